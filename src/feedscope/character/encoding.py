"""Encoding detection for byte input handed to the token source.

Feed documents fetched by a caller often arrive as bytes. Detection runs in
sequence: BOM, XML declaration, then UTF-8 as the fallback. Decoding is strict;
bytes that cannot be decoded raise ``FeedEncodingError`` rather than being
silently replaced.
"""

import codecs
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Dict, List, Optional

from feedscope.shared import get_logger

DECLARATION_SCAN_BYTES = 1024
FALLBACK_ENCODING = "utf-8"


class FeedEncodingError(ValueError):
    """Raised when feed bytes cannot be decoded into text."""

    def __init__(self, message: str, encoding: Optional[str] = None) -> None:
        super().__init__(message)
        self.encoding = encoding


class DetectionMethod(Enum):
    """Enumeration of encoding detection methods."""

    BOM = "bom"
    XML_DECLARATION = "xml_declaration"
    EXPLICIT = "explicit"
    FALLBACK = "fallback"


@dataclass
class EncodingResult:
    """Result of encoding detection.

    Attributes:
        encoding: Detected encoding name (canonical form)
        method: Detection method used
        bom_length: Number of leading BOM bytes to skip when decoding
        issues: List of issues found during detection
    """

    encoding: str
    method: DetectionMethod
    bom_length: int = 0
    issues: List[str] = field(default_factory=list)


class BOMDetector:
    """Byte Order Mark (BOM) detection for all major encodings."""

    # Longer patterns first so UTF-32 LE wins over UTF-16 LE
    BOM_PATTERNS: ClassVar[Dict[bytes, str]] = {
        b"\xff\xfe\x00\x00": "utf-32-le",
        b"\x00\x00\xfe\xff": "utf-32-be",
        b"\xef\xbb\xbf": "utf-8",
        b"\xff\xfe": "utf-16-le",
        b"\xfe\xff": "utf-16-be",
    }

    def detect(self, data: bytes) -> Optional[EncodingResult]:
        """Detect encoding based on BOM.

        Args:
            data: Byte data to analyze

        Returns:
            EncodingResult if BOM detected, None otherwise
        """
        for bom_bytes, encoding in self.BOM_PATTERNS.items():
            if data.startswith(bom_bytes):
                return EncodingResult(
                    encoding=encoding,
                    method=DetectionMethod.BOM,
                    bom_length=len(bom_bytes),
                )
        return None


class XMLDeclarationParser:
    """Parser for XML encoding declarations."""

    XML_DECLARATION_PATTERN = re.compile(
        rb'<\?xml\s[^>]*?encoding\s*=\s*["\']([^"\']+)["\']',
        re.IGNORECASE
    )

    ALIASES: ClassVar[Dict[str, str]] = {
        "utf8": "utf-8",
        "utf16": "utf-16",
        "utf32": "utf-32",
        "iso-8859-1": "latin-1",
        "windows-1252": "cp1252",
    }

    def parse_declaration(self, data: bytes) -> Optional[EncodingResult]:
        """Parse encoding from XML declaration.

        Args:
            data: Byte data to analyze

        Returns:
            EncodingResult if a declaration with an encoding is found, None otherwise
        """
        match = self.XML_DECLARATION_PATTERN.search(data[:DECLARATION_SCAN_BYTES])
        if not match:
            return None

        declared = match.group(1).decode("ascii", errors="ignore").strip().lower()
        encoding = self.ALIASES.get(declared, declared)
        if not is_known_encoding(encoding):
            return EncodingResult(
                encoding=FALLBACK_ENCODING,
                method=DetectionMethod.FALLBACK,
                issues=[f"Unknown declared encoding: {declared}"],
            )

        return EncodingResult(encoding=encoding, method=DetectionMethod.XML_DECLARATION)


def is_known_encoding(encoding: str) -> bool:
    """Check if encoding is supported by Python codecs."""
    try:
        codecs.lookup(encoding)
    except LookupError:
        return False
    return True


def detect_encoding(data: bytes) -> EncodingResult:
    """Detect the encoding of feed bytes.

    Args:
        data: Raw feed bytes

    Returns:
        EncodingResult; never None, falls back to UTF-8
    """
    bom_result = BOMDetector().detect(data)
    if bom_result is not None:
        return bom_result

    declaration_result = XMLDeclarationParser().parse_declaration(data)
    if declaration_result is not None:
        return declaration_result

    return EncodingResult(encoding=FALLBACK_ENCODING, method=DetectionMethod.FALLBACK)


def decode_input(data: bytes, encoding: Optional[str] = None) -> str:
    """Decode feed bytes into text.

    Args:
        data: Raw feed bytes
        encoding: Explicit encoding; detected when omitted

    Returns:
        Decoded text with any BOM removed

    Raises:
        FeedEncodingError: If the encoding is unknown or the bytes are invalid
    """
    if encoding is not None:
        if not is_known_encoding(encoding):
            raise FeedEncodingError(f"Unknown encoding: {encoding}", encoding)
        result = EncodingResult(encoding=encoding, method=DetectionMethod.EXPLICIT)
        bom = BOMDetector().detect(data)
        if bom is not None and codecs.lookup(bom.encoding).name == codecs.lookup(encoding).name:
            result.bom_length = bom.bom_length
    else:
        result = detect_encoding(data)
        logger = get_logger(__name__, component="encoding")
        for issue in result.issues:
            logger.warning(issue, extra={"encoding": result.encoding, "method": result.method.value})

    try:
        return data[result.bom_length:].decode(result.encoding)
    except UnicodeDecodeError as exc:
        raise FeedEncodingError(
            f"Cannot decode input as {result.encoding}: {exc.reason} "
            f"at byte {exc.start + result.bom_length}",
            result.encoding,
        ) from exc
