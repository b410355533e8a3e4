"""Character layer: turns feed bytes into text for the token source."""

from .encoding import (
    BOMDetector,
    DetectionMethod,
    EncodingResult,
    FeedEncodingError,
    XMLDeclarationParser,
    decode_input,
    detect_encoding,
)

__all__ = [
    "BOMDetector",
    "DetectionMethod",
    "EncodingResult",
    "FeedEncodingError",
    "XMLDeclarationParser",
    "decode_input",
    "detect_encoding",
]
