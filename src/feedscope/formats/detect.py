"""Document type detection.

Looks at the first non-whitespace character and, for markup, at the name of
the first element. Nothing beyond the first significant token is read.
"""

from enum import Enum
from typing import Union

from feedscope.tokenization import Reader, TokenType

_ROOT_TYPES = {
    "rss": "RSS",
    "rdf": "RSS",
    "feed": "ATOM",
    "opml": "OPML",
}


class FeedType(Enum):
    """Type of a document."""

    ATOM = "atom"
    JSON = "json"
    OPML = "opml"
    RSS = "rss"
    UNKNOWN = "unknown"
    XML_OR_HTML = "xml_or_html"


def detect_type(data: Union[str, bytes, Reader]) -> FeedType:
    """Attempt to detect the type of a document.

    Args:
        data: Document text, raw bytes or a reader

    Returns:
        ``JSON`` for input starting with ``{`` or ``[``; ``RSS``, ``ATOM`` or
        ``OPML`` by the name of the first element; ``XML_OR_HTML`` for other
        markup; ``UNKNOWN`` for anything else, including empty input.

    Raises:
        FeedEncodingError: If bytes cannot be decoded
    """
    reader = Reader.from_input(data)
    stripped = reader.text.lstrip()
    if not stripped:
        return FeedType.UNKNOWN

    first = stripped[0]
    if first in "{[":
        return FeedType.JSON
    if first != "<":
        return FeedType.UNKNOWN

    for token in reader.iter_tokens():
        if token.type is TokenType.START_TAG or token.type is TokenType.EMPTY_ELEMENT_TAG:
            name = _ROOT_TYPES.get(token.name.local.lower())
            return FeedType[name] if name else FeedType.XML_OR_HTML
        if token.type is TokenType.TEXT or token.type is TokenType.CDATA:
            if token.payload.strip():
                return FeedType.XML_OR_HTML
        elif token.type is TokenType.END_TAG or token.type is TokenType.MALFORMED:
            return FeedType.XML_OR_HTML
    return FeedType.UNKNOWN
