"""Tag matching and content reading.

``find_matching_end`` resolves the end tag that closes a given start tag by
counting unmatched opens of the same local name, so nested same-named tags
and namespace-prefixed end tags are handled. ``read_content`` collects the
text-bearing tokens inside a resolved scope.
"""

from typing import Callable, List, Optional

from feedscope.tokenization import Reader, Token, TokenType

from .content import Content, Segment
from .cursor import ScopeBoundary


def find_matching_end(
    reader: Reader,
    pos: int,
    local_name: str,
    limit: Optional[int] = None
) -> ScopeBoundary:
    """Find the end tag matching a start tag.

    Args:
        reader: Token source
        pos: Offset just past the start tag
        local_name: Local name of the start tag (prefix already stripped)
        limit: Offset the search must not cross, normally the enclosing
            scope's ``close_start``; defaults to end of input

    Returns:
        Boundary of the matching end tag. When no match exists before
        ``limit`` the boundary is unterminated and collapses onto ``limit``.
    """
    stop = len(reader) if limit is None else min(limit, len(reader))
    needle = local_name.lower()
    depth = 1

    while pos < stop:
        token = reader.tokenize(pos)
        if token is None:
            break
        if token.type is TokenType.START_TAG:
            if token.name.local.lower() == needle:
                depth += 1
        elif token.type is TokenType.END_TAG:
            if token.name.local.lower() == needle:
                depth -= 1
                if depth == 0:
                    return ScopeBoundary(token.start, token.end)
        pos = token.end

    return ScopeBoundary(stop, stop, terminated=False)


def read_content(
    reader: Reader,
    start: int,
    stop: int,
    decode_entities: bool = True,
    on_malformed: Optional[Callable[[Token], None]] = None
) -> Content:
    """Collect the text of a leaf element.

    Text runs are entity-decoded, CDATA sections are taken verbatim and any
    nested markup is inert. Malformed fragments, such as a bare ``<`` in
    ``a < b``, are kept as text and passed to ``on_malformed``.

    Args:
        reader: Token source
        start: Offset just past the start tag
        stop: Offset of the matching end tag
        decode_entities: Decode character and entity references in text runs
        on_malformed: Called with each malformed token kept as text

    Returns:
        Content spanning ``[start, stop)``
    """
    segments: List[Segment] = []
    pos = start

    while pos < stop:
        token = reader.tokenize(pos)
        if token is None:
            break
        if token.type is TokenType.TEXT or token.type is TokenType.MALFORMED:
            segments.append((token.inner_start, min(token.inner_end, stop), decode_entities))
            if token.type is TokenType.MALFORMED and on_malformed is not None:
                on_malformed(token)
        elif token.type is TokenType.CDATA:
            segments.append((token.inner_start, token.inner_end, False))
        pos = token.end

    return Content(reader.text, segments, start, stop)
