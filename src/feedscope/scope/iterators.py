"""Bounded pull iterators over element scopes.

A ``ScopeIterator`` walks the tokens of one scope, classifies the start tags
found at its own level and returns one element per call:

* a leaf element with its content already located (the cursor moves past
  the leaf's matching end tag), or
* a container element, which is itself a ``ScopeIterator`` bound to the
  container's scope. The cursor is left just past the container's start tag.

Parent and child share one ``Cursor``. When the parent is advanced while the
child it returned last is still unexhausted, the parent moves the cursor to
the child's recorded boundary and marks the child exhausted, so abandoning a
container part way through is always safe.
"""

from enum import Enum, auto
from typing import ClassVar, Dict, FrozenSet, Iterator, Optional, Set, Type

from feedscope.shared import (
    ContentMode,
    DiagnosticCode,
    DiagnosticEntry,
    DiagnosticLog,
    DiagnosticSeverity,
    FeedParserConfig,
    get_logger,
)
from feedscope.tokenization import Attributes, Reader, Token, TokenType
from feedscope.tokenization.scanner import EMPTY_ATTRIBUTES

from .content import Content
from .cursor import Cursor, ScopeBoundary
from .elements import Element, LeafElement, Unknown
from .matching import find_matching_end, read_content


class IterationState(Enum):
    """Lifecycle of a scope iterator."""

    START = auto()      # Document iterators only: root not located yet
    IN_SCOPE = auto()   # Returning elements of the scope
    EXHAUSTED = auto()  # Terminal; every further call returns None


class ParseContext:
    """State shared by a document iterator and all of its sub-scopes."""

    def __init__(self, reader: Reader, config: Optional[FeedParserConfig] = None) -> None:
        self.reader = reader
        self.config = config or FeedParserConfig()
        self.cursor = Cursor()
        self.diagnostics = DiagnosticLog(max_entries=self.config.max_diagnostics)
        self.logger = get_logger(__name__, self.config.correlation_id, "scope_iterator")

    def read_content(self, start: int, stop: int) -> Content:
        """Read leaf content, copying it now in owned mode."""
        content = read_content(
            self.reader, start, stop, self.config.decode_entities, self._report_malformed_text
        )
        if self.config.content_mode is ContentMode.OWNED:
            content.materialize()
        return content

    def _report_malformed_text(self, token: Token) -> None:
        self.report(
            DiagnosticSeverity.WARNING,
            DiagnosticCode.MALFORMED_TOKEN,
            "Kept malformed markup inside content as text",
            token.start,
            source=token.source[:40],
        )

    def report(
        self,
        severity: DiagnosticSeverity,
        code: DiagnosticCode,
        message: str,
        offset: int,
        **details: object
    ) -> None:
        """Record a recovered problem and log it."""
        position = self.reader.position(offset).to_dict()
        if severity is DiagnosticSeverity.WARNING or severity is DiagnosticSeverity.ERROR:
            self.logger.warning(message, extra={"code": code.value, **position})
        else:
            self.logger.debug(message, extra={"code": code.value, **position})

        if not self.config.collect_diagnostics:
            return
        self.diagnostics.add(DiagnosticEntry(
            severity=severity,
            code=code,
            message=message,
            component="scope_iterator",
            position=position,
            details=dict(details) or None,
            correlation_id=self.config.correlation_id,
        ))


class ScopeIterator:
    """Pull iterator confined to one scope.

    Subclasses declare which tags they recognize through ``CLASSIFIER``
    (lower-cased local name to element class). Tags listed in ``TRANSPARENT``
    are groupings whose children are read as if they were at this level.
    """

    CLASSIFIER: ClassVar[Dict[str, Type[Element]]] = {}
    TRANSPARENT: ClassVar[FrozenSet[str]] = frozenset()
    UNKNOWN: ClassVar[Type[LeafElement]] = Unknown

    def __init__(
        self,
        context: ParseContext,
        boundary: ScopeBoundary,
        state: IterationState = IterationState.IN_SCOPE
    ) -> None:
        self._context = context
        self._boundary = boundary
        self._state = state
        self._child: Optional["ScopeIterator"] = None

    @property
    def state(self) -> IterationState:
        """Current lifecycle state."""
        return self._state

    @property
    def exhausted(self) -> bool:
        """Check if the iterator has reached its terminal state."""
        return self._state is IterationState.EXHAUSTED

    @property
    def boundary(self) -> ScopeBoundary:
        """Boundary of the end tag closing this scope."""
        return self._boundary

    @property
    def diagnostics(self) -> DiagnosticLog:
        """Recovered problems for the whole document."""
        return self._context.diagnostics

    @classmethod
    def classify(cls, local_name: str) -> Type[Element]:
        """Map a local tag name to the element class for this level."""
        return cls.CLASSIFIER.get(local_name.lower(), cls.UNKNOWN)

    def __iter__(self) -> Iterator[Element]:
        return self

    def __next__(self) -> Element:
        element = self.advance()
        if element is None:
            raise StopIteration
        return element

    def advance(self) -> Optional[Element]:
        """Return the next element of this scope, or None once exhausted."""
        if self._state is IterationState.EXHAUSTED:
            return None
        if self._state is IterationState.START:
            if not self._start():
                return self._exhaust()
            self._state = IterationState.IN_SCOPE

        self._release_child()

        context = self._context
        cursor = context.cursor
        reader = context.reader

        while True:
            if cursor.pos >= self._boundary.close_start:
                cursor.advance_to(self._boundary.close_end)
                return self._exhaust()

            token = reader.tokenize(cursor.pos)
            if token is None:
                return self._exhaust()
            cursor.advance_to(token.end)

            token_type = token.type
            if token_type is TokenType.START_TAG or token_type is TokenType.EMPTY_ELEMENT_TAG:
                local_name = token.name.local.lower()
                if local_name in self.TRANSPARENT:
                    continue
                return self._open(token, self.classify(local_name))

            if token_type is TokenType.END_TAG:
                if token.name.local.lower() not in self.TRANSPARENT:
                    context.report(
                        DiagnosticSeverity.INFO,
                        DiagnosticCode.STRAY_END_TAG,
                        f"Skipped end tag without matching start: {token.name}",
                        token.start,
                    )
            elif token_type is TokenType.MALFORMED:
                context.report(
                    DiagnosticSeverity.WARNING,
                    DiagnosticCode.MALFORMED_TOKEN,
                    "Skipped malformed markup",
                    token.start,
                    source=token.source[:40],
                )
            elif token_type is TokenType.TEXT or token_type is TokenType.CDATA:
                if token.payload.strip():
                    context.report(
                        DiagnosticSeverity.INFO,
                        DiagnosticCode.STRAY_TEXT,
                        "Skipped text outside of any recognized element",
                        token.start,
                    )
            # Comments, processing instructions and declarations are skipped

    def _open(self, token: Token, element_class: Type[Element]) -> Element:
        context = self._context
        is_container = issubclass(element_class, ContainerElement)

        if token.type is TokenType.EMPTY_ELEMENT_TAG:
            if is_container:
                child = element_class(context, token, ScopeBoundary.empty(token.end))
                self._child = child
                return child
            return element_class(token)

        boundary = self._match(token)
        if is_container:
            child = element_class(context, token, boundary)
            self._child = child
            return child

        content = context.read_content(token.end, boundary.close_start)
        context.cursor.advance_to(boundary.close_end)
        return element_class(token, content)

    def _match(self, token: Token) -> ScopeBoundary:
        boundary = find_matching_end(
            self._context.reader,
            token.end,
            token.name.local,
            limit=self._boundary.close_start,
        )
        if not boundary.terminated:
            self._context.report(
                DiagnosticSeverity.WARNING,
                DiagnosticCode.UNTERMINATED_ELEMENT,
                f"No end tag for <{token.name}>; scope closed at enclosing boundary",
                token.start,
                tag=token.name.qualified,
            )
        return boundary

    def _release_child(self) -> None:
        child = self._child
        if child is None:
            return
        self._child = None
        if child.exhausted:
            return

        cursor = self._context.cursor
        target = child.boundary.close_end
        if cursor.pos < target and self._context.logger.is_debug_enabled():
            self._context.logger.debug(
                "Fast-forwarding past abandoned scope",
                extra={"from_offset": cursor.pos, "to_offset": target},
            )
        cursor.advance_to(target)
        child._exhaust()

    def _exhaust(self) -> None:
        self._state = IterationState.EXHAUSTED
        child = self._child
        self._child = None
        if child is not None and not child.exhausted:
            child._exhaust()
        return None

    def _start(self) -> bool:
        """Locate the scope of a document iterator; overridden by subclasses."""
        return True

    def _seek_child(self, names: Optional[Set[str]] = None) -> Optional[Token]:
        """Advance to the next start tag at this level whose local name is in ``names``.

        Elements with other names are skipped whole. With ``names`` of None the
        first start tag of any name is returned. The cursor is left just past
        the returned tag.
        """
        context = self._context
        cursor = context.cursor

        while cursor.pos < self._boundary.close_start:
            token = context.reader.tokenize(cursor.pos)
            if token is None:
                return None
            cursor.advance_to(token.end)

            if token.type is TokenType.START_TAG or token.type is TokenType.EMPTY_ELEMENT_TAG:
                if names is None or token.name.local.lower() in names:
                    return token
                if token.type is TokenType.START_TAG:
                    cursor.advance_to(self._match(token).close_end)
            elif token.type is TokenType.MALFORMED:
                context.report(
                    DiagnosticSeverity.WARNING,
                    DiagnosticCode.MALFORMED_TOKEN,
                    "Skipped malformed markup",
                    token.start,
                    source=token.source[:40],
                )
        return None

    def _enter(self, token: Token) -> None:
        """Narrow this iterator's scope to the element opened by ``token``."""
        if token.type is TokenType.EMPTY_ELEMENT_TAG:
            self._boundary = ScopeBoundary.empty(token.end)
        else:
            self._boundary = self._match(token)


class ContainerElement(Element, ScopeIterator):
    """Element hosting a bounded run of further classified elements."""

    kind: ClassVar[str] = "container"

    def __init__(self, context: ParseContext, tag: Token, boundary: ScopeBoundary) -> None:
        Element.__init__(self, tag)
        ScopeIterator.__init__(self, context, boundary)

    @property
    def raw(self) -> str:
        """Exact source between the start tag and its matching end tag."""
        return self._context.reader.text[self._tag.end:self._boundary.close_start]

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, state={self._state.name})"


class DocumentIterator(ScopeIterator):
    """Top-level iterator for one feed document.

    Starts in ``IterationState.START``; the first call skips the prolog and
    locates the scope to enumerate through ``_locate_scope``.
    """

    component: ClassVar[str] = "document"
    # Container class of one record (item, entry, outline); None means every container
    ROW_CLASS: ClassVar[Optional[Type[ContainerElement]]] = None

    def __init__(self, data: object, config: Optional[FeedParserConfig] = None) -> None:
        reader = Reader.from_input(data)
        context = ParseContext(reader, config)
        super().__init__(
            context,
            ScopeBoundary.open_ended(len(reader)),
            state=IterationState.START,
        )
        self._root: Optional[Token] = None

    @property
    def root(self) -> Optional[Token]:
        """Root start tag, located lazily on the first call."""
        self._ensure_started()
        return self._root

    @property
    def root_attributes(self) -> Attributes:
        """Attributes of the root tag (empty before a root is found)."""
        root = self.root
        if root is None:
            return EMPTY_ATTRIBUTES
        return root.attributes

    @property
    def reader(self) -> Reader:
        """The token source."""
        return self._context.reader

    def _ensure_started(self) -> None:
        if self._state is IterationState.START:
            if self._start():
                self._state = IterationState.IN_SCOPE
            else:
                self._exhaust()

    def _start(self) -> bool:
        root = self._seek_child()
        if root is None:
            self._context.report(
                DiagnosticSeverity.WARNING,
                DiagnosticCode.MISSING_ROOT,
                "Document contains no root element",
                len(self._context.reader),
            )
            return False
        self._root = root
        self._enter(root)
        self._context.logger.debug(
            "Located document root",
            extra={"root": root.name.qualified, "document": self.component},
        )
        return self._locate_scope(root)

    def _locate_scope(self, root: Token) -> bool:
        """Adjust the scope after entering the root; the root itself by default."""
        return True
