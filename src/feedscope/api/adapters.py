"""Integration adapters converting pulled feed elements into other shapes.

Adapters drain a format iterator and build plain records or a pandas
DataFrame. Optional libraries are imported inside the adapter methods so
that the core never depends on them.
"""

import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Iterable, List, Optional, Type

from feedscope.scope import ContainerElement, Element, LeafElement, ScopeIterator
from feedscope.shared import get_logger

MS_PER_SECOND = 1000


class AdapterType(Enum):
    """Types of integration adapters."""

    RECORDS = auto()     # Plain Python data structures
    DATA_FRAME = auto()  # DataFrame libraries (pandas)


@dataclass
class AdapterMetadata:
    """Metadata about an integration adapter."""

    name: str
    version: str
    adapter_type: AdapterType
    target_library: str
    description: str
    author: str = "feedscope"


@dataclass
class ConversionResult:
    """Result of a conversion operation."""

    success: bool
    converted_data: Any
    conversion_time_ms: float
    errors: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)


def element_to_record(element: Element) -> Dict[str, Any]:
    """Convert one element to a plain dictionary.

    Containers are drained; their elements are listed under ``children``.
    """
    record: Dict[str, Any] = {
        "name": element.name,
        "kind": element.kind,
        "attributes": element.attributes.to_dict(),
    }
    if isinstance(element, ContainerElement):
        record["children"] = [element_to_record(child) for child in element]
    elif isinstance(element, LeafElement):
        record["content"] = element.content
    return record


def to_records(elements: Iterable[Element]) -> List[Dict[str, Any]]:
    """Drain an iterator into a list of nested dictionaries."""
    return [element_to_record(element) for element in elements]


class IntegrationAdapter(ABC):
    """Abstract base class for all integration adapters."""

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        self.correlation_id = correlation_id
        self._logger = get_logger(__name__, correlation_id, self.__class__.__name__)

    @property
    @abstractmethod
    def metadata(self) -> AdapterMetadata:
        """Get adapter metadata."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the target library is available."""

    @abstractmethod
    def convert(self, iterator: ScopeIterator) -> ConversionResult:
        """Drain ``iterator`` into the target representation."""

    def _create_error_result(self, error_message: str, conversion_time_ms: float) -> ConversionResult:
        self._logger.warning(error_message, extra={"adapter": self.metadata.name})
        return ConversionResult(
            success=False,
            converted_data=None,
            conversion_time_ms=conversion_time_ms,
            errors=[error_message],
        )


class RecordsAdapter(IntegrationAdapter):
    """Adapter producing nested dictionaries."""

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="records",
            version="1.0.0",
            adapter_type=AdapterType.RECORDS,
            target_library="builtins",
            description="Nested dictionaries of names, attributes and content",
        )

    def is_available(self) -> bool:
        return True

    def convert(self, iterator: ScopeIterator) -> ConversionResult:
        start_time = time.time()
        records = to_records(iterator)
        return ConversionResult(
            success=True,
            converted_data=records,
            conversion_time_ms=(time.time() - start_time) * MS_PER_SECOND,
            metadata={
                "record_count": len(records),
                "diagnostic_count": len(iterator.diagnostics),
            },
        )


class PandasAdapter(IntegrationAdapter):
    """Adapter producing one DataFrame row per item, entry or outline.

    The iterator's ``ROW_CLASS`` selects which top-level containers are rows;
    other top-level containers (an RSS image, an Atom feed author) are
    flattened into ``DataFrame.attrs["feed"]`` under a dotted prefix.

    Leaves of a container become columns named by their local tag name; the
    first occurrence of a name wins. Attributes become ``name@attribute``
    columns and the container's own attributes ``@attribute`` columns.
    Nested containers of a different kind are flattened under a dotted
    prefix (``author.name``); nested containers of the same kind (outlines)
    become rows of their own with a larger ``depth``. Top-level leaves are
    stored in ``DataFrame.attrs["feed"]``.
    """

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="pandas",
            version="1.0.0",
            adapter_type=AdapterType.DATA_FRAME,
            target_library="pandas",
            description="Items, entries or outlines as pandas DataFrame rows",
        )

    def is_available(self) -> bool:
        try:
            import pandas  # noqa: F401
            return True
        except ImportError:
            return False

    def convert(self, iterator: ScopeIterator) -> ConversionResult:
        start_time = time.time()
        try:
            import pandas as pd
        except ImportError:
            return self._create_error_result(
                "pandas is not installed; install feedscope[pandas]",
                (time.time() - start_time) * MS_PER_SECOND,
            )

        rows: List[Dict[str, Any]] = []
        feed: Dict[str, Any] = {}
        row_class = getattr(iterator, "ROW_CLASS", None)
        for element in iterator:
            if isinstance(element, ContainerElement):
                if row_class is None or isinstance(element, row_class):
                    self._collect_rows(element, 0, rows)
                else:
                    self._flatten(element, f"{element.tag_name.local}.", feed)
            elif isinstance(element, LeafElement):
                self._set_leaf(feed, "", element)

        df = pd.DataFrame(rows)
        df.attrs["feed"] = feed
        processing_time = (time.time() - start_time) * MS_PER_SECOND
        return ConversionResult(
            success=True,
            converted_data=df,
            conversion_time_ms=processing_time,
            metadata={
                "dataframe_shape": df.shape,
                "columns": list(df.columns),
                "row_count": len(df),
            },
        )

    def _collect_rows(self, container: ContainerElement, depth: int, rows: List[Dict[str, Any]]) -> None:
        row: Dict[str, Any] = {"element": container.name, "depth": depth}
        for attribute in container.attributes:
            row.setdefault(f"@{attribute.name.local}", attribute.value)
        rows.append(row)

        for child in container:
            if isinstance(child, ContainerElement):
                if type(child) is type(container):
                    self._collect_rows(child, depth + 1, rows)
                else:
                    self._flatten(child, f"{child.tag_name.local}.", row)
            elif isinstance(child, LeafElement):
                self._set_leaf(row, "", child)

    def _flatten(self, container: ContainerElement, prefix: str, row: Dict[str, Any]) -> None:
        for child in container:
            if isinstance(child, ContainerElement):
                self._flatten(child, f"{prefix}{child.tag_name.local}.", row)
            elif isinstance(child, LeafElement):
                self._set_leaf(row, prefix, child)

    @staticmethod
    def _set_leaf(row: Dict[str, Any], prefix: str, leaf: LeafElement) -> None:
        key = f"{prefix}{leaf.tag_name.local}"
        if leaf.content is not None and leaf.content != "":
            row.setdefault(key, leaf.content)
        for attribute in leaf.attributes:
            row.setdefault(f"{key}@{attribute.name.local}", attribute.value)


class AdapterRegistry:
    """Registry for managing integration adapters."""

    def __init__(self) -> None:
        self._adapters: Dict[str, Type[IntegrationAdapter]] = {}
        self._lock = threading.RLock()

    def register(self, adapter_class: Type[IntegrationAdapter]) -> None:
        """Register an adapter class under its metadata name."""
        with self._lock:
            self._adapters[adapter_class().metadata.name] = adapter_class

    def get_adapter(
        self,
        adapter_name: str,
        correlation_id: Optional[str] = None
    ) -> Optional[IntegrationAdapter]:
        """Get an adapter instance by name.

        Returns:
            Adapter instance if registered and available, None otherwise
        """
        with self._lock:
            adapter_class = self._adapters.get(adapter_name)
        if adapter_class is None:
            return None
        instance = adapter_class(correlation_id)
        return instance if instance.is_available() else None

    def list_available_adapters(self) -> List[AdapterMetadata]:
        """List metadata of every registered adapter whose library is importable."""
        with self._lock:
            adapter_classes = list(self._adapters.values())
        instances = [adapter_class() for adapter_class in adapter_classes]
        return [instance.metadata for instance in instances if instance.is_available()]


_adapter_registry = AdapterRegistry()
_adapter_registry.register(RecordsAdapter)
_adapter_registry.register(PandasAdapter)


def register_adapter(adapter_class: Type[IntegrationAdapter]) -> None:
    """Register an integration adapter globally."""
    _adapter_registry.register(adapter_class)


def get_adapter(
    adapter_name: str,
    correlation_id: Optional[str] = None
) -> Optional[IntegrationAdapter]:
    """Get a registered adapter instance, or None if unknown or unavailable."""
    return _adapter_registry.get_adapter(adapter_name, correlation_id)


def list_available_adapters() -> List[AdapterMetadata]:
    """List all available integration adapters."""
    return _adapter_registry.list_available_adapters()
