"""Public parsing API and integration adapters."""

from .adapters import (
    AdapterMetadata,
    AdapterType,
    ConversionResult,
    IntegrationAdapter,
    PandasAdapter,
    RecordsAdapter,
    element_to_record,
    get_adapter,
    list_available_adapters,
    register_adapter,
    to_records,
)
from .parser import (
    FeedParser,
    UnsupportedFeedError,
    iter_atom,
    iter_feed,
    iter_opml,
    iter_rss,
)

__all__ = [
    "AdapterMetadata",
    "AdapterType",
    "ConversionResult",
    "FeedParser",
    "IntegrationAdapter",
    "PandasAdapter",
    "RecordsAdapter",
    "UnsupportedFeedError",
    "element_to_record",
    "get_adapter",
    "iter_atom",
    "iter_feed",
    "iter_opml",
    "iter_rss",
    "list_available_adapters",
    "register_adapter",
    "to_records",
]
