"""Dashboard aggregation.

The Aggregator turns a refresh request into sections. The search helpers
patch items in already-built sections and merge partial refreshes.
"""

from ._aggregator import (
    ALWAYS_LIVE_CODES,
    SECTION_ORDER,
    SLOW_CODES,
    Aggregator,
    demo_sections,
)
from ._refresh import RefreshRequest
from ._search import (
    ItemLocation,
    copy_updated_section_item_data,
    find_section_items,
    get_field,
    merge_sections,
)

__all__ = [
    "ALWAYS_LIVE_CODES",
    "SECTION_ORDER",
    "SLOW_CODES",
    "Aggregator",
    "ItemLocation",
    "RefreshRequest",
    "copy_updated_section_item_data",
    "demo_sections",
    "find_section_items",
    "get_field",
    "merge_sections",
]
