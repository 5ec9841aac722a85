"""Highlighting engine: boundary refinement, span walk, normalisation, codec."""

from texthighlighter.engine.boundaries import (
    RefinedBoundaries,
    refine_range_boundaries,
)
from texthighlighter.engine.codec import (
    HighlightDescriptor,
    deserialize_highlights,
    serialize_highlights,
)
from texthighlighter.engine.constants import DATA_ATTR, IGNORE_TAGS, TIMESTAMP_ATTR
from texthighlighter.engine.normaliser import (
    flatten_nested_highlights,
    merge_sibling_highlights,
    normalize_highlights,
)
from texthighlighter.engine.registry import (
    HighlightGroup,
    collect,
    group_highlights,
    is_marker,
    sort_by_depth,
)
from texthighlighter.engine.walker import wrap_range

__all__ = [
    "DATA_ATTR",
    "IGNORE_TAGS",
    "TIMESTAMP_ATTR",
    "HighlightDescriptor",
    "HighlightGroup",
    "RefinedBoundaries",
    "collect",
    "deserialize_highlights",
    "flatten_nested_highlights",
    "group_highlights",
    "is_marker",
    "merge_sibling_highlights",
    "normalize_highlights",
    "refine_range_boundaries",
    "serialize_highlights",
    "sort_by_depth",
    "wrap_range",
]
