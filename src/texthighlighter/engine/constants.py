"""Marker attribute names and tag lists shared by the highlighting engine.

Changing ``DATA_ATTR`` or ``TIMESTAMP_ATTR`` breaks every serialized
descriptor already persisted, since wrapper templates are stored verbatim.
"""

from __future__ import annotations

# Present on every marker element
DATA_ATTR = "data-highlighted"
# Creation timestamp shared by the markers of one highlighting operation
TIMESTAMP_ATTR = "data-timestamp"

# Never highlight text inside these elements (compared lower-case)
IGNORE_TAGS: frozenset[str] = frozenset(
    (
        "script",
        "style",
        "select",
        "option",
        "button",
        "object",
        "applet",
        "video",
        "audio",
        "canvas",
        "embed",
        "param",
        "meter",
        "progress",
    )
)

# Separator between child indices in a descriptor path ("0:3:1")
PATH_SEPARATOR = ":"
