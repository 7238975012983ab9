"""detour.virtual: fixed-height list windowing with spacer composition."""

# Window calculation
from detour.virtual.window import (
    DEFAULT_OVERSCAN_ITEMS,
    EMPTY_WINDOW,
    RenderWindow,
    compute_window,
)

# Item keys
from detour.virtual.keys import (
    KeyExtractor,
    KeyResolver,
    key_by_field,
    positional_key,
    resolve_key,
)

# Composition
from detour.virtual.compositor import CompositedOutput, VisibleItem, composite

# Host integration
from detour.virtual.scroller import (
    KeyDiff,
    Viewport,
    VirtualScroller,
    diff_outputs,
    render_window,
)

# Errors
from detour.virtual.errors import (
    InconsistentCollectionError,
    InvalidConfigurationError,
    VirtualizationError,
)

# Terminal components
from detour.virtual.components import Spacer, VirtualList

__all__ = [
    # Window
    "DEFAULT_OVERSCAN_ITEMS",
    "EMPTY_WINDOW",
    "RenderWindow",
    "compute_window",
    # Keys
    "KeyExtractor",
    "KeyResolver",
    "key_by_field",
    "positional_key",
    "resolve_key",
    # Composition
    "CompositedOutput",
    "VisibleItem",
    "composite",
    # Host integration
    "KeyDiff",
    "Viewport",
    "VirtualScroller",
    "diff_outputs",
    "render_window",
    # Errors
    "InconsistentCollectionError",
    "InvalidConfigurationError",
    "VirtualizationError",
    # Components
    "Spacer",
    "VirtualList",
]
