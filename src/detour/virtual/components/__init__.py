"""Terminal components for virtualized lists."""

from detour.virtual.components.spacer import Spacer
from detour.virtual.components.virtual_list import RenderItem, VirtualList

__all__ = [
    "RenderItem",
    "Spacer",
    "VirtualList",
]
