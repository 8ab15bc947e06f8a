"""Tab builders for the Planboard main window."""
from . import building_tab, gantt_tab, mindmap_tab, outline_tab

__all__ = [
    "building_tab",
    "gantt_tab",
    "mindmap_tab",
    "outline_tab",
]
