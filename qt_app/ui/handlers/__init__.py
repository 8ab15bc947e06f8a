"""Event handlers for MainWindow."""
from . import building_handlers, export_handlers, history_handlers, mindmap_handlers, outline_handlers

__all__ = [
    "building_handlers",
    "export_handlers",
    "history_handlers",
    "mindmap_handlers",
    "outline_handlers",
]
