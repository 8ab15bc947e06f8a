"""Custom widgets for the Planboard Qt shell."""
from .gantt_chart import GanttChartWidget

__all__ = ["GanttChartWidget"]
