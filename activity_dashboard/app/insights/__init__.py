"""View aggregation and chart reshaping for the dashboard."""

from .charts import build_charts
from .views import MalformedSnapshot, sorted_dates, summarize_view

__all__ = [
    "MalformedSnapshot",
    "build_charts",
    "sorted_dates",
    "summarize_view",
]
