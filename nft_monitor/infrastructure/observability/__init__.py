"""
Observability Infrastructure.

AWS Lambda Powertools metrics for the monitor.
"""

from .metrics import MetricsService, PollMetrics

__all__ = ["MetricsService", "PollMetrics"]
