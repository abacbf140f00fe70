"""
Monitor Metrics Service.

Publishes polling outcomes to CloudWatch through Powertools EMF logs.
"""

from dataclasses import dataclass

from aws_lambda_powertools import Metrics
from aws_lambda_powertools.metrics import MetricUnit

from ..config.settings import Settings


@dataclass
class PollMetrics:
    """Outcome of one monitor invocation."""

    events_found: int = 0
    last_block_checked: int | None = None
    success: bool = True


class MetricsService:
    """
    CloudWatch Metrics service.

    Wraps a Powertools ``Metrics`` instance; handlers flush it with
    ``log_metrics``.
    """

    def __init__(
        self,
        namespace: str = "NFTMonitor",
        service: str = "nft-monitor",
    ):
        self._metrics = Metrics(namespace=namespace, service=service)
        self._namespace = namespace
        self._service = service

    @classmethod
    def from_settings(cls, settings: Settings) -> "MetricsService":
        return cls(namespace=settings.metrics_namespace, service=settings.service_name)

    @property
    def metrics(self) -> Metrics:
        return self._metrics

    def record_poll(self, metrics: PollMetrics) -> None:
        """Record a poll outcome."""
        if not metrics.success:
            self._metrics.add_metric(name="PollFailed", unit=MetricUnit.Count, value=1)
            return

        self._metrics.add_metric(name="PollSucceeded", unit=MetricUnit.Count, value=1)
        self._metrics.add_metric(
            name="TransferEventsFound",
            unit=MetricUnit.Count,
            value=metrics.events_found,
        )
        if metrics.last_block_checked is not None:
            self._metrics.add_metadata(
                key="last_block_checked", value=metrics.last_block_checked
            )
