"""NFT Transfer Monitor Lambda Handler.

Invoked on a schedule by EventBridge.
"""

import asyncio

from aws_lambda_powertools import Logger, Tracer
from aws_lambda_powertools.utilities.typing import LambdaContext

from ...application.commands import PollTransferEventsCommand, PollTransferEventsResult
from ...infrastructure.config import Settings
from ...infrastructure.config.di_container import get_container
from ...infrastructure.observability import MetricsService, PollMetrics

# Initialize Powertools
settings = Settings()
logger = Logger(service=settings.service_name, level=settings.log_level)
tracer = Tracer(service=settings.service_name)
metrics_service = MetricsService.from_settings(settings)


@tracer.capture_method
async def poll_transfer_events() -> PollTransferEventsResult:
    """Run one poll against the configured contract."""
    container = get_container()
    await container.connect()

    command = PollTransferEventsCommand(initial_block=container.settings.from_block)
    return await container.poll_transfer_events_handler.handle(command)


@metrics_service.metrics.log_metrics
@logger.inject_lambda_context
@tracer.capture_lambda_handler
def handler(event: dict, context: LambdaContext) -> None:
    """Lambda handler entry point.

    Failures are logged and swallowed: the next scheduled run retries
    from the last persisted block.
    """
    try:
        result = asyncio.run(poll_transfer_events())
    except Exception:
        logger.exception("NFT transfer monitor failed")
        metrics_service.record_poll(PollMetrics(success=False))
        return

    logger.info(
        "NFT transfer monitor finished",
        extra={
            "from_block": result.from_block,
            "events_found": result.events_found,
            "last_block_checked": result.last_block_checked,
        },
    )
    metrics_service.record_poll(
        PollMetrics(
            events_found=result.events_found,
            last_block_checked=result.last_block_checked,
        )
    )
