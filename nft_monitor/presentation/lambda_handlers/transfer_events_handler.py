"""NFT Transfer Events read API Lambda Handler."""

import asyncio
import json

from aws_lambda_powertools import Logger, Tracer
from aws_lambda_powertools.event_handler import APIGatewayRestResolver, Response, content_types
from aws_lambda_powertools.logging import correlation_paths
from aws_lambda_powertools.utilities.typing import LambdaContext

from ...application.queries import ListTransferEventsQuery
from ...infrastructure.config import Settings
from ...infrastructure.config.di_container import get_container

# Initialize Powertools
settings = Settings()
logger = Logger(service=settings.service_name, level=settings.log_level)
tracer = Tracer(service=settings.service_name)
app = APIGatewayRestResolver()


async def list_transfer_events() -> list[dict]:
    container = get_container()
    await container.connect()
    return await container.list_transfer_events_handler.handle(ListTransferEventsQuery())


@app.get("/events")
@tracer.capture_method
def get_events():
    """Return every stored NFT transfer event."""
    try:
        return asyncio.run(list_transfer_events())
    except Exception as e:
        logger.exception("Failed to list NFT transfer events")
        return Response(
            status_code=500,
            content_type=content_types.APPLICATION_JSON,
            body=json.dumps({"message": f"some error happened: {e}"}),
        )


@logger.inject_lambda_context(correlation_id_path=correlation_paths.API_GATEWAY_REST)
@tracer.capture_lambda_handler
def handler(event: dict, context: LambdaContext) -> dict:
    """Lambda handler entry point."""
    return app.resolve(event, context)
