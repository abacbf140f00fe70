"""Application commands (CQRS write side)."""

from .poll_transfer_events import (
    PollTransferEventsCommand,
    PollTransferEventsHandler,
    PollTransferEventsResult,
)

__all__ = [
    "PollTransferEventsCommand",
    "PollTransferEventsHandler",
    "PollTransferEventsResult",
]
