"""Application queries (CQRS read side)."""

from .list_transfer_events import ListTransferEventsHandler, ListTransferEventsQuery

__all__ = ["ListTransferEventsHandler", "ListTransferEventsQuery"]
