"""List Transfer Events Query and Handler."""

from dataclasses import dataclass
from typing import Any, Protocol


class TransferEventReader(Protocol):
    """Protocol for reading stored transfer events."""

    async def get_all(self) -> list[dict[str, Any]]:
        """Return every stored record."""
        ...


@dataclass(frozen=True)
class ListTransferEventsQuery:
    """Query for every stored NFT transfer event."""

    pass


class ListTransferEventsHandler:
    """Handler for ListTransferEventsQuery."""

    def __init__(self, event_store: TransferEventReader):
        self._event_store = event_store

    async def handle(self, query: ListTransferEventsQuery) -> list[dict[str, Any]]:
        """Return transfer event records in store order."""
        return await self._event_store.get_all()
