"""Poll Transfer Events Command and Handler."""

from dataclasses import dataclass
from typing import Any, Protocol

import structlog

from ...domain import PARAMETERS, Parameter, TransferEvent

logger = structlog.get_logger()


class ChainEventSource(Protocol):
    """Protocol for the chain client."""

    async def get_transfer_events(self, from_block: int) -> list[dict[str, Any]]:
        """Get Transfer events from ``from_block`` inclusive."""
        ...


class EntityStore(Protocol):
    """Protocol for an entity DAO."""

    async def get(self, key: str) -> dict[str, Any] | None:
        """Fetch a record by primary key."""
        ...

    async def save(self, record: dict[str, Any]) -> dict[str, Any]:
        """Upsert a record."""
        ...


@dataclass(frozen=True)
class PollTransferEventsCommand:
    """Command to poll the contract for new Transfer events."""

    # Used when lastBlockChecked was never persisted
    initial_block: int = 0


@dataclass
class PollTransferEventsResult:
    """Result of one poll."""

    from_block: int
    events_found: int
    last_block_checked: int


class PollTransferEventsHandler:
    """Handler for PollTransferEventsCommand.

    1. Load the lastBlockChecked watermark (seeded when absent)
    2. Fetch Transfer events after the watermark
    3. Upsert each event, tracking the highest block number
    4. Persist the new watermark if any event was found

    The watermark only moves after every event of the batch is stored, so a
    failed run is retried from the same block by the next invocation;
    upserts keyed by transaction hash make the replay idempotent.
    Overlapping invocations are not serialized: a slower run may write back
    a lower watermark than a faster one.
    """

    def __init__(
        self,
        event_store: EntityStore,
        parameter_store: EntityStore,
        chain: ChainEventSource,
    ):
        self._event_store = event_store
        self._parameter_store = parameter_store
        self._chain = chain

    async def handle(self, command: PollTransferEventsCommand) -> PollTransferEventsResult:
        """Handle the poll command."""
        watermark = await self._load_watermark(command.initial_block)
        from_block = watermark.value + 1

        transfer_events = await self._chain.get_transfer_events(from_block)

        last_block = watermark.value
        for chain_event in transfer_events:
            event = TransferEvent.from_chain_event(chain_event)
            await self._event_store.save(event.to_record())
            logger.info(
                "transfer_event_persisted",
                transaction_hash=event.transaction_hash,
                block_number=event.block_number,
            )
            last_block = max(last_block, event.block_number)

        if transfer_events:
            await self._parameter_store.save(
                Parameter(name=watermark.name, value=last_block).to_record()
            )
            logger.info(
                "last_block_checked_updated",
                previous=watermark.value,
                current=last_block,
            )
        else:
            logger.info("no_transfer_events", from_block=from_block)

        return PollTransferEventsResult(
            from_block=from_block,
            events_found=len(transfer_events),
            last_block_checked=last_block,
        )

    async def _load_watermark(self, initial_block: int) -> Parameter:
        name = PARAMETERS["LAST_BLOCK_CHECKED"]
        record = await self._parameter_store.get(name)
        if record is None:
            logger.info("last_block_checked_seeded", initial_block=initial_block)
            return Parameter(name=name, value=initial_block)
        stored = Parameter.from_record(record)
        return Parameter(name=stored.name, value=int(stored.value))
