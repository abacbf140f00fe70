"""Dependency Injection Container.

Provides centralized dependency management for the Lambda handlers.
Implements a simple service locator pattern with lazy initialization so
warm invocations reuse clients.
"""

from functools import cached_property

import structlog

from nft_monitor.application.commands import PollTransferEventsHandler
from nft_monitor.application.queries import ListTransferEventsHandler
from nft_monitor.infrastructure.blockchain import NFTContract
from nft_monitor.infrastructure.config.settings import Settings
from nft_monitor.infrastructure.persistence import EntityDAO, nft_event_dao, parameter_dao

logger = structlog.get_logger()

_CACHED = [
    "nft_event_dao",
    "parameter_dao",
    "nft_contract",
    "poll_transfer_events_handler",
    "list_transfer_events_handler",
]


class DIContainer:
    """Dependency Injection Container.

    Example usage:
        ```python
        container = get_container()
        await container.connect()
        result = await container.poll_transfer_events_handler.handle(command)
        ```
    """

    def __init__(self, settings: Settings | None = None):
        """Initialize the container.

        Args:
            settings: Application settings (loads from env if not provided)
        """
        self._settings = settings or Settings()
        self._connected = False

    @property
    def settings(self) -> Settings:
        """Get application settings."""
        return self._settings

    @cached_property
    def nft_event_dao(self) -> EntityDAO:
        """Get the NFT transfer events DAO."""
        return nft_event_dao(self._settings)

    @cached_property
    def parameter_dao(self) -> EntityDAO:
        """Get the parameters DAO."""
        return parameter_dao(self._settings)

    @cached_property
    def nft_contract(self) -> NFTContract:
        """Get the NFT contract client."""
        logger.info(
            "initializing_nft_contract",
            rpc_url=self._settings.rpc_url,
            contract_address=self._settings.contract_address,
        )
        return NFTContract(
            rpc_url=self._settings.rpc_url,
            contract_address=self._settings.contract_address,
        )

    @cached_property
    def poll_transfer_events_handler(self) -> PollTransferEventsHandler:
        """Get the poll command handler."""
        return PollTransferEventsHandler(
            event_store=self.nft_event_dao,
            parameter_store=self.parameter_dao,
            chain=self.nft_contract,
        )

    @cached_property
    def list_transfer_events_handler(self) -> ListTransferEventsHandler:
        """Get the list query handler."""
        return ListTransferEventsHandler(event_store=self.nft_event_dao)

    async def connect(self) -> None:
        """Connect the DAOs, provisioning their tables on first use."""
        if self._connected:
            return
        for dao in (self.parameter_dao, self.nft_event_dao):
            created = await dao.connect()
            logger.info("dao_connected", table=dao.table_name, table_created=created)
        self._connected = True

    def reset(self) -> None:
        """Reset all cached instances.

        Useful for testing or when configuration changes.
        """
        for attr in _CACHED:
            if attr in self.__dict__:
                del self.__dict__[attr]
        self._connected = False
        logger.info("di_container_reset")


# Global container instance
_container: DIContainer | None = None


def get_container() -> DIContainer:
    """Get the global DI container instance.

    Creates the container on first call (singleton pattern).
    """
    global _container
    if _container is None:
        _container = DIContainer()
    return _container


def reset_container() -> None:
    """Reset the global container."""
    global _container
    if _container is not None:
        _container.reset()
    _container = None
