"""Entity DAOs for NFT transfer events and application parameters.

Each entity type is configuration only: a table descriptor plus the
canonical projection, with reserved words (``from``, ``to``, ``name``,
``value``) already aliased.
"""

from ..config.settings import Settings
from .entity_dao import EntityDAO
from .table_descriptor import TableDescriptor

NFT_EVENT_TABLE = TableDescriptor.single_key("NFTEvents", "transactionHash")
NFT_EVENT_PROJECTION = "transactionHash, blockNumber, #from, #to, tokenId"
NFT_EVENT_ATTRIBUTE_NAMES = {"#from": "from", "#to": "to"}

PARAMETER_TABLE = TableDescriptor.single_key("Parameters", "name")
PARAMETER_PROJECTION = "#name, #value"
PARAMETER_ATTRIBUTE_NAMES = {"#name": "name", "#value": "value"}


def nft_event_dao(settings: Settings | None = None) -> EntityDAO:
    """DAO for NFT transfer events, keyed by transaction hash."""
    settings = settings or Settings()
    return EntityDAO(
        NFT_EVENT_TABLE.with_table_name(settings.nft_events_table),
        endpoint_url=settings.dynamodb_endpoint,
        region_name=settings.aws_region,
        default_projection=NFT_EVENT_PROJECTION,
        default_attribute_names=NFT_EVENT_ATTRIBUTE_NAMES,
    )


def parameter_dao(settings: Settings | None = None) -> EntityDAO:
    """DAO for application parameters, keyed by name."""
    settings = settings or Settings()
    return EntityDAO(
        PARAMETER_TABLE.with_table_name(settings.parameters_table),
        endpoint_url=settings.dynamodb_endpoint,
        region_name=settings.aws_region,
        default_projection=PARAMETER_PROJECTION,
        default_attribute_names=PARAMETER_ATTRIBUTE_NAMES,
    )
