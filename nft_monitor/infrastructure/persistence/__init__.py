"""Persistence layer - DynamoDB entity access."""

from .entities import (
    NFT_EVENT_TABLE,
    PARAMETER_TABLE,
    nft_event_dao,
    parameter_dao,
)
from .entity_dao import EntityDAO
from .errors import ApplicationError, ConfigurationError, StoreOperationError
from .expressions import DynamoDBExpressionBuilder, WriteExpression, WriteExpressionBuilder
from .table_descriptor import ProvisionedThroughput, TableDescriptor

__all__ = [
    "ApplicationError",
    "ConfigurationError",
    "DynamoDBExpressionBuilder",
    "EntityDAO",
    "NFT_EVENT_TABLE",
    "PARAMETER_TABLE",
    "ProvisionedThroughput",
    "StoreOperationError",
    "TableDescriptor",
    "WriteExpression",
    "WriteExpressionBuilder",
    "nft_event_dao",
    "parameter_dao",
]
