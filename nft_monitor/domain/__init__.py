"""Domain layer - NFT transfer events and parameters."""

from .parameter import PARAMETERS, Parameter
from .transfer_event import TransferEvent

__all__ = ["PARAMETERS", "Parameter", "TransferEvent"]
