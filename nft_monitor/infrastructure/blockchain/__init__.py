"""Blockchain clients."""

from .nft_contract import NFTContract

__all__ = ["NFTContract"]
