"""NFT Transfer event monitor and read API."""

__version__ = "0.1.0"
