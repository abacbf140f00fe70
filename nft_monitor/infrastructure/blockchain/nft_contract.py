"""ERC-721 contract client."""

from typing import Any

import structlog
from web3 import Web3

from ..config.settings import Settings

logger = structlog.get_logger()

TRANSFER_EVENT_ABI: list[dict[str, Any]] = [
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "internalType": "address", "name": "from", "type": "address"},
            {"indexed": True, "internalType": "address", "name": "to", "type": "address"},
            {"indexed": True, "internalType": "uint256", "name": "tokenId", "type": "uint256"},
        ],
        "name": "Transfer",
        "type": "event",
    }
]


class NFTContract:
    """Reads ``Transfer`` events from an ERC-721 contract over JSON-RPC."""

    def __init__(
        self,
        rpc_url: str | None = None,
        contract_address: str | None = None,
        w3: Web3 | None = None,
    ):
        """Initialize the contract client.

        Args:
            rpc_url: JSON-RPC endpoint. Defaults to settings.
            contract_address: NFT contract address. Defaults to settings.
            w3: Preconfigured Web3 instance (tests, custom providers)
        """
        if rpc_url is None or contract_address is None:
            settings = Settings()
            rpc_url = rpc_url or settings.rpc_url
            contract_address = contract_address or settings.contract_address
        if not contract_address:
            raise ValueError("contract_address is required")

        self._w3 = w3 or Web3(Web3.HTTPProvider(rpc_url))
        self._contract = self._w3.eth.contract(
            address=Web3.to_checksum_address(contract_address),
            abi=TRANSFER_EVENT_ABI,
        )

    async def get_transfer_events(self, from_block: int) -> list[dict[str, Any]]:
        """Get every Transfer event from ``from_block`` (inclusive) to latest.

        Returns:
            Events as ``{transactionHash, blockNumber, args: {from, to, tokenId}}``
            in the order returned by the node
        """
        logs = self._contract.events.Transfer.get_logs(from_block=from_block)

        events = [
            {
                "transactionHash": Web3.to_hex(log["transactionHash"]),
                "blockNumber": log["blockNumber"],
                "args": {
                    "from": log["args"]["from"],
                    "to": log["args"]["to"],
                    "tokenId": log["args"]["tokenId"],
                },
            }
            for log in logs
        ]
        logger.info("transfer_events_fetched", from_block=from_block, count=len(events))
        return events
