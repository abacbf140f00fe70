"""NFT Transfer event value object."""

from typing import Any

from pydantic import Field, field_validator

from .shared import ValueObject


class TransferEvent(ValueObject):
    """An ERC-721 ``Transfer`` observed on chain.

    ``token_id`` is kept as a string: uint256 token ids overflow both
    DynamoDB-safe floats and 64-bit integers.
    """

    transaction_hash: str = Field(min_length=1)
    block_number: int = Field(ge=0)
    from_address: str
    to_address: str
    token_id: str

    @field_validator("token_id", mode="before")
    @classmethod
    def _token_id_as_string(cls, value: Any) -> str:
        return str(value)

    @classmethod
    def from_chain_event(cls, event: dict[str, Any]) -> "TransferEvent":
        """Create from ``{transactionHash, blockNumber, args: {from, to, tokenId}}``."""
        args = event["args"]
        return cls(
            transaction_hash=event["transactionHash"],
            block_number=int(event["blockNumber"]),
            from_address=args["from"],
            to_address=args["to"],
            token_id=str(args["tokenId"]),
        )

    def to_record(self) -> dict[str, Any]:
        """Convert to the attribute layout of the NFTEvents table."""
        return {
            "transactionHash": self.transaction_hash,
            "blockNumber": self.block_number,
            "from": self.from_address,
            "to": self.to_address,
            "tokenId": self.token_id,
        }
