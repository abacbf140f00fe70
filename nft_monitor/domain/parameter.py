"""Application parameter value object."""

from typing import Any

from .shared import ValueObject

PARAMETERS: dict[str, str] = {
    "LAST_BLOCK_CHECKED": "lastBlockChecked",
}


class Parameter(ValueObject):
    """A named scalar persisted in the Parameters table."""

    name: str
    value: Any = None

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Parameter":
        return cls(name=record["name"], value=record.get("value"))

    def to_record(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value}
