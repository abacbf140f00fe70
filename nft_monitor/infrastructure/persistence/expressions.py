"""Write-expression builders for partial updates.

DynamoDB rejects reserved words (``name``, ``value``, ``from``, ``to`` ...)
used literally in expressions, so every attribute is referenced through a
``#alias`` and every value through a ``:placeholder``.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Protocol

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_]")


@dataclass(frozen=True)
class WriteExpression:
    """An update expression plus its name and value substitutions."""

    update_expression: str
    attribute_names: dict[str, str] = field(default_factory=dict)
    attribute_values: dict[str, Any] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.attribute_names


class WriteExpressionBuilder(Protocol):
    """Protocol for building the partial-update expression of a record."""

    def build(self, record: dict[str, Any], primary_key_name: str) -> WriteExpression:
        """Build the expression setting every attribute but the primary key."""
        ...


class DynamoDBExpressionBuilder:
    """Builds ``set #a = :a, #b = :b`` style update expressions."""

    def build(self, record: dict[str, Any], primary_key_name: str) -> WriteExpression:
        assignments = []
        names: dict[str, str] = {}
        values: dict[str, Any] = {}

        for attribute, value in record.items():
            if attribute == primary_key_name:
                continue
            token = self._token(attribute, names)
            names[f"#{token}"] = attribute
            values[f":{token}"] = value
            assignments.append(f"#{token} = :{token}")

        if not assignments:
            return WriteExpression(update_expression="")

        return WriteExpression(
            update_expression="set " + ", ".join(assignments),
            attribute_names=names,
            attribute_values=values,
        )

    @staticmethod
    def _token(attribute: str, taken: dict[str, str]) -> str:
        base = _UNSAFE_CHARS.sub("_", attribute) or "attr"
        token = base
        suffix = 1
        while f"#{token}" in taken:
            token = f"{base}_{suffix}"
            suffix += 1
        return token
