"""DynamoDB table descriptor."""

from dataclasses import dataclass, field
from typing import Any

DEFAULT_PRIMARY_KEY = "id"


@dataclass(frozen=True)
class ProvisionedThroughput:
    """Read/write capacity hints for table creation."""

    read_capacity_units: int = 1
    write_capacity_units: int = 1


@dataclass(frozen=True)
class TableDescriptor:
    """Schema of a single-key DynamoDB table.

    Only the first key-schema entry is used: tables are addressed by a
    single HASH attribute.
    """

    table_name: str
    key_schema: tuple[tuple[str, str], ...] = ()
    attribute_definitions: tuple[tuple[str, str], ...] = ()
    provisioned_throughput: ProvisionedThroughput = field(
        default_factory=ProvisionedThroughput
    )

    @classmethod
    def single_key(
        cls,
        table_name: str,
        primary_key_name: str,
        attribute_type: str = "S",
        provisioned_throughput: ProvisionedThroughput | None = None,
    ) -> "TableDescriptor":
        """Build a descriptor keyed by one HASH attribute."""
        return cls(
            table_name=table_name,
            key_schema=((primary_key_name, "HASH"),),
            attribute_definitions=((primary_key_name, attribute_type),),
            provisioned_throughput=provisioned_throughput or ProvisionedThroughput(),
        )

    @property
    def primary_key_name(self) -> str:
        if self.key_schema:
            return self.key_schema[0][0] or DEFAULT_PRIMARY_KEY
        return DEFAULT_PRIMARY_KEY

    def with_table_name(self, table_name: str) -> "TableDescriptor":
        """Return a copy pointing at another table (per-environment names)."""
        return TableDescriptor(
            table_name=table_name,
            key_schema=self.key_schema,
            attribute_definitions=self.attribute_definitions,
            provisioned_throughput=self.provisioned_throughput,
        )

    def to_create_table_input(self) -> dict[str, Any]:
        """Render the kwargs for ``create_table``."""
        return {
            "TableName": self.table_name,
            "KeySchema": [
                {"AttributeName": name, "KeyType": key_type}
                for name, key_type in self.key_schema
            ],
            "AttributeDefinitions": [
                {"AttributeName": name, "AttributeType": attribute_type}
                for name, attribute_type in self.attribute_definitions
            ],
            "ProvisionedThroughput": {
                "ReadCapacityUnits": self.provisioned_throughput.read_capacity_units,
                "WriteCapacityUnits": self.provisioned_throughput.write_capacity_units,
            },
        }
