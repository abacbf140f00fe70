"""Generic DynamoDB entity access layer."""

from decimal import Decimal
from typing import Any

import boto3
import structlog
from botocore.exceptions import BotoCoreError, ClientError

from .errors import ConfigurationError, StoreOperationError
from .expressions import DynamoDBExpressionBuilder, WriteExpressionBuilder
from .table_descriptor import TableDescriptor

logger = structlog.get_logger()

Record = dict[str, Any]

_KEY_ALIAS = "#pk"


class EntityDAO:
    """CRUD access to one single-key DynamoDB table.

    Hides the difference between insert and partial update, and converts
    DynamoDB numbers back to native ``int``/``float`` values. The table is
    created on ``connect()`` when missing.

    ``save`` checks for the key then branches to put or update. The two
    steps are not atomic: concurrent writers on the same key race and the
    last writer wins. No optimistic concurrency control is applied.

    Store failures are raised as ``StoreOperationError``; absence of an
    item is signalled by ``None``.
    """

    def __init__(
        self,
        descriptor: TableDescriptor,
        endpoint_url: str | None = None,
        region_name: str = "us-east-1",
        expression_builder: WriteExpressionBuilder | None = None,
        default_projection: str | None = None,
        default_attribute_names: dict[str, str] | None = None,
    ):
        if not descriptor or not descriptor.table_name:
            raise ConfigurationError("TableName is required")

        self._descriptor = descriptor
        self._table_name = descriptor.table_name
        self._primary_key_name = descriptor.primary_key_name
        self._endpoint_url = endpoint_url
        self._region_name = region_name
        self._expression_builder = expression_builder or DynamoDBExpressionBuilder()
        self._default_projection = default_projection
        self._default_attribute_names = default_attribute_names

        self._dynamodb = None
        self._table = None

    @property
    def table_name(self) -> str:
        return self._table_name

    @property
    def primary_key_name(self) -> str:
        return self._primary_key_name

    @property
    def descriptor(self) -> TableDescriptor:
        return self._descriptor

    @property
    def is_connected(self) -> bool:
        return self._table is not None

    async def connect(self) -> bool:
        """Connect to DynamoDB and create the table if it doesn't exist.

        Returns:
            True if the table was created, False if it already existed
        """
        resource_kwargs: dict[str, Any] = {"region_name": self._region_name}
        if self._endpoint_url:
            resource_kwargs["endpoint_url"] = self._endpoint_url

        self._dynamodb = boto3.resource("dynamodb", **resource_kwargs)
        self._table = self._dynamodb.Table(self._table_name)

        return await self._create_table()

    def key_of(self, record: Record) -> dict[str, Any]:
        """Build the ``Key`` argument for a record."""
        return {self._primary_key_name: record[self._primary_key_name]}

    async def get(
        self,
        key: str,
        projection: str | None = None,
        attribute_names: dict[str, str] | None = None,
    ) -> Record | None:
        """Fetch a record by its primary key.

        Args:
            key: Value of the primary key
            projection: Comma separated attributes to fetch. Defaults to
                the DAO projection, or the primary key alone.
            attribute_names: ``#alias`` to attribute name mapping, needed
                for reserved words such as ``name``, ``from`` or ``to``

        Returns:
            The record, or None when no item has that key
        """
        self._require_connection()
        if not key:
            raise ConfigurationError(f"{self._primary_key_name} is required")

        params: dict[str, Any] = {"Key": {self._primary_key_name: key}}
        params.update(self._projection_params(projection, attribute_names))

        logger.debug("dynamodb_get", table=self._table_name, params=params)
        try:
            response = self._table.get_item(**params)
        except (ClientError, BotoCoreError) as e:
            logger.error(
                "dynamodb_get_failed", table=self._table_name, key=key, error=str(e)
            )
            raise StoreOperationError(
                f"It was not possible to get {self._table_name} with ID '{key}'", e
            ) from e

        item = response.get("Item")
        if item is None:
            return None
        return _normalize(item)

    async def get_all(
        self,
        projection: str | None = None,
        attribute_names: dict[str, str] | None = None,
    ) -> list[Record]:
        """Scan every record in the table.

        Pages are followed until DynamoDB stops returning
        ``LastEvaluatedKey``. Order is DynamoDB's, not insertion order.
        """
        self._require_connection()

        params = self._projection_params(projection, attribute_names)
        items: list[Record] = []
        try:
            while True:
                response = self._table.scan(**params)
                items.extend(_normalize(item) for item in response.get("Items", []))
                last_key = response.get("LastEvaluatedKey")
                if not last_key:
                    break
                params["ExclusiveStartKey"] = last_key
        except (ClientError, BotoCoreError) as e:
            logger.error("dynamodb_scan_failed", table=self._table_name, error=str(e))
            raise StoreOperationError(
                f"It was not possible to get {self._table_name} registries", e
            ) from e

        logger.debug("dynamodb_scan", table=self._table_name, count=len(items))
        return items

    async def save(self, record: Record) -> dict[str, Any]:
        """Insert the record, or update its attributes if the key exists.

        Updates only touch the supplied attributes; attributes missing from
        ``record`` are left as stored.

        Returns:
            The raw ``put_item`` or ``update_item`` response
        """
        self._require_connection()
        if not record:
            raise ConfigurationError(f"Entity {self._table_name} is required")
        key = record.get(self._primary_key_name)
        if not key:
            raise ConfigurationError(f"{self._primary_key_name} is required")

        item = {attribute: _to_dynamo(value) for attribute, value in record.items()}
        existing = await self.get(key, _KEY_ALIAS, {_KEY_ALIAS: self._primary_key_name})

        try:
            if existing is None:
                logger.debug("dynamodb_put", table=self._table_name, item=item)
                return self._table.put_item(Item=item)

            expression = self._expression_builder.build(item, self._primary_key_name)
            if expression.is_empty:
                logger.debug("dynamodb_update_skipped", table=self._table_name, key=key)
                return {"Attributes": {}}

            params = {
                "Key": self.key_of(item),
                "UpdateExpression": expression.update_expression,
                "ExpressionAttributeNames": expression.attribute_names,
                "ExpressionAttributeValues": expression.attribute_values,
                "ReturnValues": "UPDATED_NEW",
            }
            logger.debug("dynamodb_update", table=self._table_name, params=params)
            response = self._table.update_item(**params)
            if "Attributes" in response:
                response["Attributes"] = _normalize(response["Attributes"])
            return response
        except (ClientError, BotoCoreError, TypeError) as e:
            # TypeError: value rejected by the boto3 serializer (NaN, Infinity, unsupported types)
            logger.error(
                "dynamodb_save_failed", table=self._table_name, key=key, error=str(e)
            )
            raise StoreOperationError(
                f"It was not possible to save the entity with ID '{key}' "
                f"to {self._table_name}",
                e,
            ) from e

    async def delete(self, key: str) -> dict[str, Any]:
        """Delete a record by its primary key. Missing keys are a no-op."""
        self._require_connection()
        if not key:
            raise ConfigurationError(f"{self._primary_key_name} is required")

        try:
            return self._table.delete_item(Key={self._primary_key_name: key})
        except (ClientError, BotoCoreError) as e:
            logger.error(
                "dynamodb_delete_failed", table=self._table_name, key=key, error=str(e)
            )
            raise StoreOperationError(
                f"It was not possible to delete {self._table_name} with ID '{key}'", e
            ) from e

    def _require_connection(self) -> None:
        if self._table is None:
            raise ConfigurationError(
                f"DynamoDB client is required: call connect() on {self._table_name}"
            )

    def _projection_params(
        self,
        projection: str | None,
        attribute_names: dict[str, str] | None,
    ) -> dict[str, Any]:
        if projection is None:
            projection = self._default_projection
            if self._default_attribute_names:
                attribute_names = {**self._default_attribute_names, **(attribute_names or {})}
        if projection is None:
            projection = _KEY_ALIAS
            attribute_names = {_KEY_ALIAS: self._primary_key_name}

        params: dict[str, Any] = {"ProjectionExpression": projection}
        if attribute_names:
            params["ExpressionAttributeNames"] = attribute_names
        return params

    async def _create_table(self) -> bool:
        """Create the table in DynamoDB if it doesn't exist.

        Returns:
            True if the table was created, False if it already exists
        """
        if not self._descriptor:
            raise ConfigurationError("Dynamo Entity with its TableDescriptor is required")

        client = self._dynamodb.meta.client
        try:
            if self._table_name in _list_table_names(client):
                return False

            table = self._dynamodb.create_table(**self._descriptor.to_create_table_input())
            table.wait_until_exists()
        except (ClientError, BotoCoreError) as e:
            logger.error(
                "dynamodb_create_table_failed", table=self._table_name, error=str(e)
            )
            raise StoreOperationError(
                f"It was not possible to provision table {self._table_name}", e
            ) from e

        logger.info("dynamodb_table_created", table=self._table_name)
        return True


def _list_table_names(client: Any) -> set[str]:
    names: set[str] = set()
    params: dict[str, Any] = {}
    while True:
        response = client.list_tables(**params)
        names.update(response.get("TableNames", []))
        last_name = response.get("LastEvaluatedTableName")
        if not last_name:
            return names
        params["ExclusiveStartTableName"] = last_name


def _to_dynamo(value: Any) -> Any:
    # The resource layer rejects float, only Decimal is accepted
    if isinstance(value, float):
        return Decimal(str(value))
    return value


def _normalize(item: dict[str, Any]) -> Record:
    return {attribute: _from_dynamo(value) for attribute, value in item.items()}


def _from_dynamo(value: Any) -> Any:
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    return value
