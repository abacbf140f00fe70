"""Pytest configuration and fixtures."""

import os
from dataclasses import dataclass
from decimal import Decimal
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from botocore.exceptions import ClientError

os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "1")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "NFTMonitorTest")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "nft-monitor-test")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")

from nft_monitor.infrastructure.config import Settings  # noqa: E402


def _client_error(code: str, message: str, operation: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


def _to_stored(value: Any) -> Any:
    # DynamoDB hands every number back as Decimal
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return Decimal(value)
    return value


class FakeTable:
    """In-memory stand-in for a boto3 ``Table`` resource."""

    def __init__(self, server: "FakeDynamoDB", name: str):
        self._server = server
        self.name = name
        self.calls: list[tuple[str, dict[str, Any]]] = []

    @property
    def _items(self) -> dict[Any, dict[str, Any]]:
        if self.name not in self._server.tables:
            raise _client_error(
                "ResourceNotFoundException",
                "Requested resource not found",
                "GetItem",
            )
        return self._server.tables[self.name]["items"]

    @property
    def _key_name(self) -> str:
        return self._server.tables[self.name]["key"]

    def wait_until_exists(self) -> None:
        return None

    def get_item(self, **kwargs: Any) -> dict[str, Any]:
        self.calls.append(("get_item", kwargs))
        self._server.maybe_fail("get_item")
        item = self._items.get(kwargs["Key"][self._key_name])
        if item is None:
            return {}
        return {"Item": self._project(item, kwargs)}

    def put_item(self, Item: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("put_item", {"Item": Item}))
        self._server.maybe_fail("put_item")
        for value in Item.values():
            if isinstance(value, float):
                raise TypeError("Float types are not supported. Use Decimal types instead.")
        self._items[Item[self._key_name]] = {k: _to_stored(v) for k, v in Item.items()}
        return {"ResponseMetadata": {"HTTPStatusCode": 200}}

    def update_item(self, **kwargs: Any) -> dict[str, Any]:
        self.calls.append(("update_item", kwargs))
        self._server.maybe_fail("update_item")
        key = kwargs["Key"][self._key_name]
        names = kwargs["ExpressionAttributeNames"]
        values = kwargs["ExpressionAttributeValues"]
        expression = kwargs["UpdateExpression"]
        assert expression.lower().startswith("set "), expression

        item = self._items.setdefault(key, {self._key_name: key})
        updated = {}
        for assignment in expression[4:].split(","):
            alias, placeholder = (part.strip() for part in assignment.split("="))
            attribute = names[alias]
            item[attribute] = _to_stored(values[placeholder])
            updated[attribute] = item[attribute]

        response: dict[str, Any] = {"ResponseMetadata": {"HTTPStatusCode": 200}}
        if kwargs.get("ReturnValues") == "UPDATED_NEW":
            response["Attributes"] = updated
        return response

    def delete_item(self, Key: dict[str, Any]) -> dict[str, Any]:
        self.calls.append(("delete_item", {"Key": Key}))
        self._items.pop(Key[self._key_name], None)
        return {"ResponseMetadata": {"HTTPStatusCode": 200}}

    def scan(self, **kwargs: Any) -> dict[str, Any]:
        self.calls.append(("scan", kwargs))
        self._server.maybe_fail("scan")
        keys = list(self._items)
        start = 0
        if "ExclusiveStartKey" in kwargs:
            start = keys.index(kwargs["ExclusiveStartKey"][self._key_name]) + 1
        page = keys[start : start + self._server.page_size]

        response: dict[str, Any] = {
            "Items": [self._project(self._items[key], kwargs) for key in page]
        }
        if start + self._server.page_size < len(keys):
            response["LastEvaluatedKey"] = {self._key_name: page[-1]}
        return response

    @staticmethod
    def _project(item: dict[str, Any], kwargs: dict[str, Any]) -> dict[str, Any]:
        projection = kwargs.get("ProjectionExpression")
        if not projection:
            return dict(item)
        names = kwargs.get("ExpressionAttributeNames") or {}
        attributes = []
        for token in projection.split(","):
            token = token.strip()
            if token.startswith("#"):
                if token not in names:
                    raise _client_error("ValidationException", f"Unbound {token}", "Query")
                token = names[token]
            attributes.append(token)
        return {name: item[name] for name in attributes if name in item}


class FakeDynamoDB:
    """Shared in-memory DynamoDB state, reachable from every fake resource."""

    def __init__(self) -> None:
        self.tables: dict[str, dict[str, Any]] = {}
        self.page_size = 100
        self.failures: dict[str, Exception] = {}
        self.resource_kwargs: list[dict[str, Any]] = []
        self.create_table_calls: list[dict[str, Any]] = []
        self.table_handles: dict[str, FakeTable] = {}

    def maybe_fail(self, operation: str) -> None:
        if operation in self.failures:
            raise self.failures[operation]

    def fail(self, operation: str, code: str = "InternalServerError") -> None:
        self.failures[operation] = _client_error(code, "boom", operation)

    def resource(self, service_name: str, **kwargs: Any) -> MagicMock:
        assert service_name == "dynamodb"
        self.resource_kwargs.append(kwargs)

        resource = MagicMock()
        resource.Table.side_effect = self._table
        resource.create_table.side_effect = self._create_table
        resource.meta.client.list_tables.side_effect = self._list_tables
        return resource

    def records(self, table_name: str) -> list[dict[str, Any]]:
        return list(self.tables[table_name]["items"].values())

    def _table(self, name: str) -> FakeTable:
        return self.table_handles.setdefault(name, FakeTable(self, name))

    def _create_table(self, **kwargs: Any) -> FakeTable:
        self.create_table_calls.append(kwargs)
        name = kwargs["TableName"]
        if name in self.tables:
            raise _client_error("ResourceInUseException", "Table already exists", "CreateTable")
        self.tables[name] = {
            "key": kwargs["KeySchema"][0]["AttributeName"],
            "items": {},
        }
        return self._table(name)

    def _list_tables(self, **kwargs: Any) -> dict[str, Any]:
        names = sorted(self.tables)
        start = 0
        if "ExclusiveStartTableName" in kwargs:
            start = names.index(kwargs["ExclusiveStartTableName"]) + 1
        page = names[start : start + self.page_size]
        response: dict[str, Any] = {"TableNames": page}
        if start + self.page_size < len(names):
            response["LastEvaluatedTableName"] = page[-1]
        return response


@pytest.fixture
def fake_dynamodb() -> FakeDynamoDB:
    """Patch boto3 so every DAO talks to one in-memory DynamoDB."""
    server = FakeDynamoDB()
    with patch(
        "nft_monitor.infrastructure.persistence.entity_dao.boto3.resource",
        side_effect=server.resource,
    ):
        yield server


@pytest.fixture
def settings() -> Settings:
    """Create test settings."""
    return Settings(
        aws_region="us-east-1",
        dynamodb_endpoint="http://localhost:8000",
        rpc_url="http://localhost:8545",
        contract_address="0x" + "ab" * 20,
        from_block=0,
        _env_file=None,
    )


def _make_chain_event(
    transaction_hash: str,
    block_number: int,
    token_id: int | str = 1,
    from_address: str = "0x0000000000000000000000000000000000000000",
    to_address: str = "0x1111111111111111111111111111111111111111",
) -> dict[str, Any]:
    return {
        "transactionHash": transaction_hash,
        "blockNumber": block_number,
        "args": {"from": from_address, "to": to_address, "tokenId": token_id},
    }


@pytest.fixture
def chain_event():
    """Factory for events as returned by ``NFTContract.get_transfer_events``."""
    return _make_chain_event


@pytest.fixture
def mock_chain() -> AsyncMock:
    """Create a mock chain event source."""
    mock = AsyncMock()
    mock.get_transfer_events.return_value = []
    return mock


@dataclass
class FakeLambdaContext:
    """Lambda context accepted by Powertools ``inject_lambda_context``."""

    function_name: str = "nft-monitor-test"
    memory_limit_in_mb: int = 128
    invoked_function_arn: str = "arn:aws:lambda:us-east-1:123456789012:function:nft-monitor-test"
    aws_request_id: str = "da658bd3-2d6f-4e7b-8ec2-937234644fdc"

    def get_remaining_time_in_millis(self) -> int:
        return 30000


@pytest.fixture
def lambda_context() -> FakeLambdaContext:
    """Create a Lambda context."""
    return FakeLambdaContext()
