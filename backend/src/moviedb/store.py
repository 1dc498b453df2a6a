from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Protocol

import boto3

from .config import Settings
from .domain import Movie
from .logger import get_logger
from .query import ScanFilter

logger = get_logger(__name__)


class MovieStore(Protocol):
    table_name: str

    def table_exists(self) -> bool: ...

    def create_table(self) -> None: ...

    def wait_until_ready(self) -> None: ...

    def delete_table(self) -> None: ...

    def put_batch(self, movies: list[Movie]) -> None: ...

    def scan(self, scan_filter: ScanFilter) -> list[dict[str, str]]: ...


@dataclass
class InMemoryStore(MovieStore):
    table_name: str
    present: bool = False
    items: dict[tuple[str, Decimal], Movie] = field(default_factory=dict)

    @classmethod
    def create(cls, table_name: str = "movies") -> "InMemoryStore":
        return cls(table_name=table_name)

    def table_exists(self) -> bool:
        return self.present

    def create_table(self) -> None:
        if self.present:
            raise RuntimeError(f"table already exists: {self.table_name}")
        self.present = True
        self.items = {}

    def wait_until_ready(self) -> None:
        if not self.present:
            raise KeyError(self.table_name)

    def delete_table(self) -> None:
        if not self.present:
            raise KeyError(self.table_name)
        self.present = False
        self.items = {}

    def put_batch(self, movies: list[Movie]) -> None:
        if not self.present:
            raise KeyError(self.table_name)
        for movie in movies:
            # (searchKey, releaseYear) が同じなら後勝ち
            self.items[(movie.search_key, Decimal(movie.release_year))] = movie

    def scan(self, scan_filter: ScanFilter) -> list[dict[str, str]]:
        if not self.present:
            raise KeyError(self.table_name)
        return [
            {"title": m.title, "releaseYear": m.release_year, "rating": m.rating}
            for m in self.items.values()
            if scan_filter.matches(m)
        ]


@dataclass
class DynamoDBStore(MovieStore):
    table_name: str
    client: Any
    read_capacity: int = 5
    write_capacity: int = 5

    @classmethod
    def from_settings(cls, settings: Settings) -> "DynamoDBStore":
        if not settings.table_name:
            raise RuntimeError("DDB_TABLE_NAME is required for dynamodb store")
        client = boto3.client(
            "dynamodb",
            region_name=settings.aws_region,
            endpoint_url=settings.dynamodb_endpoint_url,
        )
        return cls(
            table_name=settings.table_name,
            client=client,
            read_capacity=settings.read_capacity,
            write_capacity=settings.write_capacity,
        )

    def table_exists(self) -> bool:
        kwargs: dict[str, Any] = {}
        while True:
            resp = self.client.list_tables(**kwargs)
            if self.table_name in resp.get("TableNames", []):
                return True
            last = resp.get("LastEvaluatedTableName")
            if not last:
                return False
            kwargs["ExclusiveStartTableName"] = last

    def create_table(self) -> None:
        self.client.create_table(
            TableName=self.table_name,
            AttributeDefinitions=[
                {"AttributeName": "searchKey", "AttributeType": "S"},
                {"AttributeName": "releaseYear", "AttributeType": "N"},
            ],
            KeySchema=[
                {"AttributeName": "searchKey", "KeyType": "HASH"},
                {"AttributeName": "releaseYear", "KeyType": "RANGE"},
            ],
            ProvisionedThroughput={
                "ReadCapacityUnits": self.read_capacity,
                "WriteCapacityUnits": self.write_capacity,
            },
        )

    def wait_until_ready(self) -> None:
        self.client.get_waiter("table_exists").wait(TableName=self.table_name)

    def delete_table(self) -> None:
        self.client.delete_table(TableName=self.table_name)

    def put_batch(self, movies: list[Movie]) -> None:
        request_items = {
            self.table_name: [{"PutRequest": {"Item": _to_item(m)}} for m in movies]
        }
        while request_items:
            resp = self.client.batch_write_item(RequestItems=request_items)
            request_items = resp.get("UnprocessedItems") or {}
            if request_items:
                pending = sum(len(v) for v in request_items.values())
                logger.warning("Resubmitting %d unprocessed items", pending)

    def scan(self, scan_filter: ScanFilter) -> list[dict[str, str]]:
        resp = self.client.scan(TableName=self.table_name, **scan_filter.to_dynamodb())
        if resp.get("LastEvaluatedKey"):
            logger.warning("Scan result truncated to the first page")
        return [_from_item(item) for item in resp.get("Items", [])]


def _to_item(movie: Movie) -> dict[str, dict[str, str]]:
    return {
        "searchKey": {"S": movie.search_key},
        "releaseYear": {"N": movie.release_year},
        "title": {"S": movie.title},
        "rating": {"N": movie.rating},
        "rank": {"N": movie.rank},
    }


def _from_item(item: dict[str, dict[str, str]]) -> dict[str, str]:
    # S と N だけを扱う。N は文字列のまま返す
    return {name: next(iter(value.values())) for name, value in item.items()}


def build_store(settings: Settings) -> MovieStore:
    kind = settings.store_backend
    if kind == "dynamodb":
        return DynamoDBStore.from_settings(settings)
    if kind == "inmemory":
        return InMemoryStore.create(settings.table_name)
    raise RuntimeError(f"unknown STORE_BACKEND: {kind}")
