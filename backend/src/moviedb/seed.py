from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Protocol

import boto3
from pydantic import TypeAdapter

from .batching import MAX_BATCH_SIZE, partition
from .config import Settings
from .domain import KeyCase, SourceMovie, to_record
from .logger import get_logger
from .store import MovieStore

logger = get_logger(__name__)

_seed_adapter = TypeAdapter(list[SourceMovie])


def parse_seed(body: bytes | str) -> list[SourceMovie]:
    """JSON 配列として読み込む。形式が違えば ValidationError。"""

    return _seed_adapter.validate_json(body)


class SeedSource(Protocol):
    def fetch(self) -> list[SourceMovie]: ...


@dataclass
class S3SeedSource(SeedSource):
    bucket: str
    key: str
    client: Any

    @classmethod
    def from_settings(cls, settings: Settings) -> "S3SeedSource":
        if not settings.s3_bucket or not settings.s3_object:
            raise RuntimeError("S3_BUCKET and S3_OBJECT are required for s3 seed")
        client = boto3.client(
            "s3",
            region_name=settings.aws_region,
            endpoint_url=settings.s3_endpoint_url,
        )
        return cls(bucket=settings.s3_bucket, key=settings.s3_object, client=client)

    def fetch(self) -> list[SourceMovie]:
        logger.info("Contacting S3 bucket s3://%s/%s", self.bucket, self.key)
        resp = self.client.get_object(Bucket=self.bucket, Key=self.key)
        movies = parse_seed(resp["Body"].read())
        logger.info("Extracted %d movies from S3", len(movies))
        return movies


@dataclass
class FileSeedSource(SeedSource):
    path: Path

    def fetch(self) -> list[SourceMovie]:
        logger.info("Reading seed file %s", self.path)
        return parse_seed(self.path.read_bytes())


def build_seed_source(settings: Settings) -> SeedSource:
    kind = settings.seed_backend
    if kind == "s3":
        return S3SeedSource.from_settings(settings)
    if kind == "file":
        if not settings.seed_file:
            raise RuntimeError("SEED_FILE is required for file seed")
        return FileSeedSource(path=Path(settings.seed_file))
    raise RuntimeError(f"unknown SEED_BACKEND: {kind}")


def load(
    store: MovieStore,
    sources: list[SourceMovie],
    key_case: KeyCase = "lower",
    batch_size: int = MAX_BATCH_SIZE,
) -> int:
    """バッチを順番に1つずつ書き込み、失敗したらそこで止める。書いたバッチ数を返す。"""

    batches = partition(sources, batch_size)
    for i, batch in enumerate(batches, start=1):
        logger.info("Inserting data batch %d/%d", i, len(batches))
        store.put_batch([to_record(s, key_case) for s in batch])
    return len(batches)
