from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from .batching import MAX_BATCH_SIZE
from .domain import KeyCase

REPO_ROOT = Path(__file__).resolve().parents[3]


def load_dotenv_file(repo_root: Path = REPO_ROOT) -> None:
    env_path = repo_root / "config" / ".env"
    if not env_path.exists():
        return
    from dotenv import load_dotenv

    load_dotenv(dotenv_path=env_path, override=False)


def _env(name: str, default: str = "") -> str:
    return os.environ.get(name, default).strip()


def _env_int(name: str, default: int) -> int:
    raw = _env(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer") from None


@dataclass(frozen=True)
class Settings:
    store_backend: str = "inmemory"
    seed_backend: str = "s3"
    table_name: str = "movies"
    dynamodb_endpoint_url: str | None = None
    read_capacity: int = 5
    write_capacity: int = 5
    s3_bucket: str = "csu44000assignment220"
    s3_object: str = "moviedata.json"
    s3_endpoint_url: str | None = None
    seed_file: str | None = None
    aws_region: str = "us-east-1"
    batch_size: int = MAX_BATCH_SIZE
    key_case: KeyCase = "lower"
    log_level: str = "INFO"
    web_dir: Path = REPO_ROOT / "web"

    def __post_init__(self) -> None:
        if self.key_case not in ("lower", "upper"):
            raise ValueError(f"unknown KEY_CASE: {self.key_case}")
        if not 1 <= self.batch_size <= MAX_BATCH_SIZE:
            raise ValueError(f"BATCH_SIZE must be between 1 and {MAX_BATCH_SIZE}")

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            store_backend=_env("STORE_BACKEND", "inmemory").lower(),
            seed_backend=_env("SEED_BACKEND", "s3").lower(),
            table_name=_env("DDB_TABLE_NAME") or "movies",
            dynamodb_endpoint_url=_env("DDB_ENDPOINT_URL") or None,
            read_capacity=_env_int("DDB_READ_CAPACITY", 5),
            write_capacity=_env_int("DDB_WRITE_CAPACITY", 5),
            s3_bucket=_env("S3_BUCKET") or "csu44000assignment220",
            s3_object=_env("S3_OBJECT") or "moviedata.json",
            s3_endpoint_url=_env("S3_ENDPOINT_URL") or None,
            seed_file=_env("SEED_FILE") or None,
            aws_region=_env("AWS_REGION") or "us-east-1",
            batch_size=_env_int("BATCH_SIZE", MAX_BATCH_SIZE),
            key_case=_env("KEY_CASE", "lower").lower(),  # type: ignore[arg-type]
            log_level=_env("LOG_LEVEL", "INFO").upper(),
            web_dir=Path(_env("WEB_DIR") or str(REPO_ROOT / "web")).resolve(),
        )
