from __future__ import annotations

from dataclasses import dataclass

from .batching import MAX_BATCH_SIZE
from .config import Settings
from .domain import Envelope, KeyCase, respond
from .logger import get_logger
from .query import parse_params, run_query
from .seed import SeedSource, build_seed_source, load
from .store import MovieStore, build_store

logger = get_logger(__name__)

MSG_CREATED = "Creation successful!"
MSG_ALREADY_EXISTS = "Table already exists"
MSG_DELETED = "Table Deleted!"
MSG_NOT_FOUND = "Table does not exist."
MSG_OK = "OK"
MSG_INVALID_YEAR = "Invalid year"


@dataclass
class MovieService:
    store: MovieStore
    seed: SeedSource
    key_case: KeyCase = "lower"
    batch_size: int = MAX_BATCH_SIZE

    def setup_table(self) -> Envelope:
        """テーブル作成からシードデータ投入までを順番に行う。"""

        if self.store.table_exists():
            return respond(False, MSG_ALREADY_EXISTS)

        sources = self.seed.fetch()

        logger.info("Creating table %s", self.store.table_name)
        try:
            self.store.create_table()
            self.store.wait_until_ready()
            logger.info("Table %s is ready", self.store.table_name)
            load(self.store, sources, self.key_case, self.batch_size)
        except Exception:
            logger.exception("Setting up table %s failed", self.store.table_name)
            raise

        logger.info("Done!")
        return respond(True, MSG_CREATED)

    def delete_table(self) -> Envelope:
        if not self.store.table_exists():
            return respond(False, MSG_NOT_FOUND)

        logger.info("Deleting table %s", self.store.table_name)
        self.store.delete_table()
        logger.info("Done")
        return respond(True, MSG_DELETED)

    def query(
        self,
        year_raw: str | None,
        rating_raw: str | None = None,
        prefix_raw: str | None = None,
    ) -> Envelope:
        params = parse_params(year_raw, rating_raw, prefix_raw, self.key_case)
        if params is None:
            return respond(False, MSG_INVALID_YEAR)
        return respond(True, MSG_OK, run_query(self.store, params))


def build_service(settings: Settings) -> MovieService:
    return MovieService(
        store=build_store(settings),
        seed=build_seed_source(settings),
        key_case=settings.key_case,
        batch_size=settings.batch_size,
    )
