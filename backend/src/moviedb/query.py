from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from .domain import KeyCase, Movie, MovieOut, QueryParams, normalize_title, parse_int
from .logger import get_logger

if TYPE_CHECKING:
    from .store import MovieStore

logger = get_logger(__name__)

YEAR_CONDITION = "releaseYear = :y"
PREFIX_CONDITION = "begins_with(searchKey, :p)"
RATING_CONDITION = "rating >= :r"
PROJECTION_EXPRESSION = "title, releaseYear, rating"


def parse_params(
    year_raw: str | None,
    rating_raw: str | None = None,
    prefix_raw: str | None = None,
    key_case: KeyCase = "lower",
) -> QueryParams | None:
    """パスパラメータを検索条件にする。year が整数でなければ None。"""

    year = parse_int(year_raw)
    if year is None:
        return None
    return QueryParams(
        year=year,
        rating=parse_int(rating_raw, 0),
        prefix=normalize_title(prefix_raw or "", key_case),
    )


@dataclass(frozen=True)
class ScanFilter:
    year: int
    prefix: str
    rating: int

    @classmethod
    def from_params(cls, params: QueryParams) -> "ScanFilter":
        return cls(year=params.year, prefix=params.prefix, rating=params.rating)

    def to_dynamodb(self) -> dict[str, Any]:
        conditions = [YEAR_CONDITION]
        values: dict[str, dict[str, str]] = {":y": {"N": str(self.year)}}
        # 空の接頭辞はすべてに一致するので条件ごと省く
        if self.prefix:
            conditions.append(PREFIX_CONDITION)
            values[":p"] = {"S": self.prefix}
        conditions.append(RATING_CONDITION)
        values[":r"] = {"N": str(self.rating)}
        return {
            "FilterExpression": " and ".join(conditions),
            "ProjectionExpression": PROJECTION_EXPRESSION,
            "ExpressionAttributeValues": values,
        }

    def matches(self, movie: Movie) -> bool:
        return (
            Decimal(movie.release_year) == self.year
            and movie.search_key.startswith(self.prefix)
            and Decimal(movie.rating) >= self.rating
        )


def to_movie_out(item: dict[str, str]) -> MovieOut:
    return MovieOut(title=item["title"], year=item["releaseYear"], rating=item["rating"])


def run_query(store: MovieStore, params: QueryParams) -> list[MovieOut]:
    logger.info(
        "Querying table year=%s rating>=%s prefix=%r", params.year, params.rating, params.prefix
    )
    items = store.scan(ScanFilter.from_params(params))
    movies = [to_movie_out(item) for item in items]
    logger.info("Query returned %d movies", len(movies))
    return movies
