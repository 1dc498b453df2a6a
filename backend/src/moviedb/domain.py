from __future__ import annotations

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

KeyCase = Literal["lower", "upper"]

SENTINEL = "-1"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)", re.ASCII)


def normalize_title(title: str, key_case: KeyCase) -> str:
    """タイトルを検索キー用に大文字/小文字へ揃える。

    ロード時とクエリ時で同じ key_case を使わないと一致しない。
    """

    if key_case == "upper":
        return title.upper()
    return title.lower()


def parse_int(raw: object, default: int | None = None) -> int | None:
    """先頭の整数部分を返す（"8.5" は 8）。数字で始まらなければ default。"""

    if raw is None or isinstance(raw, bool):
        return default
    if isinstance(raw, int):
        return raw
    match = _LEADING_INT.match(str(raw))
    if match is None:
        return default
    return int(match.group(1))


def number_or_sentinel(value: object) -> str:
    """DynamoDB の N 型に入れる文字列。数値でなければ "-1"。"""

    if value is None or isinstance(value, bool):
        return SENTINEL
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return SENTINEL
        return str(value)
    if isinstance(value, (str, Decimal)):
        try:
            number = Decimal(str(value).strip())
        except InvalidOperation:
            return SENTINEL
        if not number.is_finite():
            return SENTINEL
        return str(number)
    return SENTINEL


class SourceInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    rating: Any = None
    rank: Any = None


class SourceMovie(BaseModel):
    """シードデータ1件分。"""

    model_config = ConfigDict(extra="ignore")

    title: str
    year: Any = None
    info: SourceInfo = Field(default_factory=SourceInfo)

    @field_validator("info", mode="before")
    @classmethod
    def _null_info(cls, v: object) -> object:
        if v is None:
            return SourceInfo()
        return v


class Movie(BaseModel):
    title: str
    search_key: str
    release_year: str
    rating: str
    rank: str


def to_record(source: SourceMovie, key_case: KeyCase) -> Movie:
    return Movie(
        title=source.title,
        search_key=normalize_title(source.title, key_case),
        release_year=number_or_sentinel(source.year),
        rating=number_or_sentinel(source.info.rating),
        rank=number_or_sentinel(source.info.rank),
    )


class QueryParams(BaseModel):
    year: int
    rating: int = 0
    prefix: str = ""


class MovieOut(BaseModel):
    title: str
    year: str
    rating: str


class Result(BaseModel):
    success: bool
    message: str
    movies: Union[list[MovieOut], dict[str, Any]] = Field(default_factory=dict)


class Envelope(BaseModel):
    result: Result


def respond(success: bool, message: str, movies: list[MovieOut] | None = None) -> Envelope:
    return Envelope(
        result=Result(
            success=success,
            message=message,
            movies=movies if movies is not None else {},
        )
    )
