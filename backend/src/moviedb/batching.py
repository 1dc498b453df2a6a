from __future__ import annotations

from typing import Sequence, TypeVar

T = TypeVar("T")

# DynamoDB BatchWriteItem の上限
MAX_BATCH_SIZE = 25


def partition(items: Sequence[T], batch_size: int = MAX_BATCH_SIZE) -> list[list[T]]:
    """items を先頭から batch_size 件ずつに分割する。

    最後のバッチだけ端数になる。空のバッチは返さない。
    """

    if batch_size < 1:
        raise ValueError("batch_size must be positive")
    return [list(items[i : i + batch_size]) for i in range(0, len(items), batch_size)]
