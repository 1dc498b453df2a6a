from __future__ import annotations

from moviedb.domain import Movie
from moviedb.query import ScanFilter, parse_params


def test_parse_params_defaults():
    params = parse_params("1994")

    assert (params.year, params.rating, params.prefix) == (1994, 0, "")


def test_parse_params_normalizes_prefix_to_key_case():
    assert parse_params("1994", "8", "Pu").prefix == "pu"
    assert parse_params("1994", "8", "Pu", key_case="upper").prefix == "PU"


def test_parse_params_invalid_year_returns_none():
    assert parse_params("abc", "8", "Pu") is None
    assert parse_params(None) is None


def test_parse_params_bad_rating_falls_back_to_zero():
    assert parse_params("1994", "high").rating == 0


def test_scan_filter_to_dynamodb():
    """数値は N 型の文字列として渡す。"""

    request = ScanFilter(year=1994, prefix="pu", rating=8).to_dynamodb()

    assert request["FilterExpression"] == (
        "releaseYear = :y and begins_with(searchKey, :p) and rating >= :r"
    )
    assert request["ProjectionExpression"] == "title, releaseYear, rating"
    assert request["ExpressionAttributeValues"] == {
        ":y": {"N": "1994"},
        ":p": {"S": "pu"},
        ":r": {"N": "8"},
    }


def test_scan_filter_matches():
    movie = Movie(
        title="Pulp Fiction", search_key="pulp fiction", release_year="1994", rating="8.9", rank="1"
    )

    assert ScanFilter(year=1994, prefix="pulp", rating=8).matches(movie)
    assert not ScanFilter(year=1994, prefix="pulp", rating=9).matches(movie)
    assert not ScanFilter(year=1995, prefix="", rating=0).matches(movie)
    assert not ScanFilter(year=1994, prefix="Pulp", rating=0).matches(movie)


def test_scan_filter_without_prefix_drops_begins_with():
    request = ScanFilter(year=1994, prefix="", rating=0).to_dynamodb()

    assert request["FilterExpression"] == "releaseYear = :y and rating >= :r"
    assert ":p" not in request["ExpressionAttributeValues"]
