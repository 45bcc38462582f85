from __future__ import annotations

import pytest

from marketplace.domain.listings.entities import ListingDraft
from marketplace.domain.listings.exceptions import (
    InvalidListingQueryError,
    ListingValidationError,
)
from marketplace.domain.listings.policy import parse_listing_query, validate_listing
from marketplace.domain.users.exceptions import (
    InvalidLoginError,
    InvalidPasswordError,
    InvalidProfileError,
)
from marketplace.domain.users.policy import validate_login, validate_name, validate_password


def _draft(**overrides) -> ListingDraft:
    values = {
        "title": "Vintage bicycle",
        "description": "Steel frame, recently serviced.",
        "image_url": "https://cdn.example.com/bike.JPG",
        "price": 150.0,
    }
    values.update(overrides)
    return ListingDraft(**values)


@pytest.mark.parametrize("login", ["abc", "user.name_1", "a-b-c", "x" * 30])
def test_valid_logins(login: str) -> None:
    assert validate_login(login) == login


@pytest.mark.parametrize("login", ["ab", "x" * 31, "has space", "юзер", ""])
def test_invalid_logins(login: str) -> None:
    with pytest.raises(InvalidLoginError):
        validate_login(login)


@pytest.mark.parametrize(
    ("password", "reason"),
    [
        ("short1", "too_short"),
        ("a" * 33, "too_long"),
        ("has space 123", "invalid_chars"),
        ("dash-not-ok1", "invalid_chars"),
    ],
)
def test_invalid_passwords(password: str, reason: str) -> None:
    with pytest.raises(InvalidPasswordError) as exc_info:
        validate_password(password)

    assert exc_info.value.context["reason"] == reason


def test_password_with_allowed_symbols() -> None:
    assert validate_password("Pa$$w0rd_!@#") == "Pa$$w0rd_!@#"


def test_names_are_trimmed_and_checked() -> None:
    assert validate_name("  Anna-Maria ", field="first_name") == "Anna-Maria"
    with pytest.raises(InvalidProfileError) as exc_info:
        validate_name("X", field="last_name")
    assert exc_info.value.context["field"] == "last_name"
    with pytest.raises(InvalidProfileError):
        validate_name("R2D2", field="first_name")


def test_valid_listing_is_trimmed() -> None:
    draft = validate_listing(_draft(title="  Vintage bicycle  "))

    assert draft.title == "Vintage bicycle"


def test_all_listing_errors_reported_together() -> None:
    with pytest.raises(ListingValidationError) as exc_info:
        validate_listing(
            _draft(title="ab", description="short", price=-1, image_url="ftp://x/y.png")
        )

    fields = exc_info.value.context["fields"]
    assert set(fields) == {"title", "description", "price", "image_url"}
    assert exc_info.value.code == "listing_invalid"


@pytest.mark.parametrize(
    "url",
    [
        "",
        "not a url",
        "https://cdn.example.com/image.bmp",
        "https://cdn.example.com/image",
        "/relative/path.png",
        "https://cdn.example.com/" + "a" * 2048 + ".png",
    ],
)
def test_bad_image_urls(url: str) -> None:
    with pytest.raises(ListingValidationError) as exc_info:
        validate_listing(_draft(image_url=url))

    assert set(exc_info.value.context["fields"]) == {"image_url"}


def test_price_bounds_are_inclusive() -> None:
    assert validate_listing(_draft(price=0)).price == 0
    assert validate_listing(_draft(price=1_000_000_000)).price == 1_000_000_000
    with pytest.raises(ListingValidationError):
        validate_listing(_draft(price=1_000_000_000.01))


def test_query_defaults() -> None:
    query = parse_listing_query()

    assert (query.limit, query.offset, query.sort_by, query.order) == (10, 0, "created_at", "desc")
    assert query.min_price is None and query.max_price is None


def test_query_parses_values() -> None:
    query = parse_listing_query(
        limit="100", offset="20", sort="price", order="asc", min_price="1.5", max_price="99"
    )

    assert (query.limit, query.offset, query.sort_by, query.order) == (100, 20, "price", "asc")
    assert (query.min_price, query.max_price) == (1.5, 99.0)


@pytest.mark.parametrize(
    ("kwargs", "param"),
    [
        ({"limit": "0"}, "limit"),
        ({"limit": "101"}, "limit"),
        ({"limit": "ten"}, "limit"),
        ({"offset": "-1"}, "offset"),
        ({"offset": "2147483648"}, "offset"),
        ({"sort": "title"}, "sort"),
        ({"order": "sideways"}, "order"),
        ({"min_price": "-5"}, "min_price"),
        ({"max_price": "nan"}, "max_price"),
    ],
)
def test_query_rejects_bad_values(kwargs: dict[str, str], param: str) -> None:
    with pytest.raises(InvalidListingQueryError) as exc_info:
        parse_listing_query(**kwargs)

    assert exc_info.value.context == {"param": param}
