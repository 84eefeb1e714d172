import pytest

from dates import format_day, format_publication_date, month_to_number


@pytest.mark.parametrize("token,expected", [
    ("Jan", "01"), ("Feb", "02"), ("Mar", "03"), ("Apr", "04"),
    ("May", "05"), ("Jun", "06"), ("Jul", "07"), ("Aug", "08"),
    ("Sep", "09"), ("Oct", "10"), ("Nov", "11"), ("Dec", "12"),
])
def test_month_abbreviations_map_to_two_digits(token: str, expected: str) -> None:
    assert month_to_number(token) == expected


@pytest.mark.parametrize("token,expected", [("3", "03"), ("03", "03"), ("12", "12"), ("1", "01")])
def test_numeric_months_are_zero_padded(token: str, expected: str) -> None:
    assert month_to_number(token) == expected


@pytest.mark.parametrize("token", ["0", "13", "-2", "March", "mar", "JAN", "Spring", "", None])
def test_unusable_months_fall_back_to_january(token: str | None) -> None:
    assert month_to_number(token) == "01"


def test_format_day_pads_and_defaults() -> None:
    assert format_day("5") == "05"
    assert format_day("15") == "15"
    assert format_day(None) == "01"
    assert format_day("") == "01"


def test_publication_date_requires_year() -> None:
    assert format_publication_date(None, "Mar", "15") is None
    assert format_publication_date("  ", "Mar", "15") is None


def test_publication_date_defaults_month_and_day() -> None:
    assert format_publication_date("2021") == "2021-01-01"
    assert format_publication_date("2021", "Mar", "15") == "2021-03-15"
    assert format_publication_date("2021", "7", None) == "2021-07-01"


@pytest.mark.parametrize("token,expected", [("3rd", "03"), ("3.0", "03"), (" 7 ", "07"), ("+4", "04"), ("11th", "11"), ("13th", "01")])
def test_numeric_months_read_leading_integer(token: str, expected: str) -> None:
    assert month_to_number(token) == expected
