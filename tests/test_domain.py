from __future__ import annotations

import pytest

from greetings_api.core.errors import InvalidArgumentError
from greetings_api.domain.greetings import (
    Greeting,
    GreetingFilter,
    GreetingInput,
    next_id,
    parse_formal,
    parse_id,
)


@pytest.mark.parametrize("raw, expected", [("1", 1), (" 42 ", 42), ("+7", 7), (5, 5), ("-3", -3)])
def test_parse_id_accepts_integers(raw, expected):
    assert parse_id(raw) == expected


@pytest.mark.parametrize("raw", ["abc", "12abc", "", "1.5", None, True])
def test_parse_id_rejects_non_integers(raw):
    with pytest.raises(InvalidArgumentError) as exc:
        parse_id(raw)
    assert exc.value.message == "Invalid ID format"


def test_parse_formal_variants():
    assert parse_formal(None) is None
    assert parse_formal(False) is False
    assert parse_formal("yes") is True
    assert parse_formal("False") is False
    assert parse_formal(0) is False
    with pytest.raises(InvalidArgumentError):
        parse_formal("maybe")
    with pytest.raises(InvalidArgumentError):
        parse_formal([True])


def test_input_trims_and_requires_text():
    data = GreetingInput.build("  French ", " Bonjour  ")
    assert data == GreetingInput("French", "Bonjour", None)
    for language, greeting in (("French", None), ("   ", "x"), (3, "x")):
        with pytest.raises(InvalidArgumentError):
            GreetingInput.build(language, greeting)


def test_filter_from_query_and_matching():
    record = Greeting(1, "Spanish", "Hola", False)
    assert GreetingFilter.from_query("SPAN").matches(record)
    assert not GreetingFilter.from_query("fren").matches(record)
    assert GreetingFilter.from_query(formal="false").matches(record)
    assert GreetingFilter.from_query(formal="anything").formal is False
    assert GreetingFilter.from_query(formal="true").formal is True
    assert GreetingFilter.from_query(formal="TRUE").formal is False
    assert not GreetingFilter.from_query("span", "true").matches(record)
    assert GreetingFilter.from_query("", None) == GreetingFilter()


def test_next_id():
    assert next_id([]) == 1
    assert next_id([Greeting(3, "a", "b"), Greeting(1, "c", "d")]) == 4
