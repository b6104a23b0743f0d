"""Tests for the shareable reference codec."""

from __future__ import annotations

import pytest

from loan_payoff import url_codec
from loan_payoff.errors import ParseError


def test_encode_replaces_spaces():
    assert url_codec.encode("Something with a space") == "Something+with+a+space"


def test_encode_leaves_other_characters():
    assert url_codec.encode("Café/€ 50%") == "Café/€+50%"


def test_decode_replaces_plus():
    assert url_codec.decode("Something+with+a+space") == "Something with a space"


@pytest.mark.parametrize("name", ["a|b", "a&b", "a+b", "C++ fund"])
def test_encode_rejects_separators(name):
    with pytest.raises(ParseError):
        url_codec.encode(name)


def test_split_loan_token():
    assert url_codec.split_loan_token("Test|1000|4.5|6") == ["Test", "1000", "4.5", "6"]


@pytest.mark.parametrize("token", ["", "a|b|c", "a|b|c|d|e"])
def test_split_loan_token_wrong_field_count(token):
    with pytest.raises(ParseError, match="NAME\\|AMOUNT\\|INTEREST\\|PAYMENT"):
        url_codec.split_loan_token(token)


def test_split_loan_set():
    assert url_codec.split_loan_set("a|1|1|1&b|2|2|2") == ["a|1|1|1", "b|2|2|2"]
    assert url_codec.split_loan_set("   ") == []


def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        url_codec.split_loan_token("nope")
