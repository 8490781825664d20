from models import Country
from services import filter_countries

from conftest import make_countries


ASTAN = Country(name="Astan", region="Nowhere", code="ZZ", capital="Foo")
SAMOA = Country(name="Samoa", region="Oceania", code="AS", capital="Pago Pago")
NORWAY = Country(name="Norway", region="Europe", code="NO", capital="Oslo")


def test_query_matches_name_and_code_but_not_capital_only():
    result = filter_countries([ASTAN, SAMOA, NORWAY], "as")
    assert result == [ASTAN, SAMOA]


def test_match_is_case_insensitive_for_query_and_fields():
    assert filter_countries([NORWAY], "OSLO") == [NORWAY]
    assert filter_countries([NORWAY], "eUrOpE") == [NORWAY]


def test_each_of_the_four_fields_is_searched():
    assert filter_countries([SAMOA], "samoa") == [SAMOA]
    assert filter_countries([SAMOA], "oceania") == [SAMOA]
    assert filter_countries([SAMOA], "as") == [SAMOA]
    assert filter_countries([SAMOA], "pago") == [SAMOA]


def test_empty_query_returns_nothing():
    assert filter_countries(make_countries(10), "") == []


def test_whitespace_query_is_not_trimmed():
    assert filter_countries([NORWAY], " ") == []
    spaced = Country(name="New Zealand", region="Oceania", code="NZ", capital="Wellington")
    assert filter_countries([spaced, NORWAY], " ") == [spaced]


def test_result_keeps_input_order_and_size_is_unbounded():
    countries = make_countries(100)
    result = filter_countries(countries, "country")
    assert result == countries


def test_filter_does_not_modify_the_store(store_of):
    store = store_of(make_countries(30))
    before = store.get()
    filter_countries(store.get(), "1")
    assert store.get() is before
    assert len(store) == 30
