import pytest

from studyhall.core.exceptions import InvalidShiftError
from studyhall.fees.calculator import SHIFT_COMBINATIONS, combination_key, quote_fee, total_admission_amount


def test_single_shift_prices():
    assert quote_fee(["morning"]) == 299
    assert quote_fee(["noon"]) == 349


def test_combination_prices():
    assert quote_fee(["morning", "noon"]) == 549
    assert quote_fee(["noon", "evening", "night"]) == 749
    assert quote_fee(["morning", "noon", "evening", "night"]) == 999


def test_order_and_duplicates_do_not_matter():
    assert quote_fee(["morning", "noon"]) == quote_fee(["noon", "morning"])
    assert quote_fee(["night", "night", "evening"]) == quote_fee(["evening", "night"])


def test_every_non_empty_subset_is_priced():
    assert len(SHIFT_COMBINATIONS) == 15
    assert all(combination_key(k.split(",")) == k for k in SHIFT_COMBINATIONS)


def test_falls_back_to_individual_prices_for_unlisted_combination():
    assert quote_fee(["morning", "noon"], table={"morning": 299}) == 299 + 349


def test_input_is_not_mutated():
    selected = ["noon", "morning"]
    quote_fee(selected)
    assert selected == ["noon", "morning"]


def test_empty_selection_costs_nothing():
    assert quote_fee([]) == 0


def test_unknown_shift_rejected():
    with pytest.raises(InvalidShiftError):
        quote_fee(["morning", "lunch"])


def test_admission_total_adds_registration_fee():
    assert total_admission_amount(["morning"]) == 349
    assert total_admission_amount(["morning", "noon", "evening", "night"]) == 1049
