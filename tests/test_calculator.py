from types import SimpleNamespace

import pytest

from marketplace.domain.pricing.calculator import calculate_price, resolve_base_price


def mod(type, value, unit="FIXED"):
    return SimpleNamespace(id=f"{type}-{value}", type=type, value=value, unit=unit)


def test_sums_base_modifiers_fees_and_taxes():
    mods = [mod("BASE_PRICE", 100), mod("BASE_MOD", 25), mod("FEE", 20), mod("TAX", 5)]

    assert calculate_price(mods) == 150


def test_addons_are_not_included():
    mods = [mod("BASE_PRICE", 100), mod("ADDON", 70)]

    assert calculate_price(mods) == 100


def test_percent_mods_apply_to_base_price():
    mods = [mod("BASE_PRICE", 200), mod("FEE", 10, unit="PERCENT"), mod("TAX", 5, unit="PERCENT")]

    assert calculate_price(mods) == pytest.approx(230)


def test_percent_mod_before_base_still_uses_base():
    # instance-level percent fee sorts ahead of a property-level base price
    mods = [mod("FEE", 10, unit="PERCENT"), mod("BASE_PRICE", 300)]

    assert calculate_price(mods) == pytest.approx(330)


def test_first_base_price_wins():
    mods = [mod("BASE_PRICE", 120), mod("BASE_PRICE", 90)]

    assert resolve_base_price(mods) == 120
    assert calculate_price(mods) == 120


def test_legacy_types_are_ignored():
    mods = [mod("BASE_PRICE", 100), mod("FIXED", 40), mod("PERCENT", 10)]

    assert calculate_price(mods) == 100


def test_empty_list_costs_nothing():
    assert resolve_base_price([]) is None
    assert calculate_price([]) == 0
