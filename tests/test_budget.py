import pytest

from jodi.filters.budget import budget_fields, parse_budget_amount, parse_number


@pytest.mark.parametrize("budget, expected", [
    ("₹5,00,000", 500000),
    ("₹7,50,000", 750000),
    ("  ₹ 12,50,000.50 ", 1250000.5),
    ("Rs. 3,00,000", 300000),
    ("INR 900000", 900000),
    ("$25,000", 25000),
    ("400000", 400000),
])
def test_parse_budget_amount(budget, expected):
    assert parse_budget_amount(budget) == expected


@pytest.mark.parametrize("budget", ["5 Lakhs", "negotiable", "", None, "5-10 lakh", "-500"])
def test_parse_budget_amount_without_number(budget):
    assert parse_budget_amount(budget) is None


def test_parse_number_rejects_signs_and_exponents():
    assert parse_number("1,000") == 1000
    assert parse_number("12.") == 12
    assert parse_number(".5") == 0.5
    assert parse_number("+5") is None
    assert parse_number("1e3") is None
    assert parse_number("nan") is None


def test_budget_fields_sets_numeric_value():
    assert budget_fields("₹5,00,000") == ({"budgetNumeric": 500000}, {})


def test_budget_fields_unsets_numeric_value():
    assert budget_fields("5 Lakhs") == ({}, {"budgetNumeric": ""})
