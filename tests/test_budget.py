from datetime import date, datetime

import pytest

from voyagehub.modules.planner import budget as b


def test_currency_lookup_is_case_insensitive():
    assert b.get_currency("inr").rate == 83.5
    assert b.get_currency(" EUR ").symbol == "€"


def test_unknown_currency_is_rejected():
    with pytest.raises(b.InvalidCurrency) as exc:
        b.get_currency("XYZ")
    assert exc.value.title == "Invalid Currency"


@pytest.mark.parametrize("amount,code,expected", [
    ("500", "USD", 500),
    ("8350", "INR", 100),
    ("1000", "JPY", 7),
    ("92", "EUR", 100),
    ("250abc", "USD", 250),
    ("12.9", "USD", 12),
    ("abc", "USD", 0),
    ("", "USD", 0),
    (None, "USD", 0),
])
def test_convert_to_usd(amount, code, expected):
    assert b.convert_to_usd(amount, b.get_currency(code)) == expected


def test_round_half_up_differs_from_builtin_round():
    assert b.round_half_up(2.5) == 3
    assert b.round_half_up(3.5) == 4
    assert b.round_half_up(2.49) == 2


def test_validate_budget_messages():
    with pytest.raises(b.InvalidBudget, match="Budget is required"):
        b.validate_budget("   ")
    with pytest.raises(b.InvalidBudget, match="Enter a valid amount"):
        b.validate_budget("0")
    with pytest.raises(b.InvalidBudget, match="Enter a valid amount"):
        b.validate_budget("lots")
    assert b.validate_budget("750") == 750
    assert b.validate_budget(300) == 300


def test_same_day_counts_as_one_day():
    d = date(2026, 5, 1)
    assert b.calculate_days(d, d) == 1


def test_days_are_absolute_and_rounded_up():
    assert b.calculate_days(date(2026, 5, 1), date(2026, 5, 4)) == 3
    assert b.calculate_days(date(2026, 5, 4), date(2026, 5, 1)) == 3
    assert b.calculate_days(datetime(2026, 5, 1, 9), datetime(2026, 5, 2, 10)) == 2


def test_validate_date_range():
    b.validate_date_range(date(2026, 5, 1), date(2026, 5, 2))
    b.validate_date_range(date(2026, 5, 1), date(2026, 5, 1))
    with pytest.raises(b.InvalidDateRange, match="End date must be after start date."):
        b.validate_date_range(date(2026, 5, 3), date(2026, 5, 1))


def test_start_date_in_the_past_is_rejected():
    with pytest.raises(b.InvalidDateRange, match="past"):
        b.validate_date_range(date(2026, 1, 1), date(2026, 1, 5), today=date(2026, 2, 1))


def test_members_are_clamped():
    assert b.clamp_members(0) == 1
    assert b.clamp_members(7) == 7
    assert b.clamp_members(25) == 20


@pytest.mark.parametrize("budget_usd,days,members,key,ppd", [
    (140, 5, 2, "very_tight", 14),
    (150, 5, 2, "budget", 15),
    (490, 5, 2, "budget", 49),
    (500, 5, 2, "midrange", 50),
    (1490, 5, 2, "midrange", 149),
    (1500, 5, 2, "luxury", 150),
])
def test_budget_tier_thresholds(budget_usd, days, members, key, ppd):
    tier = b.budget_tier(budget_usd, days, members)
    assert tier.key == key
    assert tier.ppd == ppd


def test_budget_tier_needs_all_inputs():
    assert b.budget_tier(0, 3, 2) is None
    assert b.budget_tier(500, 0, 2) is None
    assert b.budget_tier(500, 3, 0) is None


def test_minimum_budget_and_category_share():
    assert b.minimum_budget(3, 2) == 90
    assert b.category_budget(1000) == 250
    assert b.category_budget(1002) == 251
    assert b.category_budget(None) == 0


def test_tight_budget_message_mentions_numbers():
    err = b.TightBudget(days=1, members=1, minimum=15, budget_usd=10)
    assert "For 1 day with 1 person" in err.message
    assert "$15" in err.message
    assert err.status_code == 409


def test_parse_interests():
    assert b.parse_interests(" food, museums,, adventure ,") == ["food", "museums", "adventure"]
    assert b.parse_interests("") == []


def test_format_date():
    assert b.format_date(date(2026, 3, 5)) == "Mar 5, 2026"
