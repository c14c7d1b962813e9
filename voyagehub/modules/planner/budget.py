"""
Budget and date arithmetic behind the trip planner.

All budgets are normalised to whole US dollars before tiering. The tier
thresholds work on the per-person-per-day (PPD) amount:

    PPD < 15   -> very_tight
    PPD < 50   -> budget
    PPD < 150  -> midrange
    otherwise  -> luxury

Budgets only cover in-destination costs (hotels, food, local transport,
activities); flights to get there are excluded.
"""

import math
import re
from dataclasses import dataclass
from datetime import date, datetime
from typing import Dict, List, Optional, Union

MIN_PPD_USD = 15
MIN_TRIP_DAYS = 2
MIN_MEMBERS = 1
MAX_MEMBERS = 20
CATEGORY_SHARE = 0.25  # hotels / food / activities / transport each get a quarter

GROUP_TYPES = ["Solo", "Couple", "Family", "Friends"]

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

DateLike = Union[date, datetime]


@dataclass(frozen=True)
class Currency:
    code: str
    symbol: str
    label: str
    rate: float  # units per 1 USD


CURRENCIES: List[Currency] = [
    Currency("USD", "$", "US Dollar", 1),
    Currency("INR", "₹", "Indian Rupee", 83.5),
    Currency("EUR", "€", "Euro", 0.92),
    Currency("GBP", "£", "British Pound", 0.79),
    Currency("JPY", "¥", "Japanese Yen", 149.5),
    Currency("AUD", "A$", "Australian Dollar", 1.53),
    Currency("CAD", "C$", "Canadian Dollar", 1.36),
    Currency("SGD", "S$", "Singapore Dollar", 1.34),
    Currency("AED", "د.إ", "UAE Dirham", 3.67),
    Currency("THB", "฿", "Thai Baht", 35.1),
]
_CURRENCIES_BY_CODE: Dict[str, Currency] = {c.code: c for c in CURRENCIES}


@dataclass(frozen=True)
class BudgetTier:
    key: str
    label: str
    ppd: int


class PlannerError(ValueError):
    """A planner rule rejected the request. title/message mirror the alert the app shows."""
    status_code = 400

    def __init__(self, title: str, message: str):
        super().__init__(message)
        self.title = title
        self.message = message


class MissingDestination(PlannerError):
    def __init__(self):
        super().__init__("Missing Destination", "Please enter a destination first.")


class LoginRequired(PlannerError):
    status_code = 401

    def __init__(self):
        super().__init__(
            "Login Required",
            "Create a free account to generate and save your itinerary. It only takes 30 seconds!",
        )


class InvalidBudget(PlannerError):
    def __init__(self, message: str):
        super().__init__("Budget Required", message)


class InvalidCurrency(PlannerError):
    def __init__(self, code: Optional[str]):
        super().__init__("Invalid Currency", f"Unsupported currency: {code}")


class InvalidDateRange(PlannerError):
    def __init__(self, message: str = "End date must be after start date."):
        super().__init__("Invalid Date", message)


class TripTooShort(PlannerError):
    def __init__(self):
        super().__init__("Too Short!", f"Pick at least {MIN_TRIP_DAYS} days to explore a city!")


class TightBudget(PlannerError):
    """Budget under the recommended minimum. The caller may resend with allow_tight_budget."""
    status_code = 409

    def __init__(self, days: int, members: int, minimum: int, budget_usd: int):
        self.days = days
        self.members = members
        self.minimum = minimum
        self.budget_usd = budget_usd
        day_word = "day" if days == 1 else "days"
        people_word = "person" if members == 1 else "people"
        super().__init__(
            "Budget Too Low",
            f"For {days} {day_word} with {members} {people_word}, the minimum recommended budget is "
            f"${minimum} (${MIN_PPD_USD}/person/day).\n\nYour budget: ${budget_usd} USD\n\n"
            "Want to continue with a tight budget?",
        )


def round_half_up(value: float) -> int:
    """Halves round up (2.5 -> 3), unlike the built-in round."""
    return math.floor(value + 0.5)


def get_currency(code: str) -> Currency:
    currency = _CURRENCIES_BY_CODE.get((code or "").strip().upper())
    if currency is None:
        raise InvalidCurrency(code)
    return currency


def parse_amount(raw: Union[str, int, float, None]) -> Optional[int]:
    """Leading integer of the input, the way a numeric text field is read. None if there is none."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        if isinstance(raw, float) and not math.isfinite(raw):
            return None
        return int(raw)
    match = _LEADING_INT.match(str(raw))
    if not match:
        return None
    return int(match.group(1))


def convert_to_usd(amount: Union[str, int, float, None], currency: Currency) -> int:
    value = parse_amount(amount)
    if value is None:
        return 0
    return round_half_up(value / currency.rate)


def validate_budget(raw: Union[str, int, float, None]) -> int:
    if raw is None or str(raw).strip() == "":
        raise InvalidBudget("Budget is required")
    value = parse_amount(raw)
    if value is None or value <= 0:
        raise InvalidBudget("Enter a valid amount")
    return value


def _day_span(start: DateLike, end: DateLike) -> float:
    return (end - start).total_seconds() / 86400


def calculate_days(start: DateLike, end: DateLike) -> int:
    """Whole days between the dates, rounded up. A same-day trip counts as one day."""
    days = math.ceil(abs(_day_span(start, end)))
    return 1 if days == 0 else days


def validate_date_range(start: DateLike, end: DateLike, today: Optional[date] = None) -> None:
    if today is not None:
        start_day = start.date() if isinstance(start, datetime) else start
        if start_day < today:
            raise InvalidDateRange("Start date cannot be in the past.")
    # same-day ranges pass; they count as one day
    if _day_span(start, end) < 0:
        raise InvalidDateRange()


def clamp_members(members: int) -> int:
    return max(MIN_MEMBERS, min(MAX_MEMBERS, members))


def minimum_budget(days: int, members: int) -> int:
    return days * members * MIN_PPD_USD


def budget_tier(budget_usd: int, days: int, members: int) -> Optional[BudgetTier]:
    if not budget_usd or not days or not members:
        return None
    ppd = round_half_up(budget_usd / (days * members))
    if ppd < MIN_PPD_USD:
        return BudgetTier("very_tight", "Very Tight", ppd)
    if ppd < 50:
        return BudgetTier("budget", "Budget Travel", ppd)
    if ppd < 150:
        return BudgetTier("midrange", "Mid-Range", ppd)
    return BudgetTier("luxury", "Luxury", ppd)


def category_budget(total_usd: Union[int, float, None]) -> int:
    return round_half_up((total_usd or 0) * CATEGORY_SHARE)


def parse_interests(text: Optional[str]) -> List[str]:
    if not text:
        return []
    return [i.strip() for i in text.split(",") if i.strip()]


def format_date(value: DateLike) -> str:
    """'Mar 5, 2026'"""
    return f"{value:%b} {value.day}, {value.year}"
