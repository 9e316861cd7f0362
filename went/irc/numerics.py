"""Numeric reply classification.

Three digit server replies only carry meaning by convention over ranges.
``NUMERIC_RULES`` is the ordered rule table; the first matching rule wins and
anything outside every rule is ``Category.UNKNOWN``.
"""

from __future__ import annotations

from enum import Enum


class Category(Enum):
    INFO = "INFO"
    ERROR = "ERROR"
    NAMES = "NAMES"
    WHO = "WHO"
    TOPIC = "TOPIC"
    IGNORED = "IGNORED"
    UNKNOWN = "UNKNOWN"


MAX_NUMERIC = 999

# (ranges, category), evaluated top to bottom
NUMERIC_RULES: tuple[tuple[tuple[range, ...], Category], ...] = (
    ((range(0, 5), range(251, 267), range(371, 377)), Category.INFO),
    ((range(400, MAX_NUMERIC + 1), range(5, 6)), Category.ERROR),
    ((range(365, 369), range(353, 354)), Category.NAMES),
    (
        (range(302, 320), range(352, 356), range(330, 331), range(360, 361)),
        Category.WHO,
    ),
    ((range(331, 334),), Category.TOPIC),
    ((range(200, 220),), Category.IGNORED),
)


def category_for(number: int) -> Category:
    # Codes past the table fall under the open ended ERROR rule (400 and up).
    number = min(number, MAX_NUMERIC)
    for ranges, category in NUMERIC_RULES:
        if any(number in r for r in ranges):
            return category
    return Category.UNKNOWN


def classify(code: str) -> Category:
    """Classify a numeric command string; non-numeric input is UNKNOWN."""
    code = code.strip()
    if not (code.isascii() and code.isdigit()):
        return Category.UNKNOWN
    return category_for(int(code))


__all__ = ["Category", "NUMERIC_RULES", "MAX_NUMERIC", "category_for", "classify"]
