"""
Month filter shared by every date-filtered endpoint.

Sales are compared by calendar month only, regardless of their year. Each
stored transaction carries a copy of its sale date moved into REFERENCE_YEAR
(see models.to_document), and a month filter is a plain half-open range on
that field:

    {"saleDateInReferenceYear": {"$gte": <1st of month>, "$lt": <1st of next month>}}
"""
from datetime import datetime

# Leap year, so Feb 29 sales keep their day.
REFERENCE_YEAR = 2000

REFERENCE_DATE_FIELD = "saleDateInReferenceYear"

MONTH_NAMES = (
    "january", "february", "march", "april", "may", "june",
    "july", "august", "september", "october", "november", "december",
)


def parse_month(value):
    """Return 1-12 for an English month name or 3-letter abbreviation."""
    name = (value or "").strip().lower()
    for index, month_name in enumerate(MONTH_NAMES, start=1):
        if name == month_name or (len(name) == 3 and month_name.startswith(name)):
            return index
    raise ValueError(f"Unknown month: {value!r}")


def month_range(month):
    """Half-open [first of month, first of next month) in the reference year."""
    if not 1 <= month <= 12:
        raise ValueError(f"Month out of range: {month!r}")
    start = datetime(REFERENCE_YEAR, month, 1)
    if month == 12:
        end = datetime(REFERENCE_YEAR + 1, 1, 1)
    else:
        end = datetime(REFERENCE_YEAR, month + 1, 1)
    return start, end


def month_filter(month):
    if month is None:
        return {}
    start, end = month_range(month)
    return {REFERENCE_DATE_FIELD: {"$gte": start, "$lt": end}}


def to_reference_year(value):
    # Wall-clock date of the sale; the offset is dropped, not converted.
    return value.replace(year=REFERENCE_YEAR, tzinfo=None)
