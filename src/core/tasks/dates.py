# src/core/tasks/dates.py
"""Due-date token normalizer.

Turns the date token of a task command into a canonical YYYY-MM-DD string.
Dates without a year use the current calendar year. There is no year
rollover and no calendar validation: "2/30" becomes "YYYY-02-30".
"""

import re
from datetime import date

ISO_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")
SLASH_PATTERN = re.compile(r"^(\d{1,2})/(\d{1,2})$")
MONTH_DAY_PATTERN = re.compile(r"^([a-z]+)\s+(\d{1,2})$", re.IGNORECASE)

MONTHS = {
    "jan": "01",
    "january": "01",
    "feb": "02",
    "february": "02",
    "mar": "03",
    "march": "03",
    "apr": "04",
    "april": "04",
    "may": "05",
    "jun": "06",
    "june": "06",
    "jul": "07",
    "july": "07",
    "aug": "08",
    "august": "08",
    "sep": "09",
    "september": "09",
    "oct": "10",
    "october": "10",
    "nov": "11",
    "november": "11",
    "dec": "12",
    "december": "12",
}


def normalize_due_date(token: str, today: date | None = None) -> str | None:
    """Normalize a free-text date token.

    Supports, in order:
    - ISO: "2025-03-14" (returned unchanged)
    - Slash: "3/14", "03/14"
    - Month name: "mar 14", "March 14"

    Args:
        token: Date token as typed by the user.
        today: Reference date for the year. Defaults to date.today().

    Returns:
        YYYY-MM-DD string, or None if the token is not a recognized form.

    Examples:
        >>> normalize_due_date("2025-03-14")
        '2025-03-14'
        >>> normalize_due_date("3/4", today=date(2025, 1, 1))
        '2025-03-04'
        >>> normalize_due_date("Feb 20", today=date(2025, 1, 1))
        '2025-02-20'
        >>> normalize_due_date("tomorrow") is None
        True
    """
    if not token:
        return None

    text = " ".join(token.split())
    year = (today or date.today()).year

    if ISO_PATTERN.match(text):
        return text

    match = SLASH_PATTERN.match(text)
    if match:
        month, day = match.groups()
        return f"{year}-{int(month):02d}-{int(day):02d}"

    match = MONTH_DAY_PATTERN.match(text)
    if match:
        month = MONTHS.get(match.group(1).lower())
        if month:
            return f"{year}-{month}-{int(match.group(2)):02d}"

    return None
