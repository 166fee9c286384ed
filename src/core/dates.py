"""
Date token resolution for assignment rows.

Tokens are tried against DATE_FORMATS in order and the first format that
yields a valid calendar date wins, so ambiguous values such as 01/02/2023
always resolve day-first. Anything left over goes through dateutil's
free-form parser before being rejected.
"""

from datetime import date, datetime

from dateutil import parser as dateutil_parser

# Order matters: dd/mm is tried before mm/dd.
DATE_FORMATS = [
    "%Y-%m-%d",
    "%d/%m/%Y",
    "%m/%d/%Y",
    "%d-%b-%Y",
    "%d %b %Y",
    "%Y/%m/%d",
    "%m-%d-%Y",
    "%b %d, %Y",
    "%B %d, %Y",
    "%d %B %Y",
    "%Y.%m.%d",
    "%d.%m.%Y",
    "%m/%d/%Y %H:%M",
    "%Y-%m-%d %H:%M",
]

NULL_TOKEN = "NULL"


class BadDateError(ValueError):
    """Raised when a token matches no known date format."""

    def __init__(self, raw: str):
        super().__init__(f'Bad date: "{raw}"')
        self.raw = raw


def resolve_date(raw: str | None, reference_date: date | None = None) -> date:
    """
    Turn a raw date token into a calendar date.

    Empty and NULL tokens (any case) resolve to reference_date, which
    defaults to today. Time of day, when present, is dropped.

    Raises:
        BadDateError: if no format and no fallback parse accepts the token
    """
    if reference_date is None:
        reference_date = date.today()

    token = (raw or "").strip()
    if not token or token.upper() == NULL_TOKEN:
        return reference_date

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(token, fmt).date()
        except ValueError:
            continue

    # Missing fields are filled from January 1st of the reference year
    default = datetime(reference_date.year, 1, 1)
    try:
        return dateutil_parser.parse(token, default=default).date()
    except (ValueError, OverflowError) as e:
        raise BadDateError(raw) from e
