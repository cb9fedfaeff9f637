"""Month names accepted by the report endpoints."""

from dataclasses import dataclass

VALID_MONTHS: tuple[str, ...] = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

INVALID_MONTH_MESSAGE = (
    "Invalid month. Please provide a valid month between January to December."
)


class InvalidMonthError(ValueError):
    """Raised when a month name is missing or not one of VALID_MONTHS."""

    def __init__(self, month: str | None) -> None:
        self.month = month
        super().__init__(INVALID_MONTH_MESSAGE)


@dataclass(frozen=True)
class MonthFilter:
    """A validated month: its English name and zero-padded number ("01".."12")."""

    name: str
    number: str


def parse_month(month: str | None) -> MonthFilter:
    """Validate a case-sensitive month name and derive its two-digit number."""
    if not month or month not in VALID_MONTHS:
        raise InvalidMonthError(month)
    return MonthFilter(name=month, number=f"{VALID_MONTHS.index(month) + 1:02d}")
