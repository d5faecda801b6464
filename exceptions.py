# exceptions.py
# Input defects raised by the parser, the scheduler and the catalog loader.


class InvalidTimeFormat(ValueError):
    """Raised when a session time range is not of the form '9:00am - 10:30am'."""

    def __init__(self, text):
        self.text = text
        super().__init__(f"Invalid time format: {text!r}")


class UnknownDayError(ValueError):
    """Raised when a session is tagged with a day outside MON..FRI."""

    def __init__(self, day):
        self.day = day
        super().__init__(f"Unknown day: {day!r}")


class DuplicateUnitError(ValueError):
    """Raised when the same unit code appears more than once in one scheduling request."""

    def __init__(self, unit_code):
        self.unit_code = unit_code
        super().__init__(f"Duplicate unit code: {unit_code!r}")


class InvalidCatalogError(ValueError):
    """Raised when a catalog session is missing required fields."""


class UnitNotFoundError(LookupError):
    """Raised when a requested unit code is not in the catalog."""


class CatalogReadingError(Exception):
    """Raised when the catalog file cannot be read or decoded."""


# Mapping of custom exceptions to HTTP status codes
CUSTOM_ERRORS = {
    InvalidTimeFormat: 400,
    UnknownDayError: 400,
    DuplicateUnitError: 400,
    InvalidCatalogError: 400,
    UnitNotFoundError: 404,
    CatalogReadingError: 500,
}
