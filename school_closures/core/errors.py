"""
Error taxonomy for the closure registry.
Each error carries a short title and a human-readable message for notices.
"""

from typing import List

from .config import YEAR_MAX, YEAR_MIN


class ClosureError(Exception):
    """Base class for every recoverable registry error."""

    title = "Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ClosureValidationError(ClosureError):
    """A submission was rejected before reaching the store."""

    kind = "validation"
    field = None


class MissingFields(ClosureValidationError):
    kind = "missing_fields"
    title = "Missing required fields"

    def __init__(self, fields: List[str]):
        super().__init__("Please fill in all required fields marked with *")
        self.fields = list(fields)
        self.field = self.fields[0] if self.fields else None


class InvalidYear(ClosureValidationError):
    kind = "invalid_year"
    title = "Invalid year"
    field = "yearOfClosure"

    def __init__(self, value: str):
        super().__init__(f"Year of closure must be between {YEAR_MIN} and {YEAR_MAX}")
        self.value = value


class InvalidStudentCount(ClosureValidationError):
    kind = "invalid_student_count"
    title = "Invalid student count"
    field = "studentsBeforeClosure"

    def __init__(self, value: str, parsed: bool = True):
        if parsed:
            super().__init__("Number of students cannot be negative")
        else:
            super().__init__("Number of students must be a whole number")
        self.value = value


class PersistenceError(ClosureError):
    """Storage read or write failed."""

    title = "Error saving data"

    def __init__(self, operation: str, message: str = "There was an error saving the school closure record"):
        super().__init__(message)
        self.operation = operation


class EmptyExportError(ClosureError):
    """Export was requested for an empty record sequence."""

    title = "No data to export"

    def __init__(self, fmt: str = None):
        super().__init__("Please add some data first or adjust your filters.")
        self.fmt = fmt
