"""
Submission validation and the data entry form reducer.
validate() is pure: it never touches the store.
"""

import re
from typing import Any, Mapping, Union

from pydantic import ValidationError

from .config import NOT_PROVIDED, YEAR_MAX, YEAR_MIN
from .errors import InvalidStudentCount, InvalidYear, MissingFields
from .schema import REQUIRED_FORM_FIELDS, ClosureForm, ValidatedPayload


def empty_form() -> ClosureForm:
    return ClosureForm()


def update_form(form: ClosureForm, field: str, value: str) -> ClosureForm:
    """Return a new form with one field replaced. The input form is left untouched."""
    if field not in ClosureForm.model_fields:
        raise KeyError(f"Unknown form field: {field}")
    return ClosureForm.model_validate({**form.model_dump(), field: value})


_INTEGER = re.compile(r"[+-]?[0-9]+")


def _parse_int(value: str):
    # ASCII digits only; int() alone would also take "2_022" and other scripts' digits
    if not _INTEGER.fullmatch(value):
        return None
    return int(value)


def validate(raw: Union[ClosureForm, Mapping[str, Any]]) -> ValidatedPayload:
    """
    Validate a raw submission and return a typed payload.

    Checks run in order and stop at the first failure: required fields,
    then year of closure, then student count.

    Raises:
        MissingFields: a required field is blank after trimming
        InvalidYear: year is not an integer in the accepted range
        InvalidStudentCount: student count is not a non-negative integer
    """
    if isinstance(raw, ClosureForm):
        form = raw
    else:
        try:
            form = ClosureForm.model_validate(dict(raw))
        except ValidationError as e:
            # A value that is not text or a number cannot fill a field
            unusable = {str(error["loc"][0]) for error in e.errors() if error["loc"]}
            raise MissingFields([name for name in ClosureForm.model_fields if name in unusable]) from e
    values = {name: getattr(form, name).strip() for name in ClosureForm.model_fields}

    missing = [name for name in REQUIRED_FORM_FIELDS if not values[name]]
    if missing:
        raise MissingFields(missing)

    year = _parse_int(values["yearOfClosure"])
    if year is None or year < YEAR_MIN or year > YEAR_MAX:
        raise InvalidYear(values["yearOfClosure"])

    students = _parse_int(values["studentsBeforeClosure"])
    if students is None:
        raise InvalidStudentCount(values["studentsBeforeClosure"], parsed=False)
    if students < 0:
        raise InvalidStudentCount(values["studentsBeforeClosure"])

    return ValidatedPayload(
        schoolName=values["schoolName"],
        district=values["district"],
        village=values["village"],
        yearOfClosure=year,
        reasonForClosure=values["reasonForClosure"],
        studentsBeforeClosure=students,
        whereStudentsGo=values["whereStudentsGo"],
        communityOpinion=values["communityOpinion"] or NOT_PROVIDED,
    )
