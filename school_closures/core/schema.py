"""
Data model for school closure records, submissions and dashboard queries.
"""

from dataclasses import asdict, dataclass
from datetime import date
from typing import Any, Dict, Union

from pydantic import BaseModel, ConfigDict, field_validator

from .config import ALL, NOT_PROVIDED

REQUIRED_FORM_FIELDS = [
    "schoolName",
    "district",
    "village",
    "yearOfClosure",
    "reasonForClosure",
    "studentsBeforeClosure",
    "whereStudentsGo",
]


class ClosureForm(BaseModel):
    """Raw form input. Every field is text, exactly as typed."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    schoolName: str = ""
    district: str = ""
    village: str = ""
    yearOfClosure: str = ""
    reasonForClosure: str = ""
    studentsBeforeClosure: str = ""
    whereStudentsGo: str = ""
    communityOpinion: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def coerce_to_text(cls, v):
        if v is None:
            return ""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


@dataclass(frozen=True)
class ValidatedPayload:
    """A submission that passed validation, ready for the store."""

    schoolName: str
    district: str
    village: str
    yearOfClosure: int
    reasonForClosure: str
    studentsBeforeClosure: int
    whereStudentsGo: str
    communityOpinion: str = NOT_PROVIDED


def _text(data: Dict[str, Any], name: str) -> str:
    value = data[name]
    if not isinstance(value, str):
        raise ValueError(f"field '{name}' is not text")
    return value


def _whole_number(data: Dict[str, Any], name: str) -> int:
    value = data[name]
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise ValueError(f"field '{name}' is not a whole number")
    return int(value)


@dataclass(frozen=True)
class ClosureRecord:
    """A stored closure record. Never mutated after creation."""

    id: str
    schoolName: str
    district: str
    village: str
    yearOfClosure: int
    reasonForClosure: str
    studentsBeforeClosure: int
    whereStudentsGo: str
    communityOpinion: str
    dateAdded: date

    @classmethod
    def create(cls, record_id: str, payload: ValidatedPayload, date_added: date) -> 'ClosureRecord':
        return cls(id=record_id, dateAdded=date_added, **asdict(payload))

    def to_dict(self) -> Dict[str, Any]:
        """Convert record to dictionary for JSON serialization."""
        data = asdict(self)
        data['dateAdded'] = self.dateAdded.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ClosureRecord':
        """Create record from its stored dictionary form."""
        return cls(
            id=str(data['id']),
            schoolName=_text(data, 'schoolName'),
            district=_text(data, 'district'),
            village=_text(data, 'village'),
            yearOfClosure=_whole_number(data, 'yearOfClosure'),
            reasonForClosure=_text(data, 'reasonForClosure'),
            studentsBeforeClosure=_whole_number(data, 'studentsBeforeClosure'),
            whereStudentsGo=_text(data, 'whereStudentsGo'),
            communityOpinion=_text(data, 'communityOpinion') if data.get('communityOpinion') else NOT_PROVIDED,
            dateAdded=date.fromisoformat(_text(data, 'dateAdded')),
        )


@dataclass(frozen=True)
class FilterSpec:
    """Dashboard filter parameters. "all" disables the year or district filter."""

    searchTerm: str = ""
    yearFilter: Union[str, int] = ALL
    districtFilter: str = ALL


@dataclass(frozen=True)
class Summary:
    totalSchools: int
    districtsAffected: int
    totalStudentsAffected: int

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)
