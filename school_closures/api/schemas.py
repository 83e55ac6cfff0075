"""
Request and response models for the closure registry HTTP API.
"""

from dataclasses import asdict
from datetime import date
from typing import List, Optional

from pydantic import BaseModel

from ..core.registry import Notice
from ..core.schema import ClosureForm, ClosureRecord, Summary


class ClosureSubmitRequest(ClosureForm):
    """Form submission. Values are raw text; numbers are accepted and read as text."""
    pass


class NoticeResponse(BaseModel):
    title: str
    description: str
    variant: str

    @classmethod
    def from_notice(cls, notice: Notice) -> 'NoticeResponse':
        return cls(title=notice.title, description=notice.description, variant=notice.variant)


class RecordResponse(BaseModel):
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
    def from_record(cls, record: ClosureRecord) -> 'RecordResponse':
        return cls(**asdict(record))


class SubmitResponse(BaseModel):
    record: RecordResponse
    notice: NoticeResponse


class SummaryResponse(BaseModel):
    totalSchools: int
    districtsAffected: int
    totalStudentsAffected: int

    @classmethod
    def from_summary(cls, summary: Summary) -> 'SummaryResponse':
        return cls(**summary.to_dict())


class DashboardResponse(BaseModel):
    records: List[RecordResponse]
    summary: SummaryResponse
    filteredCount: int
    districts: List[str]
    years: List[int]
    emptyMessage: Optional[str] = None
    warnings: List[str] = []


class OptionsResponse(BaseModel):
    districts: List[str]
    reasons: List[str]
    years: List[int]


class HealthResponse(BaseModel):
    status: str
    version: str
    storage_backend: str
    storage_health: bool
    session_only: bool
    record_count: int


class ErrorResponse(BaseModel):
    error_type: str
    title: str
    message: str
    field: Optional[str] = None
    fields: List[str] = []
