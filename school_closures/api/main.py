"""
HTTP API for the closure registry.
A thin presentation layer: every route delegates to ClosureRegistry and maps
outcome notices to responses.
"""

import threading

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import Response

from util.logging import logger

from ..core.config import ALL, STORAGE_BACKEND, VERSION, debug_enabled, validate_config
from ..core.errors import ClosureError, ClosureValidationError, EmptyExportError, MissingFields
from ..core.options import form_options
from ..core.registry import ClosureRegistry
from ..core.schema import FilterSpec
from .schemas import (
    ClosureSubmitRequest,
    DashboardResponse,
    ErrorResponse,
    HealthResponse,
    NoticeResponse,
    OptionsResponse,
    RecordResponse,
    SubmitResponse,
    SummaryResponse,
)

app = FastAPI(
    title="School Closures API",
    version=VERSION,
    description="Record, browse and export school closure data",
    docs_url="/docs" if debug_enabled() else None,
    redoc_url="/redoc" if debug_enabled() else None
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000", "http://localhost:5173"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_registry = None
_registry_lock = threading.Lock()


def get_registry() -> ClosureRegistry:
    """Process-wide registry, loaded on first use."""
    global _registry
    with _registry_lock:
        if _registry is None:
            for issue in validate_config():
                logger.warning(f"Configuration issue: {issue}")
            _registry = ClosureRegistry.from_config()
            for warning in _registry.start():
                logger.warning(warning)
    return _registry


def _error_detail(error: ClosureError) -> dict:
    fields = error.fields if isinstance(error, MissingFields) else []
    return ErrorResponse(
        error_type=getattr(error, "kind", type(error).__name__),
        title=error.title,
        message=error.message,
        field=getattr(error, "field", None),
        fields=fields,
    ).model_dump()


def _status_for(error: ClosureError) -> int:
    if isinstance(error, ClosureValidationError):
        return 422
    if isinstance(error, EmptyExportError):
        return 404
    return 503


def _filter_spec(search: str, year: str, district: str) -> FilterSpec:
    return FilterSpec(searchTerm=search, yearFilter=year, districtFilter=district)


@app.get("/health", response_model=HealthResponse)
def health_check_endpoint(registry: ClosureRegistry = Depends(get_registry)):
    """Check system health."""
    storage_health = registry.store.storage.health_check()
    return HealthResponse(
        status="healthy" if storage_health and not registry.session_only else "degraded",
        version=VERSION,
        storage_backend="memory" if registry.session_only else STORAGE_BACKEND,
        storage_health=storage_health,
        session_only=registry.session_only,
        record_count=len(registry.records()),
    )


@app.get("/options", response_model=OptionsResponse)
def options_endpoint():
    return OptionsResponse(**form_options())


@app.post("/records", response_model=SubmitResponse, status_code=201)
def submit_record_endpoint(request: ClosureSubmitRequest, registry: ClosureRegistry = Depends(get_registry)):
    """Validate and store one closure record."""
    outcome = registry.submit(request)
    if not outcome.ok:
        raise HTTPException(status_code=_status_for(outcome.error), detail=_error_detail(outcome.error))

    return SubmitResponse(
        record=RecordResponse.from_record(outcome.record),
        notice=NoticeResponse.from_notice(outcome.notice),
    )


@app.get("/records", response_model=DashboardResponse)
def list_records_endpoint(
    search: str = "",
    year: str = ALL,
    district: str = ALL,
    registry: ClosureRegistry = Depends(get_registry),
):
    """Filtered records with totals computed over the full set."""
    view = registry.dashboard(_filter_spec(search, year, district))
    return DashboardResponse(
        records=[RecordResponse.from_record(r) for r in view.records],
        summary=SummaryResponse.from_summary(view.summary),
        filteredCount=view.filtered_count,
        districts=view.districts,
        years=view.years,
        emptyMessage=view.empty_message,
        warnings=view.warnings,
    )


@app.get("/records/{record_id}", response_model=RecordResponse)
def get_record_endpoint(record_id: str, registry: ClosureRegistry = Depends(get_registry)):
    record = registry.get(record_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Record not found")
    return RecordResponse.from_record(record)


@app.get("/summary", response_model=SummaryResponse)
def summary_endpoint(registry: ClosureRegistry = Depends(get_registry)):
    return SummaryResponse.from_summary(registry.summary())


@app.get("/export/{fmt}")
def export_endpoint(
    fmt: str,
    search: str = "",
    year: str = ALL,
    district: str = ALL,
    registry: ClosureRegistry = Depends(get_registry),
):
    """Download the filtered records as a CSV or JSON attachment."""
    if fmt not in ("csv", "json"):
        raise HTTPException(status_code=400, detail=f"Unsupported export format: {fmt}")

    outcome = registry.export(fmt, _filter_spec(search, year, district))
    if not outcome.ok:
        raise HTTPException(status_code=_status_for(outcome.error), detail=_error_detail(outcome.error))

    return Response(
        content=outcome.content,
        media_type=outcome.media_type,
        headers={
            "Content-Disposition": f'attachment; filename="{outcome.filename}"',
            "X-Export-Count": str(outcome.record_count),
        },
    )
