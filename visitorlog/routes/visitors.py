"""
Visitor API routes
"""
from fastapi import APIRouter, Depends, Response, status
from datetime import tzinfo
from typing import Optional
from visitorlog.config import settings
from visitorlog.controller import VisitorLogController
from visitorlog.dependencies import get_controller, get_current_session, get_record_store, get_view_state
from visitorlog.engine.export import CSV_MEDIA_TYPE, encode_csv
from visitorlog.engine.pipeline import VisitorPage
from visitorlog.engine.timestamps import resolve_timezone, split_in_time
from visitorlog.schemas.auth import AuthSession
from visitorlog.schemas.view_state import ViewState
from visitorlog.schemas.visitor import (
    SubmissionResponse,
    VisitorCreate,
    VisitorPageResponse,
    VisitorRecord,
    VisitorRowResponse,
)
from visitorlog.services.visitor_service import VisitorService
from visitorlog.store.base import RecordStore

router = APIRouter(
    prefix="/api/visitors",
    tags=["Visitors"]
)


def visitor_row(record: VisitorRecord, tz: Optional[tzinfo] = None) -> VisitorRowResponse:
    """Dashboard row with the check-in time split into date and time"""
    visit_date, visit_time = split_in_time(record.in_time, tz)
    return VisitorRowResponse(
        id=record.id,
        name=record.name,
        mobile_number=record.mobile_number,
        college=record.college,
        person_to_meet=record.person_to_meet,
        purpose_of_visit=record.purpose_of_visit,
        in_time=record.in_time,
        date=visit_date,
        time=visit_time,
    )


def page_response(page: VisitorPage, tz: Optional[tzinfo] = None) -> VisitorPageResponse:
    return VisitorPageResponse(
        total=page.total,
        page=page.page,
        page_count=page.page_count,
        page_size=page.window.page_size,
        has_prev=page.window.has_prev,
        has_next=page.window.has_next,
        items=[visitor_row(record, tz) for record in page.rows],
    )


def csv_download(content: str, filename: str) -> Response:
    return Response(
        content=encode_csv(content),
        media_type=CSV_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("", response_model=SubmissionResponse, status_code=status.HTTP_201_CREATED)
def create_visitor(
        visitor_data: VisitorCreate,
        store: RecordStore = Depends(get_record_store)
):
    """Public visitor check-in"""
    VisitorService.submit_visitor(store, visitor_data, settings.colleges)
    return SubmissionResponse()


@router.get("", response_model=VisitorPageResponse)
async def list_visitors(
        state: ViewState = Depends(get_view_state),
        session: AuthSession = Depends(get_current_session),
        controller: VisitorLogController = Depends(get_controller)
):
    """
    Visitor list
    - Filters, sorts and paginates the full record set per the query parameters.
    """
    await controller.refresh()
    page = controller.page(session, state)
    return page_response(page, resolve_timezone(settings.display_timezone))


@router.get("/colleges", response_model=list[str])
async def list_colleges(
        session: AuthSession = Depends(get_current_session),
        controller: VisitorLogController = Depends(get_controller)
):
    """Distinct colleges for the filter picklist"""
    await controller.refresh()
    return controller.colleges(session)


@router.get("/export")
async def export_visitors(
        state: ViewState = Depends(get_view_state),
        session: AuthSession = Depends(get_current_session),
        controller: VisitorLogController = Depends(get_controller)
):
    """CSV export of every filtered and sorted record"""
    await controller.refresh()
    export = controller.export(session, state)
    return csv_download(export.content, export.filename)
