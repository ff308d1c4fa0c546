"""
HTML page routes: landing page, visitor check-in form, admin login, dashboard, QR code
"""
import io
import logging
from pathlib import Path
from typing import Optional

import qrcode
from fastapi import APIRouter, Depends, Form, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError
from starlette.responses import HTMLResponse, RedirectResponse

from visitorlog.config import settings
from visitorlog.controller import VisitorLogController
from visitorlog.dependencies import (
    SESSION_TOKEN_KEY,
    get_browser_session,
    get_controller,
    get_record_store,
    get_view_state,
)
from visitorlog.engine.sorting import SortDirection, SortKey
from visitorlog.engine.timestamps import resolve_timezone
from visitorlog.routes.visitors import csv_download, visitor_row
from visitorlog.schemas.auth import AuthSession
from visitorlog.schemas.view_state import ViewState
from visitorlog.schemas.visitor import VisitorCreate
from visitorlog.services.visitor_service import VisitorService
from visitorlog.store.base import RecordStore
from visitorlog.utils.exceptions import AppException, ValidationException

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parents[1]
templates = Jinja2Templates(directory=str(BASE_DIR / "templates"))

router = APIRouter(include_in_schema=False)

SORT_OPTIONS = [
    (SortKey.IN_TIME, SortDirection.DESC, "Newest First"),
    (SortKey.IN_TIME, SortDirection.ASC, "Oldest First"),
    (SortKey.NAME, SortDirection.ASC, "Name (A–Z)"),
    (SortKey.NAME, SortDirection.DESC, "Name (Z–A)"),
    (SortKey.COLLEGE, SortDirection.ASC, "College (A–Z)"),
    (SortKey.COLLEGE, SortDirection.DESC, "College (Z–A)"),
    (SortKey.MOBILE_NUMBER, SortDirection.ASC, "Mobile (0–9)"),
    (SortKey.MOBILE_NUMBER, SortDirection.DESC, "Mobile (9–0)"),
]

EMPTY_FORM = {
    "name": "",
    "mobile_number": "",
    "college": "",
    "person_to_meet": "",
    "purpose_of_visit": "",
    "comment_feedback": "",
}


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    # Location fields are blank when the browser never resolved a position
    if value is None or not value.strip():
        return None
    return value.strip()


@router.get("/", response_class=HTMLResponse)
async def home(request: Request):
    return templates.TemplateResponse(request, "home.html", {"app_name": settings.app_name})


@router.get("/visitor", response_class=HTMLResponse)
async def visitor_form(request: Request):
    return templates.TemplateResponse(
        request, "visitor_form.html",
        {"form": EMPTY_FORM, "colleges": settings.colleges, "errors": [], "message": None},
    )


@router.post("/visitor", response_class=HTMLResponse)
def submit_visitor_form(
        request: Request,
        name: str = Form(""),
        mobile_number: str = Form(""),
        college: str = Form(""),
        person_to_meet: str = Form(""),
        purpose_of_visit: str = Form(""),
        comment_feedback: str = Form(""),
        latitude: Optional[str] = Form(None),
        longitude: Optional[str] = Form(None),
        store: RecordStore = Depends(get_record_store)
):
    """Check-in submission; on failure the form is shown again with its contents"""
    form = {
        "name": name,
        "mobile_number": mobile_number,
        "college": college,
        "person_to_meet": person_to_meet,
        "purpose_of_visit": purpose_of_visit,
        "comment_feedback": comment_feedback,
    }
    errors = []
    try:
        visitor_data = VisitorCreate(
            **form,
            latitude=_blank_to_none(latitude),
            longitude=_blank_to_none(longitude),
        )
        VisitorService.submit_visitor(store, visitor_data, settings.colleges)
    except ValidationError as e:
        errors = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
    except ValidationException as e:
        errors = [e.detail]
    except AppException as e:
        logger.error("Visitor submission failed: %s", e.message)
        errors = [f"Error: {e.message}"]

    if errors:
        return templates.TemplateResponse(
            request, "visitor_form.html",
            {"form": form, "colleges": settings.colleges, "errors": errors, "message": None},
            status_code=422,
        )

    return templates.TemplateResponse(
        request, "visitor_form.html",
        {"form": EMPTY_FORM, "colleges": settings.colleges, "errors": [],
         "message": "Visitor logged successfully!"},
    )


@router.get("/admin/login", response_class=HTMLResponse)
async def login_form(
        request: Request,
        session: Optional[AuthSession] = Depends(get_browser_session)
):
    if session is not None:
        return RedirectResponse(url="/visitor-logs", status_code=303)
    return templates.TemplateResponse(request, "login.html", {"email": "", "error": None})


@router.post("/admin/login")
def login_post(
        request: Request,
        email: str = Form(...),
        password: str = Form(...),
        store: RecordStore = Depends(get_record_store)
):
    try:
        session = store.sign_in(email.strip(), password)
    except AppException as e:
        return templates.TemplateResponse(
            request, "login.html", {"email": email, "error": e.message}, status_code=401,
        )

    request.session[SESSION_TOKEN_KEY] = session.access_token
    return RedirectResponse(url="/visitor-logs", status_code=303)


@router.get("/logout")
def logout(
        request: Request,
        store: RecordStore = Depends(get_record_store)
):
    store.sign_out(request.session.get(SESSION_TOKEN_KEY))
    request.session.clear()
    return RedirectResponse(url="/", status_code=303)


@router.get("/visitor-logs", response_class=HTMLResponse)
async def visitor_logs(
        request: Request,
        state: ViewState = Depends(get_view_state),
        session: Optional[AuthSession] = Depends(get_browser_session),
        controller: VisitorLogController = Depends(get_controller)
):
    """Admin dashboard"""
    if session is None:
        return RedirectResponse(url="/admin/login", status_code=303)

    await controller.refresh()
    page = controller.page(session, state)
    # Links must not point past the last page
    state = state.model_copy(update={"page": page.page})
    tz = resolve_timezone(settings.display_timezone)

    return templates.TemplateResponse(
        request, "dashboard.html",
        {
            "state": state,
            "page": page,
            "rows": [visitor_row(record, tz) for record in page.rows],
            "colleges": controller.colleges(session),
            "sort_options": SORT_OPTIONS,
            "sort_resets_page": settings.sort_resets_page,
            "session": session,
        },
    )


@router.get("/visitor-logs/export")
async def visitor_logs_export(
        state: ViewState = Depends(get_view_state),
        session: Optional[AuthSession] = Depends(get_browser_session),
        controller: VisitorLogController = Depends(get_controller)
):
    if session is None:
        return RedirectResponse(url="/admin/login", status_code=303)

    await controller.refresh()
    export = controller.export(session, state)
    return csv_download(export.content, export.filename)


def render_qr_png(data: str) -> bytes:
    """PNG QR code pointing at the public check-in app"""
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_H,
        box_size=10,
        border=4,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white")

    # Save to buffer
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


@router.get("/qr", response_class=HTMLResponse)
async def qr_page(request: Request):
    return templates.TemplateResponse(request, "qr.html", {"app_url": settings.public_app_url})


@router.get("/qr.png")
async def qr_image():
    png = await run_in_threadpool(render_qr_png, settings.public_app_url)
    return Response(content=png, media_type="image/png")
