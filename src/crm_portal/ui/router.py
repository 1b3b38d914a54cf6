from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from fastapi import APIRouter, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from starlette.responses import Response

from crm_portal.hubspot import HubSpotClient, HubSpotError
from crm_portal.records import DEFAULT_PROPERTIES, PAGE_SIZE, RecordSubmission

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
TEMPLATES_DIR = BASE_DIR / "templates"
STATIC_DIR = BASE_DIR / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["ui"])

HOMEPAGE_TITLE = "Homepage"
FORM_TITLE = "Update Custom Object Form | Integrating With HubSpot"

LIST_ERROR = "Failed to fetch records from HubSpot. Check server logs for details."
CREATE_ERROR = "Failed to create record. Check server logs for details."


def _get_client(request: Request) -> HubSpotClient:
    client = getattr(request.app.state, "hubspot", None)
    if client is None:
        raise HTTPException(status_code=500, detail="HubSpot client not initialized")
    return client


@router.get("/", response_class=HTMLResponse)
async def ui_records_list(request: Request) -> HTMLResponse:
    client = _get_client(request)
    props = list(DEFAULT_PROPERTIES)

    ctx: dict[str, Any] = {
        "title": HOMEPAGE_TITLE,
        "object_type": client.object_type,
        "props": props,
        "records": [],
    }

    try:
        ctx["records"] = await client.list_objects(props, limit=PAGE_SIZE)
    except HubSpotError as exc:
        logger.error("Fetch error: %s %s", exc.status_code, exc.body or exc)
        ctx["error"] = LIST_ERROR

    return templates.TemplateResponse(request, "homepage.html", ctx)


@router.get("/update-cobj", response_class=HTMLResponse)
async def ui_record_form(request: Request) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "updates.html",
        {"title": FORM_TITLE, "form_data": RecordSubmission()},
    )


@router.post("/update-cobj", response_model=None)
async def ui_record_create(
    request: Request,
    name: str = Form(default=""),
    full_name: str = Form(default=""),
    bio: str = Form(default=""),
    other: str = Form(default=""),
    email: str = Form(default=""),
) -> Response:
    client = _get_client(request)
    submission = RecordSubmission.from_form(
        {"name": name, "full_name": full_name, "bio": bio, "other": other, "email": email}
    )

    try:
        created = await client.create_object(submission.to_properties())
    except HubSpotError as exc:
        logger.error("Error creating record: %s %s", exc.status_code, exc.body or exc)
        return templates.TemplateResponse(
            request,
            "updates.html",
            {"title": FORM_TITLE, "error": CREATE_ERROR, "form_data": submission},
            status_code=500,
        )

    if created is not None:
        logger.info(f"Created {client.object_type} record {created.id}")
    else:
        logger.info(f"Created {client.object_type} record (no id in response)")
    return RedirectResponse(url="/", status_code=303)
