"""REST API for starting scans and reading their results and progress."""

from __future__ import annotations

import contextlib
import logging

from fastapi import APIRouter, BackgroundTasks, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from keyguard.content.static import StaticContentSource
from keyguard.scanner.engine import ScanRun
from keyguard.scanner.models import PageContent

logger = logging.getLogger(__name__)

router = APIRouter(tags=["scans"])


class ContentBlockIn(BaseModel):
    location: str
    content: str


class PageIn(BaseModel):
    html: str = ""
    scripts: list[ContentBlockIn] = Field(default_factory=list)
    styles: list[ContentBlockIn] = Field(default_factory=list)

    def to_page(self) -> PageContent:
        return PageContent.build(
            self.html,
            scripts=[(b.content, f"JavaScript: {b.location}") for b in self.scripts],
            styles=[(b.content, f"CSS: {b.location}") for b in self.styles],
        )


class ScanRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: str
    user_id: str | None = Field(default=None, alias="userId")
    content: PageIn | None = None


def _ok(data: dict) -> dict:
    return {"success": True, "data": data}


def _not_found(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=404,
        content={"success": False, "message": message},
    )


def _drive(run: ScanRun) -> None:
    with contextlib.closing(run.events()) as events:
        for event in events:
            logger.debug("Scan %s: %d%% %s", run.result.id, event.progress, event.stage)


@router.post("/scan")
async def start_scan(
    body: ScanRequest,
    request: Request,
    background_tasks: BackgroundTasks,
):
    state = request.app.state
    source = (
        StaticContentSource(body.content.to_page())
        if body.content is not None
        else state.content_source
    )
    run = state.orchestrator.start(body.url, source, user_id=body.user_id)
    state.store.add(run)
    background_tasks.add_task(_drive, run)
    return _ok(run.snapshot().to_dict())


@router.get("/scan/{scan_id}")
async def get_scan(scan_id: str, request: Request):
    result = request.app.state.store.get(scan_id)
    if result is None:
        return _not_found("Scan not found")
    return _ok(result.to_dict())


@router.get("/scan/{scan_id}/progress")
async def get_scan_progress(scan_id: str, request: Request):
    event = request.app.state.store.progress(scan_id)
    if event is None:
        return _not_found("Scan not found")
    return _ok(event.to_dict())
