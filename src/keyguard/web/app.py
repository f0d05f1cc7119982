"""FastAPI application factory for the KeyGuard scan API."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from keyguard import __version__
from keyguard.config import KeyGuardConfig
from keyguard.content.base import ContentSource
from keyguard.content.static import UnavailableContentSource
from keyguard.scanner.engine import ScanOrchestrator
from keyguard.scanner.patterns import PatternRegistry
from keyguard.web.store import ScanStore


def create_app(
    config: KeyGuardConfig | None = None,
    content_source: ContentSource | None = None,
) -> FastAPI:
    """Build and return the FastAPI application.

    ``content_source`` is the page fetcher used when a scan request carries
    no content of its own.
    """
    config = config or KeyGuardConfig.load()

    app = FastAPI(
        title="KeyGuard",
        version=__version__,
        docs_url="/api/docs",
    )

    app.state.config = config
    app.state.orchestrator = ScanOrchestrator(
        PatternRegistry.load(config.pattern_files)
    )
    app.state.content_source = content_source or UnavailableContentSource()
    app.state.store = ScanStore(max_finished=config.scan_history)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        )
        return JSONResponse(
            status_code=422,
            content={"success": False, "message": f"Invalid request: {problems}"},
        )

    from keyguard.web.api.scans import router as scans_router

    app.include_router(scans_router, prefix="/api")

    return app
