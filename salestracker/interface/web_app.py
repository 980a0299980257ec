"""Mini README: FastAPI application serving the sales tracker.

Structure:
    * create_application - application factory wiring routes, error handlers
      and the static client.
    * Error handlers - every failure is rendered as ``{"error": message}``.

Routes are plain ``def`` functions, so FastAPI runs each request on its
worker thread pool and a slow database call never blocks other requests.
Validation failures map to 400, store failures to 500.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, HTTPException, Path, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import __version__
from ..context import AppContext, build_context
from ..logging_utils import configure_root_logger, get_logger
from ..storage import StoreError
from .schemas import EntryPayload, parse_timestamp

LOGGER = get_logger(__name__)

# Range of the SERIAL id column.
_MIN_ENTRY_ID = -(2**31)
_MAX_ENTRY_ID = 2**31 - 1


def _describe_validation_error(error: RequestValidationError) -> str:
    """Flatten pydantic errors into one human readable line."""

    messages = []
    for detail in error.errors():
        location = ".".join(str(part) for part in detail.get("loc", ()) if part != "body")
        messages.append(f"{location}: {detail.get('msg')}" if location else str(detail.get("msg")))
    return "; ".join(messages) or "Invalid request"


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = _describe_validation_error(exc)
        LOGGER.debug("Rejected %s %s: %s", request.method, request.url.path, message)
        return JSONResponse({"error": message}, status_code=400)

    @app.exception_handler(StoreError)
    async def store_error(request: Request, exc: StoreError) -> JSONResponse:
        LOGGER.error("%s %s failed in %s", request.method, request.url.path, exc.operation)
        return JSONResponse({"error": str(exc)}, status_code=500)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            {"error": str(exc.detail)}, status_code=exc.status_code, headers=exc.headers
        )


def create_application(context: Optional[AppContext] = None) -> FastAPI:
    """Create the FastAPI application with routes and dependencies.

    Without an explicit ``context`` one is built from the process settings,
    which applies migrations before any route is reachable. A context built
    here is also closed here when the application shuts down.
    """

    owns_context = context is None
    if context is None:
        context = build_context()
    settings = context.settings
    store = context.store
    configure_root_logger(settings.log_level)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        yield
        if owns_context:
            context.close()

    app = FastAPI(title="Sales Tracker", version=__version__, lifespan=lifespan)
    app.state.context = context
    _register_error_handlers(app)
    app.mount(
        "/web",
        StaticFiles(directory=str(settings.static_directory), html=True),
        name="web",
    )

    @app.get("/", include_in_schema=False)
    def index() -> RedirectResponse:
        """Send browsers to the static client."""

        return RedirectResponse(url="/web/")

    @app.post("/api/items", status_code=201)
    def create_item(payload: EntryPayload) -> JSONResponse:
        """Record a new entry and return it with its generated id."""

        entry = store.create_entry(payload.to_entry())
        LOGGER.info("Created %s entry %s (%s)", entry.kind_value, entry.id, entry.category)
        return JSONResponse(entry.as_dict(), status_code=201)

    @app.get("/api/items")
    def list_items() -> JSONResponse:
        """Return all entries, most recent first."""

        entries = store.list_entries()
        LOGGER.debug("Returning %s entries", len(entries))
        return JSONResponse([entry.as_dict() for entry in entries])

    @app.put("/api/items/{item_id}")
    def update_item(
        payload: EntryPayload,
        item_id: int = Path(..., ge=_MIN_ENTRY_ID, le=_MAX_ENTRY_ID),
    ) -> JSONResponse:
        """Replace every field of an entry; the id in the path wins."""

        entry = payload.to_entry(entry_id=item_id)
        store.update_entry(entry)
        LOGGER.info("Updated entry %s", item_id)
        return JSONResponse(entry.as_dict())

    @app.delete("/api/items/{item_id}", status_code=204)
    def delete_item(
        item_id: int = Path(..., ge=_MIN_ENTRY_ID, le=_MAX_ENTRY_ID),
    ) -> Response:
        """Delete an entry; unknown ids are accepted silently."""

        store.delete_entry(item_id)
        LOGGER.info("Deleted entry %s", item_id)
        return Response(status_code=204)

    @app.get("/api/analytics")
    def analytics(
        start: Optional[str] = Query(None, alias="from"),
        end: Optional[str] = Query(None, alias="to"),
    ) -> JSONResponse:
        """Summarise the amounts of entries inside the inclusive window."""

        bounds = {}
        for name, raw in (("from", start), ("to", end)):
            if not raw:
                raise HTTPException(status_code=400, detail=f"Missing '{name}' date")
            try:
                bounds[name] = parse_timestamp(raw)
            except ValueError as error:
                raise HTTPException(status_code=400, detail=f"Invalid '{name}' date: {error}") from error

        summary = store.analytics(bounds["from"], bounds["to"])
        LOGGER.debug(
            "Analytics %s -> %s: count=%s sum=%.2f",
            bounds["from"].isoformat(),
            bounds["to"].isoformat(),
            summary.count,
            summary.sum,
        )
        return JSONResponse(summary.as_dict())

    @app.get("/api/export")
    def export_items() -> JSONResponse:
        """CSV export is not offered."""

        raise HTTPException(status_code=501, detail="Not implemented")

    return app
