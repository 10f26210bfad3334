"""HTTP server for the PNG vectorizer page and upload/download conversion."""

from __future__ import annotations

import argparse
import logging
from functools import partial
from urllib.parse import quote

import uvicorn
from fastapi import FastAPI, File, Form, HTTPException, UploadFile, status
from fastapi.responses import HTMLResponse, Response

from png_vectorizer import __version__
from png_vectorizer.application.progress import ProgressSchedule
from png_vectorizer.application.session import VectorizerSession
from png_vectorizer.converter.core import (
    ConversionRequest,
    convert_png_bytes,
    safe_filename,
)
from png_vectorizer.converter.page import render_page
from png_vectorizer.converter.sessions import SessionStore
from png_vectorizer.errors import (
    ConversionError,
    SessionNotFoundError,
    UnsupportedMediaTypeError,
)
from png_vectorizer.schemas import (
    HealthResponse,
    ReadyResponse,
    ServerConfig,
    SessionState,
)
from png_vectorizer.svg import SVG_MEDIA_TYPE

logger = logging.getLogger(__name__)

APP_REF = "png_vectorizer.converter.http_server:app"


def _download_url(session_id: str, handle: str) -> str:
    return f"/v1/sessions/{session_id}/download/{handle}"


def _session_state(session_id: str, session: VectorizerSession) -> SessionState:
    """Project a session onto the browser-facing payload."""
    state = session.state
    result = state.result
    return SessionState(
        session_id=session_id,
        phase=session.phase,
        progress=state.progress,
        filename=state.selected.name if state.selected is not None else None,
        download_url=_download_url(session_id, result.handle) if result is not None else None,
    )


def _attachment_headers(filename: str) -> dict[str, str]:
    """Build download headers; non-ASCII names use RFC 5987 encoding."""
    name = safe_filename(filename)
    quoted = quote(name)
    if quoted == name:
        disposition = f'attachment; filename="{name}"'
    else:
        fallback = name.encode("ascii", "replace").decode("ascii").replace("?", "_")
        disposition = f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quoted}"
    return {
        "X-Output-Filename": quoted,
        "Content-Disposition": disposition,
    }


def create_app(config: ServerConfig | None = None) -> FastAPI:
    """Create the vectorizer HTTP application."""
    config = config or ServerConfig.from_env()
    schedule = ProgressSchedule(interval=config.progress_interval)
    store = SessionStore(
        max_sessions=config.max_sessions,
        factory=partial(VectorizerSession, schedule=schedule),
    )
    page = render_page(poll_interval_ms=config.progress_interval_ms)

    app = FastAPI(
        title="PNG Vectorizer",
        version=__version__,
        description="Wrap PNG images into downloadable SVG documents.",
    )
    app.state.sessions = store
    file_param = File(...)
    upload_param = File(...)
    expected_sha256_param = Form(default=None)

    def _get_session(session_id: str) -> VectorizerSession:
        try:
            return store.get(session_id)
        except SessionNotFoundError as exc:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=str(exc),
            ) from exc

    @app.get("/", response_class=HTMLResponse)
    async def index() -> HTMLResponse:
        return HTMLResponse(page)

    @app.get("/healthz", response_model=HealthResponse)
    async def healthz() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/readyz", response_model=ReadyResponse)
    async def readyz() -> ReadyResponse:
        return ReadyResponse(status="ready")

    @app.post(
        "/v1/sessions",
        response_model=SessionState,
        status_code=status.HTTP_201_CREATED,
    )
    async def create_session() -> SessionState:
        session_id, session = store.create()
        return _session_state(session_id, session)

    @app.get("/v1/sessions/{session_id}", response_model=SessionState)
    async def get_session(session_id: str) -> SessionState:
        return _session_state(session_id, _get_session(session_id))

    @app.put("/v1/sessions/{session_id}/file", response_model=SessionState)
    async def select_file(
        session_id: str,
        file: UploadFile = file_param,
    ) -> SessionState:
        """Accept a PNG for the page; other media types are ignored."""
        session = _get_session(session_id)
        payload = await file.read()
        session.select_file(
            name=file.filename or "",
            media_type=file.content_type or "",
            content=payload,
        )
        return _session_state(session_id, session)

    @app.post("/v1/sessions/{session_id}/convert", response_model=SessionState)
    async def convert_session(session_id: str) -> SessionState:
        """Run the conversion and return the final page state."""
        session = _get_session(session_id)
        try:
            await session.convert()
        except Exception as exc:
            logger.exception("unexpected error during session conversion")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="internal server error",
            ) from exc
        return _session_state(session_id, session)

    @app.get("/v1/sessions/{session_id}/download/{handle}")
    async def download(session_id: str, handle: str) -> Response:
        """Return the converted SVG as an attachment."""
        artifact = _get_session(session_id).download(handle)
        if artifact is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="no conversion result for this handle",
            )
        return Response(
            content=artifact.content,
            media_type=artifact.media_type,
            headers=_attachment_headers(artifact.filename),
        )

    @app.post("/v1/convert/upload")
    async def convert_upload(
        file: UploadFile = upload_param,
        expected_sha256: str | None = expected_sha256_param,
    ) -> Response:
        """Convert an uploaded PNG and return SVG bytes."""
        payload = await file.read()
        if not payload:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="uploaded file is empty",
            )
        try:
            request = ConversionRequest(
                filename=file.filename or "",
                media_type=file.content_type or "",
                expected_sha256=expected_sha256,
            )
            input_sha, outcome = convert_png_bytes(payload, request)
        except UnsupportedMediaTypeError as exc:
            raise HTTPException(
                status_code=status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
                detail=str(exc),
            ) from exc
        except (ValueError, ConversionError) as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(exc),
            ) from exc
        except Exception as exc:
            logger.exception("unexpected error during HTTP conversion upload")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="internal server error",
            ) from exc

        headers = {
            "X-Input-SHA256": input_sha,
            "X-Output-SHA256": outcome.output_sha256,
            **_attachment_headers(outcome.output_filename),
        }
        return Response(
            content=outcome.output_bytes,
            media_type=SVG_MEDIA_TYPE,
            headers=headers,
        )

    return app


app = create_app()


def main() -> None:
    """Run the vectorizer HTTP entrypoint."""
    config = ServerConfig.from_env()
    parser = argparse.ArgumentParser(description="PNG vectorizer HTTP server.")
    parser.add_argument("--host", default=config.host)
    parser.add_argument("--port", type=int, default=config.port)
    parser.add_argument("--log-level", default=config.log_level)
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper())
    uvicorn.run(
        APP_REF,
        host=args.host,
        port=args.port,
        reload=False,
    )


if __name__ == "__main__":
    main()
