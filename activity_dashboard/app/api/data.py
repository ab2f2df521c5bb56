from __future__ import annotations

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from ..schemas.dashboard import SourceErrorResponse
from ..services.source import SourceFileError, read_activity_document

router = APIRouter(tags=["data"])


@router.get(
    "/api/data",
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": SourceErrorResponse}},
)
def read_activity_data(request: Request) -> JSONResponse:
    """Serve the raw activity document, re-read from disk on every call."""

    path = request.app.state.settings.data_file
    try:
        document = read_activity_document(path)
    except SourceFileError as exc:
        payload = SourceErrorResponse(error="Could not read file", path=str(exc.path))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=payload.model_dump(),
        )
    return JSONResponse(content=document, headers={"Cache-Control": "no-store"})
