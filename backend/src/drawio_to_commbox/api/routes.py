"""API routes - draw.io upload conversion."""

from __future__ import annotations

from fastapi import APIRouter, File, HTTPException, UploadFile
from fastapi.responses import JSONResponse

from .. import config
from ..errors import ValidationError
from ..models import ApiInfoResponse, ConvertResponse, ErrorResponse
from ..services.input_layer import read_upload
from ..services.run_pipeline import run_conversion

router = APIRouter(prefix="/api", tags=["api"])


@router.post(
    "/converter/convert",
    response_model=ConvertResponse,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def api_convert(drawioFile: UploadFile | None = File(None)):  # noqa: N803 - form field name
    """Convert an uploaded .drawio file. Returns the Commbox XML, the decoded model and stats."""
    content = None
    filename = None
    content_type = None
    if drawioFile is not None:
        filename = drawioFile.filename
        content_type = drawioFile.content_type
        # One byte over the limit is enough to reject
        content = await drawioFile.read(config.MAX_UPLOAD_BYTES + 1)
    try:
        text = read_upload(content, filename, content_type)
    except ValidationError as e:
        raise HTTPException(400, e.message)

    result = run_conversion(text, filename or "")
    if isinstance(result, ErrorResponse):
        return JSONResponse(status_code=422, content=result.model_dump(by_alias=True))
    return result


@router.get("/test", response_model=ApiInfoResponse)
async def api_test():
    """List the service endpoints."""
    return ApiInfoResponse(
        message="API is working!",
        endpoints={
            "health": "GET /health",
            "convert": "POST /api/converter/convert",
        },
    )
