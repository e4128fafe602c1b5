"""Conversion endpoints.

- POST   /convert
- GET    /conversions/{user_id}
- DELETE /conversions/{user_id}/{conversion_id}
"""

from typing import Any

from fastapi import APIRouter, File, Form, Request, UploadFile
from pydantic import ValidationError

from tts_convert.api.dependencies import OrchestratorDep, SettingsDep
from tts_convert.api.exceptions import (
    BadRequestError,
    FileTooLargeError,
    UnsupportedMediaTypeError,
)
from tts_convert.api.middleware.request_context import set_request_user
from tts_convert.api.models.requests import ConvertRequest
from tts_convert.api.models.responses import (
    ConversionListResponse,
    ConvertResponse,
    DeleteConversionResponse,
    ErrorResponse,
)
from tts_convert.config import Settings
from tts_convert.core.models import ConversionRequest, UploadedFile
from tts_convert.extraction import normalize_media_type

router = APIRouter(tags=["Conversions"])

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid request"},
    404: {"model": ErrorResponse, "description": "Conversion not found"},
    500: {"model": ErrorResponse, "description": "Upstream failure"},
}


async def read_upload(file: UploadFile, settings: Settings) -> UploadedFile:
    """
    Upload-layer filter: reject unsupported media types before reading the body and
    oversized files before any processing.
    """
    media_type = normalize_media_type(file.content_type)
    allowed = settings.conversion.allowed_upload_types
    if media_type not in allowed:
        raise UnsupportedMediaTypeError(file.content_type, allowed)

    max_bytes = settings.conversion.max_upload_size_bytes
    data = await file.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise FileTooLargeError(settings.conversion.max_upload_size_mb)

    return UploadedFile(filename=file.filename, media_type=media_type, data=data)


async def read_json_body(request: Request) -> ConvertRequest:
    """Parse a JSON convert body; malformed or mistyped bodies are a 400."""
    try:
        payload = await request.json()
    except ValueError as e:
        raise BadRequestError("Malformed JSON body", details={"reason": str(e)}) from e

    try:
        return ConvertRequest.model_validate(payload)
    except ValidationError as e:
        raise BadRequestError(
            "Invalid JSON body",
            details={"errors": [err["msg"] for err in e.errors()]},
        ) from e


@router.post("/convert", response_model=ConvertResponse, responses=ERROR_RESPONSES)
async def convert(
    request: Request,
    orchestrator: OrchestratorDep,
    settings: SettingsDep,
    user_id: str | None = Form(default=None, alias="userId"),
    text: str | None = Form(default=None),
    voice_name: str | None = Form(default=None, alias="voiceName"),
    file: UploadFile | None = File(default=None, description="PDF or plain text document"),
) -> ConvertResponse:
    """
    Convert inline text or an uploaded PDF/TXT document to MP3 audio.

    Accepts multipart or urlencoded form fields, or an application/json body with
    userId, text and voiceName. An uploaded file takes precedence over the text field.
    """
    if normalize_media_type(request.headers.get("content-type")) == "application/json":
        body = await read_json_body(request)
        user_id, text, voice_name = body.user_id, body.text, body.voice_name

    set_request_user(user_id)

    upload = await read_upload(file, settings) if file is not None else None

    result = await orchestrator.convert(
        ConversionRequest(user_id=user_id, text=text, upload=upload, voice_name=voice_name)
    )

    return ConvertResponse(
        conversion_id=result.conversion_id,
        audio_url=result.audio_url,
        text_length=result.text_length,
        input_type=result.input_type,
    )


@router.get(
    "/conversions/{user_id}",
    response_model=ConversionListResponse,
    responses=ERROR_RESPONSES,
)
async def list_conversions(
    user_id: str,
    orchestrator: OrchestratorDep,
) -> ConversionListResponse:
    """List every conversion of a user."""
    set_request_user(user_id)

    conversions = await orchestrator.list_conversions(user_id)
    return ConversionListResponse(count=len(conversions), conversions=conversions)


@router.delete(
    "/conversions/{user_id}/{conversion_id}",
    response_model=DeleteConversionResponse,
    responses=ERROR_RESPONSES,
)
async def delete_conversion(
    user_id: str,
    conversion_id: str,
    orchestrator: OrchestratorDep,
) -> DeleteConversionResponse:
    """
    Delete a conversion and its audio and original upload.

    Returns 404 if the conversion does not exist.
    """
    set_request_user(user_id)

    result = await orchestrator.delete_conversion(user_id, conversion_id)
    return DeleteConversionResponse(deleted_conversion_id=result.conversion_id)
