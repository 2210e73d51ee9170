"""
Chat API routes for text, image, audio and document requests.

Every route answers 200 with `{"result": ...}` or 400 with `{"error": ...}`.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Sequence

from fastapi import APIRouter, File, Form, Request, UploadFile
from fastapi.responses import JSONResponse

from gemini_relay.media.uploads import UPLOAD_FIELDS, receive_upload
from gemini_relay.models.errors import InvalidShape
from gemini_relay.models.inference import ModelManager
from gemini_relay.models.schemas import ChatResponse, ErrorResponse, Message

logger = logging.getLogger(__name__)

ERROR_RESPONSES = {400: {"model": ErrorResponse}}

def error_response(endpoint: str, error: Exception) -> JSONResponse:
    logger.error(f"Error in {endpoint}: {str(error)}")
    return JSONResponse(status_code=400, content={"error": str(error)})

def validation_message(errors: Sequence[Dict[str, Any]]) -> str:
    """
    Turn framework validation errors into a client-facing message.

    A text value sent under a file field means no file was uploaded, so it
    gets that field's missing-input message.
    """
    for error in errors:
        loc = tuple(error.get("loc", ()))
        if len(loc) > 1 and loc[0] == "body" and loc[1] in UPLOAD_FIELDS:
            return UPLOAD_FIELDS[loc[1]].missing_message
    return "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', 'invalid value')}"
        for error in errors
    ) or "Invalid request"

def parse_messages(body: Any) -> List[Message]:
    """
    Validate a chat request body.

    Args:
        body: Decoded JSON body

    Returns:
        Messages in the order they were sent

    Raises:
        InvalidShape: `messages` is missing or not an array
    """
    messages = body.get("messages") if isinstance(body, dict) else None
    if not isinstance(messages, list):
        raise InvalidShape("Messages must be an array")
    return [Message.model_validate(message) for message in messages]

def create_router(model_manager: ModelManager, upload_dir: Optional[str] = None) -> APIRouter:
    """
    Build the API router around an inference client.

    Args:
        model_manager: Client used by every route for the process lifetime
        upload_dir: Directory for transient upload copies

    Returns:
        Router to be mounted under /api
    """
    router = APIRouter(tags=["chat"])

    @router.post("/chat", response_model=ChatResponse, responses=ERROR_RESPONSES)
    async def chat(request: Request):
        """Process a text chat request."""
        try:
            raw = await request.body()
            messages = parse_messages(json.loads(raw) if raw.strip() else {})
            return await model_manager.generate_text_response(messages)
        except Exception as e:
            return error_response("chat", e)

    @router.post("/image", response_model=ChatResponse, responses=ERROR_RESPONSES)
    async def image(
        image: Optional[UploadFile] = File(None),
        prompt: Optional[str] = Form(None),
    ):
        """Describe an uploaded image, optionally guided by a prompt."""
        try:
            async with receive_upload(image, UPLOAD_FIELDS["image"], upload_dir) as upload:
                return await model_manager.generate_image_response(upload, prompt)
        except Exception as e:
            return error_response("image", e)

    @router.post("/audio", response_model=ChatResponse, responses=ERROR_RESPONSES)
    async def audio(audio: Optional[UploadFile] = File(None)):
        """Transcribe an uploaded audio file."""
        try:
            async with receive_upload(audio, UPLOAD_FIELDS["audio"], upload_dir) as upload:
                return await model_manager.generate_audio_response(upload)
        except Exception as e:
            return error_response("audio", e)

    @router.post("/document", response_model=ChatResponse, responses=ERROR_RESPONSES)
    async def document(document: Optional[UploadFile] = File(None)):
        """Summarize an uploaded PDF document."""
        try:
            async with receive_upload(document, UPLOAD_FIELDS["document"], upload_dir) as upload:
                return await model_manager.generate_document_response(upload)
        except Exception as e:
            return error_response("document", e)

    return router
