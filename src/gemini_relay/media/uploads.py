"""
Transient storage for files uploaded to the media endpoints.

Each endpoint accepts exactly one file field and decides its MIME type
itself; the content type declared by the browser is not consulted.
Stored files live only for the duration of the request.
"""

import os
import base64
import asyncio
import logging
import tempfile
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Dict, Optional

from fastapi import UploadFile

from gemini_relay.models.contents import (
    AUDIO_MIME_TYPE,
    DOCUMENT_MIME_TYPE,
    IMAGE_MIME_TYPE,
)
from gemini_relay.models.errors import MissingInput

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class UploadField:
    name: str
    mime_type: str
    missing_message: str
    suffix: str

UPLOAD_FIELDS: Dict[str, UploadField] = {
    "image": UploadField("image", IMAGE_MIME_TYPE, "Image is required", ".png"),
    "audio": UploadField("audio", AUDIO_MIME_TYPE, "Audio is required", ".mp3"),
    "document": UploadField("document", DOCUMENT_MIME_TYPE, "Document is required", ".pdf"),
}

@dataclass(frozen=True)
class UploadedFile:
    path: str
    mime_type: str

    def read_base64(self) -> str:
        with open(self.path, "rb") as f:
            return base64.b64encode(f.read()).decode("utf-8")

def _write_temp(content: bytes, suffix: str, upload_dir: Optional[str]) -> str:
    if upload_dir:
        os.makedirs(upload_dir, exist_ok=True)
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix, dir=upload_dir) as temp_file:
        temp_file.write(content)
        return temp_file.name

@asynccontextmanager
async def receive_upload(
    upload: Optional[UploadFile],
    field: UploadField,
    upload_dir: Optional[str] = None,
) -> AsyncIterator[UploadedFile]:
    """
    Store an uploaded file on disk for the duration of the block.

    Args:
        upload: File taken from the multipart form, or None when absent
        field: Which endpoint field this is; fixes the MIME type
        upload_dir: Directory for the temporary copy (system temp if None)

    Yields:
        UploadedFile pointing at the stored copy

    Raises:
        MissingInput: No file was sent under the field name
    """
    if upload is None or not upload.filename:
        raise MissingInput(field.missing_message)

    content = await upload.read()
    temp_filename = await asyncio.to_thread(_write_temp, content, field.suffix, upload_dir)
    logger.debug(f"Stored {field.name} upload ({len(content)} bytes) at {temp_filename}")

    try:
        yield UploadedFile(path=temp_filename, mime_type=field.mime_type)
    finally:
        if os.path.exists(temp_filename):
            os.unlink(temp_filename)
