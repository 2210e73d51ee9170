"""
Model access for the hosted Gemini API.
"""

import time
import base64
import asyncio
import logging
from typing import Any, List, Optional

from google import genai
from google.genai import types

from gemini_relay.media.uploads import UploadedFile
from gemini_relay.models.contents import (
    build_audio_contents,
    build_chat_contents,
    build_document_contents,
    build_image_contents,
)
from gemini_relay.models.errors import UpstreamFailure
from gemini_relay.models.normalizer import extract_text
from gemini_relay.models.schemas import ChatResponse, Content, Message
from gemini_relay.utils.config import DEFAULT_MODEL, Settings

logger = logging.getLogger(__name__)

class ModelManager:
    """Sends assembled contents to Gemini and normalizes the answer."""

    def __init__(self, client: Any, model_id: str = DEFAULT_MODEL):
        """
        Initialize the model manager.

        Args:
            client: A `google.genai.Client`, or any object exposing
                `aio.models.generate_content`
            model_id: Model identifier passed with every request
        """
        self.client = client
        self.model_id = model_id

    @classmethod
    def from_settings(cls, settings: Settings) -> "ModelManager":
        client = genai.Client(api_key=settings.require_api_key())
        logger.info(f"Gemini client ready for model {settings.gemini_model}")
        return cls(client, model_id=settings.gemini_model)

    @staticmethod
    def to_sdk_content(content: Content) -> types.Content:
        """Convert an assembled entry to SDK types; the SDK takes raw bytes, not base64."""
        parts = []
        for part in content.parts:
            if part.inline_data is not None:
                parts.append(types.Part(inline_data=types.Blob(
                    data=base64.b64decode(part.inline_data.data),
                    mime_type=part.inline_data.mime_type,
                )))
            else:
                parts.append(types.Part(text=part.text))
        return types.Content(role=content.role, parts=parts)

    async def generate(self, contents: List[Content]) -> Any:
        """
        Call the inference API once.

        Args:
            contents: Assembled request contents

        Returns:
            The raw SDK response

        Raises:
            UpstreamFailure: The SDK call raised; the original message is kept
        """
        start_time = time.time()
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model_id,
                contents=[self.to_sdk_content(content) for content in contents],
            )
        except Exception as e:
            logger.error(f"Inference call failed: {str(e)}")
            raise UpstreamFailure(str(e)) from e

        logger.info(f"Inference finished in {time.time() - start_time:.2f}s")
        return response

    async def _answer(self, contents: List[Content]) -> ChatResponse:
        response = await self.generate(contents)
        return ChatResponse(result=extract_text(response))

    async def generate_text_response(self, messages: List[Message]) -> ChatResponse:
        """
        Generate a reply to a chat history.

        Args:
            messages: Conversation messages in order

        Returns:
            ChatResponse carrying the answer text
        """
        return await self._answer(build_chat_contents(messages))

    async def generate_image_response(
        self,
        upload: UploadedFile,
        prompt: Optional[str] = None,
    ) -> ChatResponse:
        """
        Answer a question about an uploaded image.

        Args:
            upload: Stored image file
            prompt: Instruction for the model; a default is used when empty

        Returns:
            ChatResponse carrying the answer text
        """
        data = await asyncio.to_thread(upload.read_base64)
        return await self._answer(build_image_contents(data, prompt))

    async def generate_audio_response(self, upload: UploadedFile) -> ChatResponse:
        """Transcribe an uploaded audio file."""
        data = await asyncio.to_thread(upload.read_base64)
        return await self._answer(build_audio_contents(data))

    async def generate_document_response(self, upload: UploadedFile) -> ChatResponse:
        """Summarize an uploaded PDF document."""
        data = await asyncio.to_thread(upload.read_base64)
        return await self._answer(build_document_contents(data))
