"""
Builders for the `contents` payload sent to the inference API.
"""

from typing import Iterable, List, Optional

from gemini_relay.models.schemas import Content, InlineData, Message, Part

IMAGE_MIME_TYPE = "image/png"
AUDIO_MIME_TYPE = "audio/mpeg"
DOCUMENT_MIME_TYPE = "application/pdf"

DEFAULT_IMAGE_PROMPT = "Describe the following image"
AUDIO_PROMPT = "Transcribe this audio"
DOCUMENT_PROMPT = "Summarize this document"

def _inline(data: str, mime_type: str) -> Part:
    return Part(inline_data=InlineData(data=data, mime_type=mime_type))

def build_chat_contents(messages: Iterable[Message]) -> List[Content]:
    """
    Map chat history onto one content entry per message.

    Order and role values are kept exactly as given.
    """
    return [
        Content(role=message.role, parts=[Part(text=message.content)])
        for message in messages
    ]

def build_image_contents(data: str, prompt: Optional[str] = None) -> List[Content]:
    """
    Build the payload for an image question.

    Args:
        data: Base64-encoded image bytes
        prompt: Caller instruction; empty or missing uses DEFAULT_IMAGE_PROMPT

    Returns:
        Single user entry with the text part first, then the image
    """
    return [
        Content(
            role="user",
            parts=[
                Part(text=prompt or DEFAULT_IMAGE_PROMPT),
                _inline(data, IMAGE_MIME_TYPE),
            ],
        )
    ]

def build_audio_contents(data: str) -> List[Content]:
    return [
        Content(
            role="user",
            parts=[_inline(data, AUDIO_MIME_TYPE), Part(text=AUDIO_PROMPT)],
        )
    ]

def build_document_contents(data: str) -> List[Content]:
    return [
        Content(
            role="user",
            parts=[_inline(data, DOCUMENT_MIME_TYPE), Part(text=DOCUMENT_PROMPT)],
        )
    ]
