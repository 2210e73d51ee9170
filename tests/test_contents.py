from gemini_relay.models.contents import (
    build_audio_contents,
    build_chat_contents,
    build_document_contents,
    build_image_contents,
)
from gemini_relay.models.schemas import Message


def payload(contents):
    return [content.model_dump(by_alias=True, exclude_none=True) for content in contents]


def test_chat_preserves_order_roles_and_content():
    messages = [
        Message(role="user", content="hi"),
        Message(role="assistant", content="hello"),
        Message(role="model", content="x"),
        Message(role="user", content="2+2?"),
    ]
    assert payload(build_chat_contents(messages)) == [
        {"role": "user", "parts": [{"text": "hi"}]},
        {"role": "assistant", "parts": [{"text": "hello"}]},
        {"role": "model", "parts": [{"text": "x"}]},
        {"role": "user", "parts": [{"text": "2+2?"}]},
    ]


def test_chat_with_no_messages():
    assert build_chat_contents([]) == []


def test_image_puts_prompt_first():
    assert payload(build_image_contents("aW1n", "What is this?")) == [
        {
            "role": "user",
            "parts": [
                {"text": "What is this?"},
                {"inlineData": {"data": "aW1n", "mimeType": "image/png"}},
            ],
        }
    ]


def test_image_default_prompt():
    for prompt in (None, ""):
        parts = payload(build_image_contents("aW1n", prompt))[0]["parts"]
        assert parts[0] == {"text": "Describe the following image"}


def test_audio_puts_data_first():
    assert payload(build_audio_contents("YXVk")) == [
        {
            "role": "user",
            "parts": [
                {"inlineData": {"data": "YXVk", "mimeType": "audio/mpeg"}},
                {"text": "Transcribe this audio"},
            ],
        }
    ]


def test_document_puts_data_first():
    assert payload(build_document_contents("cGRm")) == [
        {
            "role": "user",
            "parts": [
                {"inlineData": {"data": "cGRm", "mimeType": "application/pdf"}},
                {"text": "Summarize this document"},
            ],
        }
    ]
