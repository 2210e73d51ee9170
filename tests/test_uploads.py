import io
import os
import asyncio

import pytest
from fastapi import UploadFile

from gemini_relay.media.uploads import UPLOAD_FIELDS, receive_upload
from gemini_relay.models.errors import MissingInput


def make_upload(content=b"fake-bytes", filename="photo.jpg"):
    return UploadFile(file=io.BytesIO(content), filename=filename)


def test_missing_upload_raises():
    async def run():
        async with receive_upload(None, UPLOAD_FIELDS["audio"]):
            pass

    with pytest.raises(MissingInput, match="Audio is required"):
        asyncio.run(run())


def test_stores_file_and_removes_it(upload_dir):
    seen = {}

    async def run():
        async with receive_upload(make_upload(), UPLOAD_FIELDS["image"], str(upload_dir)) as stored:
            seen["path"] = stored.path
            seen["mime_type"] = stored.mime_type
            seen["exists"] = os.path.exists(stored.path)
            seen["data"] = stored.read_base64()

    asyncio.run(run())

    assert seen["exists"]
    assert os.path.dirname(seen["path"]) == str(upload_dir)
    # fixed by the endpoint, not by the file name or declared type
    assert seen["mime_type"] == "image/png"
    assert seen["data"] == "ZmFrZS1ieXRlcw=="
    assert not os.path.exists(seen["path"])
    assert os.listdir(upload_dir) == []


def test_file_removed_when_block_fails(upload_dir):
    async def run():
        async with receive_upload(make_upload(), UPLOAD_FIELDS["document"], str(upload_dir)):
            raise RuntimeError("upstream down")

    with pytest.raises(RuntimeError):
        asyncio.run(run())
    assert os.listdir(upload_dir) == []


def test_creates_missing_upload_dir(tmp_path):
    target = tmp_path / "nested" / "uploads"

    async def run():
        async with receive_upload(make_upload(), UPLOAD_FIELDS["audio"], str(target)) as stored:
            return stored.path

    path = asyncio.run(run())
    assert os.path.dirname(path) == str(target)
    assert os.path.isdir(target)
