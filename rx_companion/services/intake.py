# rx_companion/services/intake.py
import logging
import mimetypes
import os
from typing import Any

from rx_companion.core.errors import InvalidInputError
from rx_companion.schemas.prescription import SourceImage

logger = logging.getLogger(__name__)


def _media_type(file_handle: Any) -> str:
    # streamlit UploadedFile exposes .type, starlette UploadFile .content_type
    media_type = getattr(file_handle, "type", None) or getattr(file_handle, "content_type", None)
    if not media_type:
        name = getattr(file_handle, "name", None) or getattr(file_handle, "filename", None) or ""
        media_type, _ = mimetypes.guess_type(str(name))
    return (media_type or "").split(";")[0].strip().lower()


def _read_bytes(file_handle: Any) -> bytes:
    if hasattr(file_handle, "getvalue"):
        return file_handle.getvalue()
    if hasattr(file_handle, "seek"):
        file_handle.seek(0)
    return file_handle.read()


def acquire(file_handle: Any) -> SourceImage:
    """
    Turn a user-selected file (camera capture or upload) into a SourceImage.
    Bytes are held in memory only; the same SourceImage is reused on retry.
    """
    media_type = _media_type(file_handle)
    if not media_type.startswith("image/"):
        raise InvalidInputError(
            InvalidInputError.NOT_AN_IMAGE,
            f"Please choose an image file (got '{media_type or 'unknown type'}').",
        )

    data = _read_bytes(file_handle) or b""
    if not data:
        raise InvalidInputError(InvalidInputError.EMPTY_IMAGE, "The selected image is empty.")

    filename = getattr(file_handle, "name", None) or getattr(file_handle, "filename", None)
    filename = os.path.basename(str(filename)) if filename else "prescription"
    image = SourceImage(data=data, content_type=media_type, filename=filename)
    logger.debug("Acquired %s image (%d bytes)", media_type, image.size)
    return image
