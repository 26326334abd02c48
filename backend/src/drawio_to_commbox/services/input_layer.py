"""Input layer: validate an uploaded draw.io file and decode it to text."""

from __future__ import annotations

from .. import config
from ..errors import ValidationError, ValidationFailure

ALLOWED_CONTENT_TYPES = ("text/xml", "application/xml")
ALLOWED_EXTENSIONS = (".drawio", ".xml")


def is_supported_file(filename: str | None, content_type: str | None) -> bool:
    if (content_type or "").split(";")[0].strip() in ALLOWED_CONTENT_TYPES:
        return True
    return (filename or "").lower().endswith(ALLOWED_EXTENSIONS)


def read_upload(
    content: bytes | None,
    filename: str | None,
    content_type: str | None = None,
    max_bytes: int | None = None,
) -> str:
    """Validate upload metadata and size, return the content as UTF-8 text."""
    if content is None or not filename:
        raise ValidationError(ValidationFailure.MISSING_FILE, "לא הועלה קובץ")
    if not is_supported_file(filename, content_type):
        raise ValidationError(ValidationFailure.UNSUPPORTED_FILE_TYPE, "רק קבצי XML ו-Draw.io מותרים")
    limit = config.MAX_UPLOAD_BYTES if max_bytes is None else max_bytes
    if len(content) > limit:
        raise ValidationError(
            ValidationFailure.FILE_TOO_LARGE,
            f"הקובץ גדול מדי. הגודל המקסימלי הוא {limit // (1024 * 1024)}MB",
        )
    return decode_text(content)


def decode_text(content: bytes) -> str:
    """UTF-8 decode; invalid bytes become U+FFFD instead of failing the upload."""
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError:
        return content.decode("utf-8", errors="replace")
