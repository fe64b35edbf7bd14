"""Size checks for multipart image uploads."""

from os import SEEK_END

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

# Allowance for multipart boundaries and the text fields around the image
FORM_OVERHEAD_BYTES = 64 * 1024


def content_length_exceeds_limit(header_value: str | None, *, max_size_bytes: int) -> bool:
    """Early 413 check on the declared request size; unparsable headers pass."""
    if not header_value:
        return False
    try:
        declared = int(header_value)
    except ValueError:
        return False
    return declared > max_size_bytes + FORM_OVERHEAD_BYTES


async def get_upload_file_size(upload: UploadFile) -> int:
    """Bytes in the spooled upload; the stream position is left unchanged."""

    def measure() -> int:
        stream = upload.file
        position = stream.tell()
        try:
            stream.seek(0, SEEK_END)
            return stream.tell()
        finally:
            stream.seek(position)

    return await run_in_threadpool(measure)
