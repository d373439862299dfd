"""Request filter admitting a single PDF upload."""

import logging

from fastapi import File, HTTPException, Request, UploadFile, status
from starlette.datastructures import UploadFile as StarletteUploadFile

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
UPLOAD_FIELD = "file"

MISSING_FILE_MESSAGE = "Please upload a PDF file"
MULTIPLE_FILES_MESSAGE = "Only one file may be uploaded per request"
NOT_PDF_MESSAGE = "Only PDF files are allowed"


def _reject(detail: str) -> HTTPException:
    logger.info("Rejected upload: %s", detail)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


async def require_pdf_upload(
    request: Request,
    file: UploadFile | None = File(default=None, description="PDF document to store"),
) -> UploadFile:
    """Return the uploaded ``file`` part once it passes the gate.

    Exactly one file part named ``file`` is accepted and its declared content
    type must be ``application/pdf``. The content itself is not inspected.
    """

    form = await request.form()
    uploads = [
        (name, value)
        for name, value in form.multi_items()
        if isinstance(value, StarletteUploadFile)
    ]
    for name, _ in uploads:
        if name != UPLOAD_FIELD:
            raise _reject(f"Unexpected file field '{name}'")
    if len(uploads) > 1:
        raise _reject(MULTIPLE_FILES_MESSAGE)
    if file is None or not uploads:
        raise _reject(MISSING_FILE_MESSAGE)
    if file.content_type != PDF_CONTENT_TYPE:
        raise _reject(NOT_PDF_MESSAGE)
    return file


__all__ = [
    "NOT_PDF_MESSAGE",
    "PDF_CONTENT_TYPE",
    "UPLOAD_FIELD",
    "require_pdf_upload",
]
