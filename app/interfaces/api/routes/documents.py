"""Routes exposing the document registry."""

import logging
from dataclasses import replace

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status
from fastapi.responses import FileResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.application.use_cases.documents import (
    delete_document as delete_document_uc,
    list_documents as list_documents_uc,
    open_document as open_document_uc,
    upload_document as upload_document_uc,
)
from app.config import Settings
from app.domain.entities import Document
from app.interfaces.api.dependencies import get_app_settings, get_db, get_storage
from app.interfaces.api.schemas import (
    DocumentRead,
    DocumentUploadResponse,
    MessageResponse,
)
from app.interfaces.api.upload_gate import PDF_CONTENT_TYPE, require_pdf_upload
from app.infrastructure.storage import DocumentStorage
from app.utils import attach_timezone

router = APIRouter(prefix="/documents", tags=["documents"])
logger = logging.getLogger(__name__)

_BACKEND_ERRORS = (SQLAlchemyError, OSError)


def _document_to_read_model(document: Document, settings: Settings) -> DocumentRead:
    localized = replace(
        document, created_at=attach_timezone(document.created_at, settings.app_timezone)
    )
    return DocumentRead.model_validate(localized)


def _server_error(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


@router.post(
    "/upload",
    response_model=DocumentUploadResponse,
    status_code=status.HTTP_201_CREATED,
)
def upload_document(
    file: UploadFile = Depends(require_pdf_upload),
    db: Session = Depends(get_db),
    storage: DocumentStorage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
) -> DocumentUploadResponse:
    """Store an uploaded PDF and register its metadata."""

    try:
        document = upload_document_uc(
            db,
            storage,
            filename=file.filename or "document.pdf",
            stream=file.file,
            timezone_name=settings.app_timezone,
        )
    except _BACKEND_ERRORS as exc:
        logger.exception("Failed to store document %s: %s", file.filename, exc)
        raise _server_error("Upload failed") from exc

    return DocumentUploadResponse(
        message="Uploaded Successfully",
        doc=_document_to_read_model(document, settings),
    )


@router.get("", response_model=list[DocumentRead])
@router.get("/", response_model=list[DocumentRead], include_in_schema=False)
def list_documents(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> list[DocumentRead]:
    """Return every stored document, newest first."""

    try:
        documents = list_documents_uc(db)
    except SQLAlchemyError as exc:
        logger.exception("Failed to list documents: %s", exc)
        raise _server_error("Error fetching documents") from exc
    return [_document_to_read_model(document, settings) for document in documents]


@router.get(
    "/{document_id}",
    response_class=FileResponse,
    responses={200: {"content": {PDF_CONTENT_TYPE: {}}}},
)
def download_document(
    document_id: int,
    db: Session = Depends(get_db),
    storage: DocumentStorage = Depends(get_storage),
) -> FileResponse:
    """Stream the blob of ``document_id`` under its original filename."""

    try:
        document, path = open_document_uc(db, storage, document_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except _BACKEND_ERRORS as exc:
        logger.exception("Failed to stream document %s: %s", document_id, exc)
        raise _server_error("Download failed") from exc

    return FileResponse(path=path, filename=document.filename, media_type=PDF_CONTENT_TYPE)


@router.delete("/{document_id}", response_model=MessageResponse)
def delete_document(
    document_id: int,
    db: Session = Depends(get_db),
    storage: DocumentStorage = Depends(get_storage),
) -> MessageResponse:
    """Delete the document row and its stored blob."""

    try:
        delete_document_uc(db, storage, document_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except _BACKEND_ERRORS as exc:
        logger.exception("Failed to delete document %s: %s", document_id, exc)
        raise _server_error("Deletion failed") from exc

    return MessageResponse(message="Deleted Successfully")


__all__ = [
    "router",
]
