"""Schemas for document endpoints."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class DocumentRead(BaseModel):
    id: int
    filename: str
    filepath: str
    filesize: int
    created_at: datetime | None = Field(alias="createdAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


class DocumentUploadResponse(BaseModel):
    message: str
    doc: DocumentRead


class MessageResponse(BaseModel):
    message: str


__all__ = ["DocumentRead", "DocumentUploadResponse", "MessageResponse"]
