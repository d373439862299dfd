from .document import DocumentRead, DocumentUploadResponse, MessageResponse

__all__ = [
    "DocumentRead",
    "DocumentUploadResponse",
    "MessageResponse",
]
