"""SQLAlchemy model for uploaded documents."""

from sqlalchemy import BigInteger, Column, DateTime, Integer, String

from app.infrastructure.database import Base


class DocumentModel(Base):
    """Database representation of an uploaded PDF and its stored blob."""

    __tablename__ = "document"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    filename = Column(String(255), nullable=False)
    filepath = Column(String(512), nullable=False)
    filesize = Column(BigInteger, nullable=False)
    created_at = Column(DateTime(), nullable=False, index=True)


__all__ = ["DocumentModel"]
