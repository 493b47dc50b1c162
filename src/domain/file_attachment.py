"""File Attachment Domain Entity

A file stored inline (base64) on an invoice.
"""

import math
import re
from datetime import datetime
from typing import Optional, TYPE_CHECKING
from sqlmodel import Field, Column, Index, Relationship
from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from src.domain.base import BaseModel, generate_uuid, utcnow

if TYPE_CHECKING:
    from src.domain.invoice import Invoice


class FileAttachment(BaseModel, table=True):
    """
    File Attachment - File owned by an invoice

    Domain Rules:
    - Owned exclusively by its parent invoice; deleted with it
    - data holds the base64 encoded file content
    - size is the decoded size in bytes
    """

    __tablename__ = "file_attachments"
    __table_args__ = (
        Index('ix_file_attachments_invoice_id', 'invoice_id'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        sa_column=Column(String(36), primary_key=True),
        description="Unique attachment identifier (UUID)"
    )

    invoice_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(36), ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False),
        description="Foreign key to Invoice"
    )

    filename: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Sanitized original filename"
    )

    size: int = Field(
        sa_column=Column(Integer, nullable=False),
        description="File size in bytes"
    )

    content_type: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="MIME type (e.g., application/pdf)"
    )

    data: str = Field(
        sa_column=Column(Text, nullable=False),
        description="Base64 encoded file content"
    )

    uploaded_at: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime, nullable=False),
        description="Upload timestamp"
    )

    invoice: Optional["Invoice"] = Relationship(back_populates="attachments")


ALLOWED_CONTENT_TYPES = (
    "application/pdf",
    "image/jpeg",
    "image/png",
    "image/gif",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "text/plain",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
)

CONTENT_TYPE_DESCRIPTIONS = {
    "application/pdf": "PDF Document",
    "image/jpeg": "JPEG Image",
    "image/png": "PNG Image",
    "image/gif": "GIF Image",
    "application/msword": "Word Document",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "Word Document",
    "text/plain": "Text File",
    "application/vnd.ms-excel": "Excel Spreadsheet",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": "Excel Spreadsheet",
}

# Base64 grows stored payloads by about a third
BASE64_OVERHEAD = 1.33

_INVALID_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*]')
_TRAILING_DOTS_AND_SPACES = re.compile(r"[.\s]+$")
_RESERVED_FILENAMES = {"CON", "PRN", "AUX", "NUL"} | {
    f"{prefix}{n}" for prefix in ("COM", "LPT") for n in range(1, 10)
}


def sanitize_filename(filename: Optional[str]) -> str:
    """
    Make a user supplied filename safe to store and serve back

    Strips characters invalid on common filesystems, suffixes Windows
    reserved names, drops trailing dots/spaces and a leading dot.
    """
    if not filename or not filename.strip():
        return "untitled"

    sanitized = _INVALID_FILENAME_CHARS.sub("", filename)

    stem, dot, extension = sanitized.partition(".")
    if stem.upper() in _RESERVED_FILENAMES:
        sanitized = f"{stem}_{dot}{extension}"

    sanitized = _TRAILING_DOTS_AND_SPACES.sub("", sanitized)

    if sanitized.startswith(".") and len(sanitized) > 1:
        sanitized = sanitized[1:]

    return sanitized or "untitled"


def estimate_stored_size(size: int) -> int:
    return math.ceil(size * BASE64_OVERHEAD)


def describe_content_type(content_type: str) -> str:
    return CONTENT_TYPE_DESCRIPTIONS.get(content_type, "Unknown File Type")
