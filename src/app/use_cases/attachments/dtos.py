"""Data Transfer Objects for Attachment Use Cases"""

from pydantic import BaseModel, Field


class UploadAttachmentCommandDTO(BaseModel):
    """
    Command DTO for uploading a file to an invoice

    Used as input to UploadAttachment use case.
    """

    invoice_id: str = Field(
        ...,
        description="Invoice receiving the file"
    )

    filename: str = Field(
        ...,
        description="Original filename (sanitized before storage)"
    )

    content_type: str = Field(
        ...,
        description="MIME type reported by the client"
    )

    content: bytes = Field(
        ...,
        description="Raw file content"
    )


class AttachmentContentDTO(BaseModel):
    """Response DTO for DownloadAttachment"""

    attachment_id: str
    filename: str
    content_type: str
    size: int
    content: bytes
