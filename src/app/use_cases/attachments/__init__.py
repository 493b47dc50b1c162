"""Attachment use cases"""
from .upload_attachment import UploadAttachment
from .delete_attachment import DeleteAttachment
from .download_attachment import DownloadAttachment
from .dtos import UploadAttachmentCommandDTO, AttachmentContentDTO

__all__ = [
    "UploadAttachment",
    "DeleteAttachment",
    "DownloadAttachment",
    "UploadAttachmentCommandDTO",
    "AttachmentContentDTO",
]
