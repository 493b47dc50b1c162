"""UploadAttachment Use Case

Validates a file and stores it, base64 encoded, on an invoice.
"""

import base64
import logging
from typing import Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.use_cases.invoices.dtos import AttachmentDTO
from src.domain.base import generate_uuid, utcnow
from src.domain.file_attachment import (
    ALLOWED_CONTENT_TYPES,
    FileAttachment,
    estimate_stored_size,
    sanitize_filename,
)
from src.domain.totals import format_file_size
from .dtos import UploadAttachmentCommandDTO

logger = logging.getLogger(__name__)

DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
DEFAULT_MAX_ATTACHMENTS = 20
DEFAULT_MAX_TOTAL_SIZE = 50 * 1024 * 1024


class UploadAttachment:
    """
    Use Case: Attach a file to an invoice

    Business Rules:
    1. Invoice must exist
    2. Only PDF, image, Word, text and Excel files are accepted
    3. File must be non-empty and within the per-file size limit
    4. Invoice may hold at most max_attachments files
    5. Stored size (base64 overhead included) must stay within max_total_size
    6. Filename is sanitized; invoice updated_at is bumped

    Flow:
    1. Retrieve invoice
    2. Validate type, size, count and storage limits
    3. Encode and append attachment
    4. Persist and commit
    """

    def __init__(
        self,
        uow: UnitOfWork,
        invoice_repo: InvoiceRepository,
        max_file_size: int = DEFAULT_MAX_FILE_SIZE,
        max_attachments: int = DEFAULT_MAX_ATTACHMENTS,
        max_total_size: int = DEFAULT_MAX_TOTAL_SIZE,
    ):
        self.uow = uow
        self.invoice_repo = invoice_repo
        self.max_file_size = max_file_size
        self.max_attachments = max_attachments
        self.max_total_size = max_total_size

    async def execute(self, command: UploadAttachmentCommandDTO) -> Result[AttachmentDTO]:
        """
        Execute file upload

        Args:
            command: UploadAttachmentCommandDTO with invoice_id, filename, type and content

        Returns:
            Result[AttachmentDTO]: Stored attachment metadata or error
        """
        try:
            # Step 1: Retrieve invoice
            invoice = await self.invoice_repo.get_by_id(command.invoice_id)

            if not invoice:
                return Return.err(
                    Error(
                        code="INVOICE_NOT_FOUND",
                        message=f'Invoice with ID "{command.invoice_id}" not found',
                        reason="Invoice does not exist",
                    )
                )

            # Step 2: Validate
            error = self._validate(command, invoice.attachments)
            if error:
                return Return.err(error)

            # Step 3: Encode and append
            attachment = FileAttachment(
                id=generate_uuid(),
                filename=sanitize_filename(command.filename),
                size=len(command.content),
                content_type=command.content_type,
                data=base64.b64encode(command.content).decode("ascii"),
                uploaded_at=utcnow(),
            )
            invoice.attachments.append(attachment)

            # Step 4: Persist and commit
            await self.invoice_repo.update(invoice)
            await self.uow.commit()

            logger.info(
                f"Attached {attachment.filename} ({format_file_size(attachment.size)}) "
                f"to invoice {invoice.invoice_number}"
            )

            return Return.ok(
                AttachmentDTO(
                    id=attachment.id,
                    filename=attachment.filename,
                    size=attachment.size,
                    content_type=attachment.content_type,
                    uploaded_at=attachment.uploaded_at,
                )
            )

        except Exception as e:
            logger.error(f"Failed to upload attachment to invoice {command.invoice_id}: {e}")
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPLOAD_ATTACHMENT_FAILED",
                    message="Failed to upload file",
                    reason=str(e),
                )
            )

    def _validate(self, command: UploadAttachmentCommandDTO, existing) -> Optional[Error]:
        if command.content_type not in ALLOWED_CONTENT_TYPES:
            return Error(
                code="UNSUPPORTED_FILE_TYPE",
                message="File type not supported. Allowed types: PDF, JPEG, PNG, GIF, DOC, DOCX, TXT, XLS, XLSX",
                reason=f"content_type={command.content_type}",
            )

        size = len(command.content)
        if size == 0:
            return Error(
                code="EMPTY_FILE",
                message="File is empty",
                reason="size=0",
            )

        if size > self.max_file_size:
            return Error(
                code="FILE_TOO_LARGE",
                message=f"File size exceeds {format_file_size(self.max_file_size)} limit",
                reason=f"size={size}, limit={self.max_file_size}",
            )

        if len(existing) >= self.max_attachments:
            return Error(
                code="ATTACHMENT_LIMIT_EXCEEDED",
                message=f"Cannot exceed {self.max_attachments} attachments per invoice",
                reason=f"attachments={len(existing)}",
            )

        stored = sum(estimate_stored_size(attachment.size) for attachment in existing)
        if stored + estimate_stored_size(size) > self.max_total_size:
            return Error(
                code="STORAGE_LIMIT_EXCEEDED",
                message=(
                    "Adding this file would exceed the storage limit of "
                    f"{format_file_size(self.max_total_size)}"
                ),
                reason=f"stored={stored}, incoming={size}, limit={self.max_total_size}",
            )

        return None
