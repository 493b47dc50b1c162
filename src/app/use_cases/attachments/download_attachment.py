"""DownloadAttachment Use Case

Returns the decoded content of a stored file.
"""

import base64
from libs.result import Result, Return, Error
from src.app.repositories.invoice_repository import InvoiceRepository
from .dtos import AttachmentContentDTO


class DownloadAttachment:
    """Use Case: Download attachment"""

    def __init__(self, invoice_repo: InvoiceRepository):
        self.invoice_repo = invoice_repo

    async def execute(self, invoice_id: str, attachment_id: str) -> Result[AttachmentContentDTO]:
        invoice = await self.invoice_repo.get_by_id(invoice_id)

        if not invoice:
            return Return.err(
                Error(
                    code="INVOICE_NOT_FOUND",
                    message=f'Invoice with ID "{invoice_id}" not found',
                    reason="Invoice does not exist",
                )
            )

        attachment = next(
            (item for item in invoice.attachments if item.id == attachment_id), None
        )
        if attachment is None:
            return Return.err(
                Error(
                    code="ATTACHMENT_NOT_FOUND",
                    message=f'File with ID "{attachment_id}" not found',
                    reason=f"invoice_id={invoice_id}",
                )
            )

        try:
            content = base64.b64decode(attachment.data, validate=True)
        except ValueError as e:
            return Return.err(
                Error(
                    code="CORRUPTED_ATTACHMENT",
                    message=f'File "{attachment.filename}" could not be decoded',
                    reason=str(e),
                )
            )

        return Return.ok(
            AttachmentContentDTO(
                attachment_id=attachment.id,
                filename=attachment.filename,
                content_type=attachment.content_type,
                size=attachment.size,
                content=content,
            )
        )
