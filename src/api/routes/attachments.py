"""Attachment API Routes

FastAPI routes for uploading, downloading and removing files attached to
an invoice.
"""

from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from libs.result import Error
from src.app.use_cases.attachments import (
    UploadAttachment,
    DownloadAttachment,
    DeleteAttachment,
    UploadAttachmentCommandDTO,
)
from src.app.use_cases.invoices.dtos import AttachmentDTO
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.domain.totals import format_file_size
from src.depends import get_config, get_session
from src.api.error import raise_for_error
from src.api.headers import attachment_disposition

router = APIRouter(prefix="/invoices/{invoice_id}/attachments", tags=["Attachments"])

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@router.post(
    "",
    response_model=AttachmentDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {
            "description": "Unsupported, empty file or too many attachments",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "UNSUPPORTED_FILE_TYPE",
                            "message": "File type application/zip is not supported"
                        }
                    }
                }
            }
        },
        404: {"description": "Invoice not found"},
        413: {
            "description": "File or invoice storage limit exceeded",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "FILE_TOO_LARGE",
                            "message": "File exceeds the 10.0 MB limit"
                        }
                    }
                }
            }
        }
    }
)
async def upload_attachment(
    invoice_id: str,
    file: UploadFile = File(...),
    session: AsyncSession = Depends(get_session),
    config=Depends(get_config),
):
    """
    Attach a file to an invoice.

    Accepted types: PDF, JPEG, PNG, GIF, Word, plain text and Excel.
    """
    uow = SqlAlchemyUnitOfWork(session)
    invoice_repo = SqlAlchemyInvoiceRepository(session)

    # Reject oversized uploads before reading them into memory
    if file.size is not None and file.size > config.MAX_FILE_SIZE_BYTES:
        raise_for_error(
            Error(
                code="FILE_TOO_LARGE",
                message=f"File size exceeds {format_file_size(config.MAX_FILE_SIZE_BYTES)} limit",
                reason=f"size={file.size}, limit={config.MAX_FILE_SIZE_BYTES}",
            )
        )

    content = await file.read()
    command = UploadAttachmentCommandDTO(
        invoice_id=invoice_id,
        filename=file.filename or "",
        content_type=file.content_type or DEFAULT_CONTENT_TYPE,
        content=content,
    )

    use_case = UploadAttachment(
        uow,
        invoice_repo,
        max_file_size=config.MAX_FILE_SIZE_BYTES,
        max_attachments=config.MAX_ATTACHMENTS_PER_INVOICE,
        max_total_size=config.MAX_TOTAL_ATTACHMENT_BYTES,
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/{attachment_id}",
    responses={
        200: {"description": "File content"},
        404: {"description": "Invoice or attachment not found"},
    }
)
async def download_attachment(
    invoice_id: str,
    attachment_id: str,
    session: AsyncSession = Depends(get_session)
):
    """Download an attachment with its original content type."""
    invoice_repo = SqlAlchemyInvoiceRepository(session)

    use_case = DownloadAttachment(invoice_repo)
    result = await use_case.execute(invoice_id, attachment_id)

    if result.is_err():
        raise_for_error(result.error)

    attachment = result.value
    return Response(
        content=attachment.content,
        media_type=attachment.content_type,
        headers={"Content-Disposition": attachment_disposition(attachment.filename)},
    )


@router.delete(
    "/{attachment_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"description": "Invoice or attachment not found"}},
)
async def delete_attachment(
    invoice_id: str,
    attachment_id: str,
    session: AsyncSession = Depends(get_session)
):
    """Remove an attachment from an invoice."""
    uow = SqlAlchemyUnitOfWork(session)
    invoice_repo = SqlAlchemyInvoiceRepository(session)

    use_case = DeleteAttachment(uow, invoice_repo)
    result = await use_case.execute(invoice_id, attachment_id)

    if result.is_err():
        raise_for_error(result.error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
