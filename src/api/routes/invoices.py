"""Invoice API Routes

FastAPI routes for invoice CRUD, filtering, statistics, bulk operations and
PDF rendering.
"""

import base64
from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import Response
from sqlmodel.ext.asyncio.session import AsyncSession

from libs.result import Error
from src.api.schemas.invoice_request import (
    CreateInvoiceRequestSchema,
    UpdateInvoiceRequestSchema,
    BulkDeleteRequestSchema,
    BulkStatusRequestSchema,
)
from src.app.use_cases.invoices import (
    CreateInvoice,
    GetInvoice,
    UpdateInvoice,
    DeleteInvoice,
    ListInvoices,
    GetInvoiceStats,
    BulkDeleteInvoices,
    BulkUpdatePaymentStatus,
    GenerateInvoicePdf,
    CreateInvoiceCommandDTO,
    UpdateInvoiceCommandDTO,
    InvoiceResponseDTO,
    ListInvoicesQueryDTO,
    ListInvoicesResponseDTO,
    BulkDeleteCommandDTO,
    BulkUpdatePaymentStatusCommandDTO,
    BulkOperationResponseDTO,
)
from src.adapter.repositories.invoice_repository import SqlAlchemyInvoiceRepository
from src.adapter.services.pdf_service import ReportLabPdfService
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.domain.filter_criteria import DateRange, FilterCriteria, SortField, SortOrder
from src.domain.invoice import PaymentStatus
from src.domain.invoice_stats import InvoiceStats
from src.depends import get_config, get_session
from src.api.error import ClientError, raise_for_error
from src.api.headers import attachment_disposition

router = APIRouter(prefix="/invoices", tags=["Invoices"])

NOT_FOUND_RESPONSE = {
    "description": "Invoice not found",
    "content": {
        "application/json": {
            "example": {
                "error": {
                    "code": "INVOICE_NOT_FOUND",
                    "message": 'Invoice with ID "0b9f5a8e" not found'
                }
            }
        }
    }
}

VALIDATION_ERROR_RESPONSE = {
    "description": "Validation error",
    "content": {
        "application/json": {
            "example": {
                "error": {
                    "code": "VALIDATION_ERROR",
                    "message": "Invalid request parameters"
                }
            }
        }
    }
}

DUPLICATE_RESPONSE = {
    "description": "Invoice number already in use",
    "content": {
        "application/json": {
            "example": {
                "error": {
                    "code": "DUPLICATE_INVOICE_NUMBER",
                    "message": 'Invoice number "INV-001" already exists'
                }
            }
        }
    }
}


def filter_criteria_from_query(
    start_date: Optional[date] = Query(None, description="Earliest issue date (inclusive)"),
    end_date: Optional[date] = Query(None, description="Latest issue date (inclusive)"),
    payment_status: Optional[List[PaymentStatus]] = Query(
        None, description="Keep invoices with any of these statuses (repeatable)"
    ),
    search: Optional[str] = Query(
        None, description="Case-insensitive match on number, customer and line items"
    ),
) -> FilterCriteria:
    """Build filter criteria from the query string"""
    if start_date and end_date and start_date > end_date:
        raise ClientError(
            Error(
                code="VALIDATION_ERROR",
                message="Start date must be on or before end date",
                reason=f"start_date={start_date} end_date={end_date}",
            )
        )

    date_range = None
    if start_date or end_date:
        date_range = DateRange(start_date=start_date, end_date=end_date)

    return FilterCriteria(
        date_range=date_range,
        payment_statuses=payment_status,
        search_term=search,
    )


@router.post(
    "",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={400: VALIDATION_ERROR_RESPONSE, 409: DUPLICATE_RESPONSE},
)
async def create_invoice(
    request: CreateInvoiceRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """
    Create an invoice.

    Line item totals, subtotal and total may be omitted and are then
    derived; when sent they must agree with the line items (within 0.01).

    **Returns:**
    - 201: Invoice created
    - 400: Validation error
    - 409: Invoice number already exists
    """
    # Create unit of work and repositories
    uow = SqlAlchemyUnitOfWork(session)
    invoice_repo = SqlAlchemyInvoiceRepository(session)

    command = CreateInvoiceCommandDTO(**request.model_dump())

    use_case = CreateInvoice(uow, invoice_repo)
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "",
    response_model=ListInvoicesResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={400: VALIDATION_ERROR_RESPONSE},
)
async def list_invoices(
    criteria: FilterCriteria = Depends(filter_criteria_from_query),
    sort_by: Optional[SortField] = Query(None, description="Sort field"),
    order: SortOrder = Query(SortOrder.DESC, description="Sort direction"),
    session: AsyncSession = Depends(get_session)
):
    """
    List invoices matching every supplied filter.

    **Query parameters:**
    - `start_date`, `end_date`: inclusive issue date bounds (YYYY-MM-DD)
    - `payment_status`: repeat to match several statuses
    - `search`: free text
    - `sort_by`: date, invoice_number, customer_name or total
    - `order`: asc or desc (default desc)
    """
    invoice_repo = SqlAlchemyInvoiceRepository(session)

    query = ListInvoicesQueryDTO(criteria=criteria, sort_by=sort_by, order=order)

    use_case = ListInvoices(invoice_repo)
    result = await use_case.execute(query)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/stats",
    response_model=InvoiceStats,
    status_code=status.HTTP_200_OK,
    responses={400: VALIDATION_ERROR_RESPONSE},
)
async def get_invoice_stats(
    criteria: FilterCriteria = Depends(filter_criteria_from_query),
    session: AsyncSession = Depends(get_session)
):
    """
    Counts and amounts per payment status over the filtered invoices.

    Accepts the same filter parameters as the list endpoint.
    """
    invoice_repo = SqlAlchemyInvoiceRepository(session)

    use_case = GetInvoiceStats(invoice_repo)
    result = await use_case.execute(criteria)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/bulk-delete",
    response_model=BulkOperationResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={400: VALIDATION_ERROR_RESPONSE},
)
async def bulk_delete_invoices(
    request: BulkDeleteRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """Delete several invoices at once; unknown IDs are ignored."""
    uow = SqlAlchemyUnitOfWork(session)
    invoice_repo = SqlAlchemyInvoiceRepository(session)

    command = BulkDeleteCommandDTO(invoice_ids=request.invoice_ids)

    use_case = BulkDeleteInvoices(uow, invoice_repo)
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.post(
    "/bulk-status",
    response_model=BulkOperationResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={400: VALIDATION_ERROR_RESPONSE},
)
async def bulk_update_payment_status(
    request: BulkStatusRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """Set the payment status of several invoices at once; unknown IDs are ignored."""
    uow = SqlAlchemyUnitOfWork(session)
    invoice_repo = SqlAlchemyInvoiceRepository(session)

    command = BulkUpdatePaymentStatusCommandDTO(
        invoice_ids=request.invoice_ids,
        payment_status=request.payment_status,
    )

    use_case = BulkUpdatePaymentStatus(uow, invoice_repo)
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={404: NOT_FOUND_RESPONSE},
)
async def get_invoice(
    invoice_id: str,
    session: AsyncSession = Depends(get_session)
):
    """Fetch a single invoice with its line items and attachment metadata."""
    invoice_repo = SqlAlchemyInvoiceRepository(session)

    use_case = GetInvoice(invoice_repo)
    result = await use_case.execute(invoice_id)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.patch(
    "/{invoice_id}",
    response_model=InvoiceResponseDTO,
    status_code=status.HTTP_200_OK,
    responses={400: VALIDATION_ERROR_RESPONSE, 404: NOT_FOUND_RESPONSE, 409: DUPLICATE_RESPONSE},
)
async def update_invoice(
    invoice_id: str,
    request: UpdateInvoiceRequestSchema,
    session: AsyncSession = Depends(get_session)
):
    """
    Update an invoice.

    Only fields present in the body change. Sending `null` clears the
    customer email or address. Supplied line items replace the existing
    ones.
    """
    uow = SqlAlchemyUnitOfWork(session)
    invoice_repo = SqlAlchemyInvoiceRepository(session)

    command = UpdateInvoiceCommandDTO(
        invoice_id=invoice_id,
        **request.model_dump(exclude_unset=True),
    )

    use_case = UpdateInvoice(uow, invoice_repo)
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)

    return result.value


@router.delete(
    "/{invoice_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: NOT_FOUND_RESPONSE},
)
async def delete_invoice(
    invoice_id: str,
    session: AsyncSession = Depends(get_session)
):
    """Delete an invoice together with its line items and attachments."""
    uow = SqlAlchemyUnitOfWork(session)
    invoice_repo = SqlAlchemyInvoiceRepository(session)

    use_case = DeleteInvoice(uow, invoice_repo)
    result = await use_case.execute(invoice_id)

    if result.is_err():
        raise_for_error(result.error)

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{invoice_id}/pdf",
    responses={
        200: {
            "content": {"application/pdf": {}},
            "description": "PDF document"
        },
        404: NOT_FOUND_RESPONSE,
    }
)
async def download_invoice_pdf(
    invoice_id: str,
    session: AsyncSession = Depends(get_session),
    config=Depends(get_config),
):
    """
    Download the invoice as a PDF file.

    Amounts are rendered in the configured default currency.
    """
    invoice_repo = SqlAlchemyInvoiceRepository(session)
    pdf_service = ReportLabPdfService()

    use_case = GenerateInvoicePdf(
        invoice_repo,
        pdf_service,
        company_name=config.COMPANY_NAME,
        company_address=config.COMPANY_ADDRESS,
        currency=config.DEFAULT_CURRENCY,
    )
    result = await use_case.execute(invoice_id)

    if result.is_err():
        raise_for_error(result.error)

    # Decode PDF from base64 and return as binary response
    pdf_bytes = base64.b64decode(result.value.pdf_base64)

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": attachment_disposition(f"invoice_{result.value.invoice_number}.pdf")
        }
    )
