"""Invoice API routes.

Totals are always computed server-side at the configured tax rate;
`/preview` prices lines without saving so the editor can show live totals.
"""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ledgerly.core.config import get_settings
from ledgerly.domain.entities.access_level import AccessLevel
from ledgerly.domain.entities.feature import INVOICES
from ledgerly.domain.entities.invoice import InvoiceStatus
from ledgerly.domain.services import InvoiceService
from ledgerly.infrastructure.api.dependencies import require_feature
from ledgerly.infrastructure.api.schemas import (
    InvoiceCreateRequest,
    InvoiceItemInput,
    InvoiceResponse,
    InvoiceStatusRequest,
    InvoiceTotalsPreviewResponse,
    InvoiceUpdateRequest,
)
from ledgerly.infrastructure.persistence.database import get_db_session

router = APIRouter()

can_view = Depends(require_feature(INVOICES, AccessLevel.VIEW))
can_edit = Depends(require_feature(INVOICES, AccessLevel.EDIT))


def _service(session: AsyncSession) -> InvoiceService:
    return InvoiceService(session, get_settings().invoice_tax_rate)


@router.get(
    "",
    response_model=list[InvoiceResponse],
    dependencies=[can_view],
    responses={403: {"description": "Insufficient access to Invoices"}},
)
async def list_invoices(
    status_filter: InvoiceStatus | None = Query(None, alias="status"),
    session: AsyncSession = Depends(get_db_session),
) -> list[InvoiceResponse]:
    """List invoices newest first, optionally filtered by status."""
    invoices = await _service(session).list_invoices(
        status_filter.value if status_filter else None
    )
    return [InvoiceResponse.model_validate(invoice) for invoice in invoices]


@router.post(
    "/preview",
    response_model=InvoiceTotalsPreviewResponse,
    dependencies=[can_view],
)
async def preview_totals(
    items: list[InvoiceItemInput],
    session: AsyncSession = Depends(get_db_session),
) -> InvoiceTotalsPreviewResponse:
    """Price lines at the configured tax rate without saving anything."""
    totals, _ = _service(session).price(item.model_dump() for item in items)
    return InvoiceTotalsPreviewResponse.model_validate(totals)


@router.get(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    dependencies=[can_view],
    responses={404: {"description": "Invoice not found"}},
)
async def get_invoice(
    invoice_id: int,
    session: AsyncSession = Depends(get_db_session),
) -> InvoiceResponse:
    invoice = await _service(session).get_invoice(invoice_id)
    return InvoiceResponse.model_validate(invoice)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=InvoiceResponse,
    dependencies=[can_edit],
    responses={
        400: {"description": "Unknown customer or duplicate invoice number"},
        403: {"description": "Edit access to Invoices required"},
    },
)
async def create_invoice(
    request: InvoiceCreateRequest,
    session: AsyncSession = Depends(get_db_session),
) -> InvoiceResponse:
    """Create an invoice. Lines with a blank description are dropped."""
    invoice = await _service(session).create_invoice(request.model_dump())
    await session.commit()
    return InvoiceResponse.model_validate(invoice)


@router.put(
    "/{invoice_id}",
    response_model=InvoiceResponse,
    dependencies=[can_edit],
    responses={404: {"description": "Invoice not found"}},
)
async def update_invoice(
    invoice_id: int,
    request: InvoiceUpdateRequest,
    session: AsyncSession = Depends(get_db_session),
) -> InvoiceResponse:
    """Update an invoice; sending `items` replaces every line and reprices."""
    invoice = await _service(session).update_invoice(
        invoice_id,
        request.model_dump(exclude_unset=True),
    )
    await session.commit()
    return InvoiceResponse.model_validate(invoice)


@router.patch(
    "/{invoice_id}/status",
    response_model=InvoiceResponse,
    dependencies=[can_edit],
    responses={404: {"description": "Invoice not found"}},
)
async def set_invoice_status(
    invoice_id: int,
    request: InvoiceStatusRequest,
    session: AsyncSession = Depends(get_db_session),
) -> InvoiceResponse:
    """Change an invoice's status, e.g. mark it as paid."""
    invoice = await _service(session).set_status(invoice_id, request.status)
    await session.commit()
    return InvoiceResponse.model_validate(invoice)


@router.delete(
    "/{invoice_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[can_edit],
    responses={404: {"description": "Invoice not found"}},
)
async def delete_invoice(
    invoice_id: int,
    session: AsyncSession = Depends(get_db_session),
) -> Response:
    await _service(session).delete_invoice(invoice_id)
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
