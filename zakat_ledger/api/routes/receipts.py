"""Receipt Routes — donation receipts with nested items.

Invariants:
    - created_by is always the authenticated caller, never the request body
    - Item-level filters (fund_type, zakat_type) match receipts with any such item
"""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from zakat_ledger.api.dependencies import require_permission
from zakat_ledger.core.domain_types import FundType, ZakatType
from zakat_ledger.core.filters import ReceiptFilter
from zakat_ledger.core.pagination import PageRequest
from zakat_ledger.core.validation import raise_if_invalid, validate_date_range
from zakat_ledger.infrastructure.database import get_db
from zakat_ledger.infrastructure.identity import CallerIdentity
from zakat_ledger.schemas.receipt import ReceiptInput, ReceiptPage, ReceiptResponse
from zakat_ledger.services.receipts import ReceiptService

router = APIRouter(prefix="/api/v1/receipts", tags=["receipts"])


@router.get("", response_model=ReceiptPage, dependencies=[Depends(require_permission("read"))])
async def list_receipts(
    q: str | None = Query(None),
    date_from: date | None = Query(None),
    date_to: date | None = Query(None),
    fund_type: FundType | None = Query(None),
    zakat_type: ZakatType | None = Query(None),
    payment_method: str | None = Query(None),
    donor_id: UUID | None = Query(None),
    page: int | None = Query(None),
    per_page: int | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """List receipts, newest first."""
    raise_if_invalid(validate_date_range(date_from, date_to))
    filters = ReceiptFilter(
        q=q, date_from=date_from, date_to=date_to, fund_type=fund_type,
        zakat_type=zakat_type, payment_method=payment_method, donor_id=donor_id,
    )
    result = await ReceiptService(db).list_page(
        filters, PageRequest.from_params(page, per_page),
    )
    return {"items": result.items, "meta": result.meta}


@router.get(
    "/{receipt_id}", response_model=ReceiptResponse,
    dependencies=[Depends(require_permission("read"))],
)
async def get_receipt(receipt_id: UUID, db: AsyncSession = Depends(get_db)):
    return await ReceiptService(db).get(receipt_id)


@router.post("", response_model=ReceiptResponse, status_code=status.HTTP_201_CREATED)
async def create_receipt(
    body: ReceiptInput,
    caller: CallerIdentity = Depends(require_permission("receipt:write")),
    db: AsyncSession = Depends(get_db),
):
    """Create a receipt with its items in one transaction."""
    return await ReceiptService(db).create(body.model_dump(), created_by=caller.user_id)


@router.put(
    "/{receipt_id}", response_model=ReceiptResponse,
    dependencies=[Depends(require_permission("receipt:write"))],
)
async def update_receipt(
    receipt_id: UUID, body: ReceiptInput, db: AsyncSession = Depends(get_db),
):
    """Replace header fields and the whole item set."""
    return await ReceiptService(db).update(receipt_id, body.model_dump())


@router.delete(
    "/{receipt_id}", status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_permission("receipt:delete"))],
)
async def delete_receipt(receipt_id: UUID, db: AsyncSession = Depends(get_db)):
    await ReceiptService(db).delete(receipt_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
