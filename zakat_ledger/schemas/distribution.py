"""Distribution Schemas — distribution header with per-beneficiary items."""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from zakat_ledger.schemas.common import PageMeta, StrictInput


class DistributionItemInput(StrictInput):
    beneficiary_id: UUID | None = None
    amount: Decimal | None = None
    notes: str | None = None


class DistributionInput(StrictInput):
    distribution_date: date | None = None
    program_id: UUID | None = None
    source_fund_type: str | None = None
    notes: str | None = None
    items: list[DistributionItemInput] = []


class DistributionBeneficiary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str


class DistributionItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    line_no: int
    beneficiary_id: UUID
    beneficiary: DistributionBeneficiary
    amount: Decimal
    notes: str | None = None


class DistributionProgram(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str


class DistributionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    distribution_date: date
    program_id: UUID | None = None
    program: DistributionProgram | None = None
    source_fund_type: str
    total_amount: Decimal
    notes: str | None = None
    created_by_user_id: UUID
    items: list[DistributionItemResponse]
    created_at: datetime
    updated_at: datetime


class DistributionPage(BaseModel):
    items: list[DistributionResponse]
    meta: PageMeta
