"""Master Data Schemas — donors, categories, beneficiaries, programs, users."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from zakat_ledger.schemas.common import PageMeta, StrictInput


# ─── Donors ──────────────────────────────────────────────────────

class DonorInput(StrictInput):
    name: str | None = None
    phone: str | None = None
    address: str | None = None
    notes: str | None = None


class DonorResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    phone: str
    address: str
    notes: str | None = None
    created_at: datetime
    updated_at: datetime


class DonorPage(BaseModel):
    items: list[DonorResponse]
    meta: PageMeta


# ─── Categories ──────────────────────────────────────────────────

class CategoryInput(StrictInput):
    name: str | None = None
    description: str | None = None


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class CategoryPage(BaseModel):
    items: list[CategoryResponse]
    meta: PageMeta


# ─── Beneficiaries ───────────────────────────────────────────────

class BeneficiaryInput(StrictInput):
    name: str | None = None
    phone: str | None = None
    address: str | None = None
    category_id: UUID | None = None
    status: str | None = None
    description: str | None = None


class BeneficiaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    phone: str
    address: str
    category_id: UUID
    category: CategoryResponse
    status: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class BeneficiaryPage(BaseModel):
    items: list[BeneficiaryResponse]
    meta: PageMeta


# ─── Programs ────────────────────────────────────────────────────

class ProgramInput(StrictInput):
    name: str | None = None
    type: str | None = None
    active: bool = True
    description: str | None = None


class ProgramResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    type: str
    active: bool
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class ProgramPage(BaseModel):
    items: list[ProgramResponse]
    meta: PageMeta


# ─── Users ───────────────────────────────────────────────────────

class RoleUpdate(StrictInput):
    role: str | None = None


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    name: str
    role: str
    created_at: datetime
    updated_at: datetime


class UserPage(BaseModel):
    items: list[UserResponse]
    meta: PageMeta
