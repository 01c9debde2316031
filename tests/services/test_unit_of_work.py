"""Unit of Work — constraint errors translated, failed blocks leave nothing behind."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from zakat_ledger.core.errors import ConflictError, ReferenceNotFoundError
from zakat_ledger.models import Category, Donor
from zakat_ledger.services.unit_of_work import atomic, translate_integrity_error


def _integrity(message: str) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, Exception(message))


def test_unique_violation_becomes_conflict_naming_field():
    error = translate_integrity_error(
        _integrity('duplicate key value violates unique constraint "donors_phone_key"'),
        "Donor", unique_field="phone",
    )
    assert isinstance(error, ConflictError)
    assert error.message == "Donor with this phone already exists"


def test_foreign_key_on_write_is_reference_error():
    error = translate_integrity_error(
        _integrity("FOREIGN KEY constraint failed"), "Receipt",
    )
    assert isinstance(error, ReferenceNotFoundError)
    assert error.http_status == 422


def test_foreign_key_on_write_names_missing_reference():
    error = translate_integrity_error(
        _integrity(
            'insert or update on table "receipts" violates foreign key constraint '
            '"receipts_donor_id_fkey"\nDETAIL:  Key (donor_id)=(abc) '
            'is not present in table "donors".',
        ),
        "Receipt",
    )
    assert isinstance(error, ReferenceNotFoundError)
    assert error.message == "Donor 'abc' not found"
    assert error.details == [{"reference": "Donor", "id": "abc"}]


def test_foreign_key_on_delete_is_conflict():
    error = translate_integrity_error(
        _integrity("FOREIGN KEY constraint failed"), "Category", deleting=True,
    )
    assert isinstance(error, ConflictError)


async def test_atomic_rolls_back_on_constraint_violation(test_db, donor):
    with pytest.raises(ConflictError):
        async with atomic(test_db, "Donor", unique_field="phone"):
            test_db.add(Category(name="Gharim"))
            test_db.add(Donor(name="Copy", phone=donor.phone, address="Somewhere"))

    count = (await test_db.execute(
        select(func.count()).select_from(Category),
    )).scalar_one()
    assert count == 0


async def test_atomic_rolls_back_on_any_error(test_db):
    with pytest.raises(RuntimeError):
        async with atomic(test_db, "Category"):
            test_db.add(Category(name="Riqab"))
            await test_db.flush()
            raise RuntimeError("boom")

    count = (await test_db.execute(
        select(func.count()).select_from(Category),
    )).scalar_one()
    assert count == 0
