from datetime import date

import pytest

import crud.batch as crud_batch
import crud.mortality as crud_mortality
from database import SessionLocal
from schemas.mortality import MortalityRecordCreate


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


def test_stock_check_reloads_batch_written_by_another_session(client, tenant_headers, batch, db):
    stale_batch = crud_batch.get_batch_by_id(db, batch["id"], "farm-a")
    assert stale_batch.current_quantity == 100

    # Another request takes the batch down to 3 head
    response = client.post(f"/batches/{batch['id']}/mortality", json={
        "quantity": 97, "date": "2026-01-10", "cause": "disease",
    }, headers=tenant_headers)
    assert response.status_code == 200

    with pytest.raises(ValueError, match="cannot exceed"):
        crud_mortality.record_mortality(db, stale_batch, MortalityRecordCreate(quantity=5, date=date(2026, 1, 11)))
    assert stale_batch.current_quantity == 3


def test_record_mortality_within_stock(client, tenant_headers, batch, db):
    db_batch = crud_batch.get_batch_by_id(db, batch["id"], "farm-a")
    db_record = crud_mortality.record_mortality(
        db, db_batch, MortalityRecordCreate(quantity=5, date=date(2026, 1, 11)), changed_by="worker@farm-a"
    )
    assert db_record.created_by == "worker@farm-a"
    assert crud_batch.get_batch_by_id(db, batch["id"], "farm-a").current_quantity == 95
