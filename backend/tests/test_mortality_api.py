def record(client, headers, batch_id, quantity, cause="disease", day="2026-01-10"):
    return client.post(f"/batches/{batch_id}/mortality", json={
        "quantity": quantity, "date": day, "cause": cause,
    }, headers=headers)


def test_record_mortality_reduces_current_quantity(client, tenant_headers, batch):
    response = record(client, tenant_headers, batch["id"], 5)
    assert response.status_code == 200
    body = response.json()
    assert body["quantity"] == 5
    assert body["cause"] == "disease"
    assert body["batch_id"] == batch["id"]

    updated = client.get(f"/batches/{batch['id']}", headers=tenant_headers).json()
    assert updated["current_quantity"] == 95
    assert updated["status"] == "active"


def test_mortality_cannot_exceed_current_quantity(client, tenant_headers, batch):
    record(client, tenant_headers, batch["id"], 90)
    response = record(client, tenant_headers, batch["id"], 20)
    assert response.status_code == 400
    assert "cannot exceed" in response.json()["detail"]

    updated = client.get(f"/batches/{batch['id']}", headers=tenant_headers).json()
    assert updated["current_quantity"] == 10


def test_mortality_validation(client, tenant_headers, batch):
    assert record(client, tenant_headers, batch["id"], 0).status_code == 422
    assert record(client, tenant_headers, batch["id"], 1, cause="aliens").status_code == 422


def test_mortality_for_unknown_batch(client, tenant_headers):
    assert record(client, tenant_headers, 999, 1).status_code == 404


def test_losing_every_animal_depletes_batch(client, tenant_headers, batch):
    record(client, tenant_headers, batch["id"], 100)
    updated = client.get(f"/batches/{batch['id']}", headers=tenant_headers).json()
    assert updated["current_quantity"] == 0
    assert updated["status"] == "depleted"
    assert updated["depletion_percentage"] == 100


def test_delete_record_restores_quantity(client, tenant_headers, batch):
    record_id = record(client, tenant_headers, batch["id"], 100).json()["id"]

    response = client.delete(f"/mortality/{record_id}", headers=tenant_headers)
    assert response.status_code == 200

    updated = client.get(f"/batches/{batch['id']}", headers=tenant_headers).json()
    assert updated["current_quantity"] == 100
    assert updated["status"] == "active"
    assert client.delete(f"/mortality/{record_id}", headers=tenant_headers).status_code == 404


def test_delete_record_of_other_tenant(client, tenant_headers, batch):
    record_id = record(client, tenant_headers, batch["id"], 3).json()["id"]
    assert client.delete(f"/mortality/{record_id}", headers={"X-Tenant-ID": "farm-b"}).status_code == 404


def test_list_records_newest_first(client, tenant_headers, batch):
    record(client, tenant_headers, batch["id"], 1, day="2026-01-10")
    record(client, tenant_headers, batch["id"], 2, day="2026-01-12")
    records = client.get(f"/batches/{batch['id']}/mortality", headers=tenant_headers).json()
    assert [r["quantity"] for r in records] == [2, 1]


def test_cause_distribution(client, tenant_headers, batch):
    record(client, tenant_headers, batch["id"], 10, cause="disease")
    record(client, tenant_headers, batch["id"], 5, cause="predator")
    record(client, tenant_headers, batch["id"], 5, cause="disease")

    distribution = client.get(f"/batches/{batch['id']}/mortality/causes", headers=tenant_headers).json()
    assert distribution == [
        {"cause": "disease", "count": 2, "quantity": 15, "percentage": 75.0},
        {"cause": "predator", "count": 1, "quantity": 5, "percentage": 25.0},
    ]


def test_cause_distribution_empty(client, tenant_headers, batch):
    assert client.get(f"/batches/{batch['id']}/mortality/causes", headers=tenant_headers).json() == []


def test_update_record_lower_quantity_restores_stock(client, tenant_headers, batch):
    record_id = record(client, tenant_headers, batch["id"], 10).json()["id"]

    response = client.patch(f"/mortality/{record_id}", json={"quantity": 4, "cause": "predator"}, headers=tenant_headers)
    assert response.status_code == 200
    assert response.json()["quantity"] == 4
    assert response.json()["cause"] == "predator"

    updated = client.get(f"/batches/{batch['id']}", headers=tenant_headers).json()
    assert updated["current_quantity"] == 96


def test_update_record_higher_quantity_takes_more_stock(client, tenant_headers, batch):
    record_id = record(client, tenant_headers, batch["id"], 10).json()["id"]

    response = client.patch(f"/mortality/{record_id}", json={"quantity": 100}, headers=tenant_headers)
    assert response.status_code == 200

    updated = client.get(f"/batches/{batch['id']}", headers=tenant_headers).json()
    assert updated["current_quantity"] == 0
    assert updated["status"] == "depleted"


def test_update_record_rejects_increase_beyond_stock(client, tenant_headers, batch):
    record_id = record(client, tenant_headers, batch["id"], 10).json()["id"]
    record(client, tenant_headers, batch["id"], 85)

    response = client.patch(f"/mortality/{record_id}", json={"quantity": 20}, headers=tenant_headers)
    assert response.status_code == 400
    assert "cannot exceed" in response.json()["detail"]

    updated = client.get(f"/batches/{batch['id']}", headers=tenant_headers).json()
    assert updated["current_quantity"] == 5
    records = client.get(f"/batches/{batch['id']}/mortality", headers=tenant_headers).json()
    assert sorted(r["quantity"] for r in records) == [10, 85]


def test_update_record_validation_and_missing(client, tenant_headers, batch):
    record_id = record(client, tenant_headers, batch["id"], 10).json()["id"]
    assert client.patch(f"/mortality/{record_id}", json={"quantity": 0}, headers=tenant_headers).status_code == 422
    assert client.patch("/mortality/999", json={"quantity": 1}, headers=tenant_headers).status_code == 404
    assert client.patch(f"/mortality/{record_id}", json={"quantity": 1}, headers={"X-Tenant-ID": "farm-b"}).status_code == 404


def test_update_record_date_only_keeps_stock(client, tenant_headers, batch):
    record_id = record(client, tenant_headers, batch["id"], 10).json()["id"]
    response = client.patch(f"/mortality/{record_id}", json={"date": "2026-01-20"}, headers=tenant_headers)
    assert response.status_code == 200
    assert response.json()["date"] == "2026-01-20"
    assert client.get(f"/batches/{batch['id']}", headers=tenant_headers).json()["current_quantity"] == 90


def test_mortality_trends(client, tenant_headers, batch):
    record(client, tenant_headers, batch["id"], 2, day="2026-01-10")
    record(client, tenant_headers, batch["id"], 3, day="2026-01-10")
    record(client, tenant_headers, batch["id"], 4, day="2026-02-03")
    url = f"/batches/{batch['id']}/mortality/trends"

    daily = client.get(url, params={"days": 36500}, headers=tenant_headers).json()
    assert daily == [
        {"period": "2026-01-10", "records": 2, "quantity": 5},
        {"period": "2026-02-03", "records": 1, "quantity": 4},
    ]

    weekly = client.get(url, params={"period": "weekly", "days": 36500}, headers=tenant_headers).json()
    assert [t["period"] for t in weekly] == ["2026-W02", "2026-W05"]

    monthly = client.get(url, params={"period": "monthly", "days": 36500}, headers=tenant_headers).json()
    assert [t["quantity"] for t in monthly] == [5, 4]


def test_mortality_trends_validation(client, tenant_headers, batch):
    url = f"/batches/{batch['id']}/mortality/trends"
    assert client.get(url, params={"period": "hourly"}, headers=tenant_headers).status_code == 422
    assert client.get(url, params={"days": 0}, headers=tenant_headers).status_code == 422
    assert client.get("/batches/999/mortality/trends", headers=tenant_headers).status_code == 404


def test_mortality_summary_is_per_tenant(client, tenant_headers, batch):
    record(client, tenant_headers, batch["id"], 5)
    record(client, tenant_headers, batch["id"], 3)

    summary = client.get("/mortality/summary", headers=tenant_headers).json()
    assert summary == {"total_deaths": 8, "record_count": 2}
    assert client.get("/mortality/summary", headers={"X-Tenant-ID": "farm-b"}).json() == {
        "total_deaths": 0, "record_count": 0,
    }
