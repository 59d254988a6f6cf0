import logging


def test_create_and_list_feed_records(client, tenant_headers, batch):
    url = f"/batches/{batch['id']}/feed/"
    response = client.post(url, json={
        "feed_type": "layer_mash", "quantity_kg": 25.5, "cost": 1200, "date": "2026-01-03",
    }, headers=tenant_headers)
    assert response.status_code == 200
    assert response.json()["feed_type"] == "layer_mash"
    assert response.json()["quantity_kg"] == 25.5

    client.post(url, json={
        "feed_type": "grower", "quantity_kg": 10, "date": "2026-01-04",
    }, headers=tenant_headers)

    records = client.get(url, headers=tenant_headers).json()
    assert [r["feed_type"] for r in records] == ["grower", "layer_mash"]


def test_feed_validation(client, tenant_headers, batch):
    url = f"/batches/{batch['id']}/feed/"
    base = {"feed_type": "starter", "quantity_kg": 5, "cost": 10, "date": "2026-01-03"}
    assert client.post(url, json={**base, "quantity_kg": 0}, headers=tenant_headers).status_code == 422
    assert client.post(url, json={**base, "cost": -1}, headers=tenant_headers).status_code == 422
    assert client.post(url, json={**base, "feed_type": "candy"}, headers=tenant_headers).status_code == 422


def test_feed_for_unknown_batch(client, tenant_headers):
    response = client.post("/batches/999/feed/", json={
        "feed_type": "starter", "quantity_kg": 5, "date": "2026-01-03",
    }, headers=tenant_headers)
    assert response.status_code == 404


def test_feed_stats(client, tenant_headers, batch):
    url = f"/batches/{batch['id']}/feed/"
    client.post(url, json={"feed_type": "starter", "quantity_kg": 0.1, "cost": 10.1, "date": "2026-01-03"}, headers=tenant_headers)
    client.post(url, json={"feed_type": "starter", "quantity_kg": 0.2, "cost": 20.2, "date": "2026-01-04"}, headers=tenant_headers)

    stats = client.get(f"/batches/{batch['id']}/feed/stats", headers=tenant_headers).json()
    assert stats == {"total_quantity_kg": 0.3, "total_cost": 30.3, "record_count": 2}


def test_weight_samples_newest_first(client, tenant_headers, batch):
    url = f"/batches/{batch['id']}/weights/"
    client.post(url, json={"date": "2026-01-05", "sample_size": 10, "average_weight_kg": 0.4}, headers=tenant_headers)
    client.post(url, json={"date": "2026-01-12", "sample_size": 10, "average_weight_kg": 0.9}, headers=tenant_headers)
    assert client.post(url, json={"date": "2026-01-12", "sample_size": 0, "average_weight_kg": 1}, headers=tenant_headers).status_code == 422

    samples = client.get(url, headers=tenant_headers).json()
    assert [s["average_weight_kg"] for s in samples] == [0.9, 0.4]


def test_update_feed_record(client, tenant_headers, batch):
    record_id = client.post(f"/batches/{batch['id']}/feed/", json={
        "feed_type": "starter", "quantity_kg": 5, "cost": 10, "date": "2026-01-03",
    }, headers=tenant_headers).json()["id"]

    response = client.patch(f"/feed/{record_id}", json={"quantity_kg": 7.5, "feed_type": "grower"}, headers=tenant_headers)
    assert response.status_code == 200
    assert response.json()["quantity_kg"] == 7.5
    assert response.json()["feed_type"] == "grower"
    assert response.json()["cost"] == 10

    stats = client.get(f"/batches/{batch['id']}/feed/stats", headers=tenant_headers).json()
    assert stats["total_quantity_kg"] == 7.5


def test_update_feed_record_validation_and_missing(client, tenant_headers, batch):
    record_id = client.post(f"/batches/{batch['id']}/feed/", json={
        "feed_type": "starter", "quantity_kg": 5, "date": "2026-01-03",
    }, headers=tenant_headers).json()["id"]
    assert client.patch(f"/feed/{record_id}", json={"quantity_kg": 0}, headers=tenant_headers).status_code == 422
    assert client.patch(f"/feed/{record_id}", json={"cost": -2}, headers=tenant_headers).status_code == 422
    assert client.patch("/feed/999", json={"cost": 1}, headers=tenant_headers).status_code == 404
    assert client.patch(f"/feed/{record_id}", json={"cost": 1}, headers={"X-Tenant-ID": "farm-b"}).status_code == 404


def test_delete_feed_record(client, tenant_headers, batch):
    record_id = client.post(f"/batches/{batch['id']}/feed/", json={
        "feed_type": "starter", "quantity_kg": 5, "date": "2026-01-03",
    }, headers=tenant_headers).json()["id"]

    assert client.delete(f"/feed/{record_id}", headers=tenant_headers).status_code == 200
    assert client.get(f"/batches/{batch['id']}/feed/", headers=tenant_headers).json() == []
    assert client.delete(f"/feed/{record_id}", headers=tenant_headers).status_code == 404
    # With its only record gone the batch can be deleted again
    assert client.delete(f"/batches/{batch['id']}", headers=tenant_headers).status_code == 200


def test_weight_samples_for_unknown_batch_logs_warning(client, tenant_headers, caplog):
    with caplog.at_level(logging.WARNING, logger="utils.lookups"):
        assert client.get("/batches/999/weights/", headers=tenant_headers).status_code == 404
        assert client.post("/batches/999/weights/", json={
            "date": "2026-01-05", "sample_size": 10, "average_weight_kg": 0.4,
        }, headers=tenant_headers).status_code == 404
    messages = [r.getMessage() for r in caplog.records if r.name == "utils.lookups"]
    assert messages == ["Batch with batch_id=999 not found for tenant farm-a"] * 2
