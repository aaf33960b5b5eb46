import uuid


NOTIFICATION = {"title": "Catalog synced", "message": "42 products updated", "type": "success", "icon": "check"}


async def test_create_and_list_notifications(admin_client):
    response = await admin_client.post("/api/admin/notifications", json={**NOTIFICATION, "urgent": True})
    assert response.status_code == 201
    created = response.json()["data"]
    assert created["read"] is False
    assert created["urgent"] is True
    assert "time" in created

    feed = (await admin_client.get("/api/admin/notifications")).json()["data"]
    assert [n["id"] for n in feed["notifications"]] == [created["id"]]
    assert feed["unreadCount"] == 1
    assert feed["pendingEnquiries"] == 0


async def test_create_requires_fields(admin_client):
    response = await admin_client.post("/api/admin/notifications", json={"title": "Only a title"})
    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields: title, message, type, icon"}


async def test_create_rejects_unknown_type(admin_client):
    response = await admin_client.post("/api/admin/notifications", json={**NOTIFICATION, "type": "party"})
    assert response.status_code == 400


async def test_mark_one_read(admin_client):
    created = (await admin_client.post("/api/admin/notifications", json=NOTIFICATION)).json()["data"]
    await admin_client.post("/api/admin/notifications", json=NOTIFICATION)

    response = await admin_client.put("/api/admin/notifications", json={"id": created["id"]})
    assert response.status_code == 200
    assert response.json()["data"]["read"] is True

    feed = (await admin_client.get("/api/admin/notifications")).json()["data"]
    assert feed["unreadCount"] == 1


async def test_mark_all_read(admin_client):
    for _ in range(3):
        await admin_client.post("/api/admin/notifications", json=NOTIFICATION)

    response = await admin_client.put("/api/admin/notifications", json={"markAll": True})
    assert response.status_code == 200
    assert response.json()["data"]["modifiedCount"] == 3

    feed = (await admin_client.get("/api/admin/notifications")).json()["data"]
    assert feed["unreadCount"] == 0


async def test_mark_read_errors(admin_client):
    response = await admin_client.put("/api/admin/notifications", json={})
    assert response.status_code == 400
    assert response.json() == {"error": "Missing required field: id or markAll"}

    response = await admin_client.put("/api/admin/notifications", json={"id": str(uuid.uuid4())})
    assert response.status_code == 404
    assert response.json() == {"error": "Notification not found"}


async def test_clear_all(admin_client):
    await admin_client.post("/api/admin/notifications", json=NOTIFICATION)
    await admin_client.post("/api/admin/notifications", json=NOTIFICATION)

    response = await admin_client.delete("/api/admin/notifications")
    assert response.status_code == 200
    assert response.json()["data"]["deletedCount"] == 2

    feed = (await admin_client.get("/api/admin/notifications")).json()["data"]
    assert feed["notifications"] == []


async def test_feed_is_capped_at_fifty(admin_client):
    for i in range(52):
        await admin_client.post("/api/admin/notifications", json={**NOTIFICATION, "title": f"n{i}"})

    feed = (await admin_client.get("/api/admin/notifications")).json()["data"]
    assert len(feed["notifications"]) == 50
    assert feed["notifications"][0]["title"] == "n51"
