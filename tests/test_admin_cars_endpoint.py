from conftest import auth


def _set_approval(client, car_id, body, role="owner"):
    return client.patch(f"/api/admin/cars/{car_id}/approval", json=body, headers=auth(role))


def test_approve_pending_car(client):
    response = _set_approval(client, "car-pending", {"status": "APPROVED"})

    assert response.status_code == 200
    assert response.json()["car"]["approval_status"] == "APPROVED"
    listed = [car["id"] for car in client.get("/api/cars").json()["cars"]]
    assert "car-pending" in listed


def test_reject_hides_car_from_listing(client):
    response = _set_approval(client, "car-a1", {"status": "REJECTED"})

    assert response.status_code == 200
    assert response.json()["car"]["approval_status"] == "REJECTED"
    listed = [car["id"] for car in client.get("/api/cars").json()["cars"]]
    assert "car-a1" not in listed


def test_only_review_outcomes_are_accepted(client):
    for body in ({"status": "PENDING"}, {"status": "approved"}, {}):
        response = _set_approval(client, "car-a1", body)
        assert response.status_code == 400
        assert response.json()["error"] == "Valid status (APPROVED or REJECTED) is required"


def test_unknown_car(client):
    response = _set_approval(client, "car-missing", {"status": "APPROVED"})
    assert response.status_code == 404
    assert response.json()["code"] == "CAR_NOT_FOUND"


def test_requires_platform_owner(client):
    assert _set_approval(client, "car-a1", {"status": "APPROVED"}, role="admin_a").status_code == 403
    anonymous = client.patch("/api/admin/cars/car-a1/approval", json={"status": "APPROVED"})
    assert anonymous.status_code == 401
