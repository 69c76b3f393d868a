from datetime import timedelta

from conftest import NOW, auth, booking_payload


def _issue_key(client, **overrides) -> tuple[str, str]:
    payload = {"name": "Partner integration", "permissions": ["read"], "partner_id": "partner-a"}
    payload.update(overrides)
    body = client.post("/api/admin/api-keys", json=payload, headers=auth("owner")).json()
    return body["plain_text_key"], body["api_key"]["id"]


def test_missing_or_invalid_key(client):
    for headers in ({}, {"X-API-Key": "jgr_not-a-real-key"}):
        response = client.get("/api/v1/cars", headers=headers)
        assert response.status_code == 401
        assert response.json()["error"] == "Invalid or missing API key. Provide X-API-Key header."


def test_partner_key_sees_only_its_cars(client):
    key, _ = _issue_key(client)

    response = client.get("/api/v1/cars", headers={"X-API-Key": key})
    assert response.status_code == 200
    assert {car["id"] for car in response.json()["cars"]} == {"car-a1", "car-a2"}


def test_platform_key_sees_all_and_filters_by_rental_status(client):
    key, _ = _issue_key(client, partner_id=None)

    available = client.get("/api/v1/cars", headers={"X-API-Key": key}).json()
    assert available["pagination"]["total"] == 3

    maintenance = client.get(
        "/api/v1/cars", params={"rentalStatus": "MAINTENANCE"}, headers={"X-API-Key": key}
    ).json()
    assert [car["id"] for car in maintenance["cars"]] == ["car-maintenance"]


def test_hold_exclusion_applies(client, create_booking):
    key, _ = _issue_key(client)
    create_booking("car-a1")

    response = client.get("/api/v1/cars", headers={"X-API-Key": key})
    assert [car["id"] for car in response.json()["cars"]] == ["car-a2"]


def test_missing_permission(client):
    key, _ = _issue_key(client, permissions=["write"])
    response = client.get("/api/v1/cars", headers={"X-API-Key": key})
    assert response.status_code == 403
    assert response.json()["error"] == "API key missing required permission: read"


def test_inactive_and_expired_keys(client, clock):
    key, key_id = _issue_key(client)
    client.patch(f"/api/admin/api-keys/{key_id}", json={"is_active": False}, headers=auth("owner"))
    assert client.get("/api/v1/cars", headers={"X-API-Key": key}).status_code == 401

    expiring, _ = _issue_key(client, expires_at=(NOW + timedelta(hours=1)).isoformat())
    assert client.get("/api/v1/cars", headers={"X-API-Key": expiring}).status_code == 200
    clock.advance(hours=2)
    assert client.get("/api/v1/cars", headers={"X-API-Key": expiring}).status_code == 401


def test_last_used_is_recorded(client):
    key, key_id = _issue_key(client)
    client.get("/api/v1/cars", headers={"X-API-Key": key})

    listed = client.get("/api/admin/api-keys", headers=auth("owner")).json()["api_keys"]
    used = next(k for k in listed if k["id"] == key_id)
    assert used["last_used_at"].startswith("2024-05-30T08:00:00")


def test_partner_leads(client, create_booking):
    own = create_booking("car-a1")
    create_booking("car-b1")
    key, _ = _issue_key(client)

    response = client.get("/api/v1/partner/leads", headers={"X-API-Key": key})
    assert response.status_code == 200
    assert [lead["id"] for lead in response.json()["leads"]] == [own["id"]]


def test_partner_leads_requires_linked_key(client):
    key, _ = _issue_key(client, partner_id=None)
    response = client.get("/api/v1/partner/leads", headers={"X-API-Key": key})
    assert response.status_code == 403
    assert response.json()["error"] == "This API key is not linked to a partner"


class TestCarDetail:
    def test_partner_key_is_scoped(self, client):
        key, _ = _issue_key(client)

        own = client.get("/api/v1/cars/car-a1", headers={"X-API-Key": key})
        assert own.status_code == 200
        assert own.json()["car"]["id"] == "car-a1"
        assert client.get("/api/v1/cars/car-b1", headers={"X-API-Key": key}).status_code == 404

    def test_only_approved_cars(self, client):
        key, _ = _issue_key(client, partner_id=None)

        assert client.get("/api/v1/cars/car-b1", headers={"X-API-Key": key}).status_code == 200
        response = client.get("/api/v1/cars/car-pending", headers={"X-API-Key": key})
        assert response.status_code == 404
        assert response.json()["code"] == "CAR_NOT_FOUND"


class TestPartnerCars:
    def test_lists_whole_fleet(self, client):
        key, _ = _issue_key(client)

        body = client.get("/api/v1/partner/cars", headers={"X-API-Key": key}).json()
        assert [car["id"] for car in body["cars"]] == ["car-pending", "car-a2", "car-a1"]
        assert body["pagination"]["limit"] == 50

    def test_filters(self, client):
        key, _ = _issue_key(client)

        pending = client.get(
            "/api/v1/partner/cars", params={"approvalStatus": "PENDING"}, headers={"X-API-Key": key}
        ).json()
        assert [car["id"] for car in pending["cars"]] == ["car-pending"]

        rented = client.get(
            "/api/v1/partner/cars", params={"rentalStatus": "RENTED"}, headers={"X-API-Key": key}
        ).json()
        assert rented["cars"] == []

    def test_requires_linked_key(self, client):
        key, _ = _issue_key(client, partner_id=None)
        response = client.get("/api/v1/partner/cars", headers={"X-API-Key": key})
        assert response.status_code == 403
        assert response.json()["code"] == "API_KEY_NOT_LINKED"


class TestBookings:
    def test_create_for_session_user(self, client):
        key, _ = _issue_key(client, permissions=["write"])

        response = client.post(
            "/api/v1/bookings",
            json=booking_payload("car-a1"),
            headers={"X-API-Key": key, **auth("customer")},
        )
        assert response.status_code == 201
        body = response.json()
        assert body["booking"]["user_id"] == "user-customer"
        assert body["booking"]["lead_status"] == "NEW"
        assert body["booking_number"].startswith("JR-20240530-")

    def test_create_requires_write_permission(self, client):
        key, _ = _issue_key(client)

        response = client.post(
            "/api/v1/bookings",
            json=booking_payload("car-a1"),
            headers={"X-API-Key": key, **auth("customer")},
        )
        assert response.status_code == 403
        assert response.json()["error"] == "API key missing required permission: write"

    def test_create_requires_session(self, client):
        key, _ = _issue_key(client, permissions=["write"])

        response = client.post("/api/v1/bookings", json=booking_payload("car-a1"), headers={"X-API-Key": key})
        assert response.status_code == 401

    def test_suspended_user_cannot_book(self, client):
        key, _ = _issue_key(client, permissions=["write"])

        response = client.post(
            "/api/v1/bookings",
            json=booking_payload("car-a1"),
            headers={"X-API-Key": key, **auth("suspended")},
        )
        assert response.status_code == 403
        assert response.json()["code"] == "ACCOUNT_SUSPENDED"

    def test_list_own_bookings(self, client, create_booking):
        own = create_booking("car-a1", headers=auth("customer"))
        create_booking("car-b1", headers=auth("other_customer"))
        key, _ = _issue_key(client)

        response = client.get("/api/v1/bookings", headers={"X-API-Key": key, **auth("customer")})
        assert response.status_code == 200
        body = response.json()
        assert [b["id"] for b in body["bookings"]] == [own["id"]]
        assert body["pagination"] == {"page": 1, "limit": 20, "total": 1, "total_pages": 1}

    def test_list_filters_by_status(self, client, create_booking):
        create_booking("car-a1", headers=auth("customer"))
        key, _ = _issue_key(client)

        response = client.get(
            "/api/v1/bookings",
            params={"status": "COMPLETED"},
            headers={"X-API-Key": key, **auth("customer")},
        )
        assert response.json()["bookings"] == []

    def test_list_requires_session_and_read_key(self, client):
        read_key, _ = _issue_key(client)
        write_key, _ = _issue_key(client, permissions=["write"])

        assert client.get("/api/v1/bookings", headers={"X-API-Key": read_key}).status_code == 401
        response = client.get("/api/v1/bookings", headers={"X-API-Key": write_key, **auth("customer")})
        assert response.status_code == 403


class TestMe:
    def test_returns_profile(self, client):
        response = client.get("/api/v1/auth/me", headers=auth("admin_a"))

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["id"] == "user-admin-a"
        assert user["role"] == "PARTNER_ADMIN"
        assert user["partner_id"] == "partner-a"

    def test_suspended_user_is_not_found(self, client):
        response = client.get("/api/v1/auth/me", headers=auth("suspended"))
        assert response.status_code == 404
        assert response.json()["error"] == "User not found or suspended"

    def test_requires_session(self, client):
        assert client.get("/api/v1/auth/me").status_code == 401
