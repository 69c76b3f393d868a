from decimal import Decimal

from conftest import COMPLETE_PIPELINE, advance, auth


def _edit(client, booking_id, role="admin_a", **changes):
    return client.patch(f"/api/partner/leads/{booking_id}/edit", json=changes, headers=auth(role))


def _stored_lead(client, booking_id):
    leads = client.get("/api/partner/leads", headers=auth("owner")).json()["leads"]
    return next(lead for lead in leads if lead["id"] == booking_id)


class TestEditLead:
    def test_extend_then_shrink_scenario(self, client, create_booking):
        booking = create_booking("car-a1")
        assert Decimal(booking["total_price"]) == Decimal("2000")

        extended = _edit(client, booking["id"], return_datetime="2024-06-05T10:00:00Z")
        assert extended.status_code == 200
        assert Decimal(extended.json()["booking"]["total_price"]) == Decimal("4000")

        shrunk = _edit(client, booking["id"], return_datetime="2024-06-02T10:00:00Z")
        assert shrunk.status_code == 400
        assert shrunk.json() == {
            "error": "ไม่สามารถลดวันที่คืนรถได้ สามารถเพิ่มวันที่คืนรถได้เท่านั้น",
            "code": "RETURN_DATE_SHORTENED",
        }

        stored = _stored_lead(client, booking["id"])
        assert Decimal(stored["total_price"]) == Decimal("4000")
        assert stored["return_datetime"].startswith("2024-06-05T10:00:00")

    def test_contact_fields(self, client, create_booking):
        booking = create_booking("car-a1")
        response = _edit(
            client,
            booking["id"],
            customer_name="Malee",
            customer_note="Needs child seat",
            return_location="Don Mueang Airport",
        )
        assert response.status_code == 200
        edited = response.json()["booking"]
        assert edited["customer_name"] == "Malee"
        assert edited["customer_note"] == "Needs child seat"
        assert edited["return_location"] == "Don Mueang Airport"
        assert edited["customer_phone"] == booking["customer_phone"]
        assert Decimal(edited["total_price"]) == Decimal("2000")

    def test_edit_after_pickup_is_rejected(self, client, create_booking):
        booking = create_booking("car-a1")
        advance(client, booking["id"], "CLAIMED", "PICKUP")

        response = _edit(client, booking["id"], customer_name="Changed")
        assert response.status_code == 400
        assert response.json() == {
            "error": "ไม่สามารถแก้ไขการจองได้หลังจากยืนยันรับรถแล้ว",
            "code": "BOOKING_NOT_EDITABLE",
        }
        assert _stored_lead(client, booking["id"])["customer_name"] == "Somchai Jaidee"

    def test_edit_claimed_lead_is_allowed(self, client, create_booking):
        booking = create_booking("car-a1")
        advance(client, booking["id"], "CLAIMED")
        assert _edit(client, booking["id"], customer_name="Changed").status_code == 200

    def test_other_partner_is_forbidden(self, client, create_booking):
        booking = create_booking("car-a1")

        response = _edit(client, booking["id"], role="admin_b", customer_name="Hijack")
        assert response.status_code == 403
        assert response.json()["error"] == "Forbidden: Not authorized for this partner"
        assert _stored_lead(client, booking["id"])["customer_name"] == "Somchai Jaidee"

    def test_owner_can_edit_any_lead(self, client, create_booking):
        booking = create_booking("car-b1")
        assert _edit(client, booking["id"], role="owner", customer_name="Owner").status_code == 200

    def test_lead_without_email_round_trips(self, client, create_booking):
        booking = create_booking("car-a1", customer_email="")
        assert booking["customer_email"] == ""

        response = _edit(client, booking["id"], customer_name="Malee", customer_email="")
        assert response.status_code == 200
        assert response.json()["booking"]["customer_name"] == "Malee"
        assert response.json()["booking"]["customer_email"] == ""

    def test_empty_email_clears_stored_email(self, client, create_booking):
        booking = create_booking("car-a1")
        assert booking["customer_email"] == "somchai@example.com"

        response = _edit(client, booking["id"], customer_email="")
        assert response.status_code == 200
        assert _stored_lead(client, booking["id"])["customer_email"] == ""

    def test_invalid_email_is_rejected(self, client, create_booking):
        booking = create_booking("car-a1")
        response = _edit(client, booking["id"], customer_email="not-an-email")
        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_missing_booking(self, client):
        response = _edit(client, "missing", customer_name="X")
        assert response.status_code == 404
        assert response.json()["code"] == "BOOKING_NOT_FOUND"

    def test_requires_partner_role(self, client, create_booking):
        booking = create_booking("car-a1")
        assert _edit(client, booking["id"], role="customer", customer_name="X").status_code == 403
        anonymous = client.patch(f"/api/partner/leads/{booking['id']}/edit", json={"customer_name": "X"})
        assert anonymous.status_code == 401


class TestLeadStatus:
    def test_full_pipeline_creates_commission(self, client, create_booking):
        booking = create_booking("car-a1")

        completed = advance(client, booking["id"], *COMPLETE_PIPELINE)

        assert completed["lead_status"] == "COMPLETED"
        assert completed["claimed_at"] is not None
        assert completed["pickup_confirmed_at"] is not None
        assert completed["return_confirmed_at"] is not None

        commissions = client.get("/api/admin/commissions", headers=auth("owner")).json()
        assert len(commissions["commissions"]) == 1
        commission = commissions["commissions"][0]
        assert commission["booking_id"] == booking["id"]
        assert commission["status"] == "PENDING"
        assert Decimal(commission["commission_amount"]) == Decimal("200")

    def test_invalid_transition(self, client, create_booking):
        booking = create_booking("car-a1")

        response = client.patch(
            f"/api/partner/leads/{booking['id']}/status",
            json={"status": "ACTIVE"},
            headers=auth("admin_a"),
        )
        assert response.status_code == 400
        assert response.json()["code"] == "INVALID_LEAD_TRANSITION"
        assert _stored_lead(client, booking["id"])["lead_status"] == "NEW"

    def test_cancel_stores_reason(self, client, create_booking):
        booking = create_booking("car-a1")
        advance(client, booking["id"], "CLAIMED", "PICKUP", "ACTIVE")

        response = client.patch(
            f"/api/partner/leads/{booking['id']}/status",
            json={"status": "CANCELLED", "note": "Car broke down"},
            headers=auth("admin_a"),
        )
        assert response.status_code == 200
        assert response.json()["booking"]["cancellation_reason"] == "Car broke down"

    def test_terminal_status_cannot_change(self, client, create_booking):
        booking = create_booking("car-a1")
        advance(client, booking["id"], "CANCELLED")

        response = client.patch(
            f"/api/partner/leads/{booking['id']}/status",
            json={"status": "CLAIMED"},
            headers=auth("admin_a"),
        )
        assert response.status_code == 400

    def test_unknown_status_value(self, client, create_booking):
        booking = create_booking("car-a1")
        response = client.patch(
            f"/api/partner/leads/{booking['id']}/status",
            json={"status": "LOST"},
            headers=auth("admin_a"),
        )
        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_other_partner_cannot_change_status(self, client, create_booking):
        booking = create_booking("car-a1")
        response = client.patch(
            f"/api/partner/leads/{booking['id']}/status",
            json={"status": "CLAIMED"},
            headers=auth("admin_b"),
        )
        assert response.status_code == 403


class TestListLeads:
    def test_partner_admin_sees_own_leads(self, client, create_booking):
        own = create_booking("car-a1")
        create_booking("car-b1")

        response = client.get("/api/partner/leads", headers=auth("admin_a"))
        assert response.status_code == 200
        assert [lead["id"] for lead in response.json()["leads"]] == [own["id"]]
        assert response.json()["pagination"]["total"] == 1

    def test_partner_admin_cannot_target_other_partner(self, client):
        for partner_id in ("partner-b", "no-such-partner"):
            response = client.get(
                "/api/partner/leads", params={"partnerId": partner_id}, headers=auth("admin_a")
            )
            assert response.status_code == 403
            assert response.json()["error"] == "Forbidden: Not authorized for this partner"

    def test_owner_sees_all_and_filters(self, client, create_booking):
        lead_a = create_booking("car-a1")
        create_booking("car-b1")
        advance(client, lead_a["id"], "CLAIMED")

        everything = client.get("/api/partner/leads", headers=auth("owner")).json()
        assert everything["pagination"]["total"] == 2

        claimed = client.get(
            "/api/partner/leads", params={"status": "CLAIMED"}, headers=auth("owner")
        ).json()
        assert [lead["id"] for lead in claimed["leads"]] == [lead_a["id"]]

        partner_b = client.get(
            "/api/partner/leads", params={"partnerId": "partner-b"}, headers=auth("owner")
        ).json()
        assert [lead["partner_id"] for lead in partner_b["leads"]] == ["partner-b"]

    def test_customer_is_forbidden(self, client):
        assert client.get("/api/partner/leads", headers=auth("customer")).status_code == 403
        assert client.get("/api/partner/leads").status_code == 401
