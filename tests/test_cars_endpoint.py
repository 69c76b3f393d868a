from decimal import Decimal

from conftest import auth


def _ids(response):
    return [car["id"] for car in response.json()["cars"]]


def test_list_only_approved_and_available_newest_first(client):
    response = client.get("/api/cars")

    assert response.status_code == 200
    assert _ids(response) == ["car-b1", "car-a2", "car-a1"]
    assert response.json()["pagination"] == {"page": 1, "limit": 20, "total": 3, "total_pages": 1}


def test_filters_and_sort(client):
    assert _ids(client.get("/api/cars", params={"category": "SUV"})) == ["car-b1", "car-a2"]
    assert _ids(client.get("/api/cars", params={"sort": "price_asc"})) == ["car-a1", "car-a2", "car-b1"]
    assert _ids(client.get("/api/cars", params={"sort": "price_desc"})) == ["car-b1", "car-a2", "car-a1"]
    assert _ids(client.get("/api/cars", params={"minPrice": "1500", "maxPrice": "2000"})) == ["car-a2"]
    assert _ids(client.get("/api/cars", params={"search": "toyota"})) == ["car-b1", "car-a1"]
    assert _ids(client.get("/api/cars", params={"transmission": "MANUAL"})) == ["car-b1"]
    assert _ids(client.get("/api/cars", params={"fuelType": "HYBRID"})) == ["car-a2"]


def test_pagination(client):
    response = client.get("/api/cars", params={"page": 2, "limit": 1})
    assert _ids(response) == ["car-a2"]
    assert response.json()["pagination"] == {"page": 2, "limit": 1, "total": 3, "total_pages": 3}


def test_limit_is_capped(client):
    response = client.get("/api/cars", params={"limit": 500})
    assert response.json()["pagination"]["limit"] == 100


def test_invalid_filter_value(client):
    response = client.get("/api/cars", params={"category": "SPACESHIP"})
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


def test_held_car_is_hidden_until_hold_expires(client, clock, create_booking):
    create_booking("car-a1")
    assert "car-a1" not in _ids(client.get("/api/cars"))

    clock.advance(minutes=14, seconds=59)
    assert "car-a1" not in _ids(client.get("/api/cars"))

    clock.advance(seconds=1)
    assert "car-a1" in _ids(client.get("/api/cars"))


def test_held_car_reappears_when_lead_is_claimed(client, create_booking):
    booking = create_booking("car-a1")
    assert "car-a1" not in _ids(client.get("/api/cars"))

    response = client.patch(
        f"/api/partner/leads/{booking['id']}/status",
        json={"status": "CLAIMED"},
        headers=auth("admin_a"),
    )
    assert response.status_code == 200
    assert "car-a1" in _ids(client.get("/api/cars"))


class TestCarDetail:
    def test_returns_car(self, client):
        response = client.get("/api/cars/car-a2")

        assert response.status_code == 200
        car = response.json()["car"]
        assert car["id"] == "car-a2"
        assert car["partner_id"] == "partner-a"
        assert Decimal(car["price_per_day"]) == Decimal("1800")
        assert car["locked_until"] is None

    def test_unknown_car(self, client):
        response = client.get("/api/cars/car-missing")
        assert response.status_code == 404
        assert response.json() == {"error": "Car not found", "code": "CAR_NOT_FOUND"}
