"""
End-to-end tests through the HTTP API.
"""

from tests.conftest import BOOKING_DAY, auth_headers, make_token


class TestAuth:

    def test_missing_token_is_rejected(self, client):
        response = client.get("/users/me")
        assert response.status_code == 401

    def test_bad_signature_is_rejected(self, client):
        token = make_token("someone", "someone@example.com", secret="wrong-secret")
        response = client.get("/users/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_first_request_registers_user(self, client):
        headers = auth_headers("new-1", "New.Person@Example.com", "New Person")

        response = client.get("/users/me", headers=headers)

        assert response.status_code == 200
        body = response.json()
        assert body["email"] == "new.person@example.com"
        assert body["name"] == "New Person"

        again = client.get("/users/me", headers=headers)
        assert again.json()["id"] == body["id"]

    def test_sync_updates_profile(self, client, customer):
        headers = auth_headers("customer-2", customer.email, "Cam Renamed")

        response = client.get("/users/me", headers=headers)

        assert response.status_code == 200
        assert response.json()["id"] == customer.id
        assert response.json()["name"] == "Cam Renamed"

    def test_email_change_keeps_the_account(self, client, customer):
        headers = auth_headers(customer.external_id, "cam.new@example.com", "Cam Customer")

        response = client.get("/users/me", headers=headers)

        assert response.status_code == 200
        assert response.json()["id"] == customer.id
        assert response.json()["email"] == "cam.new@example.com"

        again = client.get("/users/me", headers=headers)
        assert again.status_code == 200
        assert again.json()["id"] == customer.id


class TestBusinessSetup:

    def test_owner_lists_business_and_desks(self, client):
        headers = auth_headers("owner-9", "owner9@example.com", "Owner Nine")

        created = client.post(
            "/businesses/",
            json={
                "name": "Bean There",
                "address": "1 Main St",
                "city": "Austin",
                "amenities": ["Wi-Fi", " Wi-Fi ", "Coffee", ""],
            },
            headers=headers,
        )
        assert created.status_code == 201
        business = created.json()
        assert business["amenities"] == ["Wi-Fi", "Coffee"]

        second = client.post(
            "/businesses/",
            json={"name": "Again", "address": "2 Main St", "city": "Austin"},
            headers=headers,
        )
        assert second.status_code == 400

        desk = client.post("/desks/", json={"name": "Bar Stool", "hourly_rate": 5}, headers=headers)
        assert desk.status_code == 201

        desks = client.get(f"/businesses/{business['id']}/desks")
        assert [d["name"] for d in desks.json()] == ["Bar Stool"]

        mine = client.get("/businesses/mine", headers=headers)
        assert mine.json()["id"] == business["id"]

    def test_unknown_business(self, client):
        assert client.get("/businesses/999").status_code == 404

    def test_desk_requires_a_business(self, client, customer_headers):
        response = client.post("/desks/", json={"name": "Desk", "hourly_rate": 5}, headers=customer_headers)
        assert response.status_code == 404

    def test_other_owner_cannot_edit_desk(self, client, desk):
        headers = auth_headers("owner-x", "other-owner@example.com")
        client.post(
            "/businesses/",
            json={"name": "Rival", "address": "3 Main St", "city": "Austin"},
            headers=headers,
        )

        response = client.patch(f"/desks/{desk.id}", json={"name": "Mine now"}, headers=headers)
        assert response.status_code == 403

    def test_update_and_delete_desk(self, client, desk, owner_headers):
        updated = client.patch(f"/desks/{desk.id}", json={"hourly_rate": 7.5}, headers=owner_headers)
        assert updated.status_code == 200
        assert updated.json()["hourly_rate"] == 7.5
        assert updated.json()["name"] == "Window Seat"

        deleted = client.delete(f"/desks/{desk.id}", headers=owner_headers)
        assert deleted.status_code == 200
        assert client.get(f"/desks/{desk.id}/availability", params={"day": "2024-06-01"}).status_code == 404


class TestBusinessHours:

    def test_set_read_and_clear_hours(self, client, business, owner_headers):
        saved = client.put(
            "/business-hours/2024-06-01",
            json={"open_time": "09:00", "close_time": "17:00"},
            headers=owner_headers,
        )
        assert saved.status_code == 200

        updated = client.put(
            "/business-hours/2024-06-01",
            json={"open_time": "10:00", "close_time": "18:00"},
            headers=owner_headers,
        )
        assert updated.json()["id"] == saved.json()["id"]

        hours = client.get(f"/businesses/{business.id}/hours/2024-06-01")
        assert hours.json()["open_time"] == "10:00:00"

        dates = client.get(
            f"/businesses/{business.id}/hours",
            params={"start": "2024-06-01", "end": "2024-06-30"},
        )
        assert dates.json() == ["2024-06-01"]

        cleared = client.delete("/business-hours/2024-06-01", headers=owner_headers)
        assert cleared.status_code == 200
        assert client.get(f"/businesses/{business.id}/hours/2024-06-01").status_code == 404

    def test_close_must_follow_open(self, client, business, owner_headers):
        response = client.put(
            "/business-hours/2024-06-01",
            json={"open_time": "17:00", "close_time": "09:00"},
            headers=owner_headers,
        )
        assert response.status_code == 400


class TestBookingFlow:
    """Hours 09:00-17:00 on 2024-06-01, one confirmed booking 12:00-14:00."""

    def _book(self, client, headers, desk_id, start_hour, duration_hours):
        return client.post(
            "/reservations/",
            json={
                "desk_id": desk_id,
                "reservation_date": BOOKING_DAY.isoformat(),
                "start_hour": start_hour,
                "duration_hours": duration_hours,
            },
            headers=headers,
        )

    def test_customer_books_around_existing_reservation(self, client, desk, open_day, customer_headers):
        first = self._book(client, customer_headers, desk.id, 12, 2)
        assert first.status_code == 201
        assert first.json()["status"] == "confirmed"
        assert first.json()["total_price"] == 12.0

        availability = client.get(f"/desks/{desk.id}/availability", params={"day": "2024-06-01"})
        assert availability.json()["start_hours"] == [9, 10, 11, 14, 15, 16]
        assert availability.json()["booked_hours"] == [12, 13]

        at_11 = client.get(f"/desks/{desk.id}/max-duration", params={"day": "2024-06-01", "start_hour": 11})
        at_14 = client.get(f"/desks/{desk.id}/max-duration", params={"day": "2024-06-01", "start_hour": 14})
        assert at_11.json()["max_duration"] == 1
        assert at_14.json()["max_duration"] == 3

        overlapping = self._book(client, customer_headers, desk.id, 11, 2)
        assert overlapping.status_code == 409

        adjacent = self._book(client, customer_headers, desk.id, 14, 3)
        assert adjacent.status_code == 201

    def test_same_booking_twice_is_a_conflict(self, client, desk, open_day, customer_headers):
        assert self._book(client, customer_headers, desk.id, 12, 2).status_code == 201

        duplicate = self._book(client, customer_headers, desk.id, 12, 2)

        assert duplicate.status_code == 409
        assert "no longer available" in duplicate.json()["detail"]

    def test_window_past_closing_is_a_bad_request(self, client, desk, open_day, customer_headers):
        response = self._book(client, customer_headers, desk.id, 15, 3)
        assert response.status_code == 400

    def test_closed_day_has_nothing_to_offer(self, client, desk):
        availability = client.get(f"/desks/{desk.id}/availability", params={"day": "2024-06-01"})
        assert availability.json()["is_open"] is False
        assert availability.json()["start_hours"] == []

        response = self._book(
            client, auth_headers("c-3", "c3@example.com"), desk.id, 10, 1
        )
        assert response.status_code == 400

    def test_owner_cannot_book_own_desk(self, client, desk, open_day, owner_headers):
        response = self._book(client, owner_headers, desk.id, 10, 1)
        assert response.status_code == 400
        assert "own business" in response.json()["detail"]

    def test_confirmation_visibility(self, client, desk, open_day, customer_headers, owner_headers):
        reservation = self._book(client, customer_headers, desk.id, 9, 1).json()

        mine = client.get(f"/reservations/{reservation['id']}", headers=customer_headers)
        assert mine.status_code == 200
        assert mine.json()["desk"]["name"] == "Window Seat"
        assert mine.json()["business"]["name"] == "Corner Coffee"

        as_owner = client.get(f"/reservations/{reservation['id']}", headers=owner_headers)
        assert as_owner.status_code == 200

        stranger = client.get(
            f"/reservations/{reservation['id']}",
            headers=auth_headers("stranger", "stranger@example.com"),
        )
        assert stranger.status_code == 403

        listed = client.get("/reservations/", headers=customer_headers)
        assert [r["id"] for r in listed.json()] == [reservation["id"]]

        at_business = client.get("/businesses/mine/reservations", headers=owner_headers)
        assert [r["id"] for r in at_business.json()] == [reservation["id"]]

    def test_cancel_releases_the_slot(self, client, desk, open_day, customer_headers):
        reservation = self._book(client, customer_headers, desk.id, 9, 8).json()
        assert self._book(client, customer_headers, desk.id, 10, 1).status_code == 409

        cancelled = client.patch(f"/reservations/{reservation['id']}/cancel", headers=customer_headers)
        assert cancelled.status_code == 200
        assert cancelled.json()["status"] == "cancelled"

        assert self._book(client, customer_headers, desk.id, 10, 1).status_code == 201

    def test_desk_with_reservations_cannot_be_deleted(self, client, desk, open_day, customer_headers, owner_headers):
        self._book(client, customer_headers, desk.id, 9, 1)

        response = client.delete(f"/desks/{desk.id}", headers=owner_headers)
        assert response.status_code == 400
