"""
Shared fixtures for the API tests: an app wired to an in-memory MongoDB and
two staff accounts.
"""

import unittest
from datetime import date, timedelta

import mongomock
from fastapi.testclient import TestClient

from config import Settings
from main import create_app
from seed import create_user


def booking_payload(**overrides):
    check_in = date.today() + timedelta(days=10)
    payload = {
        "roomName": "Deluxe Suite",
        "roomType": "suite",
        "guestName": "  John Smith ",
        "guestEmail": " John.Smith@Example.com ",
        "guestPhone": "+1 (555) 123-4567",
        "checkInDate": check_in.isoformat(),
        "checkOutDate": (check_in + timedelta(days=3)).isoformat(),
        "numberOfGuests": 2,
        "totalPrice": 750,
        "specialRequests": "  Late check-in requested ",
    }
    payload.update(overrides)
    return payload


def contact_payload(**overrides):
    payload = {
        "name": " Emma Johnson ",
        "email": "Emma.Johnson@Example.com",
        "message": " Do you have parking? ",
    }
    payload.update(overrides)
    return payload


class ApiTestCase(unittest.TestCase):
    """Runs the full application against mongomock."""

    def setUp(self):
        self.mongo = mongomock.MongoClient()
        self.settings = Settings(database_name="comfort_hotel_test", cookie_secure=False)
        self.app = create_app(self.settings, client=self.mongo)
        self.client = TestClient(self.app)
        self.client.__enter__()
        self.addCleanup(self.client.__exit__, None, None, None)
        self.store = self.app.state.store

        create_user(self.store, "admin", "admin123", role="admin",
                    email="admin@comforthotel.com", full_name="Administrator", rounds=4)
        create_user(self.store, "manager", "manager123", role="manager",
                    email="manager@comforthotel.com", full_name="Hotel Manager", rounds=4)

    def login(self, username="admin", password="admin123"):
        response = self.client.post("/admin/login", json={"username": username, "password": password})
        self.assertEqual(response.status_code, 200, response.text)
        return response

    def logout(self):
        return self.client.post("/admin/logout")

    def create_booking(self, **overrides):
        response = self.client.post("/api/bookings", json=booking_payload(**overrides))
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()["id"]

    def create_contact(self, **overrides):
        response = self.client.post("/api/contacts", json=contact_payload(**overrides))
        self.assertEqual(response.status_code, 201, response.text)
        return response.json()["id"]
