"""
Locust Load Test Suite

Hotel scenarios need a provisioned hotel account:
  export LOAD_HOTEL_EMAIL=hotel@example.com LOAD_HOTEL_PASSWORD=...

Run scenarios:
  locust -f locustfile.py --tags review       # Racing confirm/reject on one booking
  locust -f locustfile.py --tags throughput   # Catalog reads
  locust -f locustfile.py --tags edge         # Bad input
  locust -f locustfile.py                     # All tests
"""

import os
import random
import string
from locust import HttpUser, task, between, tag, events

HOTEL_EMAIL = os.getenv("LOAD_HOTEL_EMAIL", "hotel@example.com")
HOTEL_PASSWORD = os.getenv("LOAD_HOTEL_PASSWORD", "hotelpassword123")
CONSUMER_PASSWORD = "loadtest123"

# Shared state
EVENT_IDS = []
PENDING_BOOKING_IDS = []


def random_email():
    return f"load_{random.randint(10000, 99999)}_{random_suffix()}@test.com"


def random_suffix():
    return "".join(random.choices(string.ascii_lowercase, k=6))


def booking_form(event_id):
    return {
        "event_id": event_id,
        "full_name": f"Load {random_suffix()}",
        "phone": "555-0000",
        "date": "2026-12-31",
        "event_type": random.choice(["music", "sports", "food", "arts", "business"]),
    }


def login_consumer(client):
    email = random_email()
    client.post("/api/v1/auth/register", json={
        "full_name": "Load Tester",
        "email": email,
        "phone_number": "555-0000",
        "password": CONSUMER_PASSWORD,
    })
    resp = client.post("/api/v1/auth/login", json={"email": email, "password": CONSUMER_PASSWORD})
    if resp.status_code == 200:
        return {"Authorization": f"Bearer {resp.json()['access_token']}"}
    return {}


def login_hotel(client):
    resp = client.post("/api/v1/auth/login", json={"email": HOTEL_EMAIL, "password": HOTEL_PASSWORD})
    if resp.status_code == 200 and resp.json()["role"] == "hotel":
        return {"Authorization": f"Bearer {resp.json()['access_token']}"}
    return {}


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    print("\n" + "="*60)
    print(f"SETUP: hotel scenarios log in as {HOTEL_EMAIL}")
    print("="*60)


class ReviewRaceUser(HttpUser):
    """
    TEST 1: Review race - many hotel sessions review the same bookings

    Run: locust -f locustfile.py --tags review -u 50 -r 25 --run-time 30s

    Every pending booking must be moved exactly once: one 200 per booking,
    every other attempt a 409 invalid_transition. Afterwards:
      SELECT status, COUNT(*) FROM bookings GROUP BY status;
    """
    wait_time = between(0, 0.1)

    def on_start(self):
        self.hotel_headers = login_hotel(self.client)
        self.consumer_headers = login_consumer(self.client)

        if self.hotel_headers and not EVENT_IDS:
            resp = self.client.post("/api/v1/events/", json={
                "title": "Review Race Event",
                "location": "Load Hall",
                "description": "Bookings here are reviewed by many sessions at once",
                "image_url": "http://localhost/media/placeholder.png",
                "categories": "Load",
            }, headers=self.hotel_headers)
            if resp.status_code == 201:
                EVENT_IDS.append(resp.json()["id"])
                print(f"\n✓ Created event {resp.json()['id']}\n")

    @tag("review")
    @task(1)
    def request_booking(self):
        if not EVENT_IDS or not self.consumer_headers:
            return
        resp = self.client.post("/api/v1/bookings/",
            json=booking_form(EVENT_IDS[0]),
            headers=self.consumer_headers)
        if resp.status_code == 201:
            PENDING_BOOKING_IDS.append(resp.json()["id"])

    @tag("review")
    @task(5)
    def review_booking(self):
        if not PENDING_BOOKING_IDS or not self.hotel_headers:
            return
        booking_id = random.choice(PENDING_BOOKING_IDS[-10:])
        with self.client.patch(f"/api/v1/bookings/{booking_id}/status",
            json={"status": random.choice(["confirmed", "rejected"])},
            headers=self.hotel_headers,
            name="/api/v1/bookings/{id}/status",
            catch_response=True
        ) as resp:
            if resp.status_code == 200:
                resp.success()
            elif resp.status_code == 409 and resp.json().get("code") == "invalid_transition":
                resp.success()  # Expected: already reviewed
            else:
                resp.failure(f"Unexpected: {resp.status_code}")


class ThroughputUser(HttpUser):
    """
    TEST 2: Throughput - catalog reads

    Run: locust -f locustfile.py --tags throughput -u 100 -r 20 --run-time 60s
    """
    wait_time = between(0.1, 0.5)

    @tag("throughput", "read")
    @task(10)
    def list_events(self):
        resp = self.client.get("/api/v1/events/")
        if resp.status_code == 200:
            for event in resp.json()[:20]:
                if event["id"] not in EVENT_IDS:
                    EVENT_IDS.append(event["id"])

    @tag("throughput", "read")
    @task(3)
    def search_events(self):
        self.client.get("/api/v1/events/?q=event", name="/api/v1/events/?q=")

    @tag("throughput", "read")
    @task(3)
    def get_event_detail(self):
        if EVENT_IDS:
            self.client.get(f"/api/v1/events/{random.choice(EVENT_IDS)}",
                name="/api/v1/events/{id}")

    @tag("throughput")
    @task(1)
    def health_check(self):
        self.client.get("/health")


class EdgeCaseUser(HttpUser):
    """
    TEST 3: Edge cases - bad input handling

    Run: locust -f locustfile.py --tags edge -u 20 -r 5 --run-time 30s

    System should NOT crash, return proper error codes.
    """
    wait_time = between(0.5, 1.5)

    def on_start(self):
        self.headers = login_consumer(self.client)

    def _expect(self, resp, codes):
        if resp.status_code in codes:
            resp.success()
        else:
            resp.failure(f"Expected {codes}, got {resp.status_code}")

    @tag("edge")
    @task
    def invalid_event_id(self):
        with self.client.post("/api/v1/bookings/",
            json=booking_form(999999),
            headers=self.headers,
            catch_response=True
        ) as resp:
            self._expect(resp, [404])

    @tag("edge")
    @task
    def blank_name(self):
        form = booking_form(EVENT_IDS[0] if EVENT_IDS else 1)
        form["full_name"] = "   "
        with self.client.post("/api/v1/bookings/", json=form, headers=self.headers,
            catch_response=True
        ) as resp:
            self._expect(resp, [404, 422])

    @tag("edge")
    @task
    def unknown_event_type(self):
        form = booking_form(1)
        form["event_type"] = "karaoke"
        with self.client.post("/api/v1/bookings/", json=form, headers=self.headers,
            catch_response=True
        ) as resp:
            self._expect(resp, [422])

    @tag("edge")
    @task
    def consumer_reviews_booking(self):
        with self.client.patch("/api/v1/bookings/1/status",
            json={"status": "confirmed"},
            headers=self.headers,
            name="/api/v1/bookings/{id}/status",
            catch_response=True
        ) as resp:
            self._expect(resp, [403])

    @tag("edge")
    @task
    def malformed_json(self):
        with self.client.post("/api/v1/bookings/",
            data="not json at all",
            headers=self.headers,
            catch_response=True
        ) as resp:
            self._expect(resp, [400, 422])

    @tag("edge")
    @task
    def missing_auth(self):
        with self.client.post("/api/v1/bookings/",
            json=booking_form(1),
            catch_response=True
        ) as resp:
            self._expect(resp, [401])


class RealisticUser(HttpUser):
    """
    TEST 4: Realistic consumer workload

    Run: locust -f locustfile.py -u 200 -r 20 --run-time 120s

    Mostly browsing, some saving, occasional booking.
    """
    wait_time = between(1, 3)

    def on_start(self):
        self.headers = login_consumer(self.client)

    @task(50)
    def browse_events(self):
        resp = self.client.get("/api/v1/events/")
        if resp.status_code == 200:
            for event in resp.json()[:20]:
                if event["id"] not in EVENT_IDS:
                    EVENT_IDS.append(event["id"])

    @task(20)
    def view_event(self):
        if EVENT_IDS:
            self.client.get(f"/api/v1/events/{random.choice(EVENT_IDS)}",
                name="/api/v1/events/{id}")

    @task(10)
    def save_event(self):
        if EVENT_IDS and self.headers:
            self.client.put(f"/api/v1/saved-events/{random.choice(EVENT_IDS)}",
                headers=self.headers, name="/api/v1/saved-events/{id}")

    @task(5)
    def book_event(self):
        if EVENT_IDS and self.headers:
            self.client.post("/api/v1/bookings/",
                json=booking_form(random.choice(EVENT_IDS)),
                headers=self.headers)

    @task(5)
    def my_bookings(self):
        if self.headers:
            self.client.get("/api/v1/bookings/me", headers=self.headers)
