import os
import random

from locust import HttpUser, task, between


ORIGIN_LAT = float(os.getenv("LOCUST_ORIGIN_LAT", 40.0))
ORIGIN_LNG = float(os.getenv("LOCUST_ORIGIN_LNG", -75.0))


class SearcherUser(HttpUser):
    wait_time = between(1, 5)
    host = "http://127.0.0.1:8000"

    @task(3)
    def nearby_sellers(self):
        self.client.get(
            "/v1/sellers/active",
            params={
                "lat": ORIGIN_LAT + random.uniform(-0.2, 0.2),
                "lng": ORIGIN_LNG + random.uniform(-0.2, 0.2),
                "radius": random.choice([5, 10, 50]),
            },
            name="/v1/sellers/active",
        )

    @task(1)
    def all_sellers(self):
        self.client.get("/v1/sellers/active", name="/v1/sellers/active [no origin]")


class SellerUser(HttpUser):
    """Needs SELLER_TOKEN pointing at an activated seller account."""
    wait_time = between(5, 15)
    host = "http://127.0.0.1:8000"

    def on_start(self):
        self.headers = {"Authorization": f"Bearer {os.getenv('SELLER_TOKEN', '')}"}
        self.latitude = ORIGIN_LAT
        self.longitude = ORIGIN_LNG

    @task
    def report_location(self):
        self.latitude += random.uniform(-0.001, 0.001)
        self.longitude += random.uniform(-0.001, 0.001)
        self.client.put(
            "/v1/sellers/me/location",
            json={"latitude": self.latitude, "longitude": self.longitude},
            headers=self.headers,
        )
