import random
from locust import HttpUser, task, between

DIFFICULTIES = ["EASY", "MEDIUM", "HARD"]


def _trail(i: int) -> dict:
    lat = 45.35 + random.random() * 0.1
    lon = 25.45 + random.random() * 0.15
    return {
        "name": f"Load Trail {i}",
        "description": "synthetic",
        "distance": round(random.uniform(3.0, 40.0), 2),
        "elevationGain": random.randint(100, 2000),
        "elevationLoss": random.randint(100, 2000),
        "durationMinutes": random.randint(60, 780),
        "difficulty": random.choice(DIFFICULTIES),
        "terrain": ["forest"],
        "latitude": lat,
        "longitude": lon,
        "waypoints": [[lat, lon], [lat + 0.01, lon + 0.01]],
    }


class TrailUser(HttpUser):
    wait_time = between(0.1, 1.5)

    @task(3)
    def list_trails(self):
        self.client.get("/api/v1/trails")

    @task(2)
    def filter_trails(self):
        self.client.get("/api/v1/trails", params={"difficulty": random.choice(DIFFICULTIES)})

    @task(1)
    def create_trail(self):
        self.client.post("/api/v1/trails", json=_trail(random.randint(0, 10_000)))

    @task(1)
    def health(self):
        self.client.get("/health")

    def on_start(self):
        self.client.get("/metrics")
