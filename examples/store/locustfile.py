import random
import string
from threading import Lock
from locust import HttpUser, task, between


_ids_lock = Lock()
_ids = []


def _rand_name() -> str:
    return "prod-" + "".join(random.choice(string.ascii_lowercase) for _ in range(6))


def _rand_product() -> dict:
    return {
        "name": _rand_name(),
        "description": random.choice(["", "load test item"]),
        "price": round(random.uniform(1.0, 100.0), 2),
        "stock": random.randint(0, 50),
    }


class ProductApiUser(HttpUser):
    """Drives the /api/products surface; run against `product-api --port 8080`."""

    wait_time = between(0.05, 0.15)

    @task(5)
    def list_products(self):
        self.client.get("/api/products", name="GET /api/products")

    @task(3)
    def create_and_get(self):
        r = self.client.post("/api/products", json=_rand_product(), name="POST /api/products")
        if r.status_code == 201:
            pid = r.json().get("id")
            if isinstance(pid, int):
                with _ids_lock:
                    _ids.append(pid)
                self.client.get(f"/api/products/{pid}", name="GET /api/products/:id")

    @task(1)
    def update_or_delete(self):
        with _ids_lock:
            pid = random.choice(_ids) if _ids else None
        if pid is None:
            return
        if random.random() < 0.5:
            # another user may have deleted it already
            with self.client.put(f"/api/products/{pid}", json=_rand_product(),
                                 name="PUT /api/products/:id", catch_response=True) as r:
                if r.status_code in (200, 404):
                    r.success()
        else:
            with self.client.delete(f"/api/products/{pid}", name="DELETE /api/products/:id",
                                    catch_response=True) as r:
                if r.status_code in (204, 404):
                    r.success()
                    with _ids_lock:
                        try:
                            _ids.remove(pid)
                        except ValueError:
                            pass

    @task(1)
    def bad_requests(self):
        with self.client.get("/api/products/abc", name="GET /api/products/:id (invalid)",
                             catch_response=True) as r:
            if r.status_code == 400:
                r.success()
            else:
                r.failure(f"expected 400, got {r.status_code}")
