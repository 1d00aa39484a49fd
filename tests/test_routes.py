# tests/test_routes.py
import pytest
from fastapi.testclient import TestClient
from carsdb.db import get_db
from carsdb.main import app
from carsdb.models import car_id
from carsdb.queries import QueryEngine

@pytest.fixture
def client(store):
    app.dependency_overrides[get_db] = lambda: QueryEngine(store)
    yield TestClient(app)
    app.dependency_overrides.clear()

def test_health(client):
    body = client.get("/health").json()
    assert body["status"] == "ok"
    assert body["records"] == 6
    assert body["brands"] == 3

def test_brands(client):
    assert client.get("/brands").json() == ["Alfa Romeo", "Honda", "Toyota"]

def test_fetch_car(client):
    cid = car_id("Toyota", "Corolla", "midsize")
    resp = client.get(f"/cars/{cid}")
    assert resp.status_code == 200
    assert resp.json() == {"id": cid, "make": "Toyota", "model": "Corolla", "type": "midsize", "years": [1998, 2001, 2003]}
    assert client.get(f"/cars/{cid}", params={"fields": "model,years,color"}).json() == {"model": "Corolla", "years": [1998, 2001, 2003]}

def test_fetch_unknown_car_is_null(client):
    resp = client.get("/cars/nope")
    assert resp.status_code == 200
    assert resp.json() is None

def test_fetch_many(client):
    cid = car_id("Honda", "Civic", "midsize")
    resp = client.post("/cars/fetch", json={"ids": [cid, "nope"], "selected_fields": ["make"]})
    assert resp.json() == [{"make": "Honda"}, None]

def test_list_cars(client):
    resp = client.get("/brands/Toyota/cars", params=[("fields", "model"), ("sort", "model"), ("dir", "desc")])
    assert resp.json() == [{"model": "Tacoma"}, {"model": "Corolla"}, {"model": "Camry"}]

def test_list_cars_bad_direction(client):
    assert client.get("/brands/Toyota/cars", params={"dir": "up"}).status_code == 422
