import asyncio
import json

import pytest
from fastapi.testclient import TestClient

from mixbar.recipe.engine import RecipeEngine
from mixbar.recipe.recipe_types import Ingredient
from mixbar.server import create_app
from mixbar.sync.channel import InMemorySyncChannel


@pytest.fixture
def channel():
    return InMemorySyncChannel()


@pytest.fixture
def client(channel):
    return TestClient(create_app(channel=channel, engine=RecipeEngine()))


def test_read_sabit_default(client):
    resp = client.get("/api/sabit")
    assert resp.status_code == 200
    data = resp.json()
    assert {k: data[k] for k in "SABIT"} == {k: 0.0 for k in "SABIT"}


def test_write_then_read_sabit(client, channel):
    resp = client.post("/api/sabit", json={"S": 10, "T": 50})
    assert resp.status_code == 200
    stored = resp.json()
    assert stored["S"] == 10.0
    assert isinstance(stored["timestamp"], int)

    assert client.get("/api/sabit").json() == stored
    assert channel.read("sabit/current") == stored


def test_write_keeps_client_timestamp(client):
    stored = client.post("/api/sabit", json={"B": 70, "timestamp": 1700000000000}).json()
    assert stored["timestamp"] == 1700000000000


def test_compute_recipe_endpoint(client):
    resp = client.post("/api/recipe", json={"S": 100})
    assert resp.status_code == 200
    data = resp.json()

    assert data["total_volume"] == 60.0
    assert data["recipe"][0]["name"] == "Simple Syrup"
    assert data["balance"]["S"] == 100.0
    assert "abv" in data["profile"]
    assert data["text"].startswith("TOTAL VOLUME: 60.0 ml")


def test_compute_recipe_all_zero(client):
    data = client.post("/api/recipe", json={}).json()
    assert data["total_volume"] == 60.0
    assert len(data["recipe"]) == 15
    assert all(item["amount"] == 4.0 for item in data["recipe"])


def test_compute_recipe_clamps_out_of_range(client):
    data = client.post("/api/recipe", json={"T": 400, "S": -50}).json()
    assert data["total_volume"] == 150.0


def test_compute_recipe_rejects_non_numeric(client):
    resp = client.post("/api/recipe", json={"S": "very sweet"})
    assert resp.status_code == 422


def test_catalog_endpoint(client):
    data = client.get("/api/catalog").json()
    assert len(data["ingredients"]) == 15
    assert data["ingredients"][0]["name"] == "Gin (Tanqueray)"
    assert data["reference_scales"]["i"]["maximum"] == 47.3


def test_injected_catalog():
    engine = RecipeEngine(catalog=[Ingredient("House Mix", s=1.0)])
    client = TestClient(create_app(channel=InMemorySyncChannel(), engine=engine))

    data = client.post("/api/recipe", json={"S": 30}).json()
    assert data["recipe"] == [{"name": "House Mix", "amount": 60.0}]
    assert len(client.get("/api/catalog").json()["ingredients"]) == 1


def test_health(client):
    data = client.get("/health").json()
    assert data["status"] == "healthy"
    assert data["engine"]["ingredients"] == 15
    assert data["engine"]["sigma"] == 12.0


def _frames(body):
    return [frame for frame in body.split("\n\n") if frame]


def test_stream_route_sends_recipe_then_ping(channel):
    client = TestClient(create_app(channel=channel, engine=RecipeEngine(), heartbeat_seconds=0.05))
    channel.write("sabit/current", {"T": 100, "timestamp": 9})

    resp = client.get("/api/sabit/stream", params={"max_events": 2})

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/event-stream")
    assert resp.headers["cache-control"] == "no-cache"
    recipe_frame, ping_frame = _frames(resp.text)
    assert recipe_frame.startswith("event: recipe\ndata: ")
    payload = json.loads(recipe_frame.split("data: ", 1)[1])
    assert payload["content"]["recipe"]["total_volume"] == 150.0
    assert payload["content"]["timestamp"] == 9
    assert ping_frame == "event: ping\ndata: "
    # Closing the stream releases the channel subscription
    assert channel.subscriber_count("sabit/current") == 0


def test_stream_route_pings_while_idle(channel):
    client = TestClient(create_app(channel=channel, engine=RecipeEngine(), heartbeat_seconds=0.01))
    resp = client.get("/api/sabit/stream", params={"max_events": 2})
    assert _frames(resp.text) == ["event: ping\ndata: ", "event: ping\ndata: "]


def test_stream_route_rejects_bad_limit(client):
    assert client.get("/api/sabit/stream", params={"max_events": 0}).status_code == 422


def test_stream_route_stops_on_disconnect(channel):
    app = create_app(channel=channel, engine=RecipeEngine(), heartbeat_seconds=5)
    channel.write("sabit/current", {"S": 50})
    route = next(r for r in app.routes if getattr(r, "path", None) == "/api/sabit/stream")

    class GoneRequest:
        async def is_disconnected(self):
            return True

    async def drain():
        response = await route.endpoint(request=GoneRequest(), max_events=None)
        return [chunk async for chunk in response.body_iterator]

    assert asyncio.run(drain()) == []
    assert channel.subscriber_count("sabit/current") == 0


def test_compute_recipe_with_infinite_component(client):
    resp = client.post(
        "/api/recipe",
        content='{"S": Infinity, "A": 50}',
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["balance"] == {"S": 0.0, "A": 100.0, "B": 0.0, "I": 0.0, "T": 0.0}
    assert data["total_volume"] == 60.0
    assert {item["name"] for item in data["recipe"][:2]} == {"Simple Syrup", "Grenadine"}
