import json

from mixbar.recipe.recipe_types import DisplayVector, DrinkProfile, RecipeItem, RecipeResult
from mixbar.sse_utils import format_sse_event, safe_json


def _data(frame):
    event_line, data_line = frame.strip("\n").split("\n")
    assert data_line.startswith("data: ")
    return event_line, json.loads(data_line[len("data: "):])


def test_ping_frame():
    assert format_sse_event("ping", {"type": "ping", "content": {}}) == "event: ping\ndata: \n\n"


def test_envelope_passes_through_with_typed_content():
    item = {
        "type": "recipe",
        "content": {
            "vector": DisplayVector(S=100.0),
            "recipe": RecipeResult(total_volume=60.0, recipe=[RecipeItem("Simple Syrup", 45.9)]),
            "profile": DrinkProfile(sugar_g_per_l=780.0),
            "timestamp": 42,
        },
        "seq_id": 3,
        "ts": 1.5,
    }
    frame = format_sse_event("recipe", item)
    event_line, payload = _data(frame)

    assert frame.endswith("\n\n")
    assert event_line == "event: recipe"
    assert payload["seq_id"] == 3
    assert payload["content"]["vector"]["S"] == 100.0
    assert payload["content"]["recipe"] == {
        "total_volume": 60.0,
        "recipe": [{"name": "Simple Syrup", "amount": 45.9}],
    }
    assert payload["content"]["profile"]["ph"] == 7.0
    assert payload["content"]["profile"]["blend"] is None


def test_plain_data_is_wrapped():
    _, payload = _data(format_sse_event("status", ["ready"]))
    assert payload == {"type": "status", "content": ["ready"]}


def test_formatting_failure_becomes_error_event():
    class Broken:
        def to_dict(self):
            raise ValueError("cannot serialize")

    frame = format_sse_event("recipe", {"type": "recipe", "content": Broken()})
    event_line, payload = _data(frame)

    assert event_line == "event: error_event"
    assert payload == {"type": "error", "content": "cannot serialize"}


def test_safe_json_falls_back_to_str():
    assert safe_json({1: (object,)})["1"][0].startswith("<class")
    assert safe_json(None) is None
