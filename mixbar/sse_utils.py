import json
import logging
from typing import Any

logger = logging.getLogger(__name__)


def safe_json(obj: Any) -> Any:
    """
    JSON-safe view of a recipe event.
    Recipe types (DisplayVector, RecipeResult, DrinkProfile, ...) serialize through their to_dict().
    """
    if obj is None or isinstance(obj, (str, int, float, bool)):
        return obj
    if isinstance(obj, dict):
        return {str(k): safe_json(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [safe_json(v) for v in obj]
    if hasattr(obj, "to_dict") and callable(obj.to_dict):
        return safe_json(obj.to_dict())
    return str(obj)


def format_sse_event(event: str, data: Any) -> str:
    """
    Formats a message into an SSE-compatible string.
    ENVELOPE: {"type": event, "content": data, "seq_id": ..., "ts": ...}
    """
    try:
        if event == "ping":
            return "event: ping\ndata: \n\n"

        payload = data if isinstance(data, dict) and "type" in data else {"type": event, "content": data}
        json_envelope = json.dumps(safe_json(payload))
        return f"event: {event}\ndata: {json_envelope}\n\n"

    except Exception as e:
        logger.error(f"SSE Formatting failure for event {event}: {e}")
        error_json = json.dumps({"type": "error", "content": str(e)})
        return f"event: error_event\ndata: {error_json}\n\n"
