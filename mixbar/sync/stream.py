"""
Bridges a synchronization channel onto an async stream of recipe events for
one display surface.

Channel callbacks may fire from any thread at drag-frame frequency. Only the
latest pending record is kept, so a slow display skips intermediate vectors
instead of falling behind.
"""

import asyncio
import logging
import time
from typing import Any, AsyncIterator, Dict, Optional

from mixbar import config
from mixbar.recipe.engine import RecipeEngine
from mixbar.recipe.normalizer import from_record, to_engine_vector
from mixbar.recipe.profile import estimate_profile
from mixbar.sync.channel import SABIT_RECORD_KEY, SyncChannel

logger = logging.getLogger(__name__)


def build_recipe_content(record: Optional[Dict[str, Any]], engine: RecipeEngine) -> Dict[str, Any]:
    """Recomputes the recipe for one synchronized record. Values stay typed; SSE framing serializes them."""
    display = from_record(record)
    vector = to_engine_vector(display)
    result = engine.compute_recipe(vector)
    profile = estimate_profile(engine.allocate(vector))
    return {
        "vector": display,
        "recipe": result,
        "profile": profile,
        "timestamp": (record or {}).get("timestamp"),
    }


class RecipeStream:
    def __init__(
        self,
        channel: SyncChannel,
        engine: RecipeEngine,
        key: str = SABIT_RECORD_KEY,
        heartbeat_seconds: float = config.HEARTBEAT_SECONDS,
    ):
        self.channel = channel
        self.engine = engine
        self.key = key
        self.heartbeat_seconds = heartbeat_seconds

    @staticmethod
    def _offer(queue: asyncio.Queue, record: Dict[str, Any]):
        # Latest wins: drop whatever the display has not consumed yet
        while not queue.empty():
            queue.get_nowait()
        queue.put_nowait(record)

    async def events(self) -> AsyncIterator[Dict[str, Any]]:
        loop = asyncio.get_running_loop()
        queue: asyncio.Queue = asyncio.Queue()

        def on_record(record: Dict[str, Any]):
            loop.call_soon_threadsafe(self._offer, queue, record)

        unsubscribe = self.channel.subscribe(self.key, on_record)
        seq_id = 1
        try:
            while True:
                try:
                    record = await asyncio.wait_for(queue.get(), timeout=self.heartbeat_seconds)
                except asyncio.TimeoutError:
                    yield {"type": "ping", "content": {}, "ts": time.time()}
                    continue

                yield {
                    "type": "recipe",
                    "content": build_recipe_content(record, self.engine),
                    "seq_id": seq_id,
                    "ts": time.time(),
                }
                seq_id += 1
        finally:
            unsubscribe()
            logger.info(f"[STREAM] display on {self.key} closed after {seq_id - 1} recipes")
