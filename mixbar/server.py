import logging
from typing import Optional

import psutil
from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse
from starlette.middleware.base import BaseHTTPMiddleware

from mixbar import __version__, config
from mixbar.recipe.catalog import REFERENCE_SCALES, get_catalog
from mixbar.recipe.engine import RecipeEngine
from mixbar.recipe.formatting import render_recipe_text
from mixbar.recipe.normalizer import balance, from_record, to_engine_vector
from mixbar.recipe.profile import estimate_profile
from mixbar.sse_utils import format_sse_event
from mixbar.sync.channel import InMemorySyncChannel, SabitRecord, SyncChannel
from mixbar.sync.stream import RecipeStream
from mixbar.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs every request. DEBUG only: the radar posts once per drag frame."""

    async def dispatch(self, request: Request, call_next):
        logger.debug(f"🔵 {request.method} {request.url.path}")
        try:
            response = await call_next(request)
            logger.debug(f"🟢 {response.status_code} for {request.method} {request.url.path}")
            return response
        except Exception as e:
            logger.exception(f"🔴 REQUEST FAILED: {type(e).__name__}: {e}")
            raise


def create_app(
    channel: Optional[SyncChannel] = None,
    engine: Optional[RecipeEngine] = None,
    record_key: str = config.RECORD_KEY,
    heartbeat_seconds: float = config.HEARTBEAT_SECONDS,
) -> FastAPI:
    if channel is None:
        channel = InMemorySyncChannel()
    if engine is None:
        engine = RecipeEngine(catalog=get_catalog(config.CATALOG_PATH))

    app = FastAPI(
        title="x-Music Bar API",
        description="SABIT vector synchronization and cocktail recipe engine.",
        version=__version__,
    )
    app.state.channel = channel
    app.state.engine = engine

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    @app.post("/api/sabit")
    async def write_sabit(payload: SabitRecord):
        """Input surface: overwrite the shared record."""
        stored = channel.write(record_key, payload.to_record())
        return stored

    @app.get("/api/sabit")
    async def read_sabit():
        record = channel.read(record_key)
        if record is None:
            return SabitRecord().model_dump()
        return record

    @app.get("/api/sabit/stream")
    async def stream_recipes(
        request: Request,
        max_events: Optional[int] = Query(None, ge=1, description="Close after this many frames (long-poll clients)"),
    ):
        """Display surface: one recipe event per record update, pings while idle."""
        stream = RecipeStream(channel, engine, key=record_key, heartbeat_seconds=heartbeat_seconds)

        async def event_generator():
            events = stream.events()
            sent = 0
            try:
                async for item in events:
                    if await request.is_disconnected():
                        logger.info("[SSE] Display disconnected.")
                        break
                    yield format_sse_event(item["type"], item)
                    sent += 1
                    if max_events is not None and sent >= max_events:
                        break
            finally:
                await events.aclose()

        response = StreamingResponse(event_generator(), media_type="text/event-stream")
        response.headers["Cache-Control"] = "no-cache"
        response.headers["Connection"] = "keep-alive"
        response.headers["X-Accel-Buffering"] = "no"
        return response

    @app.post("/api/recipe")
    async def compute_recipe(payload: SabitRecord):
        """Stateless: display-domain vector in, recipe out."""
        try:
            display = from_record(payload.model_dump())
            vector = to_engine_vector(display)
            result = engine.compute_recipe(vector)
            profile = estimate_profile(engine.allocate(vector))
            return {
                **result.to_dict(),
                "profile": profile.to_dict(),
                "balance": balance(display),
                "text": render_recipe_text(result, profile),
            }
        except Exception as e:
            logger.exception(f"Recipe computation failed: {e}")
            raise HTTPException(status_code=500, detail=str(e))

    @app.get("/api/catalog")
    async def read_catalog():
        return {
            "ingredients": [ing.to_dict() for ing in engine.catalog],
            "reference_scales": {
                axis: {
                    "label": scale.label,
                    "maximum": scale.maximum,
                    "unit": scale.unit,
                    "reference": scale.reference,
                }
                for axis, scale in REFERENCE_SCALES.items()
            },
        }

    @app.get("/health")
    async def health_check():
        try:
            memory_mb = round(psutil.Process().memory_info().rss / 1024 / 1024, 1)
        except Exception as e:
            logger.warning(f"Memory check failed: {e}")
            memory_mb = None
        return {
            "status": "healthy",
            "service": "mixbar",
            "version": __version__,
            "engine": engine.describe(),
            "memory_mb": memory_mb,
        }

    return app


app = create_app()


def main():
    import uvicorn

    setup_logging(config.LOG_LEVEL)
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    main()
