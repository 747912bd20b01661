"""aiohttp application serving ``/metrics`` and ``/json``."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator

from aiohttp import web

from owm_exporter.client import WeatherClient
from owm_exporter.config import ExporterConfig
from owm_exporter.metrics import CONTENT_TYPE, MetricsResponder, outcome_as_json
from owm_exporter.poller import OutcomeSource, Poller
from owm_exporter.state.store import ReadingStore

_logger = logging.getLogger(__name__)

STORE_KEY = web.AppKey("store", ReadingStore)
RESPONDER_KEY = web.AppKey("responder", MetricsResponder)
POLLER_KEY = web.AppKey("poller", Poller)


async def handle_metrics(request: web.Request) -> web.Response:
    responder = request.app[RESPONDER_KEY]
    return web.Response(
        body=responder.render().encode("utf-8"),
        headers={"Content-Type": CONTENT_TYPE},
    )


async def handle_json(request: web.Request) -> web.Response:
    snapshot = request.app[STORE_KEY].snapshot()
    payload = outcome_as_json(snapshot.outcome)
    if isinstance(payload, dict) and "error" in payload:
        payload["last_success_at"] = snapshot.last_success_at.isoformat() if snapshot.last_success_at else None
    return web.json_response(payload)


def build_app(
    config: ExporterConfig,
    *,
    client: OutcomeSource | None = None,
    store: ReadingStore | None = None,
) -> web.Application:
    """Wire store, responder and poller into an aiohttp application.

    The poller starts with the application and is cancelled on cleanup,
    together with the HTTP session of a client created here.
    """
    store = store if store is not None else ReadingStore()
    owned_client: WeatherClient | None = None
    if client is None:
        owned_client = WeatherClient(
            config.api_key,
            base_url=config.base_url,
            timeout=config.request_timeout,
        )
        client = owned_client
    poller = Poller(client, store, config.coordinates, config.units, interval=config.interval)

    app = web.Application()
    app[STORE_KEY] = store
    app[RESPONDER_KEY] = MetricsResponder(store, config.units, location=config.location)
    app[POLLER_KEY] = poller

    async def _poller_ctx(_app: web.Application) -> AsyncIterator[None]:
        if owned_client is not None:
            await owned_client.__aenter__()
        poller.start()
        try:
            yield
        finally:
            try:
                await poller.stop()
            finally:
                if owned_client is not None:
                    await owned_client.close()
                _logger.info("Poller stopped")

    app.cleanup_ctx.append(_poller_ctx)
    app.router.add_get("/metrics", handle_metrics)
    app.router.add_get("/json", handle_json)
    return app
