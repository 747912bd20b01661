"""Command-line entry point: ``owm-exporter`` / ``python -m owm_exporter``."""

from __future__ import annotations

import argparse
import logging
import os
import sys

from aiohttp import web

from owm_exporter.config import ExporterConfig
from owm_exporter.exceptions import OwmConfigError
from owm_exporter.models.units import UnitSystem
from owm_exporter.server import build_app

_logger = logging.getLogger("owm_exporter")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="owm-exporter",
        description="Export OpenWeatherMap current weather for one location as Prometheus metrics.",
    )
    parser.add_argument(
        "coords",
        nargs="?",
        help="comma-separated lat/lon coords, e.g. 52.37,4.89; put -- before negative values (env: OWM_COORDS)",
    )
    parser.add_argument(
        "-u",
        "--units",
        choices=[member.value for member in UnitSystem] + ["kelvin"],
        help="unit type (env: OWM_UNITS, default: standard)",
    )
    parser.add_argument("-k", "--api-key", help="OpenWeatherMap API key (env: OWM_API_KEY)")
    parser.add_argument("-i", "--interval", type=float, help="refresh interval in seconds (env: OWM_INTERVAL)")
    parser.add_argument("-p", "--port", type=int, help="port for the HTTP server (env: OWM_PORT)")
    parser.add_argument("--host", help="address for the HTTP server (env: OWM_HOST)")
    parser.add_argument(
        "-l",
        "--location",
        help="if set, adds a location label to all exported metrics (env: OWM_LOCATION)",
    )
    parser.add_argument("--timeout", type=float, help="API request timeout in seconds (env: OWM_REQUEST_TIMEOUT)")
    parser.add_argument(
        "--log-level",
        default=os.environ.get("OWM_LOG_LEVEL", "INFO"),
        help="logging level (env: OWM_LOG_LEVEL, default: INFO)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = ExporterConfig.from_env(
            coordinates=args.coords,
            api_key=args.api_key,
            units=args.units,
            interval=args.interval,
            port=args.port,
            host=args.host,
            location=args.location,
            request_timeout=args.timeout,
        )
    except OwmConfigError as exc:
        _logger.error("Invalid configuration: %s", exc)
        return 2

    _logger.info("Serving metrics on http://%s:%d/metrics", config.host, config.port)
    web.run_app(build_app(config), host=config.host, port=config.port, print=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
