"""Command-line entry point: parse flags, start the listener, wait for a signal."""

import argparse
import asyncio
import signal
from collections.abc import Sequence
from typing import Any, Optional

from pydantic import ValidationError

from dovecot_exporter.core.config import Settings
from dovecot_exporter.core.exporter_service import DovecotExporterService
from dovecot_exporter.core.logging import LoggerConfigurator
from dovecot_exporter.core.logging import logger as global_logger


def parse_listen_address(value: str) -> tuple[str, int]:
    """Split ``host:port`` (``:9199``, ``[::1]:9199``) into host and port."""
    host, sep, port = value.rpartition(":")
    if not sep:
        raise argparse.ArgumentTypeError(f"expected host:port, got {value!r}")
    try:
        port_number = int(port)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port in {value!r}") from None
    return host.strip("[]"), port_number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dovecot-exporter",
        description="Expose Dovecot's stats socket as Prometheus metrics.",
    )
    parser.add_argument(
        "--web.listen-address",
        dest="listen_address",
        type=parse_listen_address,
        help="Address to listen on for web interface and telemetry (default :9199).",
    )
    parser.add_argument(
        "--web.telemetry-path",
        dest="telemetry_path",
        help="Path under which to expose metrics (default /metrics).",
    )
    parser.add_argument(
        "--dovecot.socket-path",
        dest="socket_path",
        help="Path of Dovecot's stats socket (default /var/run/dovecot/stats).",
    )
    parser.add_argument(
        "--dovecot.scopes",
        dest="scopes",
        help="Comma separated stats scopes to query (default user).",
    )
    parser.add_argument(
        "--dovecot.global-scopes",
        dest="global_scopes",
        help="Comma separated scopes that answer with a single row (default global).",
    )
    parser.add_argument(
        "--dovecot.timeout",
        dest="socket_timeout",
        type=float,
        help="Seconds allowed for each socket operation (default 5).",
    )
    parser.add_argument(
        "--dovecot.export-file",
        dest="export_file",
        help="Read a captured EXPORT response from this file instead of the socket.",
    )
    parser.add_argument(
        "--log.level",
        dest="log_level",
        help="Log level (default INFO).",
    )
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    """Build settings from the environment, with any given flags taking precedence."""
    overrides: dict[str, Any] = {}
    if args.listen_address is not None:
        overrides["LISTEN_HOST"], overrides["LISTEN_PORT"] = args.listen_address
    for flag, field in (
        ("telemetry_path", "TELEMETRY_PATH"),
        ("socket_path", "SOCKET_PATH"),
        ("scopes", "SCOPES"),
        ("global_scopes", "GLOBAL_SCOPES"),
        ("socket_timeout", "SOCKET_TIMEOUT"),
        ("export_file", "EXPORT_FILE"),
        ("log_level", "LOG_LEVEL"),
    ):
        value = getattr(args, flag)
        if value is not None:
            overrides[field] = value
    return Settings(**overrides)


async def serve(settings: Settings) -> None:
    """Run the exporter until SIGINT or SIGTERM."""
    logger = global_logger.with_context(operation="runner")
    service = DovecotExporterService.from_settings(settings)

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop.set)

    await service.start()
    try:
        await stop.wait()
        logger.info("Shutdown requested")
    finally:
        await service.stop()


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = load_settings(args)
    except ValidationError as e:
        parser.error(str(e))

    LoggerConfigurator.configure_root(settings.LOG_LEVEL)
    asyncio.run(serve(settings))


if __name__ == "__main__":
    main()
