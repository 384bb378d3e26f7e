"""Application entry point for hsconfig."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import tprint

import settings
from adapters.default_config import StaticDefaultConfigSource
from adapters.discovery import HttpDiscoveryClient
from core.controller import ServerConfigController
from core.models import ServerConfig

NAME = "HSCONFIG"
FONT = "tarty-1"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


def _build_handlers(config: dict, level: int) -> list[logging.Handler]:
    handlers: list[logging.Handler] = []
    # The TUI draws over stderr, so console output is opt-in.
    if config.get("console", False):
        handlers.append(logging.StreamHandler())

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/hsconfig.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.PROJECT_ROOT, path)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                path,
                maxBytes=int(file_cfg.get("max_bytes", 1024 * 1024)),
                backupCount=int(file_cfg.get("backup_count", 3)),
                encoding="utf-8",
            )
        )

    for handler in handlers:
        handler.setLevel(level)
    return handlers


def _configure_logging() -> None:
    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    level = getattr(logging, str(config.get("level", "INFO")).upper(), logging.INFO)
    handlers = _build_handlers(config, level)
    if not handlers:
        return

    logging.basicConfig(
        level=level,
        handlers=handlers,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _describe(config: ServerConfig) -> str:
    identity = config.is_url if config.identity_enabled else "(identity server disabled)"
    return f"homeserver: {config.hs_url} ({config.hs_name or 'unnamed'})\nidentity server: {identity}"


def _config() -> None:
    _print_banner()
    _configure_logging()
    from frontend.app import ServerConfigApp

    default_source = StaticDefaultConfigSource(settings.DEFAULT_SERVER_CONFIG)
    result = ServerConfigApp(
        server_config=default_source.get(),
        discovery=HttpDiscoveryClient(config=settings.VALIDATION),
        default_source=default_source,
        validation_config=settings.VALIDATION,
        form_config=settings.FORM,
    ).run()
    if result is None:
        print("No server selected.")
        return
    print(_describe(result))


async def _run_check(hs_url: str, is_url: str) -> tuple[Optional[ServerConfig], str]:
    default_source = StaticDefaultConfigSource(settings.DEFAULT_SERVER_CONFIG)
    controller = ServerConfigController(
        server_config=default_source.get(),
        discovery=HttpDiscoveryClient(config=settings.VALIDATION),
        default_source=default_source,
        on_server_config_change=lambda config: None,
        config=settings.VALIDATION,
    )
    result = await controller.validate_and_apply_server(hs_url, is_url)
    return result, controller.error_text


def _check(hs_url: str, is_url: str) -> None:
    _configure_logging()
    logger = logging.getLogger(__name__)
    logger.info("Checking homeserver %s", hs_url)

    result, error_text = asyncio.run(_run_check(hs_url, is_url))
    if result is None:
        print(f"error: {error_text}")
        raise SystemExit(1)
    print(_describe(result))


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="hsconfig")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("config", help="Launch the server picker TUI")
    check = subparsers.add_parser(
        "check",
        help="Validate a homeserver (and optional identity server) without the TUI.",
    )
    check.add_argument("hs_url", help="Homeserver URL, e.g. https://matrix.example.org")
    check.add_argument("is_url", nargs="?", default="", help="Identity server URL")

    args = parser.parse_args(argv)
    if args.command == "check":
        _check(args.hs_url, args.is_url)
        return
    _config()


if __name__ == "__main__":
    main()
