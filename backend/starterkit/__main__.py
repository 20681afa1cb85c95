"""Command-line interface for the StarterKit backend."""

from __future__ import annotations

import argparse
import logging
import signal
import sys
from typing import Sequence

import uvicorn

from starterkit.config import Settings, get_settings

logger = logging.getLogger("starterkit.cli")

KNOWN_COMMANDS = {"serve", "dev-proxy"}


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="StarterKit backend utilities")
    subparsers = parser.add_subparsers(dest="command")

    parser.set_defaults(command="serve")

    serve_parser = subparsers.add_parser("serve", help="Start the API server")
    serve_parser.add_argument("--host", default=None, help="Bind address (default: HOST or 0.0.0.0)")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port for the API (default: PORT or 3000)",
    )

    proxy_parser = subparsers.add_parser(
        "dev-proxy", help="Start the development proxy in front of the API"
    )
    proxy_parser.add_argument("--host", default="127.0.0.1", help="Bind address for the proxy")
    proxy_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port for the proxy (default: dev server port from the build config)",
    )
    proxy_parser.add_argument(
        "--root",
        default=None,
        help="Directory served for non-proxied paths, with index.html fallback",
    )
    proxy_parser.add_argument(
        "--config",
        default=None,
        help="JSON file overriding the frontend build configuration",
    )

    args_list = list(argv) if argv is not None else sys.argv[1:]

    if not args_list:
        args_list = ["serve"]
    elif args_list[0] not in KNOWN_COMMANDS and args_list[0] not in ("-h", "--help"):
        args_list = ["serve", *args_list]

    return parser.parse_args(args_list)


class _Server(uvicorn.Server):
    """uvicorn server that stops without waiting for open connections."""

    def handle_exit(self, sig: int, frame) -> None:
        logger.info("%s received, shutting down", signal.Signals(sig).name)
        self.force_exit = True
        super().handle_exit(sig, frame)


def _exit_on_signal(sig: int, frame) -> None:
    sys.exit(0)


def _run(app, host: str, port: int, log_level: str) -> None:
    for sig in (signal.SIGTERM, signal.SIGINT):
        signal.signal(sig, _exit_on_signal)

    config = uvicorn.Config(app, host=host, port=port, log_level=log_level.lower())
    _Server(config).run()


def _serve(settings: Settings, host: str | None, port: int | None) -> None:
    from starterkit.main import create_app

    overrides = {}
    if host is not None:
        overrides["host"] = host
    if port is not None:
        overrides["port"] = port
    if overrides:
        settings = settings.model_copy(update=overrides)

    app = create_app(settings)
    _run(app, settings.host, settings.port, settings.log_level)


def _dev_proxy(
    settings: Settings,
    host: str,
    port: int | None,
    root: str | None,
    config_path: str | None,
) -> None:
    from starterkit.build_config import load_build_config
    from starterkit.dev_proxy import create_dev_proxy_app

    build_config = load_build_config(config_path)
    app = create_dev_proxy_app(build_config, static_root=root)
    _run(app, host, port or build_config.dev_server.port, settings.log_level)


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    settings = get_settings()

    logging.basicConfig(
        level=settings.log_level_number,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.command == "dev-proxy":
        _dev_proxy(settings, args.host, args.port, args.root, args.config)
    else:
        _serve(settings, args.host, args.port)


if __name__ == "__main__":
    main()
