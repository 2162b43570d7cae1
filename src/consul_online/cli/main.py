# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""consul-online CLI."""

from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from typing import Any

from ..config import WaitSettings, load_wait_settings
from ..errors import ConfigError
from ..log import normalize_log_level, setup_logging
from ..models import RunResult
from ..runtime import run
from ..version import __version__
from ..wait.report import EXIT_INIT_ERROR, emit_outcome, report_outcome


def _positive_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not a number: {value}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value}")
    return parsed


def _log_level(value: str) -> str:
    level = normalize_log_level(value)
    if level is None:
        raise argparse.ArgumentTypeError(f"unknown log level: {value}")
    return level


class _ArgumentParser(argparse.ArgumentParser):
    """Usage errors exit with the initialization-failure status."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(EXIT_INIT_ERROR, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="consul-online",
        description="Wait until a consul agent is reachable and the cluster has elected a leader.",
        epilog="Exit status: 0 online, 1 initialization failed, 2 timed out, 3 connection failed.",
    )
    parser.add_argument(
        "address",
        nargs="?",
        help='Address of the consul agent, e.g. "127.0.0.1:8500", "https://localhost:8501" (default: CONSUL_HTTP_ADDR or localhost:8500)',
    )
    parser.add_argument(
        "-l",
        "--log-level",
        type=_log_level,
        help="Application log level: trace, debug, info, warn, error, off (default: CONSUL_ONLINE_LOG or warn)",
    )
    parser.add_argument("--tls", action="store_true", help="Force a TLS connection (also CONSUL_HTTP_SSL=true)")
    parser.add_argument(
        "-t",
        "--timeout",
        type=_positive_float,
        help="Global timeout in seconds. Without --reconnect the last request may run past it.",
    )
    parser.add_argument("-i", "--interval", type=_positive_float, help="Polling interval in seconds (default: 1)")
    parser.add_argument("-r", "--reconnect", action="store_true", help="Do not treat connection failures as exit conditions")
    parser.add_argument(
        "--skip-verify",
        action="store_true",
        help="Skip server certificate validation. Dangerous; prefer --ca-cert (also CONSUL_HTTP_SSL_VERIFY=false)",
    )
    parser.add_argument("--ca-cert", help="CA certificate file (also CONSUL_CACERT)")
    parser.add_argument("--client-cert", help="Client certificate file (also CONSUL_CLIENT_CERT)")
    parser.add_argument("--client-key", help="Client key file (also CONSUL_CLIENT_KEY)")
    parser.add_argument("--http-token", help="Access token, needs operator:read (also CONSUL_HTTP_TOKEN)")
    parser.add_argument(
        "--http-token-file",
        help="File holding the access token; wins over --http-token (also CONSUL_HTTP_TOKEN_FILE)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def settings_from_args(args: argparse.Namespace, base: WaitSettings | None = None) -> WaitSettings:
    """Overlay command line values on environment-derived settings."""
    settings = base or load_wait_settings()
    overrides: dict[str, Any] = {
        "timeout": args.timeout,
        "interval": args.interval,
        "reconnect": bool(args.reconnect),
        "force_tls": bool(args.tls) or settings.force_tls,
        "skip_verify": bool(args.skip_verify) or settings.skip_verify,
    }
    for name in ("address", "ca_cert", "client_cert", "client_key", "http_token", "http_token_file"):
        value = getattr(args, name)
        if value is not None:
            overrides[name] = value
    return replace(settings, **overrides)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    try:
        settings = settings_from_args(args)
    except ConfigError as exc:
        result = RunResult.init_error(str(exc))
    else:
        result = run(settings)

    return emit_outcome(report_outcome(result))


if __name__ == "__main__":
    raise SystemExit(main())
