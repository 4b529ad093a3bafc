# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""halclient CLI."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from ..client import HalClient
from ..config import HalClientSettings, load_settings
from ..errors import HalHttpRequestError
from ..http import HttpRequest
from ..log import setup_logging
from ..resources import ResourceObject
from ..result import HalResult

CLI_TEXT_TRUNCATION_BYTES = 4096

EXIT_OK = 0
EXIT_HTTP_ERROR = 1
EXIT_FAILURE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Fetch a HAL resource and show its state, links and embedded resources")
    parser.add_argument("url", help="Resource URL (relative URLs resolve against HALCLIENT_BASE_URL)")
    parser.add_argument(
        "-X",
        "--method",
        default="GET",
        type=str.upper,
        choices=["GET", "POST", "PUT", "DELETE"],
        help="HTTP method (default: GET)",
    )
    parser.add_argument("-d", "--data", help="JSON payload for POST/PUT")
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output the resource as HAL JSON instead of a summary",
    )
    parser.add_argument(
        "--ignore-ssl-errors",
        action="store_true",
        help="Skip TLS verification (useful for lab/self-signed servers)",
    )
    parser.add_argument("--max-redirects", type=int, help="Maximum redirect hops to follow")
    parser.add_argument("--log-level", help="Logging level (default: HALCLIENT_LOG_LEVEL or WARNING)")
    return parser


def _truncate_text_bytes(text: str, max_bytes: int) -> str:
    raw = text.encode("utf-8")
    if len(raw) <= max_bytes:
        return text
    suffix = "...[truncated]"
    keep = max_bytes - len(suffix.encode("utf-8"))
    if keep <= 0:
        return suffix[:max_bytes]
    return raw[:keep].decode("utf-8", errors="ignore") + suffix


def _truncate_for_cli(value: Any, *, max_bytes: int) -> Any:
    """Truncate long strings anywhere in a JSON-shaped value."""
    if isinstance(value, str):
        return _truncate_text_bytes(value, max_bytes)
    if isinstance(value, dict):
        return {k: _truncate_for_cli(v, max_bytes=max_bytes) for k, v in value.items()}
    if isinstance(value, list):
        return [_truncate_for_cli(v, max_bytes=max_bytes) for v in value]
    return value


def _print_json(resource: ResourceObject) -> None:
    json.dump(
        _truncate_for_cli(resource.to_dict(), max_bytes=CLI_TEXT_TRUNCATION_BYTES),
        sys.stdout,
        indent=2,
        sort_keys=True,
    )
    sys.stdout.write("\n")


def _pretty_print(resource: ResourceObject) -> None:
    if getattr(resource, "is_empty", False):
        print("(no content)")
        return
    print(f"State ({len(resource.state)}): {', '.join(sorted(resource.state)) or '-'}")
    if resource.links:
        print("Links:")
        for rel in sorted(resource.links):
            for link in resource.links[rel]:
                suffix = " (templated)" if link.templated else ""
                title = f" ({link.title})" if link.title else ""
                print(f"- {rel}: {link.href}{suffix}{title}")
    if resource.embedded:
        embedded = ", ".join(f"{rel}={len(items)}" for rel, items in sorted(resource.embedded.items()))
        print(f"Embedded: {embedded}")


def _show(resource: ResourceObject, as_json: bool) -> None:
    if as_json:
        _print_json(resource)
    else:
        _pretty_print(resource)


def _report(result: HalResult, as_json: bool) -> int:
    if result.resource is not None:
        _show(result.resource, as_json)
        return EXIT_OK

    error = result.error
    print(f"Error: {error}", file=sys.stderr)
    if isinstance(error, HalHttpRequestError):
        if error.resource is not None:
            _show(error.resource, as_json)
        return EXIT_HTTP_ERROR
    return EXIT_FAILURE


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level)

    payload: Any = None
    if args.data is not None:
        if args.method not in ("POST", "PUT"):
            parser.error("--data is only valid with POST or PUT")
        try:
            payload = json.loads(args.data)
        except json.JSONDecodeError as exc:
            parser.error(f"--data is not valid JSON: {exc.msg}")

    settings: HalClientSettings = load_settings()
    if args.ignore_ssl_errors:
        settings.verify_ssl = False
    if args.max_redirects is not None and args.max_redirects > 0:
        settings.max_redirects = args.max_redirects

    request = HttpRequest(url=args.url, method=args.method)
    if args.data is not None:
        request.json = payload

    with HalClient(settings=settings) as client:
        result = client.send(request)

    return _report(result, args.json)


if __name__ == "__main__":
    raise SystemExit(main())
