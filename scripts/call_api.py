"""
Usage:
    python -m scripts.call_api /services/data/v59.0/limits
    python -m scripts.call_api /sobjects/Account --method POST --data '{"Name": "Acme"}'

Reads API_BASE_URL / API_TOKEN from the environment (or .env).
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import TYPE_CHECKING, Any

import httpx
from rich.console import Console
from rich.panel import Panel
from rich.pretty import Pretty

from config.settings import Settings, get_settings
from observability.logger import setup_logging
from observability.metrics import MetricsCollector
from rest.errors import AuthenticationError
from rest.executor import APIExecutor
from schemas.requests import ApiRequest, HttpVerb

if TYPE_CHECKING:
    from protocols.http_client import HttpClient


def build_client(settings: Settings) -> httpx.Client:
    return httpx.Client(
        timeout=settings.request_timeout_seconds,
        verify=settings.verify_ssl,
    )


def run(
    path: str,
    *,
    method: str = "GET",
    data: str | None = None,
    settings: Settings | None = None,
    client: HttpClient | None = None,
    console: Console | None = None,
) -> int:
    """Execute one call and print the outcome. Returns the process exit code."""
    settings = settings or get_settings()
    console = console or Console()
    client = client or build_client(settings)

    metrics = MetricsCollector()
    executor: APIExecutor[Any] = APIExecutor(
        Any,
        settings.api_token,
        metrics=metrics,
        context_chars=settings.decode_context_chars,
    )
    request = ApiRequest(
        method=HttpVerb(method.upper()),
        url=settings.url_for(path),
        json_body=json.loads(data) if data else None,
    )

    try:
        value = executor.execute(client, request)
    except AuthenticationError as exc:
        detail = f"[bold]{exc.error}[/bold]\n{exc.error_description or ''}" if exc.error else exc.raw_body
        console.print(
            Panel(
                detail or "[dim]empty body[/dim]",
                title=f"HTTP {executor.http_result_code}: authentication failed",
                border_style="red",
            )
        )
        return 1

    console.print(f"[bold green]HTTP {executor.http_result_code}[/bold green] {request.method.value} {request.url}")
    if value is None:
        console.print("[dim]No decoded content[/dim]")
    else:
        console.print(Pretty(value))
    console.print(f"[dim]{metrics.summary()}[/dim]")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Execute one bearer-authenticated REST call")
    parser.add_argument("path", help="API path (joined to API_BASE_URL) or absolute URL")
    parser.add_argument("--method", default="GET", choices=[v.value for v in HttpVerb])
    parser.add_argument("--data", default=None, help="JSON request body")
    args = parser.parse_args(argv)

    settings = get_settings()
    setup_logging(level=settings.log_level, fmt=settings.log_format)
    return run(args.path, method=args.method, data=args.data, settings=settings)


if __name__ == "__main__":
    sys.exit(main())
