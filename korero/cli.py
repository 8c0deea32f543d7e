"""Command line for sending a single request.

Usage:
    # GET with query parameters
    korero GET https://api.example.com/items -p page=2 -p tag=new

    # POST a JSON body with a bearer token
    korero POST https://api.example.com/items --token abc --json '{"name": "x"}'

    # Show status line (-v) and response headers (-vv)
    korero GET https://api.example.com/items -vv

    # Only errors
    korero DELETE https://api.example.com/items/1 -q
"""

import json
import sys

import click
from pydantic import ValidationError

from .config import KoreroConfig
from .http import HTTPError, Method, RequestBuilder, decode_response, is_success
from .output import MinVerbosity, TerminalLogger, Verbosity
from .utils.logger import get_logger, reset_logging, setup_logging

logger = get_logger(__name__)


class StatusLine(MinVerbosity):
    """Status line of a response, shown from MEDIUM verbosity."""

    def __init__(self, status_code: int, reason: str, url: str):
        self.status_code = status_code
        self.reason = reason
        self.url = url

    def min_verbosity(self) -> Verbosity:
        return Verbosity.MEDIUM

    def __str__(self) -> str:
        return f"{self.status_code} {self.reason} {self.url}".strip()


def parse_param(value: str) -> tuple[str, str]:
    """Split ``key=value`` into a pair."""
    key, sep, val = value.partition("=")
    if not sep or not key:
        raise click.BadParameter(f"expected key=value, got {value!r}", param_hint="--param")
    return key, val


@click.command()
@click.argument(
    "method",
    type=click.Choice([m.value for m in Method], case_sensitive=False),
)
@click.argument("url")
@click.option(
    "--token", "-t",
    default=None,
    help="Bearer token sent in the Authorization header.",
)
@click.option(
    "--param", "-p", "params",
    multiple=True,
    help="Query parameter as key=value. Can be specified multiple times.",
)
@click.option(
    "--json", "body",
    default=None,
    help="JSON request body.",
)
@click.option(
    "--timeout",
    type=float,
    default=None,
    help="Request timeout in seconds.",
)
@click.option(
    "--attempts",
    type=int,
    default=1,
    help="Attempts on connection errors and timeouts.",
)
@click.option(
    "-v", "--verbose",
    count=True,
    help="Increase verbosity (-v status line, -vv headers and debug logs).",
)
@click.option(
    "-q", "--quiet",
    is_flag=True,
    help="Only print errors.",
)
@click.option(
    "--json-logs",
    is_flag=True,
    help="Output diagnostic logs as JSON.",
)
def main(
    method: str,
    url: str,
    token: str | None,
    params: tuple[str, ...],
    body: str | None,
    timeout: float | None,
    attempts: int,
    verbose: int,
    quiet: bool,
    json_logs: bool,
):
    """Send a METHOD request to URL and print the JSON response."""
    verbosity = Verbosity.from_flags(verbose, quiet)
    try:
        config = KoreroConfig(
            timeout=timeout,
            max_attempts=attempts,
            verbosity=verbosity,
            log_level=verbosity.log_level,
            json_logs=json_logs,
        )
    except ValidationError as e:
        raise click.UsageError(str(e)) from e

    setup_logging(log_level=config.log_level, json_logs=config.json_logs)
    try:
        send_request(config, method, url, token, params, body)
    finally:
        reset_logging()


def send_request(
    config: KoreroConfig,
    method: str,
    url: str,
    token: str | None,
    params: tuple[str, ...],
    body: str | None,
) -> None:
    """Build, send and print one request; exit with status 1 on HTTPError."""
    out = TerminalLogger(config.verbosity)

    pairs = [parse_param(p) for p in params]
    payload = None
    if body is not None:
        try:
            payload = json.loads(body)
        except ValueError as e:
            raise click.BadParameter(f"invalid JSON: {e}", param_hint="--json") from e

    try:
        with RequestBuilder(method, url, config=config) as req:
            if token:
                req.add_auth(token)
            if pairs:
                req.add_query(pairs)
            if body is not None:
                req.add_body(payload)

            response = req.send()
            out.print(StatusLine(response.status_code, response.reason or "", response.url))
            out.debug(dict(response.headers))

            if response.content or not is_success(response.status_code):
                out.info(decode_response(response))

    except HTTPError as e:
        logger.info("request_failed", error_type=type(e).__name__, error=str(e))
        out.error(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
