"""HTTP transport for the Todoist REST API.

One call to :meth:`Transport.request` is one logical API call: it builds the
authenticated request, retries on HTTP 429 honoring ``Retry-After``, and turns
the final response into either the raw body or a classified exception.
"""
from __future__ import annotations

import json
import time
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Mapping, Optional
from urllib.parse import urlencode

import requests

from ..utils.logger import get_logger
from .cancel import CancelToken
from .errors import (
    APIError,
    AuthError,
    MarshalError,
    NetworkError,
    RateLimitedError,
    RequestCancelled,
    RetriesExceededError,
)

log = get_logger(__name__)

BASE_URL = "https://api.todoist.com/api/v1"
MAX_RETRIES = 3
REQUEST_TIMEOUT = 30.0
RATE_LIMIT_WAIT = 5.0


@dataclass(frozen=True)
class ClientConfig:
    token: str
    debug: bool = False
    base_url: str = BASE_URL
    timeout: float = REQUEST_TIMEOUT
    max_retries: int = MAX_RETRIES
    rate_limit_wait: float = RATE_LIMIT_WAIT


def parse_retry_after(value: Optional[str], fallback: float) -> float:
    """Seconds to wait from a Retry-After header; fallback when absent or not an integer."""
    if not value:
        return fallback
    try:
        return float(max(0, int(value.strip())))
    except ValueError:
        return fallback


def _status_text(code: int) -> str:
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return ""


class Transport:
    def __init__(self, config: ClientConfig, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session if session is not None else requests.Session()
        self.cancel_token = CancelToken()

    def close(self) -> None:
        self.cancel_token.cancel()
        self.session.close()

    def _trace(self, message: str, *args: Any) -> None:
        if self.config.debug:
            log.debug(message, *args)

    def _wait(self, seconds: float, cancel: CancelToken) -> None:
        if cancel.wait(seconds):
            raise RequestCancelled()

    def request(
        self,
        method: str,
        endpoint: str,
        data: Optional[Mapping[str, Any]] = None,
        cancel: Optional[CancelToken] = None,
    ) -> bytes:
        cancel = cancel if cancel is not None else self.cancel_token
        method = method.upper()
        url = f"{self.config.base_url}/{endpoint}"

        params = None
        body = None
        if data is not None:
            if method == "GET":
                params = {k: v for k, v in data.items() if v != ""} or None
            else:
                try:
                    body = json.dumps(data).encode("utf-8")
                except (TypeError, ValueError) as e:
                    raise MarshalError(f"failed to marshal request: {e}") from e

        headers = {
            "Authorization": f"Bearer {self.config.token}",
            "Content-Type": "application/json",
        }
        shown_url = f"{url}?{urlencode(params)}" if params else url

        last_error: Optional[RateLimitedError] = None
        for attempt in range(self.config.max_retries + 1):
            if last_error is not None:
                self._wait(last_error.retry_after, cancel)
            cancel.raise_if_cancelled()

            start = time.monotonic()
            try:
                resp = self.session.request(
                    method,
                    url,
                    params=params,
                    data=body,
                    headers=headers,
                    timeout=self.config.timeout,
                )
            except requests.RequestException as e:
                self._trace("%s %s -> error: %s (%.3fs)", method, shown_url, e, time.monotonic() - start)
                raise NetworkError(f"request failed: {e}") from e

            try:
                content = resp.content
            except requests.RequestException as e:
                raise NetworkError(f"failed to read response: {e}") from e
            finally:
                resp.close()

            status = resp.status_code
            self._trace(
                "%s %s -> %d %s (%.3fs)",
                method, shown_url, status, _status_text(status), time.monotonic() - start,
            )
            # an attempt that finished after cancellation is discarded
            cancel.raise_if_cancelled()

            text = content.decode("utf-8", errors="replace")
            if status == 429:
                wait = parse_retry_after(resp.headers.get("Retry-After"), self.config.rate_limit_wait)
                last_error = RateLimitedError(wait, text)
                if attempt < self.config.max_retries:
                    self._trace("rate limited, retrying in %gs", wait)
                    continue
                break

            if status >= 400:
                if status in (401, 403):
                    raise AuthError(
                        f"authentication failed: API error ({status}): {text}", status, text
                    )
                raise APIError.from_response(status, text)

            return content

        log.debug("giving up on %s %s after %d attempts", method, url, self.config.max_retries + 1)
        raise RetriesExceededError(last_error)
