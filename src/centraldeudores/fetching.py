# src/centraldeudores/fetching.py
"""
HTTP fetching utilities for centraldeudores.

This module provides a small fetcher for the BCRA registry API:
- Adds a descriptive User-Agent and a JSON Accept header
- Enforces a timeout boundary on every request
- Maps every failure to a DebtorLookupError with a classified kind

One request per call; there is no retry or backoff.
"""

from __future__ import annotations

import http.client
import logging
import os
import socket
import ssl
from dataclasses import dataclass
from typing import Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from centraldeudores.errors import (
    DebtorLookupError,
    LookupErrorKind,
    classify_http_status,
    decode_error_messages,
)


DEFAULT_BASE_URL = "https://api.bcra.gob.ar/CentralDeDeudores/v1.0"
_DEFAULT_USER_AGENT = "centraldeudores"


@dataclass(frozen=True)
class FetcherConfig:
    """
    Configuration for URLFetcher.

    Parameters
    ----------
    base_url:
        Root of the registry API, without trailing slash.
    timeout_sec:
        Timeout applied to connecting and reading. Exceeding it is a TIMEOUT error.
    user_agent:
        User-Agent header. If None, URLFetcher tries the
        CENTRALDEUDORES_USER_AGENT environment variable, then a default.
    ssl_context:
        Optional SSL context. If None, uses the default verified context.
    """

    base_url: str = DEFAULT_BASE_URL
    timeout_sec: float = 15.0
    user_agent: Optional[str] = None
    ssl_context: Optional[ssl.SSLContext] = None


def _is_timeout(reason: object) -> bool:
    return isinstance(reason, (socket.timeout, TimeoutError)) or "timed out" in str(reason)


class URLFetcher:
    """
    A small HTTP GET client with registry-specific error classification.
    """

    def __init__(self, logger: logging.Logger, config: Optional[FetcherConfig] = None):
        self._logger = logger
        self._config = config or FetcherConfig()
        self._user_agent = self._resolve_user_agent(self._config.user_agent)

    @property
    def base_url(self) -> str:
        return self._config.base_url.rstrip("/")

    def _resolve_user_agent(self, user_agent: Optional[str]) -> str:
        """
        Resolve the User-Agent.

        Resolution order:
        1) Explicit parameter
        2) CENTRALDEUDORES_USER_AGENT environment variable
        3) Package default
        """
        if user_agent and user_agent.strip():
            return user_agent.strip()

        val = os.getenv("CENTRALDEUDORES_USER_AGENT")
        if val and val.strip():
            return val.strip()

        return _DEFAULT_USER_AGENT

    def _open(self, req: Request):
        if self._config.ssl_context is not None:
            return urlopen(req, timeout=self._config.timeout_sec, context=self._config.ssl_context)
        return urlopen(req, timeout=self._config.timeout_sec)

    def fetch(self, url: str) -> bytes:
        """
        Fetch the body of `url`.

        Returns
        -------
        bytes
            Raw response body.

        Raises
        ------
        DebtorLookupError
            Classified by HTTP status, timeout or connectivity failure; FAILED
            for anything else (truncated body, protocol error, malformed URL).
        """
        try:
            req = Request(url)
            req.add_header("User-Agent", self._user_agent)
            req.add_header("Accept", "application/json")
            with self._open(req) as resp:
                return resp.read()
        except HTTPError as e:
            body = e.fp.read() if e.fp is not None else b""
            kind = classify_http_status(e.code)
            self._logger.warning(f"Registry answered HTTP {e.code} for {url}")
            raise DebtorLookupError(
                kind,
                status=e.code,
                upstream_messages=decode_error_messages(body),
            ) from e
        except URLError as e:
            kind = LookupErrorKind.TIMEOUT if _is_timeout(e.reason) else LookupErrorKind.OFFLINE
            self._logger.warning(f"Failed to fetch {url}: {e.reason}")
            raise DebtorLookupError(kind) from e
        except (socket.timeout, TimeoutError) as e:
            self._logger.warning(f"Timed out fetching {url}")
            raise DebtorLookupError(LookupErrorKind.TIMEOUT) from e
        except OSError as e:
            self._logger.warning(f"Failed to fetch {url}: {e}")
            raise DebtorLookupError(LookupErrorKind.OFFLINE) from e
        except (http.client.HTTPException, ValueError) as e:
            self._logger.warning(f"Failed to fetch {url}: {e!r}")
            raise DebtorLookupError(LookupErrorKind.FAILED) from e
