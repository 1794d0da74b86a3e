"""Default httpx transport for Graph API requests."""
# -----------------------------------------------------------------------------
# fbcommerce - Graph API client for commerce catalogs and pixel events
# https://pypi.org/project/fbcommerce
#
# Copyright (c) 2025 sh0rch
# Licensed under the MIT License: https://opensource.org/licenses/MIT
# -----------------------------------------------------------------------------

import logging
import os

import httpx

from fbcommerce.core.response import RawResponse
from fbcommerce.errors import TransportFailure
from fbcommerce.utils import mask_headers

DEFAULT_TIMEOUT = 10.0
FORM_TYPES = (str, int, float, bool, type(None))


def get_httpx_proxies() -> str | None:
    """Return proxy URL if HTTPS_PROXY is set."""
    proxy_url = os.getenv("HTTPS_PROXY") or os.getenv("https_proxy")
    if proxy_url:
        return proxy_url
    return None


def get_error_code(exc: Exception) -> int | None:
    """Dig an errno out of an httpx exception chain."""
    while exc is not None:
        errno = getattr(exc, "errno", None)
        if isinstance(errno, int):
            return errno
        exc = exc.__cause__ or exc.__context__
    return None


def get_body_kwargs(body: dict | None) -> dict:
    """Send flat bodies as a form and nested ones as JSON."""
    if not body:
        return {}
    if all(isinstance(v, FORM_TYPES) for v in body.values()):
        return {"data": body}
    return {"json": body}


class HttpxTransport:
    """Send prepared requests with httpx.AsyncClient."""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT,
                 proxy: str | None = None):
        self.timeout = timeout
        self.proxy = proxy or get_httpx_proxies()

    async def __call__(self, method: str, url: str, headers: dict,
                       body: dict | None = None) -> RawResponse:
        logging.debug(f"{method} {url} headers={mask_headers(headers)}")
        try:
            async with httpx.AsyncClient(
                proxy=self.proxy,
                timeout=self.timeout
            ) as client:
                response = await client.request(
                    method, url, headers=headers, **get_body_kwargs(body))
        except httpx.RequestError as e:
            logging.error(
                f"Graph API request error: {type(e).__name__}: {e}")
            raise TransportFailure(str(e) or type(e).__name__,
                                   get_error_code(e)) from e

        logging.debug(f"{method} {url} - [{response.status_code}]")
        logging.debug(f"Response: {response.text[:200]}...")
        return RawResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.text,
        )
