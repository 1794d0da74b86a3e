"""Decoding of raw Graph API responses."""
# -----------------------------------------------------------------------------
# fbcommerce - Graph API client for commerce catalogs and pixel events
# https://pypi.org/project/fbcommerce
#
# Copyright (c) 2025 sh0rch
# Licensed under the MIT License: https://opensource.org/licenses/MIT
# -----------------------------------------------------------------------------

import json
import logging
from typing import NamedTuple, Optional, Union

from fbcommerce.errors import MalformedResponse, RemoteApiError, TransportFailure


class RawResponse(NamedTuple):
    """What a transport hands back after one HTTP exchange."""

    status_code: Optional[int]
    headers: Optional[dict] = None
    body: str = ""


def ensure_response(
        raw: Union[RawResponse, TransportFailure]) -> RawResponse:
    """Raise if the transport reported a failure instead of a response."""
    if isinstance(raw, TransportFailure):
        logging.warning(f"Graph API transport failure: [{raw.code}] "
                        f"{raw.message}")
        raise raw
    if raw is None or raw.status_code is None:
        logging.warning("Graph API transport returned no status code")
        raise TransportFailure()
    return raw


def decode_response(raw: Union[RawResponse, TransportFailure]) -> dict:
    """Turn a raw response into the decoded body or raise an ApiError."""
    raw = ensure_response(raw)

    if not raw.body or not raw.body.strip():
        logging.error(f"Graph API returned an empty body "
                      f"[{raw.status_code}]")
        raise MalformedResponse()

    try:
        data = json.loads(raw.body)
    except json.JSONDecodeError as e:
        logging.error(f"Graph API returned invalid JSON "
                      f"[{raw.status_code}]: {raw.body[:200]}")
        raise MalformedResponse(e.msg) from e

    if not isinstance(data, dict):
        logging.error(f"Graph API returned {type(data).__name__} "
                      "instead of an object")
        raise MalformedResponse("expected a JSON object")

    if "error" in data:
        error = RemoteApiError.from_body(data["error"])
        logging.error(f"Graph API error: [{error.code}"
                      f"{'/' + str(error.subcode) if error.subcode else ''}] "
                      f"{error.message}")
        raise error

    return data
