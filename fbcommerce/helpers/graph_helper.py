"""Graph API request building for fbcommerce."""
# -----------------------------------------------------------------------------
# fbcommerce - Graph API client for commerce catalogs and pixel events
# https://pypi.org/project/fbcommerce
#
# Copyright (c) 2025 sh0rch
# Licensed under the MIT License: https://opensource.org/licenses/MIT
# -----------------------------------------------------------------------------

import json
from typing import Iterable, NamedTuple, Optional
from urllib.parse import quote, urlencode

GRAPH_HOST = "graph.facebook.com"
API_VERSION = "v12.0"
METHODS = ("GET", "POST", "DELETE", "PUT")
SCALAR_TYPES = (str, int, float, bool)


class Request(NamedTuple):
    """A fully prepared Graph API request."""

    method: str
    url: str
    headers: dict
    body: Optional[dict] = None


def get_auth_headers(token: str, extra_headers: dict = None) -> dict:
    """Forms headers for authorization."""
    headers = {}
    if extra_headers:
        headers.update(extra_headers)
    headers.update({
        "Authorization": f"Bearer {token}",
        "Accept": "application/json"
    })
    return headers


def build_path(template: str, **path_params) -> str:
    """Fill a path template like ``{user_id}/permissions/{permission}``."""
    quoted = {k: quote(str(v), safe="") for k, v in path_params.items()}
    return template.format(**quoted).lstrip("/")


def build_url(path: str, version: str = API_VERSION,
              host: str = GRAPH_HOST, params: dict = None) -> str:
    """Build an absolute Graph API URL."""
    url = f"https://{host}/{version}/{path.lstrip('/')}"
    if params:
        url = f"{url}?{urlencode(params, safe=',')}"
    return url


def encode_body(body: dict, json_fields: Iterable[str] = ()) -> dict:
    """Prepare a request body, JSON-encoding only the named fields.

    The items batch endpoint takes a plain key/value form whose ``requests``
    field must be a JSON string. Every other field is kept as given.
    """
    encoded = dict(body)
    for key in json_fields:
        if key in encoded and not isinstance(encoded[key], SCALAR_TYPES):
            encoded[key] = json.dumps(encoded[key], separators=(",", ":"))
    return encoded


def build_request(method: str, path: str, token: str,
                  version: str = API_VERSION, host: str = GRAPH_HOST,
                  params: dict = None, body: dict = None,
                  json_fields: Iterable[str] = ()) -> Request:
    """Compose method, URL, headers and body of a Graph API request."""
    method = method.upper()
    if method not in METHODS:
        raise ValueError(f"Unsupported method: {method}")

    return Request(
        method=method,
        url=build_url(path, version, host, params),
        headers=get_auth_headers(token),
        body=encode_body(body, json_fields) if body is not None else None,
    )
