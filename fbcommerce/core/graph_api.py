"""Defines the Graph API client used for catalogs and pixel events."""
# -----------------------------------------------------------------------------
# fbcommerce - Graph API client for commerce catalogs and pixel events
# https://pypi.org/project/fbcommerce
#
# Copyright (c) 2025 sh0rch
# Licensed under the MIT License: https://opensource.org/licenses/MIT
# -----------------------------------------------------------------------------

import logging
from typing import Awaitable, Callable, Iterable, Optional, Union

from fbcommerce.config import get_config_value, get_partner_agent
from fbcommerce.core.events import Event, build_pixel_payload
from fbcommerce.core.response import RawResponse, decode_response, ensure_response
from fbcommerce.errors import TransportFailure
from fbcommerce.helpers.graph_helper import Request, build_path, build_request
from fbcommerce.helpers.transport import HttpxTransport

Transport = Callable[[str, str, dict, Optional[dict]],
                     Awaitable[Union[RawResponse, TransportFailure]]]
PixelEventFilter = Callable[[dict], dict]

BATCH_METHODS = ("CREATE", "UPDATE", "DELETE")
DEFAULT_ITEM_TYPE = "PRODUCT_ITEM"


class GraphAPI:
    """Graph API client for a single access token.

    Every operation builds one request, sends it through the transport and
    decodes the answer. Nothing is retried or cached.
    """

    def __init__(self, access_token: str,
                 transport: Optional[Transport] = None,
                 api_version: Optional[str] = None,
                 graph_host: Optional[str] = None,
                 partner_agent: Optional[str] = None,
                 pixel_event_filter: Optional[PixelEventFilter] = None):
        if not access_token:
            raise ValueError("Access token is required")
        self._access_token = access_token
        self.api_version = api_version or get_config_value("api_version")
        self.graph_host = graph_host or get_config_value("graph_host")
        self.partner_agent = partner_agent or get_partner_agent()
        self.transport = transport or HttpxTransport(
            timeout=get_config_value("timeout"),
            proxy=get_config_value("https_proxy"))
        self.pixel_event_filter = pixel_event_filter

    def set_pixel_event_filter(
            self, pixel_event_filter: Optional[PixelEventFilter]) -> None:
        """Set the callable that may rewrite pixel event payloads."""
        self.pixel_event_filter = pixel_event_filter

    def build(self, method: str, path: str, params: dict = None,
              body: dict = None, json_fields: tuple = ()) -> Request:
        return build_request(method, path, self._access_token,
                             version=self.api_version,
                             host=self.graph_host,
                             params=params, body=body,
                             json_fields=json_fields)

    async def send(self, request: Request) -> RawResponse:
        """Send a prepared request and make sure a response came back."""
        logging.debug(f"Calling Graph API {request.method} {request.url}")
        raw = await self.transport(request.method, request.url,
                                   request.headers, request.body)
        return ensure_response(raw)

    async def perform(self, method: str, path: str, params: dict = None,
                      body: dict = None, json_fields: tuple = ()) -> dict:
        request = self.build(method, path, params=params, body=body,
                             json_fields=json_fields)
        return decode_response(await self.send(request))

    async def is_product_catalog_valid(self, catalog_id: str) -> bool:
        """Check that the catalog answers with HTTP 200.

        Any other status means the catalog is invalid. A transport failure
        raises, since validity could not be determined at all.
        """
        path = build_path("{catalog_id}", catalog_id=catalog_id)
        response = await self.send(self.build("GET", path))
        valid = response.status_code == 200
        if not valid:
            logging.info(f"Catalog {catalog_id} is not valid "
                         f"[{response.status_code}]")
        return valid

    async def get_catalog(self, catalog_id: str) -> dict:
        path = build_path("{catalog_id}", catalog_id=catalog_id)
        return await self.perform("GET", path, params={"fields": "name"})

    async def get_user(self) -> dict:
        return await self.perform("GET", "me")

    async def revoke_user_permission(self, user_id: str,
                                     permission: str) -> dict:
        path = build_path("{user_id}/permissions/{permission}",
                          user_id=user_id, permission=permission)
        result = await self.perform("DELETE", path)
        if result.get("success"):
            logging.info(f"Revoked {permission} from user {user_id}")
        return result

    async def get_page(self, page_id: str) -> dict:
        path = build_path("{page_id}", page_id=page_id)
        return await self.perform("GET", path, params={"fields": "name,link"})

    async def get_business_manager(self, business_id: str) -> dict:
        path = build_path("{business_id}", business_id=business_id)
        return await self.perform("GET", path, params={"fields": "name,link"})

    async def get_installation_ids(self, external_business_id: str) -> dict:
        """Look up the Facebook Business Extension installation ids."""
        return await self.perform(
            "GET", "fbe_business/fbe_installs",
            params={"fbe_external_business_id": external_business_id})

    async def send_item_updates(self, catalog_id: str, items: dict) -> dict:
        """Send a batch of product item updates.

        ``items`` is the batch envelope: ``allow_upsert``, ``requests`` and
        ``item_type``. Returns the batch ``handles``.
        """
        if not isinstance(items, dict):
            raise ValueError("Items batch must be a dictionary")
        requests = items.get("requests")
        if not requests or not isinstance(requests, list):
            raise ValueError("Items batch must contain a list of requests")
        for idx, item in enumerate(requests):
            if not isinstance(item, dict):
                raise ValueError(f"requests[{idx}] must be a dictionary")
            if str(item.get("method", "")).upper() not in BATCH_METHODS:
                raise ValueError(f"requests[{idx}] has unsupported method: "
                                 f"{item.get('method')}")
            if not isinstance(item.get("data"), dict):
                raise ValueError(f"requests[{idx}] must contain 'data'")

        body = {
            "allow_upsert": items.get("allow_upsert", True),
            "requests": requests,
            "item_type": items.get("item_type", DEFAULT_ITEM_TYPE),
        }
        path = build_path("{catalog_id}/items_batch", catalog_id=catalog_id)
        result = await self.perform("POST", path, body=body,
                                   json_fields=("requests",))
        logging.info(f"Sent {len(requests)} item update(s) to catalog "
                     f"{catalog_id}, handles: {result.get('handles')}")
        return result

    async def get_batch_status(self, catalog_id: str, handle: str) -> dict:
        path = build_path("{catalog_id}/check_batch_request_status",
                          catalog_id=catalog_id)
        return await self.perform("GET", path, params={"handle": handle})

    async def send_pixel_events(self, pixel_id: str,
                                events: Iterable[Union[Event, dict]]) -> dict:
        """Send server-side pixel events.

        The payload goes through ``pixel_event_filter`` right before it is
        sent; whatever the filter returns is what goes over the wire.
        """
        payload = build_pixel_payload(events, self.partner_agent)
        if self.pixel_event_filter is not None:
            payload = self.pixel_event_filter(payload)
            if not isinstance(payload, dict):
                raise ValueError("Pixel event filter must return a dict")
            logging.debug("Pixel event payload passed through filter")

        path = build_path("{pixel_id}/events", pixel_id=pixel_id)
        result = await self.perform("POST", path, body=payload)
        logging.info(f"Pixel {pixel_id} received "
                     f"{result.get('events_received')} event(s)")
        return result
