"""Pixel events and their normalization for the Conversions API."""
# -----------------------------------------------------------------------------
# fbcommerce - Graph API client for commerce catalogs and pixel events
# https://pypi.org/project/fbcommerce
#
# Copyright (c) 2025 sh0rch
# Licensed under the MIT License: https://opensource.org/licenses/MIT
# -----------------------------------------------------------------------------

import copy
import hashlib
import logging
import re
import time
import uuid
from typing import Iterable, Union

from fbcommerce.utils import is_sha256

PII_FIELDS = ("em", "fn", "ln", "ph", "ct", "st", "zp",
              "country", "external_id", "ge", "db")

RENAMED_USER_FIELDS = {
    "click_id": "fbc",
    "browser_id": "fbp",
}


def normalize_pii(field: str, value) -> str:
    """Normalize a PII value the way the Conversions API expects."""
    value = str(value).strip().lower()
    if field == "ph":
        value = re.sub(r"\D", "", value)
    elif field in ("ct", "fn", "ln"):
        value = re.sub(r"\s+", "", value)
    return value


def hash_pii(field: str, value):
    """Hash a PII value with SHA-256 unless it is already hashed."""
    if isinstance(value, list):
        return [hash_pii(field, v) for v in value]
    if value is None or value == "" or is_sha256(value):
        return value
    normalized = normalize_pii(field, value)
    return hashlib.sha256(normalized.encode("utf-8")).hexdigest()


class Event:
    """A server-side pixel event."""

    def __init__(self, data: dict = None):
        data = copy.deepcopy(data) if data else {}
        data.setdefault("action_source", "website")
        data.setdefault("event_time", int(time.time()))
        data.setdefault("event_id", str(uuid.uuid4()))
        data.setdefault("custom_data", {})
        data["user_data"] = self._prepare_user_data(data.get("user_data"))
        self._data = data

    @staticmethod
    def _prepare_user_data(user_data: dict) -> dict:
        user_data = dict(user_data or {})
        for field in PII_FIELDS:
            if field in user_data:
                user_data[field] = hash_pii(field, user_data[field])
        return user_data

    def get_data(self) -> dict:
        return copy.deepcopy(self._data)

    def get_id(self) -> str:
        return self._data["event_id"]

    def get_name(self) -> str:
        return self._data.get("event_name", "")

    def get_user_data(self) -> dict:
        return copy.deepcopy(self._data["user_data"])

    def __repr__(self):
        return f"Event(name={self.get_name()!r}, id={self.get_id()!r})"


def normalize_event(event: Union[Event, dict]) -> dict:
    """Return a copy of the event ready to be sent.

    ``user_data.click_id`` and ``user_data.browser_id`` are renamed to
    ``fbc`` and ``fbp``. Everything else is copied as is and the
    given event is left untouched.
    """
    if isinstance(event, Event):
        data = event.get_data()
    else:
        data = copy.deepcopy(dict(event))

    user_data = data.get("user_data")
    if isinstance(user_data, dict):
        for old, new in RENAMED_USER_FIELDS.items():
            if old in user_data:
                user_data[new] = user_data.pop(old)
    return data


def build_pixel_payload(events: Iterable[Union[Event, dict]],
                        partner_agent: str) -> dict:
    """Build the outer payload of an events request."""
    data = [normalize_event(event) for event in events]
    logging.debug(f"Prepared {len(data)} pixel event(s) "
                  f"for partner agent {partner_agent}")
    return {
        "data": data,
        "partner_agent": str(partner_agent),
    }
