import hashlib
import uuid

from fbcommerce.core.events import (
    Event,
    build_pixel_payload,
    hash_pii,
    normalize_event,
)

HASHED_EMAIL = "a95869aaee45119b0a46d9b3d5f2d788cc25995af4291fc0841afa71097004e3"


def sha256(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


def test_event_fills_defaults():
    event = Event({"event_name": "PageView"})
    data = event.get_data()

    assert data["action_source"] == "website"
    assert isinstance(data["event_time"], int)
    assert uuid.UUID(data["event_id"])
    assert data["custom_data"] == {}
    assert data["user_data"] == {}
    assert event.get_name() == "PageView"
    assert event.get_id() == data["event_id"]


def test_event_keeps_given_values():
    event = Event({"event_id": "abc", "event_time": 1652769366,
                   "action_source": "system_generated"})

    assert event.get_id() == "abc"
    assert event.get_data()["event_time"] == 1652769366
    assert event.get_data()["action_source"] == "system_generated"


def test_event_hashes_pii_once():
    event = Event({"user_data": {
        "em": "  John.Doe@Example.com ",
        "ph": "+1 (555) 010-2030",
        "external_id": ["42", HASHED_EMAIL],
        "client_ip_address": "172.20.0.1",
    }})
    user_data = event.get_user_data()

    assert user_data["em"] == sha256("john.doe@example.com")
    assert user_data["ph"] == sha256("15550102030")
    assert user_data["external_id"] == [sha256("42"), HASHED_EMAIL]
    assert user_data["client_ip_address"] == "172.20.0.1"


def test_hash_pii_skips_hashed_and_empty_values():
    assert hash_pii("em", HASHED_EMAIL) == HASHED_EMAIL
    assert hash_pii("em", "") == ""
    assert hash_pii("em", None) is None


def test_event_does_not_share_state_with_input():
    data = {"user_data": {"click_id": "fb.1.2.3"}, "custom_data": {"value": "1"}}
    event = Event(data)

    data["custom_data"]["value"] = "2"
    event.get_data()["custom_data"]["value"] = "3"

    assert event.get_data()["custom_data"]["value"] == "1"


def test_normalize_event_renames_click_and_browser_ids():
    event = {"event_name": "Purchase",
             "user_data": {"click_id": "fb.1.1.click", "browser_id": "fb.1.1.browser",
                           "em": HASHED_EMAIL}}

    normalized = normalize_event(event)

    assert normalized["user_data"] == {"fbc": "fb.1.1.click",
                                       "fbp": "fb.1.1.browser",
                                       "em": HASHED_EMAIL}
    assert event["user_data"]["click_id"] == "fb.1.1.click"
    assert "fbc" not in event["user_data"]


def test_normalize_event_without_identifiers():
    event = {"event_name": "ViewContent",
             "custom_data": {"content_ids": ["woo-belt_17"]},
             "user_data": {"client_user_agent": "Mozilla/5.0"}}

    assert normalize_event(event) == event


def test_build_pixel_payload():
    events = [Event({"event_name": "Purchase",
                     "user_data": {"browser_id": "fb.1.2.3"}}),
              {"event_name": "AddToCart"}]

    payload = build_pixel_payload(events, "woocommerce-6.5.1-2.6.13")

    assert payload["partner_agent"] == "woocommerce-6.5.1-2.6.13"
    assert [e["event_name"] for e in payload["data"]] == ["Purchase", "AddToCart"]
    assert payload["data"][0]["user_data"] == {"fbp": "fb.1.2.3"}
