import json

import pytest

from fbcommerce.helpers.graph_helper import (
    build_path,
    build_request,
    build_url,
    encode_body,
    get_auth_headers,
)


def test_auth_header_cannot_be_overridden():
    headers = get_auth_headers("secret", {"Authorization": "Bearer other",
                                          "X-Test": "1"})

    assert headers["Authorization"] == "Bearer secret"
    assert headers["X-Test"] == "1"


def test_build_url_without_params():
    assert build_url("me") == "https://graph.facebook.com/v12.0/me"


def test_build_url_keeps_commas_in_fields():
    url = build_url("/123", version="v13.0", params={"fields": "name,link"})

    assert url == "https://graph.facebook.com/v13.0/123?fields=name,link"


def test_build_path_quotes_segments():
    path = build_path("{user_id}/permissions/{permission}",
                      user_id="1/2", permission="ads read")

    assert path == "1%2F2/permissions/ads%20read"


def test_encode_body_serializes_only_named_fields():
    requests = [{"method": "DELETE", "data": {"id": "woo_1"}}]
    extra = {"tags": ["a"]}

    body = encode_body({
        "allow_upsert": False,
        "requests": requests,
        "item_type": "PRODUCT_ITEM",
        "retailer": None,
        "extra": extra,
    }, json_fields=("requests",))

    assert body == {
        "allow_upsert": False,
        "requests": '[{"method":"DELETE","data":{"id":"woo_1"}}]',
        "item_type": "PRODUCT_ITEM",
        "retailer": None,
        "extra": extra,
    }
    assert json.loads(body["requests"]) == requests


def test_encode_body_keeps_payload_as_given_without_json_fields():
    payload = {"data": [{"event_name": "Purchase"}], "partner_agent": "wc-1-2",
               "upload_tag": None}

    assert encode_body(payload) == payload
    assert encode_body(payload) is not payload


def test_build_request_encodes_requests_field_only():
    request = build_request("post", "1/items_batch", "token",
                            body={"requests": [{"method": "UPDATE"}],
                                  "allow_upsert": True},
                            json_fields=("requests",))

    assert request.body == {"requests": '[{"method":"UPDATE"}]',
                            "allow_upsert": True}


def test_build_request_get_has_no_body():
    request = build_request("get", "me", "token")

    assert request.method == "GET"
    assert request.body is None
    assert request.headers["Authorization"] == "Bearer token"


def test_build_request_rejects_unknown_method():
    with pytest.raises(ValueError):
        build_request("PATCH", "me", "token")
