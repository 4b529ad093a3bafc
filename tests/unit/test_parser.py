# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import json

import pytest

from halclient.errors import HalParseError
from halclient.parser import HalJsonParser

DOCUMENT = {
    "_links": {
        "self": {"href": "/orders"},
        "next": {"href": "/orders?page=2", "title": "Next page"},
        "find": {"href": "/orders{?id}", "templated": True},
        "ea:admin": [{"href": "/admins/2", "name": "fred"}, {"href": "/admins/5", "name": "kate"}],
    },
    "_embedded": {
        "ea:order": [
            {"_links": {"self": {"href": "/orders/123"}}, "total": 30.0, "status": "shipped"},
            {"_links": {"self": {"href": "/orders/124"}}, "total": 20.0, "status": "processing"},
        ],
        "ea:basket": {"_embedded": {"ea:item": {"sku": "X1"}}},
    },
    "currentlyProcessing": 14,
    "shippedToday": 20,
}


def test_parse_splits_links_embedded_and_state():
    result = HalJsonParser().parse(json.dumps(DOCUMENT))

    assert set(result.links) == {"self", "next", "find", "ea:admin"}
    assert result.links["next"][0].title == "Next page"
    assert result.links["next"][0].rel == "next"
    assert result.links["find"][0].templated is True
    assert [link.name for link in result.links["ea:admin"]] == ["fred", "kate"]

    orders = result.embedded["ea:order"]
    assert len(orders) == 2
    assert orders[0]["status"] == "shipped"
    assert orders[1].link("self").href == "/orders/124"

    basket = result.embedded["ea:basket"][0]
    assert basket.embedded_for("ea:item")[0]["sku"] == "X1"

    assert dict(result.state) == {"currentlyProcessing": 14, "shippedToday": 20}


def test_parse_plain_object_has_only_state():
    result = HalJsonParser().parse('{"message": "not found"}')
    assert dict(result.links) == {}
    assert dict(result.embedded) == {}
    assert dict(result.state) == {"message": "not found"}


@pytest.mark.parametrize(
    "text",
    [
        "",
        "{not json",
        "[1, 2]",
        '"just a string"',
        '{"_links": []}',
        '{"_links": {"self": {"title": "no href"}}}',
        '{"_links": {"self": "/orders"}}',
        '{"_embedded": {"item": [1]}}',
    ],
)
def test_parse_rejects_malformed_documents(text):
    with pytest.raises(HalParseError):
        HalJsonParser().parse(text)


def test_parse_error_chains_json_error():
    with pytest.raises(HalParseError) as excinfo:
        HalJsonParser().parse("{broken")
    assert isinstance(excinfo.value.__cause__, json.JSONDecodeError)
