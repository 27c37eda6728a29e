from datetime import datetime, timezone

import pytest

from lemonsqueezy.response import (
    ApiError,
    Document,
    DocumentList,
    JsonApi,
    Link,
    RelationshipLinks,
    ResourceData,
    Response,
    SelfLink,
    parse_time,
)

BASE = "https://api.example.com/v1/subscription-items/1"


def _item(item_id="1"):
    return {
        "type": "subscription-items",
        "id": item_id,
        "attributes": {"quantity": 1},
        "relationships": {
            "price": {"links": {"related": BASE + "/price", "self": BASE + "/relationships/price"}}
        },
        "links": {"self": BASE},
    }


def test_parse_time_utc_with_fraction():
    assert parse_time("2023-07-18T12:16:24.000000Z") == datetime(
        2023, 7, 18, 12, 16, 24, tzinfo=timezone.utc
    )


def test_parse_time_without_fraction():
    assert parse_time("2022-11-12T00:00:00Z") == datetime(2022, 11, 12, tzinfo=timezone.utc)


def test_parse_time_with_offset_is_same_instant():
    assert parse_time("2023-01-01T10:00:00+02:00") == parse_time("2023-01-01T08:00:00Z")


def test_parse_time_none():
    assert parse_time(None) is None


def test_parse_time_invalid():
    with pytest.raises(ValueError):
        parse_time("yesterday")


@pytest.mark.parametrize("status", [200, 201, 202, 204, 205])
def test_success_statuses_do_not_raise(status):
    response = Response(status_code=status, body=b"{}")
    assert response.raise_for_status() is response


def test_error_status_raises_with_message():
    response = Response(status_code=500, body=b"boom")
    with pytest.raises(ApiError) as info:
        response.raise_for_status()
    assert info.value.status_code == 500
    assert info.value.response is response
    assert str(info.value) == "500: Internal Server Error, Body: boom"


def test_unknown_status_has_empty_text():
    with pytest.raises(ApiError) as info:
        Response(status_code=599, body=b"x").raise_for_status()
    assert str(info.value) == "599: , Body: x"


def test_link_round_trip():
    link = Link.from_dict({"related": "r", "self": "s"})
    assert (link.related, link.self_url) == ("r", "s")
    assert SelfLink.from_dict({"self": "s"}).self_url == "s"
    assert RelationshipLinks.from_dict({"links": {"self": "s"}}).links.self_url == "s"
    assert JsonApi.from_dict({"version": "1.0"}).version == "1.0"


def test_missing_links_give_empty_strings():
    assert Link.from_dict(None) == Link("", "")


def test_document_from_dict():
    payload = {"jsonapi": {"version": "1.0"}, "links": {"self": BASE}, "data": _item()}
    doc = Document.from_dict(payload, dict, lambda rel: RelationshipLinks.from_dict(rel["price"]))
    assert doc.jsonapi.version == "1.0"
    assert doc.links.self_url == BASE
    assert doc.data.id == "1"
    assert doc.data.type == "subscription-items"
    assert doc.data.attributes == {"quantity": 1}
    assert doc.data.relationships.links.related == BASE + "/price"
    assert doc.data.links.self_url == BASE


def test_resource_without_relationships():
    data = ResourceData.from_dict(_item(), dict)
    assert data.relationships is None


def test_document_rejects_non_object():
    with pytest.raises(TypeError):
        Document.from_dict([1, 2], dict)


def test_document_list_from_dict():
    payload = {
        "jsonapi": {"version": "1.0"},
        "meta": {"page": {"total": 2}},
        "links": {"first": "f"},
        "data": [_item("1"), _item("2")],
    }
    docs = DocumentList.from_dict(payload, dict)
    assert [item.id for item in docs.data] == ["1", "2"]
    assert docs.meta == {"page": {"total": 2}}
    assert docs.links == {"first": "f"}


def test_document_list_empty():
    assert DocumentList.from_dict({}, dict).data == []