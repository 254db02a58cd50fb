"""Test request assembly before any network interaction.

'why': guarantee parameters land in exactly one location and omitted values vanish
"""
from __future__ import annotations

import json

from apicore import ApiRequestOptions, build_config
from apicore._request import build_cookie_header, build_form_data, build_request, iter_query


def _config(**overrides: object):
    settings: dict[str, object] = {"base_url": "http://localhost:3000/base/", "version": "1.0"}
    settings.update(overrides)
    return build_config(**settings)  # type: ignore[arg-type]


def test_path_template_substitutes_version_and_named_params() -> None:
    options = ApiRequestOptions(
        method="get",
        url="/api/v{api-version}/users/{userId}/files/{name}",
        path={"userId": 42, "name": "a b.txt"},
    )

    descriptor = build_request(options, _config())

    assert descriptor.method == "GET"
    assert descriptor.url == "http://localhost:3000/base/api/v1.0/users/42/files/a%20b.txt"


def test_unresolved_path_placeholder_is_left_in_place() -> None:
    options = ApiRequestOptions(method="GET", url="/items/{itemId}")

    descriptor = build_request(options, _config())

    assert descriptor.url.endswith("/items/{itemId}")


def test_custom_path_encoder_is_used() -> None:
    options = ApiRequestOptions(method="GET", url="/files/{name}", path={"name": "a/b"})

    descriptor = build_request(options, _config(encode_path=lambda value: value.replace("/", "%2F")))

    assert descriptor.url.endswith("/files/a%2Fb")


def test_query_omits_none_and_expands_sequences_and_mappings() -> None:
    pairs = list(
        iter_query(
            {
                "skip": None,
                "tag": ["a", "b"],
                "filter": {"name": "x", "age": {"gt": 3}},
                "flag": True,
                "limit": 10,
            }
        )
    )

    assert pairs == [
        ("tag", "a"),
        ("tag", "b"),
        ("filter[name]", "x"),
        ("filter[age][gt]", "3"),
        ("flag", "true"),
        ("limit", "10"),
    ]


def test_form_data_stringifies_fields_and_drops_missing() -> None:
    fields = build_form_data({"name": "x", "count": 3, "meta": {"k": "v"}, "tags": ["a", None, "b"], "skip": None})

    assert fields == {"name": ["x"], "count": ["3"], "meta": ['{"k":"v"}'], "tags": ["a", "b"]}


def test_form_data_absent_when_all_values_missing() -> None:
    assert build_form_data({"a": None}) is None
    assert build_form_data({}) is None


def test_form_parameters_take_precedence_over_body() -> None:
    options = ApiRequestOptions(
        method="POST",
        url="/submit",
        form_data={"field": "value"},
        body={"ignored": True},
        media_type="application/json",
    )

    descriptor = build_request(options, _config())

    assert descriptor.form_data == {"field": ["value"]}
    assert descriptor.content is None
    assert "Content-Type" not in descriptor.headers


def test_json_body_keeps_nested_structure() -> None:
    body = {"first": {"second": {"third": "Hello World!"}}}
    options = ApiRequestOptions(method="POST", url="/complex", body=body)

    descriptor = build_request(options, _config())

    assert descriptor.content is not None
    assert json.loads(descriptor.content) == body
    assert descriptor.headers["Content-Type"] == "application/json"


def test_body_content_type_follows_value_kind() -> None:
    text = build_request(ApiRequestOptions(method="POST", url="/t", body="hello"), _config())
    raw = build_request(ApiRequestOptions(method="POST", url="/b", body=b"\x00\x01"), _config())
    custom = build_request(
        ApiRequestOptions(method="POST", url="/c", body="<a/>", media_type="application/xml"), _config()
    )

    assert text.headers["Content-Type"] == "text/plain"
    assert text.content == b"hello"
    assert raw.headers["Content-Type"] == "application/octet-stream"
    assert custom.headers["Content-Type"] == "application/xml"


def test_headers_merge_in_order_and_drop_none() -> None:
    options = ApiRequestOptions(
        method="GET",
        url="/h",
        headers={"x-shared": "call", "X-Missing": None, "X-Count": 2},
        cookies={"session": "abc", "theme": None, "lang": "en"},
    )

    descriptor = build_request(
        options,
        _config(),
        authorization="Bearer t",
        client_headers={"X-Shared": "client", "X-Client": "yes"},
    )

    assert descriptor.headers == {
        "Accept": "application/json",
        "X-Client": "yes",
        "x-shared": "call",
        "X-Count": "2",
        "Cookie": "session=abc; lang=en",
        "Authorization": "Bearer t",
    }


def test_cookie_header_absent_without_values() -> None:
    assert build_cookie_header({"a": None}) is None
