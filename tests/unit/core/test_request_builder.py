"""
Tests for RequestBuilder and PreparedHTTPRequest.
"""

import json
from enum import Enum
from typing import Optional

import pytest
from pydantic import BaseModel, Field

from src.smart_http.core.auth import Authenticator
from src.smart_http.core.exceptions import ConfigurationError
from src.smart_http.core.request import HTTPClientRequest
from src.smart_http.core.request_builder import PreparedHTTPRequest, RequestBuilder, query_pairs


class SearchParams(BaseModel):
    page_size: int = Field(alias="PageSize")
    search: Optional[str] = None


class Status(str, Enum):
    ACTIVE = "active"


class TestBuildUrl:
    """Query parameters from endpoint_params."""

    def test_no_params_keeps_base_uri(self):
        prepared = RequestBuilder.build(HTTPClientRequest(base_uri="https://api.example.com/u?x=1"))
        assert prepared.url == "https://api.example.com/u?x=1"

    def test_mapping_params(self):
        request = HTTPClientRequest(
            base_uri="https://api.example.com/users",
            endpoint_params={"Page": 2, "Tags": ["a", "b"], "Filter": None, "Empty": ""},
        )
        assert RequestBuilder.build(request).url == \
            "https://api.example.com/users?page=2&tags=a&tags=b"

    def test_pydantic_params_use_alias(self):
        request = HTTPClientRequest(base_uri="/users", endpoint_params=SearchParams(PageSize=10))
        assert RequestBuilder.build(request).url == "/users?pageSize=10"

    def test_params_appended_before_fragment(self):
        request = HTTPClientRequest(base_uri="/users?sort=name#list", endpoint_params={"q": "a b"})
        assert RequestBuilder.build(request).url == "/users?sort=name&q=a%20b#list"

    def test_only_empty_params_keep_uri(self):
        request = HTTPClientRequest(base_uri="/users", endpoint_params={"q": None})
        assert RequestBuilder.build(request).url == "/users"

    def test_enum_values(self):
        assert query_pairs({"status": Status.ACTIVE}) == [("status", "active")]

    def test_invalid_params_type(self):
        with pytest.raises(ConfigurationError):
            query_pairs(["a", "b"])


class TestBuildHeaders:
    """Accept, caller headers, Authorization."""

    def test_accept_json_always_first(self):
        prepared = RequestBuilder.build(HTTPClientRequest(base_uri="/x"))
        assert prepared.headers == [("Accept", "application/json")]

    def test_caller_headers_are_additive(self):
        request = HTTPClientRequest(base_uri="/x", headers={"Accept": "text/csv", "X-Tag": "a"})
        prepared = RequestBuilder.build(request)

        assert prepared.headers == [
            ("Accept", "application/json"),
            ("Accept", "text/csv"),
            ("X-Tag", "a"),
        ]
        assert prepared.merged_headers() == {"Accept": "application/json, text/csv", "X-Tag": "a"}

    def test_authenticator_sets_single_authorization(self):
        request = HTTPClientRequest(
            base_uri="/x",
            headers={"authorization": "Custom abc"},
            authenticator=Authenticator.bearer("t"),
        )
        prepared = RequestBuilder.build(request)

        values = [v for k, v in prepared.headers if k.lower() == "authorization"]
        assert values == ["Bearer t"]

    def test_caller_authorization_kept_without_authenticator(self):
        request = HTTPClientRequest(base_uri="/x", headers={"Authorization": "Custom abc"})
        assert RequestBuilder.build(request).get_header("authorization") == "Custom abc"

    def test_none_authenticator_adds_nothing(self):
        request = HTTPClientRequest(base_uri="/x", authenticator=Authenticator.none())
        assert RequestBuilder.build(request).get_header("Authorization") is None

    def test_unknown_scheme_fails_build(self):
        request = HTTPClientRequest(base_uri="/x", authenticator=Authenticator(method="Digest"))
        with pytest.raises(ConfigurationError, match="Invalid authorization type."):
            RequestBuilder.build(request)


class TestBuildContent:
    """Request body."""

    def test_request_body_serialized_without_nulls(self):
        request = HTTPClientRequest(
            base_uri="/x", method="POST", request_body={"name": "alice", "email": None}
        )
        prepared = RequestBuilder.build(request)

        assert json.loads(prepared.content) == {"name": "alice"}
        assert prepared.get_header("Content-Type") == "application/json"

    def test_pydantic_body_uses_alias(self):
        request = HTTPClientRequest(base_uri="/x", method="POST", request_body=SearchParams(PageSize=5))
        assert json.loads(RequestBuilder.build(request).content) == {"PageSize": 5}

    def test_raw_content_verbatim(self):
        request = HTTPClientRequest(
            base_uri="/x", method="PUT", content="a,b\n1,2", content_type="text/csv"
        )
        prepared = RequestBuilder.build(request)

        assert prepared.content == b"a,b\n1,2"
        assert prepared.get_header("content-type") == "text/csv"

    def test_content_type_replaces_caller_value(self):
        request = HTTPClientRequest(
            base_uri="/x",
            method="POST",
            headers={"Content-Type": "text/plain"},
            request_body={"a": 1},
        )
        values = [v for k, v in RequestBuilder.build(request).headers if k.lower() == "content-type"]
        assert values == ["application/json"]

    def test_raw_content_without_type(self):
        prepared = RequestBuilder.build(HTTPClientRequest(base_uri="/x", content=b"\x00\x01"))
        assert prepared.content == b"\x00\x01"
        assert prepared.get_header("Content-Type") is None

    def test_no_body(self):
        assert RequestBuilder.build(HTTPClientRequest(base_uri="/x")).content is None

    def test_unserializable_body(self):
        request = HTTPClientRequest(base_uri="/x", method="POST", request_body=object())
        with pytest.raises(ConfigurationError):
            RequestBuilder.build(request)


class TestBuild:
    """build() contract."""

    def test_none_request_raises(self):
        with pytest.raises(ConfigurationError):
            RequestBuilder.build(None)

    def test_method_passed_through(self):
        prepared = RequestBuilder.build(HTTPClientRequest(base_uri="/x", method="delete"))
        assert prepared.method == "DELETE"

    def test_merged_headers_keep_first_spelling(self):
        prepared = PreparedHTTPRequest("GET", "/", [("X-Tag", "a"), ("x-tag", "b")])
        assert prepared.merged_headers() == {"X-Tag": "a, b"}
