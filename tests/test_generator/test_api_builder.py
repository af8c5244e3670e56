"""Tests for derivekit.generator.api_builder -- endpoint registry to query callables."""

from __future__ import annotations

import asyncio
import inspect
from typing import Any

import pytest

from derivekit.exceptions import (
    DuplicateDerivedNameError,
    InvalidDescriptorError,
    InvalidKeyError,
    MethodNotFoundError,
)
from derivekit.generator import ApiBuilder, ApiObject, create_api
from derivekit.models import EndpointDescriptor, HTTPMethod, NamingRule


# ---------------------------------------------------------------------------
# Derived names and cardinality
# ---------------------------------------------------------------------------


class TestDerivedNames:
    def test_exposes_exactly_one_callable_per_endpoint(self, endpoints, transport) -> None:
        api = create_api(endpoints, transport)
        assert isinstance(api, ApiObject)
        assert list(api) == ["useGetPostQuery", "useUpdateUserQuery"]
        assert len(api) == len(endpoints)

    def test_single_endpoint_example(self, transport) -> None:
        api = create_api(
            {"getPost": {"url": "https://myapp.de/api/posts", "method": "GET"}},
            transport,
        )
        assert list(api) == ["useGetPostQuery"]

    def test_custom_naming_rule(self, endpoints, transport) -> None:
        api = ApiBuilder(NamingRule(prefix="fetch", capitalize=True)).build(endpoints, transport)
        assert set(api) == {"fetchGetPost", "fetchUpdateUser"}

    def test_empty_registry(self, transport) -> None:
        api = create_api({}, transport)
        assert len(api) == 0

    def test_dir_lists_derived_names(self, endpoints, transport) -> None:
        api = create_api(endpoints, transport)
        assert dir(api) == ["useGetPostQuery", "useUpdateUserQuery"]

    def test_repr(self, endpoints, transport) -> None:
        api = create_api(endpoints, transport)
        assert repr(api) == "ApiObject(useGetPostQuery, useUpdateUserQuery)"

    def test_callable_metadata(self, endpoints, transport) -> None:
        api = create_api(endpoints, transport)
        query = api.useGetPostQuery
        assert query.__name__ == "useGetPostQuery"
        assert query.endpoint == EndpointDescriptor(
            url="https://myapp.de/api/posts", method=HTTPMethod.GET
        )


# ---------------------------------------------------------------------------
# Invocation
# ---------------------------------------------------------------------------


class TestInvocation:
    def test_delegates_to_transport(self, endpoints, transport) -> None:
        api = create_api(endpoints, transport)
        result = api.useGetPostQuery()
        assert result == "ok"
        assert transport.calls == [("https://myapp.de/api/posts", "GET", None)]

    def test_post_endpoint(self, endpoints, transport) -> None:
        api = create_api(endpoints, transport)
        api.useUpdateUserQuery({"json": {"name": "Ada"}})
        assert transport.calls == [
            ("https://myapp.de/api/users", "POST", {"json": {"name": "Ada"}})
        ]

    def test_options_passed_through_unmodified(self, endpoints, transport) -> None:
        options = {"params": {"page": 2}, "timeout": 5, "custom": object()}
        api = create_api(endpoints, transport)
        api.useGetPostQuery(options)
        assert transport.calls[0][2] is options

    def test_no_io_at_build_time(self, endpoints, transport) -> None:
        create_api(endpoints, transport)
        assert transport.calls == []

    def test_repeated_calls_independent(self, endpoints, transport) -> None:
        api = create_api(endpoints, transport)
        api.useGetPostQuery()
        api.useGetPostQuery({"params": {"page": 3}})
        assert len(transport.calls) == 2

    def test_transport_errors_pass_through(self, endpoints) -> None:
        class Boom(Exception):
            pass

        class FailingTransport:
            def send(self, url: str, method: str, options: Any = None) -> Any:
                raise Boom("network down")

        api = create_api(endpoints, FailingTransport())
        with pytest.raises(Boom, match="network down"):
            api.useGetPostQuery()

    def test_async_transport_gives_coroutine_functions(self, endpoints, async_transport) -> None:
        api = create_api(endpoints, async_transport)
        assert inspect.iscoroutinefunction(api.useGetPostQuery)

        result = asyncio.run(api.useGetPostQuery({"params": {"page": 1}}))

        assert result == "ok"
        assert async_transport.calls == [
            ("https://myapp.de/api/posts", "GET", {"params": {"page": 1}})
        ]


# ---------------------------------------------------------------------------
# Lookup and immutability
# ---------------------------------------------------------------------------


class TestLookup:
    def test_undeclared_method_raises(self, endpoints, transport) -> None:
        api = create_api(endpoints, transport)
        with pytest.raises(MethodNotFoundError) as exc_info:
            api.useRemoveUserQuery()
        assert exc_info.value.method_name == "useRemoveUserQuery"
        assert "useGetPostQuery" in str(exc_info.value)

    def test_source_key_is_not_exposed(self, endpoints, transport) -> None:
        api = create_api(endpoints, transport)
        with pytest.raises(MethodNotFoundError):
            api.getPost

    def test_hasattr_is_false_for_undeclared(self, endpoints, transport) -> None:
        api = create_api(endpoints, transport)
        assert hasattr(api, "useGetPostQuery")
        assert not hasattr(api, "useRemoveUserQuery")

    def test_contains(self, endpoints, transport) -> None:
        api = create_api(endpoints, transport)
        assert "useGetPostQuery" in api
        assert "getPost" not in api

    def test_is_read_only(self, endpoints, transport) -> None:
        api = create_api(endpoints, transport)
        with pytest.raises(AttributeError):
            api.useGetPostQuery = lambda: None
        with pytest.raises(AttributeError):
            api.useExtraQuery = lambda: None
        with pytest.raises(AttributeError):
            del api.useGetPostQuery

    def test_registry_snapshot(self, endpoints, transport) -> None:
        api = create_api(endpoints, transport)
        endpoints["removeUser"] = {"url": "/api/users", "method": "POST"}
        endpoints["getPost"]["url"] = "https://elsewhere.example"
        assert "useRemoveUserQuery" not in api
        api.useGetPostQuery()
        assert transport.calls[0][0] == "https://myapp.de/api/posts"


# ---------------------------------------------------------------------------
# Build-time errors
# ---------------------------------------------------------------------------


class TestBuildErrors:
    def test_case_collision(self, transport) -> None:
        with pytest.raises(DuplicateDerivedNameError) as exc_info:
            create_api(
                {
                    "getPost": {"url": "/a", "method": "GET"},
                    "GetPost": {"url": "/b", "method": "GET"},
                },
                transport,
            )
        assert exc_info.value.keys == ("getPost", "GetPost")

    def test_empty_key(self, transport) -> None:
        with pytest.raises(InvalidKeyError):
            create_api({"": {"url": "/a", "method": "GET"}}, transport)

    def test_malformed_key(self, transport) -> None:
        with pytest.raises(InvalidKeyError):
            create_api({"get-post": {"url": "/a", "method": "GET"}}, transport)

    def test_unsupported_method(self, transport) -> None:
        with pytest.raises(InvalidDescriptorError, match="getPost"):
            create_api({"getPost": {"url": "/a", "method": "DELETE"}}, transport)

    def test_missing_url(self, transport) -> None:
        with pytest.raises(InvalidDescriptorError, match="url"):
            create_api({"getPost": {"method": "GET"}}, transport)

    def test_empty_url(self, transport) -> None:
        with pytest.raises(InvalidDescriptorError):
            create_api({"getPost": {"url": "", "method": "GET"}}, transport)

    def test_extra_descriptor_field(self, transport) -> None:
        with pytest.raises(InvalidDescriptorError):
            create_api({"getPost": {"url": "/a", "method": "GET", "verb": "x"}}, transport)

    def test_non_mapping_descriptor(self, transport) -> None:
        with pytest.raises(InvalidDescriptorError, match="mapping"):
            create_api({"getPost": "https://myapp.de/api/posts"}, transport)

    def test_lowercase_method_accepted(self, transport) -> None:
        api = create_api({"getPost": {"url": "/a", "method": "get"}}, transport)
        api.useGetPostQuery()
        assert transport.calls == [("/a", "GET", None)]

    def test_descriptor_instances_accepted(self, transport) -> None:
        descriptor = EndpointDescriptor(url="/a", method="POST")
        api = create_api({"createPost": descriptor}, transport)
        assert api.useCreatePostQuery.endpoint is descriptor

    def test_transport_without_send(self, endpoints) -> None:
        with pytest.raises(TypeError, match="send"):
            create_api(endpoints, object())
