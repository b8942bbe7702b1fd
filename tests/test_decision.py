# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for the per-request CORS decision."""

from __future__ import annotations

from datetime import timedelta

import pytest

from flycors.adapters.memory import InMemoryExchange
from flycors.decision import (
    ACCESS_CONTROL_ALLOW_CREDENTIALS,
    ACCESS_CONTROL_ALLOW_HEADERS,
    ACCESS_CONTROL_ALLOW_METHODS,
    ACCESS_CONTROL_ALLOW_ORIGIN,
    ACCESS_CONTROL_MAX_AGE,
    DecisionKind,
    decide,
    has_include,
    has_match,
)
from flycors.kernel.exceptions import (
    HeadersNotAllowedException,
    MethodNotAllowedException,
    OriginNotAllowedException,
)
from flycors.policy import CorsPolicy, resolve_policy

DEFAULT = resolve_policy()


def _preflight(origin: str = "https://a.com", method: str | None = None, headers: str | None = None) -> InMemoryExchange:
    request_headers = {"Origin": origin}
    if method is not None:
        request_headers["Access-Control-Request-Method"] = method
    if headers is not None:
        request_headers["Access-Control-Request-Headers"] = headers
    return InMemoryExchange("OPTIONS", request_headers)


class TestHelpers:
    def test_has_match_is_exact(self):
        assert has_match(["GET", "POST"], "GET")
        assert not has_match(["GET", "POST"], "get")
        assert not has_match([], "GET")

    def test_has_include_subset(self):
        assert has_include(["X-A", "X-B", "X-C"], ["X-A", "X-B"])
        assert not has_include(["X-A"], ["X-A", "X-B"])
        assert has_include(["X-A"], [])

    def test_has_include_ignores_duplicates(self):
        assert has_include(["X-A"], ["X-A", "X-A"])


class TestNoOrigin:
    @pytest.mark.parametrize("method", ["GET", "POST", "OPTIONS"])
    def test_not_applicable(self, method):
        decision = decide(InMemoryExchange(method), DEFAULT)

        assert decision.kind is DecisionKind.NOT_APPLICABLE
        assert decision.headers == ()
        assert decision.error is None
        assert not decision.terminates

    def test_empty_origin_is_absent(self):
        decision = decide(InMemoryExchange("GET", {"Origin": ""}), DEFAULT)
        assert decision.kind is DecisionKind.NOT_APPLICABLE


class TestOriginValidation:
    def test_wildcard_allows_any_origin(self):
        for origin in ("https://a.com", "http://localhost:3000", "null"):
            decision = decide(InMemoryExchange("GET", {"Origin": origin}), DEFAULT)
            assert decision.kind is DecisionKind.ALLOWED
            assert (ACCESS_CONTROL_ALLOW_ORIGIN, origin) in decision.headers

    def test_listed_origin_allowed(self):
        policy = resolve_policy(CorsPolicy(origins=["https://a.com"]))
        decision = decide(InMemoryExchange("GET", {"Origin": "https://a.com"}), policy)
        assert decision.kind is DecisionKind.ALLOWED

    def test_unlisted_origin_rejected(self):
        policy = resolve_policy(CorsPolicy(origins=["https://a.com"]))
        decision = decide(InMemoryExchange("GET", {"Origin": "https://b.com"}), policy)

        assert decision.kind is DecisionKind.REJECTED
        assert isinstance(decision.error, OriginNotAllowedException)
        assert decision.error.context == {"origin": "https://b.com"}
        assert decision.headers == ()
        assert decision.status_code == 403
        assert decision.terminates

    def test_origin_match_is_case_sensitive(self):
        policy = resolve_policy(CorsPolicy(origins=["https://a.com"]))
        decision = decide(InMemoryExchange("GET", {"Origin": "https://A.com"}), policy)
        assert decision.kind is DecisionKind.REJECTED

    def test_no_subdomain_wildcards(self):
        policy = resolve_policy(CorsPolicy(origins=["https://*.a.com"]))
        decision = decide(InMemoryExchange("GET", {"Origin": "https://api.a.com"}), policy)
        assert decision.kind is DecisionKind.REJECTED

    def test_empty_origins_rejects_everything(self):
        policy = resolve_policy(CorsPolicy(origins=[]))
        for method in ("GET", "OPTIONS"):
            decision = decide(InMemoryExchange(method, {"Origin": "https://a.com"}), policy)
            assert decision.kind is DecisionKind.REJECTED


class TestSimpleRequest:
    def test_echoes_origin_even_with_wildcard(self):
        decision = decide(InMemoryExchange("GET", {"Origin": "https://a.com"}), DEFAULT)
        assert decision.headers == ((ACCESS_CONTROL_ALLOW_ORIGIN, "https://a.com"),)
        assert decision.status_code is None
        assert not decision.terminates

    def test_credentials(self):
        policy = resolve_policy(CorsPolicy(origins=["https://a.com"], credentials=True))
        decision = decide(InMemoryExchange("GET", {"Origin": "https://a.com"}), policy)

        assert decision.headers == (
            (ACCESS_CONTROL_ALLOW_ORIGIN, "https://a.com"),
            (ACCESS_CONTROL_ALLOW_CREDENTIALS, "true"),
        )

    def test_wildcard_with_credentials_echoes_origin(self):
        policy = resolve_policy(CorsPolicy(origins=["*"], credentials=True))
        decision = decide(InMemoryExchange("POST", {"Origin": "https://x.org"}), policy)

        assert dict(decision.headers)[ACCESS_CONTROL_ALLOW_ORIGIN] == "https://x.org"
        assert dict(decision.headers)[ACCESS_CONTROL_ALLOW_CREDENTIALS] == "true"

    def test_expose_headers_sent_as_allow_headers(self):
        policy = resolve_policy(CorsPolicy(expose_headers=["X-Total", "X-Page"]))
        decision = decide(InMemoryExchange("GET", {"Origin": "https://a.com"}), policy)

        assert dict(decision.headers)[ACCESS_CONTROL_ALLOW_HEADERS] == ("X-Total", "X-Page")

    def test_simple_request_ignores_preflight_headers(self):
        policy = resolve_policy(CorsPolicy(methods=["GET"]))
        exchange = InMemoryExchange(
            "GET", {"Origin": "https://a.com", "Access-Control-Request-Method": "DELETE"}
        )
        assert decide(exchange, policy).kind is DecisionKind.ALLOWED

    def test_does_not_mutate_exchange(self):
        exchange = InMemoryExchange("GET", {"Origin": "https://a.com"})
        decide(exchange, DEFAULT)

        assert exchange.response_headers == {}
        assert exchange.status_code is None
        assert not exchange.terminated


class TestPreflight:
    def test_success_with_default_policy(self):
        decision = decide(_preflight(method="GET", headers="Content-Type"), DEFAULT)

        assert decision.kind is DecisionKind.PREFLIGHT_ALLOWED
        assert decision.status_code == 204
        assert decision.terminates
        assert decision.headers == (
            (ACCESS_CONTROL_ALLOW_ORIGIN, "https://a.com"),
            (ACCESS_CONTROL_ALLOW_METHODS, DEFAULT.methods),
            (ACCESS_CONTROL_ALLOW_HEADERS, ("Content-Type",)),
            (ACCESS_CONTROL_MAX_AGE, "3600"),
        )

    def test_without_request_method_or_headers(self):
        decision = decide(_preflight(), DEFAULT)
        assert decision.kind is DecisionKind.PREFLIGHT_ALLOWED

    def test_method_not_allowed(self):
        policy = resolve_policy(CorsPolicy(methods=["GET"]))
        decision = decide(_preflight(method="POST"), policy)

        assert decision.kind is DecisionKind.REJECTED
        assert isinstance(decision.error, MethodNotAllowedException)
        assert decision.error.code == "METHOD_NOT_ALLOWED"
        assert ACCESS_CONTROL_ALLOW_METHODS not in dict(decision.headers)

    def test_rejection_keeps_allow_origin_and_credentials(self):
        policy = resolve_policy(CorsPolicy(methods=["GET"], credentials=True))
        decision = decide(_preflight(method="PUT"), policy)

        assert decision.headers == (
            (ACCESS_CONTROL_ALLOW_ORIGIN, "https://a.com"),
            (ACCESS_CONTROL_ALLOW_CREDENTIALS, "true"),
        )

    def test_method_match_is_case_sensitive(self):
        decision = decide(_preflight(method="get"), DEFAULT)
        assert isinstance(decision.error, MethodNotAllowedException)

    def test_headers_subset_allowed(self):
        policy = resolve_policy(CorsPolicy(headers=["X-A", "X-B", "X-C"]))
        decision = decide(_preflight(headers="X-A, X-B"), policy)
        assert decision.kind is DecisionKind.PREFLIGHT_ALLOWED

    def test_headers_not_subset_rejected(self):
        policy = resolve_policy(CorsPolicy(headers=["X-A"]))
        decision = decide(_preflight(headers="X-A, X-B"), policy)

        assert decision.kind is DecisionKind.REJECTED
        assert isinstance(decision.error, HeadersNotAllowedException)
        assert decision.error.context == {"headers": "X-A, X-B"}

    def test_headers_split_on_comma_space_only(self):
        policy = resolve_policy(CorsPolicy(headers=["X-A", "X-B"]))
        decision = decide(_preflight(headers="X-A,X-B"), policy)
        assert decision.kind is DecisionKind.REJECTED

    def test_header_match_is_case_sensitive(self):
        decision = decide(_preflight(headers="content-type"), DEFAULT)
        assert isinstance(decision.error, HeadersNotAllowedException)

    def test_method_checked_before_headers(self):
        policy = resolve_policy(CorsPolicy(methods=["GET"], headers=["X-A"]))
        decision = decide(_preflight(method="POST", headers="X-Z"), policy)
        assert isinstance(decision.error, MethodNotAllowedException)

    def test_empty_lists_omit_headers(self):
        policy = resolve_policy(CorsPolicy(methods=[], headers=[]))
        decision = decide(_preflight(), policy)

        assert decision.kind is DecisionKind.PREFLIGHT_ALLOWED
        names = [name for name, _ in decision.headers]
        assert ACCESS_CONTROL_ALLOW_METHODS not in names
        assert ACCESS_CONTROL_ALLOW_HEADERS not in names

    def test_empty_methods_rejects_any_requested_method(self):
        policy = resolve_policy(CorsPolicy(methods=[]))
        decision = decide(_preflight(method="GET"), policy)
        assert isinstance(decision.error, MethodNotAllowedException)

    def test_custom_max_age(self):
        policy = resolve_policy(CorsPolicy(max_age=timedelta(minutes=5)))
        decision = decide(_preflight(), policy)
        assert dict(decision.headers)[ACCESS_CONTROL_MAX_AGE] == "300"

    def test_expose_headers_not_used_for_preflight(self):
        policy = resolve_policy(CorsPolicy(expose_headers=["X-Total"]))
        decision = decide(_preflight(), policy)
        assert dict(decision.headers)[ACCESS_CONTROL_ALLOW_HEADERS] == ("Content-Type",)


class TestPreflightRepeatedHeaders:
    def test_repeated_requested_header_is_allowed(self):
        policy = resolve_policy(CorsPolicy(headers=["X-A"]))
        decision = decide(_preflight(headers="X-A, X-A"), policy)
        assert decision.kind is DecisionKind.PREFLIGHT_ALLOWED
