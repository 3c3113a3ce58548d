"""Tests for Outcome and the request descriptor types."""

import pytest

from tmdb_api.exceptions import ErrorKind, ProviderError, TransportFailureError
from tmdb_api.types import HttpMethod, Outcome, RequestDescriptor


class TestOutcome:
    def test_success(self):
        outcome = Outcome.success(42)

        assert outcome.ok
        assert outcome.kind is None
        assert not outcome.is_local_failure
        assert outcome.unwrap() == 42

    def test_success_without_value(self):
        assert Outcome.success(None).ok

    def test_local_failure(self):
        outcome = Outcome.failure(TransportFailureError())

        assert not outcome.ok
        assert outcome.kind is ErrorKind.TRANSPORT_FAILURE
        assert outcome.is_local_failure
        with pytest.raises(TransportFailureError):
            outcome.unwrap()

    def test_provider_failure(self):
        outcome = Outcome.failure(ProviderError(401, 7, "Invalid API key"))

        assert outcome.kind is ErrorKind.PROVIDER_ERROR
        assert not outcome.is_local_failure


class TestRequestDescriptor:
    def test_defaults(self):
        descriptor = RequestDescriptor("/3/configuration")

        assert descriptor.method is HttpMethod.GET
        assert dict(descriptor.query) == {}
        assert descriptor.body is None
        assert descriptor.result_type is None

    @pytest.mark.parametrize(
        ("method", "has_body"),
        [
            (HttpMethod.GET, False),
            (HttpMethod.POST, True),
            (HttpMethod.PUT, True),
            (HttpMethod.DELETE, False),
        ],
    )
    def test_has_body(self, method, has_body):
        assert method.has_body is has_body

    @pytest.mark.parametrize("method", [HttpMethod.GET, HttpMethod.DELETE])
    def test_body_rejected_for_bodyless_methods(self, method):
        with pytest.raises(ValueError, match="do not carry a body"):
            RequestDescriptor("/3/movie/603", method, body="{}")

    def test_body_accepted_for_post(self):
        descriptor = RequestDescriptor("/3/account/1/favorite", HttpMethod.POST, body="{}")
        assert descriptor.body == "{}"
