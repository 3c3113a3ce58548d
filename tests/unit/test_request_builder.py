"""Tests for request construction: URLs, query encoding and headers."""

import httpx
import pytest

from tmdb_api.config import ClientConfig
from tmdb_api.credentials import Credentials
from tmdb_api.exceptions import MalformedBaseUrlError, MalformedRequestUrlError
from tmdb_api.request import ACCEPT, CONTENT_TYPE, RequestBuilder, encode_query, render_value
from tmdb_api.types import HttpMethod, RequestDescriptor


def make_builder(base_url="https://api.themoviedb.org", **credentials):
    config = ClientConfig(base_url=base_url, credentials=Credentials(**credentials))
    return RequestBuilder(config)


class TestRenderValue:
    """Tests for query value rendering."""

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_unsendable_values(self, value):
        assert render_value(value) is None

    def test_booleans_are_lowercase(self):
        assert render_value(True) == "true"
        assert render_value(False) == "false"

    def test_numbers(self):
        assert render_value(2) == "2"
        assert render_value(0) == "0"
        assert render_value(7.5) == "7.5"


class TestEncodeQuery:
    """Tests for query string encoding."""

    def test_drops_blank_values(self):
        assert encode_query({"a": "1", "b": None, "c": "", "d": " "}) == "a=1"

    def test_percent_encodes_values(self):
        assert encode_query({"query": "fast & furious"}) == "query=fast+%26+furious"

    def test_injects_api_key(self):
        assert encode_query({"page": 1}, api_key="ABC") == "page=1&api_key=ABC"

    def test_blank_api_key_is_replaced(self):
        assert encode_query({"api_key": ""}, api_key="ABC") == "api_key=ABC"

    def test_explicit_api_key_is_kept(self):
        assert encode_query({"api_key": "XYZ"}, api_key="ABC") == "api_key=XYZ"

    def test_injects_default_language(self):
        assert encode_query({"language": None}, default_language="fr") == "language=fr"

    def test_explicit_language_wins(self):
        assert encode_query({"language": "de"}, default_language="fr") == "language=de"

    def test_empty(self):
        assert encode_query({}) == ""


class TestBuildUrl:
    """Tests for URL resolution against the base URL."""

    def test_api_key_added_to_blank_parameter(self):
        builder = make_builder(api_key="ABC")
        url = builder.build_url(RequestDescriptor("/3/movie/603", query={"api_key": ""}))

        assert str(url) == "https://api.themoviedb.org/3/movie/603?api_key=ABC"

    def test_no_query_string_when_nothing_to_send(self):
        builder = make_builder()
        url = builder.build_url(RequestDescriptor("/3/configuration"))

        assert str(url) == "https://api.themoviedb.org/3/configuration"

    def test_query_values_survive_encoding(self):
        builder = make_builder()
        url = builder.build_url(
            RequestDescriptor(
                "/3/search/multi",
                query={"query": "amélie & co", "include_adult": False, "page": 2},
            )
        )

        assert url.params["query"] == "amélie & co"
        assert url.params["include_adult"] == "false"
        assert url.params["page"] == "2"

    def test_api_key_not_sent_with_bearer_token(self):
        builder = make_builder(api_key="ABC", read_token="r" * 40)
        url = builder.build_url(RequestDescriptor("/3/movie/603"))

        assert "api_key" not in url.params

    def test_default_language_applied(self):
        config = ClientConfig(default_language="en-US")
        url = RequestBuilder(config).build_url(RequestDescriptor("/3/movie/603"))

        assert url.params["language"] == "en-US"

    def test_config_changes_apply_to_next_build(self):
        config = ClientConfig()
        builder = RequestBuilder(config)
        config.credentials.api_key = "NEW"

        url = builder.build_url(RequestDescriptor("/3/movie/603"))

        assert url.params["api_key"] == "NEW"

    @pytest.mark.parametrize("base_url", ["not a url", "/relative/path", "api.themoviedb.org"])
    def test_malformed_base_url(self, base_url):
        builder = make_builder(base_url=base_url)

        with pytest.raises(MalformedBaseUrlError) as exc_info:
            builder.build_url(RequestDescriptor("/3/movie/603"))

        assert exc_info.value.base_url == base_url
        assert str(exc_info.value) == f"Base url '{base_url}' malformed"

    def test_malformed_request_url(self):
        builder = make_builder()

        with pytest.raises(MalformedRequestUrlError) as exc_info:
            builder.build_url(RequestDescriptor("/3/movie/\x00"))

        assert exc_info.value.endpoint == "/3/movie/\x00"


class TestHeaders:
    """Tests for default and authorization headers."""

    def test_json_headers(self):
        headers = make_builder().build_headers()

        assert headers["Content-Type"] == CONTENT_TYPE
        assert headers["Accept"] == ACCEPT
        assert "Authorization" not in headers

    def test_read_token_bearer(self):
        headers = make_builder(read_token="READ").build_headers()
        assert headers["Authorization"] == "Bearer READ"

    def test_access_token_wins_over_read_token(self):
        headers = make_builder(read_token="READ", access_token="ACCESS").build_headers()
        assert headers["Authorization"] == "Bearer ACCESS"

    def test_api_key_is_never_a_header(self):
        headers = make_builder(api_key="ABC").build_headers()
        assert "Authorization" not in headers


class TestBuild:
    """Tests for complete request construction."""

    def test_get_has_no_body(self):
        request = make_builder().build(RequestDescriptor("/3/movie/603"))

        assert isinstance(request, httpx.Request)
        assert request.method == "GET"
        assert request.content == b""

    def test_post_body_is_utf8(self):
        descriptor = RequestDescriptor(
            "/3/movie/603/rating",
            method=HttpMethod.POST,
            body='{"value": 8.5, "note": "très bien"}',
        )
        request = make_builder().build(descriptor)

        assert request.method == "POST"
        assert request.content == '{"value": 8.5, "note": "très bien"}'.encode()
        assert request.headers["Content-Type"] == CONTENT_TYPE

    def test_malformed_base_url_before_any_io(self):
        with pytest.raises(MalformedBaseUrlError):
            make_builder(base_url="::").build(RequestDescriptor("/3/movie/603"))
