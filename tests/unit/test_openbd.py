# ABOUTME: Unit tests for the OpenBD provider and its response parser.
# ABOUTME: Covers the [null] no-match answer and space-separated author strings.

from booklend.metadata.openbd import OpenBDProvider, parse_get_response
from tests.fixtures.fakes import FakeHttpClient
from tests.fixtures.provider_responses import OPENBD_EMPTY_RESPONSE, OPENBD_RESPONSE

ISBN = "9784873115658"


class TestParseGetResponse:
    """Tests for parse_get_response."""

    def test_extracts_summary_fields(self) -> None:
        meta = parse_get_response(ISBN, OPENBD_RESPONSE)
        assert meta is not None
        assert meta.title == "リーダブルコード"
        assert meta.published_date == "201106"
        assert meta.thumbnail_url == "https://cover.openbd.jp/9784873115658.jpg"
        assert meta.source == "openbd"

    def test_author_string_split_on_spaces(self) -> None:
        meta = parse_get_response(ISBN, OPENBD_RESPONSE)
        assert meta is not None
        assert meta.authors == ["Boswell,Dustin", "Foucher,Trevor"]

    def test_null_entry_is_no_match(self) -> None:
        assert parse_get_response(ISBN, OPENBD_EMPTY_RESPONSE) is None

    def test_empty_list_is_no_match(self) -> None:
        assert parse_get_response(ISBN, []) is None

    def test_entry_without_summary_is_no_match(self) -> None:
        """A record with no summary carries nothing usable."""
        assert parse_get_response(ISBN, [{"onix": {}}]) is None
        assert parse_get_response(ISBN, [{"summary": {}}]) is None

    def test_sparse_summary_gets_placeholders(self) -> None:
        meta = parse_get_response(ISBN, [{"summary": {"pubdate": "2011"}}])
        assert meta is not None
        assert meta.title == "Unknown title"
        assert meta.published_date == "2011"


class TestOpenBDProvider:
    """Tests for OpenBDProvider.lookup."""

    def test_requests_get_endpoint_with_isbn(self) -> None:
        client = FakeHttpClient({"api.openbd.jp": OPENBD_RESPONSE})
        meta = OpenBDProvider(client).lookup(ISBN)
        assert meta is not None
        assert client.request_log == [("https://api.openbd.jp/v1/get", {"isbn": ISBN})]

    def test_unknown_isbn_returns_none(self) -> None:
        client = FakeHttpClient({"api.openbd.jp": OPENBD_EMPTY_RESPONSE})
        assert OpenBDProvider(client).lookup(ISBN) is None
