"""
Snippetbox — Configuration and Helper Tests
=============================================
"""

from datetime import datetime, timedelta, timezone

import pytest

from snippetbox.config import DEFAULT_DATABASE_URL, Settings, parse_addr
from snippetbox.routes.snippets import parse_snippet_id
from snippetbox.exceptions import NotFoundError
from snippetbox.templating import human_date


class TestParseAddr:

    def test_port_only(self):
        assert parse_addr(":4000") == ("0.0.0.0", 4000)

    def test_host_and_port(self):
        assert parse_addr("127.0.0.1:8080") == ("127.0.0.1", 8080)

    @pytest.mark.parametrize("addr", ["4000", "localhost", "localhost:http", ""])
    def test_invalid(self, addr):
        with pytest.raises(ValueError):
            parse_addr(addr)


class TestSettings:

    def test_log_level_is_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValueError):
            Settings(log_level="chatty")

    def test_default_database_fails_production_check(self):
        with pytest.raises(ValueError, match="DATABASE_URL"):
            Settings(database_url=DEFAULT_DATABASE_URL).validate_required_for_production()

    def test_configured_database_passes_production_check(self):
        Settings(database_url="postgresql+asyncpg://u:p@db/snippetbox").validate_required_for_production()

    def test_session_defaults(self):
        s = Settings()

        assert s.session_lifetime == 12 * 60 * 60
        assert s.session_cleanup_interval == 300
        assert not s.session_cookie_secure

    def test_sqlite_detection(self):
        assert Settings(database_url="sqlite+aiosqlite:///./dev.db").is_sqlite
        assert not Settings(database_url="postgresql+asyncpg://u:p@db/snippetbox").is_sqlite


class TestParseSnippetId:

    @pytest.mark.parametrize("raw,expected", [("1", 1), ("42", 42), ("+7", 7), ("007", 7)])
    def test_valid(self, raw, expected):
        assert parse_snippet_id(raw) == expected

    @pytest.mark.parametrize("raw", ["0", "-3", "", " 1", "1_000", "x", "2147483648"])
    def test_invalid(self, raw):
        with pytest.raises(NotFoundError):
            parse_snippet_id(raw)


class TestHumanDate:

    def test_formats_utc(self):
        value = datetime(2024, 3, 17, 10, 15, tzinfo=timezone.utc)

        assert human_date(value) == "17 Mar 2024 at 10:15"

    def test_converts_to_utc(self):
        value = datetime(2024, 3, 17, 12, 15, tzinfo=timezone(timedelta(hours=2)))

        assert human_date(value) == "17 Mar 2024 at 10:15"

    def test_none_is_empty(self):
        assert human_date(None) == ""
