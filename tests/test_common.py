"""Tests for common utilities."""

import io
import json
import logging

from shortlinks.common.validators import is_valid_url, is_valid_slug, is_valid_prefix
from shortlinks.common.url_builder import build_short_url
from shortlinks.common.logging_config import setup_logging, get_logger
from shortlinks.store.models import Link


class TestValidators:
    """Test validation utilities."""

    def test_valid_urls(self):
        """Any non-empty string is accepted."""
        for url in ("https://example.com", "http://example.com/path?q=1", "mailto:someone", "relative/path"):
            valid, _ = is_valid_url(url)
            assert valid

    def test_invalid_urls(self):
        """Missing URLs are rejected."""
        for url in (None, "", "   ", 42):
            valid, error = is_valid_url(url)
            assert not valid
            assert "required" in error.lower()

    def test_valid_slugs(self):
        """Test valid slug validation."""
        for slug in ("abc123", "my-link", "my_link", "A", "x" * 64):
            valid, _ = is_valid_slug(slug)
            assert valid

    def test_invalid_slugs(self):
        """Test invalid slug validation."""
        valid, error = is_valid_slug("")
        assert not valid
        assert "required" in error.lower()

        valid, error = is_valid_slug("x" * 65)
        assert not valid
        assert "64" in error

        for slug in ("has space", "a/b", "q?x", "emoji☃"):
            valid, error = is_valid_slug(slug)
            assert not valid
            assert "letters" in error

    def test_prefixes(self):
        """Empty prefixes are fine; others follow the slug alphabet."""
        assert is_valid_prefix(None)[0]
        assert is_valid_prefix("")[0]
        assert is_valid_prefix("qr-")[0]
        assert not is_valid_prefix("a b")[0]
        assert not is_valid_prefix("p" * 33)[0]


class TestURLBuilder:
    """Test short link construction."""

    def test_build_short_url(self):
        assert build_short_url("abc", "https://sho.rt") == "https://sho.rt/abc"

    def test_trailing_slash(self):
        """A trailing slash on the base URL is not doubled."""
        assert build_short_url("abc", "https://sho.rt/") == "https://sho.rt/abc"
        assert build_short_url("abc", "https://sho.rt/s/") == "https://sho.rt/s/abc"


class TestLinkModel:
    """Test Link conversions."""

    def test_to_dict(self):
        link = Link.from_dict("s", {"url": "https://e.example", "created": "2024-05-01T12:00:00+00:00", "visits": 2})

        assert link.to_dict() == {
            "slug": "s",
            "url": "https://e.example",
            "visits": 2,
            "created": "2024-05-01T12:00:00+00:00",
            "lastVisit": None,
        }

    def test_record_round_trip_keeps_last_visit(self):
        record = {
            "url": "https://e.example",
            "created": "2024-05-01T12:00:00+00:00",
            "visits": 1,
            "lastVisit": "2024-05-02T08:30:00+00:00",
        }
        assert Link.from_dict("s", record).to_record() == record

    def test_naive_timestamps_are_utc(self):
        link = Link.from_document({"slug": "s", "url": "u", "createdAt": "2024-05-01T12:00:00"})
        assert link.created_at.utcoffset().total_seconds() == 0
        assert link.visits == 0

    def test_zulu_suffix(self):
        """Timestamps ending in Z parse as UTC."""
        link = Link.from_dict("s", {"url": "u", "created": "2024-05-01T12:00:00.123Z", "lastVisit": "2024-05-02T00:00:00Z"})

        assert link.created_at.utcoffset().total_seconds() == 0
        assert link.created_at.microsecond == 123000
        assert link.last_visit.day == 2


class TestLogging:
    """Test logging setup."""

    def test_setup_logging(self, tmp_path):
        log_file = tmp_path / "app.log"
        logger = setup_logging(level="warning", log_file=str(log_file))

        assert logger.name == "shortlinks"
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 2

        logger.warning("written")
        for handler in logger.handlers:
            handler.flush()
        assert "written" in log_file.read_text()

    def test_setup_logging_replaces_handlers(self):
        setup_logging(level="INFO")
        logger = setup_logging(level="DEBUG")
        assert len(logger.handlers) == 1

    def test_get_logger(self):
        assert get_logger("shortlinks.web").parent.name == "shortlinks"

    def test_json_format(self):
        stream = io.StringIO()
        logger = setup_logging(level="INFO", json_format=True, stream=stream)

        logger.info('quoted "value" here')

        entry = json.loads(stream.getvalue().strip())
        assert entry["level"] == "INFO"
        assert entry["logger"] == "shortlinks"
        assert entry["message"] == 'quoted "value" here'
