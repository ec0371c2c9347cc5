"""
Unit tests for log sanitization utilities.
"""

import pytest

from google_drive_agent.utils.log_sanitizer import (
    sanitize_query, sanitize_name, sanitize_file_id, sanitize_id_list, sanitize_for_logging
)


@pytest.mark.unit
class TestLogSanitizer:

    def test_sanitize_query(self):
        assert sanitize_query("") == "[empty-query]"
        assert sanitize_query("budget") == "'budget' (6 chars)"

        result = sanitize_query("notes from jane.doe@example.com")
        assert "jane.doe" not in result
        assert "[EMAIL]" in result

        result = sanitize_query("call 555-123-4567")
        assert "555" not in result
        assert "[PHONE]" in result

    def test_sanitize_query_masks_filter_values(self):
        result = sanitize_query("name contains 'budget 2024'")

        assert result == "'name contains '…'' (27 chars)"
        assert "budget" not in result

    def test_sanitize_query_truncates(self):
        result = sanitize_query("a" * 50)

        assert result == f"'{'a' * 30}...' (50 chars)"

    def test_sanitize_name(self):
        assert sanitize_name("") == "[no-name]"
        assert sanitize_name("Reports") == "'Reports' (7 chars)"
        assert sanitize_name("Quarterly Financial Review") == "'Quarterly Fi...' (26 chars)"

    def test_sanitize_file_id(self):
        assert sanitize_file_id(None) == "[no-id]"
        assert sanitize_file_id("short_id") == "[id: short_id]"
        assert sanitize_file_id("1AbCdEfGhIjKlMnOpQrStUv") == "[id: 1AbCdEfG...StUv]"

    def test_sanitize_id_list(self):
        assert sanitize_id_list([]) == "[]"
        assert sanitize_id_list(["A", "B"]) == "[[id: A], [id: B]]"

    def test_sanitize_for_logging(self):
        result = sanitize_for_logging(
            query="quarterly report",
            name="Reports",
            file_id="1AbCdEfGhIjKlMnOpQrStUv",
            parent_id=None,
            parents=["OLD"],
            limit=5,
        )

        assert result["query"] == "'quarterly report' (16 chars)"
        assert result["name"] == "'Reports' (7 chars)"
        assert result["file_id"] == "[id: 1AbCdEfG...StUv]"
        assert result["parent_id"] is None
        assert result["parents"] == "[[id: OLD]]"
        assert result["limit"] == 5
