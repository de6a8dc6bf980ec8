"""Tests for decoding model output, including fenced and prose-wrapped JSON."""
import pytest

from core.response_normalizer import (
    ParseFailure,
    _extract_json_object,
    normalize,
    strip_code_fence,
)

PLAIN = '{"intent": "add_task", "title": "Buy milk", "reply": "Added!"}'


class TestNormalize:
    """Test normalize against various model output formats."""

    def test_clean_json(self):
        result = normalize(PLAIN)
        assert result == {"intent": "add_task", "title": "Buy milk", "reply": "Added!"}

    def test_markdown_fence_json(self):
        assert normalize(f"```json\n{PLAIN}\n```") == normalize(PLAIN)

    def test_markdown_fence_no_language(self):
        assert normalize(f"```\n{PLAIN}\n```") == normalize(PLAIN)

    def test_fence_on_same_line(self):
        assert normalize(f"```json {PLAIN} ```") == normalize(PLAIN)

    def test_leading_fence_only(self):
        assert normalize(f"```json\n{PLAIN}") == normalize(PLAIN)

    def test_whitespace_around_json(self):
        assert normalize(f"   \n\n  {PLAIN}  \n\n  ") == normalize(PLAIN)

    def test_prose_before_and_after(self):
        raw = f"Here is the analysis:\n{PLAIN}\nI hope this helps!"
        assert normalize(raw) == normalize(PLAIN)

    def test_nested_braces(self):
        raw = '{"intent": "general", "reply": "ok", "extra": {"a": {"b": 1}}}'
        assert normalize(raw)["extra"]["a"]["b"] == 1

    def test_json_with_string_containing_braces(self):
        raw = '{"intent": "general", "reply": "use { and } in strings"}'
        assert "{" in normalize(raw)["reply"]

    def test_invalid_json_is_parse_failure(self):
        raw = "I don't have any JSON for you, sorry!"
        result = normalize(raw)
        assert isinstance(result, ParseFailure)
        assert result.raw_text == raw
        assert "invalid JSON" in result.reason

    def test_truncated_json_is_parse_failure(self):
        assert isinstance(normalize('{"intent": "add_task", "title": '), ParseFailure)

    def test_empty_string_is_parse_failure(self):
        result = normalize("")
        assert isinstance(result, ParseFailure)
        assert result.reason == "empty response"

    def test_json_array_is_parse_failure(self):
        result = normalize("[1, 2, 3]")
        assert isinstance(result, ParseFailure)
        assert "list" in result.reason

    def test_fenced_invalid_json_is_parse_failure(self):
        assert isinstance(normalize("```json\nnot valid json\n```"), ParseFailure)

    def test_does_not_validate_enums(self):
        result = normalize('{"intent": "fly_to_moon", "category": "Groceries"}')
        assert result == {"intent": "fly_to_moon", "category": "Groceries"}


class TestStripCodeFence:
    def test_strips_single_pair(self):
        assert strip_code_fence("```json\n{}\n```") == "{}"

    def test_leaves_unfenced_text(self):
        assert strip_code_fence("  {}  ") == "{}"

    def test_uppercase_language_tag(self):
        assert strip_code_fence("```JSON\n{}\n```") == "{}"


class TestExtractJsonObject:
    def test_multiple_json_objects_takes_first(self):
        assert _extract_json_object('{"a": 1}\n{"b": 2}') == '{"a": 1}'

    def test_skips_invalid_candidate(self):
        assert _extract_json_object('{not json} then {"valid": true}') == '{"valid": true}'

    def test_stray_closing_brace_ignored(self):
        assert _extract_json_object('} oops {"a": 1}') == '{"a": 1}'

    def test_no_json_raises_valueerror(self):
        with pytest.raises(ValueError, match="No valid JSON"):
            _extract_json_object("nothing here")

    def test_brace_inside_string_value(self):
        raw = 'Sure! {"intent": "add_task", "title": "fix } bug", "reply": "ok"} hope that helps'
        assert normalize(raw) == {"intent": "add_task", "title": "fix } bug", "reply": "ok"}

    def test_escaped_quote_inside_string_value(self):
        raw = 'Result: {"intent": "general", "reply": "say \\"{hi}\\" twice"} done'
        assert normalize(raw)["reply"] == 'say "{hi}" twice'

    def test_quotes_in_prose_before_object(self):
        assert _extract_json_object('He said "hi" then {"a": 1}') == '{"a": 1}'
