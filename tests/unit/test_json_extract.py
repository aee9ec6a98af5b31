import pytest

from llm_gateway import JsonExtractionError, first_balanced_span, parse_json_value
from llm_gateway.json_extract import MAX_SCAN_CHARS


def test_strict_parse() -> None:
    assert parse_json_value('[{"a": 1}]', list) == [{"a": 1}]
    assert parse_json_value('{"score": 5}', dict) == {"score": 5}


def test_code_fence_is_stripped() -> None:
    assert parse_json_value('```json\n{"score": 5}\n```', dict) == {"score": 5}


def test_prose_wrapped_value_is_recovered() -> None:
    text = 'Sure! Here is the result:\n{"score": 80, "reason": "ok"}\nHope this helps.'
    assert parse_json_value(text, dict) == {"score": 80, "reason": "ok"}


def test_brackets_inside_strings_are_ignored() -> None:
    text = 'noise {"reason": "use } and { carefully", "score": 1} trailing }'
    assert parse_json_value(text, dict) == {"reason": "use } and { carefully", "score": 1}


def test_expected_shape_guides_recovery() -> None:
    assert parse_json_value('x [1] {"a": 1}', dict) == {"a": 1}
    with pytest.raises(JsonExtractionError):
        parse_json_value('{"a": 1}', list)


def test_unrecoverable_replies_raise() -> None:
    with pytest.raises(JsonExtractionError):
        parse_json_value("", dict)
    with pytest.raises(JsonExtractionError, match="No JSON object"):
        parse_json_value("no json here", dict)
    with pytest.raises(JsonExtractionError):
        parse_json_value("[1, 2,]", list)


def test_scan_is_bounded() -> None:
    text = "[" + " " * MAX_SCAN_CHARS + "]"
    assert first_balanced_span(text, "[") is None
    assert first_balanced_span("abc", "{") is None
    assert first_balanced_span('pre [1, [2]] post', "[") == "[1, [2]]"


def test_deeply_nested_reply_is_an_extraction_error() -> None:
    nested = "[" * 100_000 + "]" * 100_000
    with pytest.raises(JsonExtractionError):
        parse_json_value(nested, list)
    with pytest.raises(JsonExtractionError):
        parse_json_value("Result: " + nested, list)
