import pytest

from core.json_validator import AnalysisValidator, JSONValidationError, parse_llm_json


def test_plain_object_parses():
    assert parse_llm_json('{"consensus_level": 70}') == {"consensus_level": 70}


def test_object_wrapped_in_prose_and_fences():
    raw = 'Here is my analysis:\n```json\n{"key_topics": ["Budget"], "note": "uses {braces}"}\n```\nThanks!'

    assert parse_llm_json(raw) == {"key_topics": ["Budget"], "note": "uses {braces}"}


def test_escaped_quotes_do_not_confuse_brace_matching():
    raw = 'Result: {"claim": "He said \\"no}\\" twice", "verifiable": true} done'

    assert parse_llm_json(raw)["claim"] == 'He said "no}" twice'


def test_trailing_commas_are_repaired(caplog):
    raw = 'Answer: {"key_topics": ["Budget", "Tax",], "factuality_score": 80,}'

    assert parse_llm_json(raw) == {"key_topics": ["Budget", "Tax"], "factuality_score": 80}
    assert "attempting repair" in caplog.text


@pytest.mark.parametrize("raw", [None, "", "   ", "I could not analyze this article."])
def test_no_object_raises(raw):
    with pytest.raises(JSONValidationError):
        parse_llm_json(raw)


def test_top_level_array_is_rejected():
    with pytest.raises(JSONValidationError, match="Expected a JSON object"):
        AnalysisValidator.validate_and_parse('["Budget"]', "comparison")


def test_unrepairable_object_raises():
    with pytest.raises(JSONValidationError, match="Invalid JSON"):
        parse_llm_json('text {"key": undefined} text')


def test_extract_skips_unbalanced_opening_brace():
    assert AnalysisValidator.extract_json_object('{ broken and then {"ok": 1}') == '{"ok": 1}'
    assert AnalysisValidator.extract_json_object('no braces here') is None
