import json

import pytest

from profile_match_ai.errors import ErrorKind, MalformedResponseError
from profile_match_ai.schemas.analysis import AnalysisResult
from profile_match_ai.services.result_parser import parse_completion


def test_valid_completion():
    raw = '{"matches":["X"],"gaps":["Y"],"improvedProfile":"Z","suggestions":["W"]}'
    assert parse_completion(raw) == AnalysisResult(
        matches=["X"], gaps=["Y"], improvedProfile="Z", suggestions=["W"]
    )


def test_values_pass_through_untouched():
    raw = json.dumps(
        {
            "matches": ["  b ", "a", "a"],
            "gaps": [],
            "improvedProfile": "  spaced  ",
            "suggestions": ["z", "y"],
            "score": 7,
        }
    )
    result = parse_completion(raw)
    assert result.matches == ["  b ", "a", "a"]
    assert result.gaps == []
    assert result.improved_profile == "  spaced  "
    assert result.suggestions == ["z", "y"]


@pytest.mark.parametrize("tag", ["json", "JSON", "Json", ""])
def test_markdown_fence_is_tolerated(tag):
    raw = f"```{tag}\n" + '{"matches":[],"gaps":[],"improvedProfile":"P","suggestions":[]}' + "\n```"
    assert parse_completion(raw).improved_profile == "P"


@pytest.mark.parametrize(
    "raw",
    [
        "not json",
        "",
        "Here is your analysis: {}",
        '["matches"]',
        '{"matches":["X"],"gaps":["Y"],"improvedProfile":"Z"}',
        '{"matches":["X"],"gaps":"Y","improvedProfile":"Z","suggestions":[]}',
        '{"matches":["X", 3],"gaps":[],"improvedProfile":"Z","suggestions":[]}',
        '{"matches":[],"gaps":[],"improvedProfile":["Z"],"suggestions":[]}',
        '{"matches":[],"gaps":[],"improvedProfile":null,"suggestions":[]}',
        '{"matches":[],"gaps":[],"improvedProfile":"Z","suggestions":[null]}',
        '{"matches":[],"gaps":[],"improved_profile":"Z","suggestions":[]}',
    ],
)
def test_malformed_completion_is_rejected_whole(raw):
    with pytest.raises(MalformedResponseError) as exc:
        parse_completion(raw)
    assert exc.value.kind == ErrorKind.MALFORMED_RESPONSE
