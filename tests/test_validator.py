"""Tests for the risk validator."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

import string

import pytest

from mask_token import (
    ValidationRules, ValidationResult,
    validate, validate_batch, batch_summary, risk_level, is_likely_valid,
)
from mask_token.risk import risk_level as bucket
from mask_token.validator import (
    STRICT_VALIDATION, BALANCED_VALIDATION, LENIENT_VALIDATION, generate_suggestions,
)

NPM = "npm_a1b2c3d4e5f6g7h8i9j0"


# ── Basics ───────────────────────────────────────────────────────────

@pytest.mark.parametrize("value", ["", None, 42])
def test_empty_or_non_string(value):
    result = validate(value)
    assert result.valid is False
    assert result.warnings == ["Input is empty or not a string"]
    assert result.suggestions == ["Provide a valid string input"]
    assert result.risk_score == 100


def test_real_looking_token_is_clean():
    result = validate(NPM)
    assert result == ValidationResult(valid=True, warnings=[], suggestions=[], risk_score=0)


def test_undefined():
    result = validate("undefined")
    assert result.valid is False
    assert result.warnings == [
        "Looks like an undefined or null value",
        "Input is very short (9 chars) - might not be a real token",
    ]
    assert result.suggestions == ["Replace placeholder with actual token value"]
    assert result.risk_score == 75


def test_placeholder_short_and_repetitive_caps_at_100():
    result = validate("xxxxxxxx")
    assert result.warnings == [
        "Looks like a placeholder or test value",
        "Input is very short (8 chars) - might not be a real token",
        "Low character diversity (might not be a token)",
    ]
    assert result.suggestions == [
        "Replace placeholder with actual token value",
        "Verify this is a real token and not a test string",
    ]
    assert result.risk_score == 100


def test_wrong_credential_type():
    result = validate("password_for_the_database")
    assert "Might be a different credential type (not a token)" in result.warnings
    assert "Ensure you are passing a token, not a password or username" in result.suggestions


def test_surrounding_and_repeated_whitespace():
    result = validate("  password123456789  ")
    assert result.warnings == [
        "Contains multiple consecutive spaces",
        "Has leading or trailing whitespace",
    ]
    assert result.suggestions == ["Trim whitespace from token before masking"]
    assert result.risk_score == 75


def test_very_long_and_repetitive():
    value = (string.ascii_letters + string.digits) * 34
    result = validate(value)
    assert f"Input is very long ({len(value)} chars) - might be malformed" in result.warnings
    assert "Low character diversity (might not be a token)" in result.warnings
    assert result.risk_score == 50


# ── Rules ────────────────────────────────────────────────────────────

def test_min_length_rule_replaces_heuristic():
    result = validate("abc123", ValidationRules(min_length=20))
    assert result.warnings == ["Input too short (6 < 20)"]
    assert result.suggestions == ["Ensure you are passing the full token string"]
    assert result.risk_score == 30


def test_max_length_rule_replaces_heuristic():
    value = (string.ascii_letters + string.digits) * 34
    result = validate(value, ValidationRules(max_length=100))
    assert f"Input too long ({len(value)} > 100)" in result.warnings
    assert not any("very long" in w for w in result.warnings)


def test_no_spaces_rule():
    result = validate("abcd efgh ijkl mnop", ValidationRules(no_spaces=True))
    assert result.warnings == ["Contains whitespace (tokens typically do not)"]
    assert result.risk_score == 40


def test_require_prefix_rule():
    result = validate("ABCDEFGHIJKLMNOPQRST", ValidationRules(require_prefix=True))
    assert result.warnings == ["Missing expected prefix pattern"]
    assert result.suggestions == ["Check if the token format is correct"]
    assert result.risk_score == 20
    # Low risk, but still not "valid": valid means no warnings at all
    assert result.valid is False
    assert result.risk_level == "low"


def test_pattern_rule():
    result = validate(NPM, ValidationRules(pattern=r"^ghp_"))
    assert result.warnings == ["Does not match expected pattern"]
    assert result.suggestions == ["Verify the token follows the expected format"]
    assert validate(NPM, ValidationRules(pattern=r"^npm_")).valid is True


def test_custom_check_rule():
    result = validate(NPM, ValidationRules(custom_check=lambda v: False))
    assert result.warnings == ["Failed custom validation"]
    assert result.suggestions == ["Review custom validation logic"]
    assert result.risk_score == 30


def test_rules_merge():
    merged = STRICT_VALIDATION.merged(ValidationRules(min_length=32, require_prefix=False))
    assert merged.min_length == 32
    assert merged.require_prefix is False
    assert merged.no_spaces is True
    assert merged.max_length == STRICT_VALIDATION.max_length


def test_rule_bundles():
    assert STRICT_VALIDATION.require_prefix is True
    assert BALANCED_VALIDATION.min_length == 12
    assert LENIENT_VALIDATION.min_length == 8
    assert validate(NPM, STRICT_VALIDATION).valid is True


# ── Scoring helpers ──────────────────────────────────────────────────

@pytest.mark.parametrize("score,level", [
    (0, "low"), (20, "low"),
    (21, "medium"), (50, "medium"),
    (51, "high"), (80, "high"),
    (81, "critical"), (100, "critical"),
])
def test_risk_level(score, level):
    assert risk_level(score) == level


@pytest.mark.parametrize("score", [0, 20, 21, 50, 51, 80, 81, 100])
def test_result_risk_level_matches_buckets(score):
    assert ValidationResult(risk_score=score).risk_level == bucket(score) == risk_level(score)


def test_is_likely_valid():
    assert is_likely_valid(NPM) is True
    assert is_likely_valid("undefined") is False


def test_suggestions_deduplicated():
    assert generate_suggestions(["Input too short (1 < 2)", "Input too short (3 < 4)"]) == [
        "Ensure you are passing the full token string",
    ]


# ── Batch ────────────────────────────────────────────────────────────

def test_batch_summary():
    results = validate_batch([NPM, "undefined", "xxxxxxxx"])
    assert [r.risk_score for r in results] == [0, 75, 100]
    assert batch_summary(results) == {
        "total": 3,
        "valid": 1,
        "invalid": 2,
        "average_risk_score": 58.3,
        "high_risk_count": 1,
    }


def test_batch_summary_empty():
    assert batch_summary([]) == {
        "total": 0,
        "valid": 0,
        "invalid": 0,
        "average_risk_score": 0.0,
        "high_risk_count": 0,
    }


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
