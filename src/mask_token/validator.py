"""Risk validator: scores how likely an input is NOT a real token.

Usage:
    result = validate("undefined")
    result.valid        # False
    result.warnings     # ["Looks like an undefined or null value", ...]
    result.risk_score   # 75

Scoring is additive and capped at 100.  ``valid`` only means "no
warnings"; use ``risk_level`` / ``is_likely_valid`` for a graded answer.
"""

from __future__ import annotations
import re
from typing import Iterable

from .patterns import MAX_TOKEN_LENGTH, MIN_ENTROPY_RATIO, MIN_TOKEN_LENGTH, entropy_ratio
from .risk import RISK_HIGH, RISK_MEDIUM, risk_level
from .types import ValidationResult, ValidationRules

# Risk weights
TOO_SHORT = 30
TOO_LONG = 10
HAS_WHITESPACE = 40
MISSING_PREFIX = 20
PATTERN_MISMATCH = 25
CUSTOM_CHECK_FAILED = 30
PLACEHOLDER = 50
WRONG_CREDENTIAL = 40
MULTIPLE_SPACES = 35
LOW_ENTROPY = 35
VERY_SHORT = 25
VERY_LONG = 15

_GENERIC_PREFIX = re.compile(r"[a-z]{2,6}_")
_WHITESPACE = re.compile(r"\s")

# Each signature: (compiled_regex, message, score).  Searched, not matched.
_SUSPICIOUS: list[tuple[re.Pattern, str, int]] = [
    (re.compile(r"^(?:undefined|null)$", re.IGNORECASE),
     "Looks like an undefined or null value", PLACEHOLDER),
    (re.compile(r"^(?:test|example|sample|demo|placeholder|your[_-]?token|xxx+|000+)", re.IGNORECASE),
     "Looks like a placeholder or test value", PLACEHOLDER),
    (re.compile(r"^(?:password|username|email|user|admin|root)", re.IGNORECASE),
     "Might be a different credential type (not a token)", WRONG_CREDENTIAL),
    (re.compile(r"\s{2,}"),
     "Contains multiple consecutive spaces", MULTIPLE_SPACES),
    (re.compile(r"^\s+|\s+$"),
     "Has leading or trailing whitespace", HAS_WHITESPACE),
]

# Warning keyword(s) → suggestion.  First matching row wins per warning.
_SUGGESTIONS: list[tuple[tuple[str, ...], str]] = [
    (("too short",), "Ensure you are passing the full token string"),
    (("too long",), "Verify the input is a single token, not multiple concatenated values"),
    (("whitespace",), "Trim whitespace from token before masking"),
    (("prefix",), "Check if the token format is correct"),
    (("pattern",), "Verify the token follows the expected format"),
    (("custom",), "Review custom validation logic"),
    (("placeholder", "undefined", "null"), "Replace placeholder with actual token value"),
    (("password", "username", "credential"), "Ensure you are passing a token, not a password or username"),
    (("entropy", "diversity"), "Verify this is a real token and not a test string"),
]

STRICT_VALIDATION = ValidationRules(
    min_length=MIN_TOKEN_LENGTH, max_length=MAX_TOKEN_LENGTH, no_spaces=True, require_prefix=True,
)
BALANCED_VALIDATION = ValidationRules(min_length=12, max_length=MAX_TOKEN_LENGTH, no_spaces=True)
LENIENT_VALIDATION = ValidationRules(min_length=8, no_spaces=True)


def validate(value: str, rules: ValidationRules | None = None) -> ValidationResult:
    """Score ``value`` against ``rules`` and the built-in signatures."""
    if not isinstance(value, str) or not value:
        return ValidationResult(
            valid=False,
            warnings=["Input is empty or not a string"],
            suggestions=["Provide a valid string input"],
            risk_score=100,
        )

    rules = rules or ValidationRules()
    warnings: list[str] = []
    score = 0
    length = len(value)

    # --- Rules ---
    if rules.min_length is not None and length < rules.min_length:
        warnings.append(f"Input too short ({length} < {rules.min_length})")
        score += TOO_SHORT
    if rules.max_length is not None and length > rules.max_length:
        warnings.append(f"Input too long ({length} > {rules.max_length})")
        score += TOO_LONG
    if rules.no_spaces and _WHITESPACE.search(value):
        warnings.append("Contains whitespace (tokens typically do not)")
        score += HAS_WHITESPACE
    if rules.require_prefix and not _GENERIC_PREFIX.match(value):
        warnings.append("Missing expected prefix pattern")
        score += MISSING_PREFIX
    if rules.pattern is not None and not re.search(rules.pattern, value):
        warnings.append("Does not match expected pattern")
        score += PATTERN_MISMATCH
    if rules.custom_check is not None and not rules.custom_check(value):
        warnings.append("Failed custom validation")
        score += CUSTOM_CHECK_FAILED

    # --- Suspicious content ---
    for pattern, message, weight in _SUSPICIOUS:
        if pattern.search(value):
            warnings.append(message)
            score += weight

    # --- Heuristic length, skipped when an explicit rule covers it ---
    if length < MIN_TOKEN_LENGTH and not rules.min_length:
        if not any("too short" in w for w in warnings):
            warnings.append(f"Input is very short ({length} chars) - might not be a real token")
            score += VERY_SHORT
    if length > MAX_TOKEN_LENGTH and not rules.max_length:
        if not any("too long" in w for w in warnings):
            warnings.append(f"Input is very long ({length} chars) - might be malformed")
            score += VERY_LONG

    # --- Diversity ---
    if entropy_ratio(value) < MIN_ENTROPY_RATIO:
        warnings.append("Low character diversity (might not be a token)")
        score += LOW_ENTROPY

    return ValidationResult(
        valid=not warnings,
        warnings=warnings,
        suggestions=generate_suggestions(warnings),
        risk_score=max(0, min(100, score)),
    )


def generate_suggestions(warnings: Iterable[str]) -> list[str]:
    """Map warnings to actionable suggestions, deduplicated, in first-seen order."""
    out: list[str] = []
    for warning in warnings:
        for keywords, suggestion in _SUGGESTIONS:
            if any(k in warning for k in keywords):
                if suggestion not in out:
                    out.append(suggestion)
                break
    return out


def is_likely_valid(value: str) -> bool:
    return validate(value).risk_score <= RISK_MEDIUM


# ── Batch ────────────────────────────────────────────────────────────

def validate_batch(values: Iterable[str], rules: ValidationRules | None = None) -> list[ValidationResult]:
    return [validate(v, rules) for v in values]


def batch_summary(results: list[ValidationResult]) -> dict:
    """Aggregate counts and the mean risk score (one decimal)."""
    total = len(results)
    valid = sum(1 for r in results if r.valid)
    average = sum(r.risk_score for r in results) / total if total else 0.0
    return {
        "total": total,
        "valid": valid,
        "invalid": total - valid,
        "average_risk_score": round(average, 1),
        "high_risk_count": sum(1 for r in results if r.risk_score > RISK_HIGH),
    }
