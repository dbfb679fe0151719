"""Core types."""

from __future__ import annotations
import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Literal, Mapping, Union

from .errors import InvalidOptionError
from .risk import risk_level as _risk_level

Category = Literal["api", "oauth", "secret", "key"]
Mode = Literal["auto", "standard", "jwt", "apikey", "custom"]


# ── Prefix definitions ───────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class LiteralPrefix:
    """A token format identified by a fixed leading string."""
    text: str                          # e.g. "npm_"
    name: str                          # e.g. "NPM Token"
    min_length: int | None = None
    category: Category | None = None

    def match(self, value: str) -> str | None:
        return self.text if value.startswith(self.text) else None


@dataclass(frozen=True, slots=True)
class RegexPrefix:
    """A token format identified by a regex anchored at the start.

    If the pattern defines a ``prefix`` group, only that group is treated
    as the preservable prefix; otherwise the whole match is.
    """
    pattern: re.Pattern
    name: str
    min_length: int | None = None
    category: Category | None = None

    def match(self, value: str) -> str | None:
        m = self.pattern.match(value)
        if m is None:
            return None
        if "prefix" in self.pattern.groupindex:
            return m.group("prefix")
        return m.group()


PrefixDefinition = Union[LiteralPrefix, RegexPrefix]


@dataclass(frozen=True, slots=True)
class TokenMetadata:
    """What detection learned about an input."""
    type: str = "unknown"
    prefix: str | None = None
    confidence: float = 0.0            # 0.0–1.0
    is_likely_token: bool = False


# ── Validation ───────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class ValidationRules:
    """Optional checks for ``validate``.  ``None`` means "not checked"."""
    min_length: int | None = None
    max_length: int | None = None
    no_spaces: bool | None = None
    require_prefix: bool | None = None
    pattern: re.Pattern | str | None = None
    custom_check: Callable[[str], bool] | None = None

    def merged(self, other: ValidationRules | None) -> ValidationRules:
        """Field-by-field overlay; set fields of ``other`` win."""
        if other is None:
            return self
        return ValidationRules(**{
            name: getattr(other, name) if getattr(other, name) is not None else getattr(self, name)
            for name in _RULE_FIELDS
        })


_RULE_FIELDS = ("min_length", "max_length", "no_spaces", "require_prefix", "pattern", "custom_check")


@dataclass(slots=True)
class ValidationResult:
    """Outcome of validating an input."""
    valid: bool = True
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    risk_score: int = 0                # 0–100

    @property
    def risk_level(self) -> str:
        return _risk_level(self.risk_score)


# ── Masking options ──────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class SegmentConfig:
    """Delimiter and visible characters per segment for jwt/custom modes."""
    delimiter: str | None = None
    show_chars_per_segment: int | None = None


@dataclass(frozen=True)
class MaskOptions:
    """Caller-supplied masking options.  ``None`` means "use the layer below"."""
    fixed_length: int | bool | None = None
    show_head: int | None = None
    show_tail: int | None = None
    mask_char: str | None = None
    preserve_prefix: bool | list[str] | tuple[str, ...] | None = None
    custom_prefixes: Mapping[str, str] | None = None
    warn_if_plain: bool | None = None
    validators: ValidationRules | None = None
    on_warning: Callable[[ValidationResult], None] | None = None
    mode: Mode | None = None
    segments: SegmentConfig | None = None
    include_metadata: bool | None = None
    preset: str | None = None

    def __post_init__(self) -> None:
        # Accept plain dicts for the nested option groups
        object.__setattr__(self, "validators", as_rules(self.validators))
        object.__setattr__(self, "segments", as_segments(self.segments))
        if isinstance(self.preserve_prefix, (list, set, frozenset)):
            object.__setattr__(self, "preserve_prefix", tuple(self.preserve_prefix))
        if isinstance(self.custom_prefixes, Mapping):
            object.__setattr__(self, "custom_prefixes", MappingProxyType(dict(self.custom_prefixes)))


@dataclass(frozen=True)
class PresetConfig(MaskOptions):
    """A named bundle of options."""
    name: str = "custom"
    description: str | None = None


OPTION_FIELDS = (
    "fixed_length", "show_head", "show_tail", "mask_char", "preserve_prefix",
    "custom_prefixes", "warn_if_plain", "validators", "on_warning", "mode",
    "segments", "include_metadata",
)


def as_rules(value: ValidationRules | Mapping[str, Any] | None) -> ValidationRules | None:
    """Coerce a mapping into ValidationRules; None and instances pass through."""
    if value is None or isinstance(value, ValidationRules):
        return value
    if not isinstance(value, Mapping):
        raise InvalidOptionError("validators must be ValidationRules or a mapping")
    unknown = set(value) - set(_RULE_FIELDS)
    if unknown:
        raise InvalidOptionError(f"Unknown validator(s): {', '.join(sorted(unknown))}")
    return ValidationRules(**value)


def as_segments(value: SegmentConfig | Mapping[str, Any] | None) -> SegmentConfig | None:
    if value is None or isinstance(value, SegmentConfig):
        return value
    if not isinstance(value, Mapping):
        raise InvalidOptionError("segments must be SegmentConfig or a mapping")
    unknown = set(value) - {"delimiter", "show_chars_per_segment"}
    if unknown:
        raise InvalidOptionError(f"Unknown segment option(s): {', '.join(sorted(unknown))}")
    return SegmentConfig(**value)


# ── Results ──────────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class OriginalInfo:
    """What may be said about the input without revealing it."""
    length: int
    has_prefix: bool


@dataclass(slots=True)
class MaskResult:
    """Result of ``mask(..., include_metadata=True)``."""
    masked: str
    metadata: TokenMetadata
    validation: ValidationResult
    original: OriginalInfo
