"""Masker: the main API.  Resolve options, classify, mask.

Usage:
    from mask_token import mask, Masker

    mask("npm_a1b2c3d4e5f6g7h8i9j0")                 # "npm_••••••••i9j0"
    mask("npm_a1b2c3d4e5f6g7h8i9j0", show_head=2)    # "npm_a1••••••••i9j0"
    mask("sk_test_1234567890abcdefghijklmn", preset="strict")
                                                      # "sk_test_••••••••••••klmn"

    masker = Masker(registry=PrefixRegistry())        # isolated custom prefixes
    result = masker.mask(token, include_metadata=True)
    result.metadata.type                              # "NPM Token"

Guarantee: for a non-empty secret the visible head and tail never cover
the whole secret, whatever ``show_head`` / ``show_tail`` ask for.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field, fields, replace
from typing import Callable, Iterable, Mapping

from .errors import InvalidArgumentError, InvalidOptionError, UnknownPresetError
from .presets import PRESETS
from .registry import PrefixRegistry, default_registry
from .types import (
    OPTION_FIELDS,
    MaskOptions,
    MaskResult,
    OriginalInfo,
    PresetConfig,
    SegmentConfig,
    TokenMetadata,
    ValidationResult,
    ValidationRules,
)
from .validator import validate

logger = logging.getLogger(__name__)

DEFAULT_MASK_CHAR = "•"
DEFAULT_FIXED_LENGTH = 8
MIN_MASKED_CHARS = 1

MASK_CHARACTERS = {
    "bullet": "•",
    "asterisk": "*",
    "times": "×",
    "line": "─",
}

MODES = ("auto", "standard", "jwt", "apikey", "custom")

JWT_SEGMENT_COUNT = 3
JWT_DELIMITER = "."
JWT_SEGMENT_CHARS = 3
JWT_MASK_LENGTH = 3

CUSTOM_DELIMITER = "-"
CUSTOM_SEGMENT_CHARS = 2
CUSTOM_MASK_LENGTH = 4


@dataclass(frozen=True, slots=True)
class ResolvedOptions:
    """Fully populated options; produced once per call by ``Masker.resolve``."""
    fixed_length: int | bool = True
    show_head: int = 0
    show_tail: int = 4
    mask_char: str = DEFAULT_MASK_CHAR
    preserve_prefix: bool | tuple[str, ...] = True
    custom_prefixes: Mapping[str, str] = field(default_factory=dict)
    warn_if_plain: bool = False
    validators: ValidationRules | None = None
    on_warning: Callable[[ValidationResult], None] | None = None
    mode: str = "auto"
    segments: SegmentConfig = field(default_factory=SegmentConfig)
    include_metadata: bool = False


DEFAULTS = ResolvedOptions()

_OPTION_KEYS = {f.name for f in fields(MaskOptions)}


class Masker:
    """Masking engine bound to a prefix registry and a preset table.

    Option layers, lowest first: built-in defaults, ``defaults`` given
    here, the named preset, then the options of the call.
    """

    def __init__(
        self,
        *,
        registry: PrefixRegistry | None = None,
        presets: Mapping[str, PresetConfig] | None = None,
        defaults: MaskOptions | None = None,
    ) -> None:
        self.registry = default_registry if registry is None else registry
        self.presets: dict[str, PresetConfig] = dict(PRESETS if presets is None else presets)
        self.defaults = defaults

    def add_preset(self, config: PresetConfig) -> None:
        self.presets[config.name] = config

    # ------------------------------------------------------------------
    # Options
    # ------------------------------------------------------------------

    def resolve(self, options: MaskOptions | Mapping | None = None, **overrides) -> ResolvedOptions:
        """Layer defaults, preset and explicit options into one value.

        Raises UnknownPresetError for an unregistered preset name and
        InvalidOptionError for out-of-range values.
        """
        if isinstance(options, Mapping):
            options = MaskOptions(**_known_keys(options))
        if overrides:
            _known_keys(overrides)
            options = replace(options, **overrides) if options is not None else MaskOptions(**overrides)

        preset = None
        if options is not None and options.preset is not None:
            preset = self.presets.get(options.preset)
            if preset is None:
                raise UnknownPresetError(options.preset)

        values = {name: getattr(DEFAULTS, name) for name in OPTION_FIELDS}
        for layer in (self.defaults, preset, options):
            if layer is None:
                continue
            for name in OPTION_FIELDS:
                value = getattr(layer, name)
                if value is None:
                    continue
                if name == "validators" and values["validators"] is not None:
                    value = values["validators"].merged(value)
                values[name] = value

        return ResolvedOptions(**_checked(values))

    # ------------------------------------------------------------------
    # Masking
    # ------------------------------------------------------------------

    def mask(self, value: str, options: MaskOptions | Mapping | None = None, **overrides) -> str | MaskResult:
        """Mask ``value``.  Returns a MaskResult when ``include_metadata`` is set."""
        if not isinstance(value, str):
            raise InvalidArgumentError(f"Input must be a string, got {type(value).__name__}")
        opts = self.resolve(options, **overrides)

        validation = ValidationResult()
        if opts.warn_if_plain:
            validation = validate(value, opts.validators)
            if not validation.valid:
                _report(validation, opts.on_warning)

        metadata = self.registry.detect(value, opts.custom_prefixes)
        masked = self._apply(value, metadata, opts)

        if opts.include_metadata:
            return MaskResult(
                masked=masked,
                metadata=metadata,
                validation=validation,
                original=OriginalInfo(length=len(value), has_prefix=metadata.prefix is not None),
            )
        return masked

    def _apply(self, value: str, metadata: TokenMetadata, opts: ResolvedOptions) -> str:
        if opts.mode == "jwt":
            return _mask_jwt(value, metadata, opts)
        if opts.mode == "custom":
            return _mask_custom_segments(value, opts)
        return _mask_standard(value, metadata, opts)

    def mask_batch(self, values: Iterable[str], options: MaskOptions | Mapping | None = None, **overrides) -> list:
        return [self.mask(v, options, **overrides) for v in values]

    def define_preset(self, config: PresetConfig) -> Callable[[str], str]:
        """Bind ``config`` into a one-argument masking function."""
        bound = replace(config, include_metadata=False)
        self.resolve(bound)  # fail now, not on first use

        def apply(value: str) -> str:
            return self.mask(value, bound)

        apply.__name__ = f"mask_{config.name}"
        return apply


# ── Strategies ───────────────────────────────────────────────────────

def _mask_standard(value: str, metadata: TokenMetadata, opts: ResolvedOptions) -> str:
    """prefix + head + fixed mask + tail, never exposing the whole secret."""
    prefix, secret = "", value
    if opts.preserve_prefix and metadata.prefix:
        if opts.preserve_prefix is True or metadata.prefix in opts.preserve_prefix:
            prefix, secret = metadata.prefix, value[len(metadata.prefix):]

    if not secret:
        return prefix

    length = len(secret)
    head_chars = min(opts.show_head, length)
    tail_chars = min(opts.show_tail, length)

    if head_chars + tail_chars >= length:
        max_visible = max(0, length - MIN_MASKED_CHARS)
        if max_visible == 0:
            return prefix + opts.mask_char * fixed_mask_length(opts)
        # Tail wins the split: trailing characters identify a token best
        adjusted_tail = min(tail_chars, max_visible // 2)
        adjusted_head = min(head_chars, max_visible - adjusted_tail)
        if opts.warn_if_plain:
            logger.warning(
                "Adjusted show_head (%d->%d) and show_tail (%d->%d) to prevent "
                "full secret exposure (secret length: %d)",
                opts.show_head, adjusted_head, opts.show_tail, adjusted_tail, length,
            )
        head_chars, tail_chars = adjusted_head, adjusted_tail

    head = secret[:head_chars]
    tail = secret[length - tail_chars:] if tail_chars else ""

    if opts.fixed_length is False:
        # Reveals the approximate secret length
        body = max(MIN_MASKED_CHARS, length - head_chars - tail_chars)
    else:
        body = fixed_mask_length(opts)

    return prefix + head + opts.mask_char * body + tail


def _mask_jwt(value: str, metadata: TokenMetadata, opts: ResolvedOptions) -> str:
    """header.payload.signature → first N chars of each segment + 3 mask chars."""
    delimiter = opts.segments.delimiter or JWT_DELIMITER
    parts = value.split(delimiter)
    if len(parts) != JWT_SEGMENT_COUNT:
        logger.warning(
            "JWT mode expects %d segments, found %d; falling back to standard masking",
            JWT_SEGMENT_COUNT, len(parts),
        )
        return _mask_standard(value, metadata, opts)

    shown = _segment_chars(opts, JWT_SEGMENT_CHARS)
    # Segments no longer than `shown` are left as they are
    return delimiter.join(
        part if len(part) <= shown else part[:shown] + opts.mask_char * JWT_MASK_LENGTH
        for part in parts
    )


def _mask_custom_segments(value: str, opts: ResolvedOptions) -> str:
    """Each delimited segment → first N + 4 mask chars + last N."""
    delimiter = opts.segments.delimiter or CUSTOM_DELIMITER
    shown = _segment_chars(opts, CUSTOM_SEGMENT_CHARS)
    out: list[str] = []
    for part in value.split(delimiter):
        if len(part) <= shown * 2:
            out.append(part)
            continue
        tail = part[len(part) - shown:] if shown else ""
        out.append(part[:shown] + opts.mask_char * CUSTOM_MASK_LENGTH + tail)
    return delimiter.join(out)


def fixed_mask_length(opts: ResolvedOptions) -> int:
    if isinstance(opts.fixed_length, bool):
        return DEFAULT_FIXED_LENGTH
    return opts.fixed_length


def _segment_chars(opts: ResolvedOptions, default: int) -> int:
    n = opts.segments.show_chars_per_segment
    return default if n is None else n


def _report(validation: ValidationResult, on_warning: Callable[[ValidationResult], None] | None) -> None:
    if on_warning is not None:
        on_warning(validation)
        return
    logger.warning("%s", ", ".join(validation.warnings))
    if validation.suggestions:
        logger.warning("Suggestions: %s", ", ".join(validation.suggestions))


def _known_keys(raw: Mapping) -> Mapping:
    unknown = set(raw) - _OPTION_KEYS
    if unknown:
        raise InvalidOptionError(f"Unknown option(s): {', '.join(sorted(unknown))}")
    return raw


def _checked(values: dict) -> dict:
    """Validate resolved option values; normalise containers."""
    fixed = values["fixed_length"]
    if not isinstance(fixed, bool) and not (isinstance(fixed, int) and fixed > 0):
        raise InvalidOptionError("fixed_length must be a positive integer or a boolean")
    for name in ("show_head", "show_tail"):
        n = values[name]
        if isinstance(n, bool) or not isinstance(n, int) or n < 0:
            raise InvalidOptionError(f"{name} must be a non-negative integer")
    if not isinstance(values["mask_char"], str) or not values["mask_char"]:
        raise InvalidOptionError("mask_char must be a non-empty string")
    if values["mode"] not in MODES:
        raise InvalidOptionError(f"Invalid masking mode: {values['mode']!r}")

    preserve = values["preserve_prefix"]
    if not isinstance(preserve, bool):
        if not isinstance(preserve, (list, tuple, set, frozenset)) or not all(isinstance(p, str) for p in preserve):
            raise InvalidOptionError("preserve_prefix must be a boolean or a list of prefixes")
        values["preserve_prefix"] = tuple(preserve)

    values["custom_prefixes"] = dict(values["custom_prefixes"])

    segments = values["segments"]
    if segments.delimiter is not None and (not isinstance(segments.delimiter, str) or not segments.delimiter):
        raise InvalidOptionError("segments.delimiter must be a non-empty string")
    n = segments.show_chars_per_segment
    if n is not None and (isinstance(n, bool) or not isinstance(n, int) or n < 0):
        raise InvalidOptionError("segments.show_chars_per_segment must be a non-negative integer")
    return values


# ── Process default ──────────────────────────────────────────────────

_default = Masker()


def mask(value: str, options: MaskOptions | Mapping | None = None, **overrides) -> str | MaskResult:
    """Mask with the process default engine (default prefix registry)."""
    return _default.mask(value, options, **overrides)


def mask_strict(value: str) -> str:
    return _default.mask(value, preset="strict")


def mask_balanced(value: str) -> str:
    return _default.mask(value, preset="balanced")


def mask_lenient(value: str) -> str:
    return _default.mask(value, preset="lenient")


def mask_ui(value: str) -> str:
    return _default.mask(value, preset="ui")


def mask_batch(values: Iterable[str], options: MaskOptions | Mapping | None = None, **overrides) -> list:
    return _default.mask_batch(values, options, **overrides)


def define_preset(config: PresetConfig) -> Callable[[str], str]:
    return _default.define_preset(config)
