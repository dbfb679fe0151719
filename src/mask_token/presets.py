"""Built-in presets: named option bundles.

    strict    12-char mask, last 4 visible, warns on suspicious input
    balanced  8-char mask, first 2 + last 4 visible, warns
    lenient   6-char ``*`` mask, first 4 + last 6 visible (development only)
    ui        8-char mask, first 4 + last 4 visible
"""

from __future__ import annotations
from dataclasses import fields, replace

from .errors import UnknownPresetError
from .types import PresetConfig, ValidationRules, as_rules

PRESET_STRICT = PresetConfig(
    name="strict",
    description="Maximum security - minimal exposure (PCI-DSS/SOC2 compliant)",
    fixed_length=12,
    show_tail=4,
    show_head=0,
    mask_char="•",
    preserve_prefix=True,
    warn_if_plain=True,
    validators=ValidationRules(min_length=16, no_spaces=True),
    mode="auto",
)

PRESET_BALANCED = PresetConfig(
    name="balanced",
    description="Balance security and usability - good for general use",
    fixed_length=8,
    show_tail=4,
    show_head=2,
    mask_char="•",
    preserve_prefix=True,
    warn_if_plain=True,
    validators=ValidationRules(min_length=12, no_spaces=True),
    mode="auto",
)

PRESET_LENIENT = PresetConfig(
    name="lenient",
    description="More visible for debugging - use in development only",
    fixed_length=6,
    show_tail=6,
    show_head=4,
    mask_char="*",
    preserve_prefix=True,
    warn_if_plain=False,
    mode="auto",
)

PRESET_UI = PresetConfig(
    name="ui",
    description="Optimized for UI display - clean and readable",
    fixed_length=8,
    show_tail=4,
    show_head=4,
    mask_char="•",
    preserve_prefix=True,
    warn_if_plain=False,
    mode="auto",
)

PRESETS: dict[str, PresetConfig] = {
    "strict": PRESET_STRICT,
    "balanced": PRESET_BALANCED,
    "lenient": PRESET_LENIENT,
    "ui": PRESET_UI,
}


def get_preset(name: str) -> PresetConfig | None:
    return PRESETS.get(name)


def is_valid_preset(name: str) -> bool:
    return name in PRESETS


def preset_names() -> list[str]:
    return list(PRESETS)


def extend_preset(base: str, **overrides) -> PresetConfig:
    """Derive a preset from a built-in one.

    Validators are merged field by field; everything else is replaced.
    """
    config = PRESETS.get(base)
    if config is None:
        raise UnknownPresetError(base)
    validators = overrides.pop("validators", None)
    if validators is not None:
        overrides["validators"] = (config.validators or ValidationRules()).merged(as_rules(validators))
    return replace(config, **overrides)


def compare_presets(first: str, second: str) -> dict[str, dict[str, object]]:
    """Fields whose values differ between two built-in presets."""
    a, b = PRESETS.get(first), PRESETS.get(second)
    if a is None:
        raise UnknownPresetError(first)
    if b is None:
        raise UnknownPresetError(second)
    diff: dict[str, dict[str, object]] = {}
    for f in fields(PresetConfig):
        va, vb = getattr(a, f.name), getattr(b, f.name)
        if va != vb:
            diff[f.name] = {first: va, second: vb}
    return diff


_RECOMMENDATIONS: list[tuple[tuple[str, ...], str]] = [
    (("production", "compliance", "audit", "log", "security"), "strict"),
    (("debug", "development", "local", "test"), "lenient"),
    (("ui", "interface", "dashboard", "settings", "page"), "ui"),
]


def recommend_preset(use_case: str) -> str:
    """Pick a preset name from a free-text description of the use case."""
    text = use_case.lower()
    for keywords, name in _RECOMMENDATIONS:
        if any(k in text for k in keywords):
            return name
    return "balanced"
