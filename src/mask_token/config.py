"""YAML/dict config loader for mask-token.

Supports loading from a YAML file or a plain dict (for embedding in a
larger application config).

Example YAML:

    mask_token:
      enabled: true
      defaults:
        show_tail: 4
        mask_char: "*"
      prefixes:
        myapp_: MyApp API Key
        int-: Internal Service Token
      presets:
        corporate:
          description: Corporate logging policy
          extends: strict
          fixed_length: 16
          validators:
            min_length: 32
"""

from __future__ import annotations
import logging
from dataclasses import fields, replace
from pathlib import Path
from typing import Any, Mapping

from .errors import ConfigError
from .masker import Masker, ResolvedOptions, fixed_mask_length
from .presets import PRESETS
from .registry import PrefixRegistry
from .types import MaskOptions, PresetConfig, SegmentConfig, TokenMetadata, ValidationRules

logger = logging.getLogger(__name__)

_OPTION_KEYS = {f.name for f in fields(MaskOptions)} - {"preset", "on_warning"}
_RULE_KEYS = {f.name for f in fields(ValidationRules)} - {"custom_check"}


class _DisabledMasker(Masker):
    """Masker used when masking is switched off in config.

    Still fails closed: every input becomes a bare fixed-length mask.
    """

    def _apply(self, value: str, metadata: TokenMetadata, opts: ResolvedOptions) -> str:
        return opts.mask_char * fixed_mask_length(opts)


def load_config(data: Mapping[str, Any] | None) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline)."""
    data = data or {}
    # Support nested under "mask_token" key or flat
    if "mask_token" in data:
        data = data["mask_token"] or {}
    if not isinstance(data, Mapping):
        raise ConfigError("mask_token config must be a mapping")

    prefixes = _section(data, "prefixes")
    for prefix, label in prefixes.items():
        if not isinstance(prefix, str) or not isinstance(label, str) or not prefix or not label:
            raise ConfigError(f"Invalid prefix entry: {prefix!r}: {label!r}")

    enabled = data.get("enabled", True)
    if not isinstance(enabled, bool):
        raise ConfigError(f"'enabled' must be true or false, got {enabled!r}")

    presets: dict[str, PresetConfig] = {}
    for name, raw in _section(data, "presets").items():
        presets[name] = _build_preset(name, raw)

    return {
        "enabled": enabled,
        "defaults": _build_options(_section(data, "defaults"), "defaults"),
        "prefixes": dict(prefixes),
        "presets": presets,
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    import yaml  # optional dependency
    with open(path, encoding="utf-8") as f:
        return load_config(yaml.safe_load(f))


def create_masker(config: Mapping[str, Any], *, registry: PrefixRegistry | None = None) -> Masker:
    """Create a fully configured Masker from a config dict.

    The masker gets its own registry (unless one is passed) so configured
    prefixes don't leak into the process default.
    """
    cfg = config if _is_normalized(config) else load_config(config)

    registry = PrefixRegistry() if registry is None else registry
    for prefix, label in cfg["prefixes"].items():
        registry.register(prefix, label)

    cls = Masker if cfg["enabled"] else _DisabledMasker
    masker = cls(registry=registry, defaults=cfg["defaults"])
    for preset in cfg["presets"].values():
        masker.add_preset(preset)
        logger.debug("loaded preset %r", preset.name)
    # Surface bad values at construction time, not on first mask
    masker.resolve()
    for name in cfg["presets"]:
        masker.resolve(preset=name)
    return masker


# ── Helpers ──────────────────────────────────────────────────────────

def _is_normalized(config: Mapping[str, Any]) -> bool:
    return isinstance(config.get("defaults"), MaskOptions) and "enabled" in config


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key) or {}
    if not isinstance(value, Mapping):
        raise ConfigError(f"'{key}' must be a mapping")
    return value


def _build_options(raw: Mapping[str, Any], where: str) -> MaskOptions:
    unknown = set(raw) - _OPTION_KEYS
    if unknown:
        raise ConfigError(f"Unknown option(s) in {where}: {', '.join(sorted(unknown))}")
    kwargs = dict(raw)
    if "validators" in kwargs and kwargs["validators"] is not None:
        rules = _section(kwargs, "validators")
        bad = set(rules) - _RULE_KEYS
        if bad:
            raise ConfigError(f"Unknown validator(s) in {where}: {', '.join(sorted(bad))}")
        kwargs["validators"] = ValidationRules(**rules)
    if "segments" in kwargs and kwargs["segments"] is not None:
        segments = _section(kwargs, "segments")
        bad = set(segments) - {"delimiter", "show_chars_per_segment"}
        if bad:
            raise ConfigError(f"Unknown segment option(s) in {where}: {', '.join(sorted(bad))}")
        kwargs["segments"] = SegmentConfig(**segments)
    return MaskOptions(**kwargs)


def _build_preset(name: str, raw: Mapping[str, Any] | None) -> PresetConfig:
    if raw is not None and not isinstance(raw, Mapping):
        raise ConfigError(f"Preset {name!r} must be a mapping")
    raw = dict(raw or {})
    base_name = raw.pop("extends", None)
    description = raw.pop("description", None)
    options = _build_options(raw, f"preset {name!r}")

    if base_name is None:
        base = PresetConfig(name=name)
    else:
        base = PRESETS.get(base_name)
        if base is None:
            raise ConfigError(f"Preset {name!r} extends unknown preset {base_name!r}")

    overrides = {k: getattr(options, k) for k in _OPTION_KEYS if getattr(options, k) is not None}
    if "validators" in overrides and base.validators is not None:
        overrides["validators"] = base.validators.merged(overrides["validators"])
    return replace(
        base,
        name=name,
        description=description if description is not None else base.description,
        **overrides,
    )
