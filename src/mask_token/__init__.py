"""mask-token: mask API keys and tokens for safe display and logging."""

from .masker import (
    Masker, mask, mask_batch, define_preset,
    mask_strict, mask_balanced, mask_lenient, mask_ui,
)
from .registry import (
    PrefixRegistry, register_prefix, clear_custom_prefixes, detect,
    supported_types, prefix_count, get_prefix_info,
)
from .validator import validate, validate_batch, batch_summary, risk_level, is_likely_valid
from .patterns import looks_like_token
from .presets import PRESETS, extend_preset, compare_presets, recommend_preset
from .config import create_masker, load_config, load_from_yaml
from .errors import (
    MaskTokenError, InvalidArgumentError, InvalidOptionError, UnknownPresetError, ConfigError,
)
from .types import (
    MaskOptions, PresetConfig, SegmentConfig, MaskResult, OriginalInfo,
    TokenMetadata, ValidationRules, ValidationResult, LiteralPrefix, RegexPrefix,
)

__all__ = [
    "Masker", "mask", "mask_batch", "define_preset",
    "mask_strict", "mask_balanced", "mask_lenient", "mask_ui",
    "PrefixRegistry", "register_prefix", "clear_custom_prefixes", "detect",
    "supported_types", "prefix_count", "get_prefix_info",
    "validate", "validate_batch", "batch_summary", "risk_level", "is_likely_valid",
    "looks_like_token",
    "PRESETS", "extend_preset", "compare_presets", "recommend_preset",
    "create_masker", "load_config", "load_from_yaml",
    "MaskTokenError", "InvalidArgumentError", "InvalidOptionError", "UnknownPresetError", "ConfigError",
    "MaskOptions", "PresetConfig", "SegmentConfig", "MaskResult", "OriginalInfo",
    "TokenMetadata", "ValidationRules", "ValidationResult", "LiteralPrefix", "RegexPrefix",
]
__version__ = "0.1.0"
