"""Prefix registry: classifies an input against known and custom formats.

Usage:
    registry = PrefixRegistry()           # starts with no custom prefixes
    registry.register("myapp_", "MyApp API Key")
    registry.detect("myapp_s3cr3t")       # TokenMetadata(type="MyApp API Key", ...)

Resolution order (first hit wins):
  1. prefixes passed to the call
  2. prefixes registered on this registry
  3. the static ``KNOWN_PREFIXES`` table
  4. the ``looks_like_token`` heuristic (type "unknown", confidence 0)

Writes take a lock and swap in a new dict, so ``detect`` reads a stable
snapshot without locking.
"""

from __future__ import annotations
import logging
import threading
from collections import Counter
from typing import Mapping

from .errors import InvalidArgumentError
from .patterns import KNOWN_PREFIXES, looks_like_token
from .types import LiteralPrefix, PrefixDefinition, TokenMetadata

logger = logging.getLogger(__name__)

_UNKNOWN = TokenMetadata()


class PrefixRegistry:
    """Known token formats plus a mutable map of custom prefixes."""

    __slots__ = ("_custom", "_lock", "_known")

    def __init__(self, known: tuple[PrefixDefinition, ...] = KNOWN_PREFIXES) -> None:
        self._custom: dict[str, str] = {}      # "myapp_" → "MyApp API Key"
        self._lock = threading.Lock()
        self._known = known

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def register(self, prefix: str, label: str) -> None:
        """Register (or relabel) a custom prefix.  Last write wins."""
        if not isinstance(prefix, str) or not prefix:
            raise InvalidArgumentError("Prefix must be a non-empty string")
        if not isinstance(label, str) or not label:
            raise InvalidArgumentError("Label must be a non-empty string")
        with self._lock:
            updated = dict(self._custom)
            updated[prefix] = label
            self._custom = updated
        logger.debug("registered custom prefix %r as %r", prefix, label)

    def clear(self) -> None:
        with self._lock:
            self._custom = {}

    # ------------------------------------------------------------------
    # Detection
    # ------------------------------------------------------------------

    def detect(self, value: str, custom_prefixes: Mapping[str, str] | None = None) -> TokenMetadata:
        """Classify ``value``.  Never raises for string input."""
        if not isinstance(value, str) or not value:
            return _UNKNOWN

        for source in (custom_prefixes or {}, self._custom):
            for prefix, name in source.items():
                if value.startswith(prefix):
                    return TokenMetadata(type=name, prefix=prefix, confidence=1.0, is_likely_token=True)

        for definition in self._known:
            matched = definition.match(value)
            if matched is None:
                continue
            confidence = _length_confidence(len(value), definition.min_length)
            return TokenMetadata(
                type=definition.name,
                prefix=matched or None,
                confidence=confidence,
                is_likely_token=confidence > 0.7,
            )

        return TokenMetadata(is_likely_token=looks_like_token(value))

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def custom(self) -> dict[str, str]:
        """Copy of the custom prefix → label map."""
        return dict(self._custom)

    def supported_types(self) -> list[str]:
        """Custom labels first, then the built-in type names."""
        return [*self._custom.values(), *(d.name for d in self._known)]

    def prefix_count(self) -> dict:
        custom = len(self._custom)
        builtin = len(self._known)
        by_category = Counter(d.category for d in self._known if d.category)
        return {
            "total": custom + builtin,
            "custom": custom,
            "builtin": builtin,
            "by_category": dict(by_category),
        }

    def get_prefix_info(self, prefix: str) -> PrefixDefinition | None:
        """Look up a literal prefix; regex formats can't be looked up by text."""
        label = self._custom.get(prefix)
        if label:
            return LiteralPrefix(prefix, label, category="api")
        for definition in self._known:
            if isinstance(definition, LiteralPrefix) and definition.text == prefix:
                return definition
        return None


def _length_confidence(length: int, min_length: int | None) -> float:
    if not min_length:
        return 0.9
    if length >= min_length:
        return 1.0
    if length >= min_length * 0.8:
        return 0.8
    return 0.6


# ── Process default ──────────────────────────────────────────────────

default_registry = PrefixRegistry()


def register_prefix(prefix: str, label: str) -> None:
    """Register a custom prefix on the process default registry."""
    default_registry.register(prefix, label)


def clear_custom_prefixes() -> None:
    """Drop every custom prefix from the process default registry."""
    default_registry.clear()


def detect(value: str, custom_prefixes: Mapping[str, str] | None = None) -> TokenMetadata:
    return default_registry.detect(value, custom_prefixes)


def supported_types() -> list[str]:
    return default_registry.supported_types()


def prefix_count() -> dict:
    return default_registry.prefix_count()


def get_prefix_info(prefix: str) -> PrefixDefinition | None:
    return default_registry.get_prefix_info(prefix)
