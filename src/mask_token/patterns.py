"""Known token formats and the "does this look like a token" heuristic.

The table is checked top to bottom and the first hit wins, so longer,
more specific prefixes sit above the shorter ones they share a lead with
(``sk-ant-`` before ``sk-``) and the generic patterns come last.
"""

from __future__ import annotations
import re

from .types import LiteralPrefix, PrefixDefinition, RegexPrefix

MIN_TOKEN_LENGTH = 16
MAX_TOKEN_LENGTH = 2048
MIN_ENTROPY_RATIO = 0.3

_TOKEN_ALPHABET = re.compile(r"[A-Za-z0-9_.\-/+=]+")
_WHITESPACE = re.compile(r"\s")


KNOWN_PREFIXES: tuple[PrefixDefinition, ...] = (
    # npm
    LiteralPrefix("npm_", "NPM Token", 36, "api"),

    # GitHub
    LiteralPrefix("github_pat_", "GitHub Fine-Grained Personal Access Token", 82, "oauth"),
    LiteralPrefix("ghp_", "GitHub Personal Access Token", 40, "oauth"),
    LiteralPrefix("gho_", "GitHub OAuth Access Token", 40, "oauth"),
    LiteralPrefix("ghu_", "GitHub User-to-Server Token", 40, "oauth"),
    LiteralPrefix("ghs_", "GitHub Server-to-Server Token", 40, "api"),
    LiteralPrefix("ghr_", "GitHub Refresh Token", 40, "oauth"),

    # GitLab
    LiteralPrefix("glpat-", "GitLab Personal Access Token", 20, "api"),
    LiteralPrefix("gldt-", "GitLab Deploy Token", 20, "api"),

    # Stripe
    RegexPrefix(re.compile(r"sk_(?:test|live)_"), "Stripe Secret Key", 32, "secret"),
    RegexPrefix(re.compile(r"pk_(?:test|live)_"), "Stripe Publishable Key", 32, "key"),
    RegexPrefix(re.compile(r"rk_(?:test|live)_"), "Stripe Restricted Key", 32, "key"),

    # Slack
    LiteralPrefix("xoxb-", "Slack Bot Token", 50, "oauth"),
    LiteralPrefix("xoxp-", "Slack User Token", 50, "oauth"),
    LiteralPrefix("xoxa-", "Slack Access Token", 50, "oauth"),
    LiteralPrefix("xoxr-", "Slack Refresh Token", 50, "oauth"),
    LiteralPrefix("xapp-", "Slack App-Level Token", 50, "api"),

    # AWS
    LiteralPrefix("AKIA", "AWS Access Key ID", 20, "key"),
    LiteralPrefix("ASIA", "AWS Session Token", 20, "key"),

    # Google
    LiteralPrefix("AIza", "Google API Key", 39, "api"),

    # Anthropic, then OpenAI (most specific first)
    LiteralPrefix("sk-ant-", "Anthropic API Key", 40, "secret"),
    LiteralPrefix("sk-proj-", "OpenAI Project Key", 48, "secret"),
    LiteralPrefix("sk-", "OpenAI Secret Key", 48, "secret"),

    # Twilio: whole-token shape, only the two-letter lead is kept
    RegexPrefix(re.compile(r"(?P<prefix>SK)[a-f0-9]{32}$"), "Twilio API Key", 34, "api"),
    RegexPrefix(re.compile(r"(?P<prefix>AC)[a-f0-9]{32}$"), "Twilio Account SID", 34, "api"),

    # SendGrid
    LiteralPrefix("SG.", "SendGrid API Key", 69, "api"),

    # Heroku keys are bare UUIDs: nothing to preserve
    RegexPrefix(
        re.compile(r"(?P<prefix>)[a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12}$"),
        "Heroku API Key", 36, "api",
    ),

    # Shopify
    LiteralPrefix("shpat_", "Shopify Private App Token", 32, "api"),
    LiteralPrefix("shpca_", "Shopify Custom App Token", 32, "api"),
    LiteralPrefix("shpss_", "Shopify Shared Secret", 32, "secret"),

    # Vercel / Netlify
    RegexPrefix(re.compile(r"(?P<prefix>vercel_)[a-zA-Z0-9_]+$"), "Vercel Token", 24, "api"),
    RegexPrefix(re.compile(r"(?P<prefix>nf)[a-zA-Z0-9]{40,}$"), "Netlify Access Token", 42, "oauth"),

    # DigitalOcean / Docker Hub
    LiteralPrefix("dop_v1_", "DigitalOcean Personal Access Token", 64, "api"),
    LiteralPrefix("dckr_pat_", "Docker Hub Personal Access Token", 36, "api"),

    # Generic: no length expectation, lower confidence
    RegexPrefix(re.compile(r"api[_-]?key[_-]", re.IGNORECASE), "Generic API Key", None, "api"),
    RegexPrefix(re.compile(r"token[_-]", re.IGNORECASE), "Generic Token", None, "api"),
    RegexPrefix(re.compile(r"secret[_-]", re.IGNORECASE), "Generic Secret", None, "secret"),
    RegexPrefix(re.compile(r"[a-z]{2,6}_"), "Generic Prefixed Token", None, "api"),
)


def entropy_ratio(value: str) -> float:
    """Distinct characters divided by length (0.0 for empty input)."""
    if not value:
        return 0.0
    return len(set(value)) / len(value)


def looks_like_token(value: str) -> bool:
    """Heuristic for inputs with no recognised prefix.

    True when the value is long enough, has no whitespace, uses only
    token characters (letters, digits, ``_ . - / + =``) and is not
    dominated by a few repeated characters.
    """
    if len(value) < MIN_TOKEN_LENGTH:
        return False
    if _WHITESPACE.search(value):
        return False
    if not _TOKEN_ALPHABET.fullmatch(value):
        return False
    return entropy_ratio(value) >= MIN_ENTROPY_RATIO
