"""Tests for built-in presets and preset helpers."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from dataclasses import FrozenInstanceError

import pytest

from mask_token import PRESETS, ValidationRules, mask_strict, extend_preset, compare_presets, recommend_preset
from mask_token.errors import UnknownPresetError
from mask_token.masker import MASK_CHARACTERS, Masker
from mask_token.presets import get_preset, is_valid_preset, preset_names


def test_builtin_preset_names():
    assert preset_names() == ["strict", "balanced", "lenient", "ui"]
    assert set(PRESETS) == set(preset_names())


def test_preset_values():
    strict = get_preset("strict")
    assert (strict.fixed_length, strict.show_head, strict.show_tail) == (12, 0, 4)
    assert strict.warn_if_plain is True
    assert strict.validators == ValidationRules(min_length=16, no_spaces=True)

    lenient = get_preset("lenient")
    assert (lenient.fixed_length, lenient.show_head, lenient.show_tail) == (6, 4, 6)
    assert lenient.mask_char == "*"
    assert lenient.warn_if_plain is False


def test_is_valid_preset():
    assert is_valid_preset("ui") is True
    assert is_valid_preset("nope") is False
    assert get_preset("nope") is None


def test_extend_preset_merges_validators():
    custom = extend_preset("strict", name="super-strict", fixed_length=16,
                           validators=ValidationRules(min_length=32))
    assert custom.name == "super-strict"
    assert custom.fixed_length == 16
    assert custom.show_tail == 4
    assert custom.validators.min_length == 32
    assert custom.validators.no_spaces is True
    # Base preset untouched
    assert PRESETS["strict"].fixed_length == 12


def test_extend_preset_without_base_validators():
    custom = extend_preset("ui", validators=ValidationRules(min_length=10))
    assert custom.validators == ValidationRules(min_length=10)


def test_extend_preset_accepts_dict_validators():
    custom = extend_preset("strict", validators={"min_length": 40})
    assert custom.validators == ValidationRules(min_length=40, no_spaces=True)


def test_builtin_presets_cannot_be_weakened():
    with pytest.raises(FrozenInstanceError):
        get_preset("strict").show_head = 20
    assert mask_strict("sk_test_1234567890abcdefghijklmn") == "sk_test_••••••••••••klmn"


def test_extend_unknown_preset():
    with pytest.raises(UnknownPresetError):
        extend_preset("nope", fixed_length=4)


def test_extended_preset_usable_by_masker():
    masker = Masker()
    masker.add_preset(extend_preset("ui", name="wide", show_head=6))
    assert masker.mask("npm_a1b2c3d4e5f6g7h8i9j0", preset="wide") == "npm_a1b2c3••••••••i9j0"


def test_compare_presets():
    diff = compare_presets("strict", "lenient")
    assert diff["fixed_length"] == {"strict": 12, "lenient": 6}
    assert diff["mask_char"] == {"strict": "•", "lenient": "*"}
    assert diff["warn_if_plain"] == {"strict": True, "lenient": False}
    assert "preserve_prefix" not in diff
    assert "mode" not in diff


def test_compare_unknown_preset():
    with pytest.raises(UnknownPresetError):
        compare_presets("strict", "nope")


@pytest.mark.parametrize("use_case,expected", [
    ("production logs", "strict"),
    ("compliance audit trail", "strict"),
    ("debugging", "lenient"),
    ("local development", "lenient"),
    ("settings page", "ui"),
    ("a mobile dashboard", "ui"),
    ("something else", "balanced"),
])
def test_recommend_preset(use_case, expected):
    assert recommend_preset(use_case) == expected


def test_mask_characters():
    assert MASK_CHARACTERS["bullet"] == "•"
    assert MASK_CHARACTERS["asterisk"] == "*"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
