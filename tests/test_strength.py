"""
Tests for the password strength analyzer.

Covers: reference scores, level bands, empty input, character class flags,
entropy, common-password and pattern penalties, feedback, generation
guarantees, the strength gate, and the common-password lookup.
"""

import math
import random
import string

import pytest

from securepass.core.interfaces import PasswordAnalyzer
from securepass.vault.models import StrengthLevel
from securepass.vault.strength import (
    COMMON_FEEDBACK,
    COMMON_PASSWORDS,
    EMPTY_FEEDBACK,
    LEVEL_FEEDBACK,
    MIN_GENERATED_LENGTH,
    SPECIAL_CHARS,
    StrengthAnalyzer,
    calculate_entropy,
    has_repeated_chars,
    has_sequential_chars,
    level_for_score,
)


# ===================================================================
# Helpers
# ===================================================================


def _make_analyzer(seed=None) -> StrengthAnalyzer:
    """Create an analyzer; seeded runs use a deterministic RNG."""
    if seed is None:
        return StrengthAnalyzer()
    return StrengthAnalyzer(rng=random.Random(seed))


# ===================================================================
# TestReferenceScores
# ===================================================================


class TestReferenceScores:
    """Known passwords score exactly as the rules dictate."""

    def test_password123_is_fair(self):
        # 20 length + 20 classes + 10 entropy - 10 for "123"
        result = _make_analyzer().analyze_strength("password123")
        assert result.score == 40
        assert result.level == StrengthLevel.FAIR
        assert result.is_common_password is False

    def test_passphrase_is_strong(self):
        # Long but single-class: 40 length + 10 lower + 20 entropy
        result = _make_analyzer().analyze_strength("correcthorsebatterystaple")
        assert result.score == 70
        assert result.level == StrengthLevel.STRONG

    def test_troubador(self):
        result = _make_analyzer().analyze_strength("Tr0ub4dor&3")
        assert result.score == 75
        assert result.level == StrengthLevel.STRONG

    def test_sunshine_variant(self):
        result = _make_analyzer().analyze_strength("Sun$hine99")
        assert result.score == 70
        assert result.level == StrengthLevel.STRONG

    def test_max_score_password(self):
        result = _make_analyzer().analyze_strength("xK9#mP2$vN4@qL7!")
        assert result.score == 100
        assert result.level == StrengthLevel.VERY_STRONG
        assert result.feedback == LEVEL_FEEDBACK[StrengthLevel.VERY_STRONG]

    def test_common_password_clamped_to_zero(self):
        result = _make_analyzer().analyze_strength("password")
        assert result.score == 0
        assert result.level == StrengthLevel.WEAK
        assert result.is_common_password is True
        assert result.feedback == COMMON_FEEDBACK

    def test_score_always_in_bounds(self):
        analyzer = _make_analyzer(seed=7)
        samples = ["a", "aaa", "abc", "password", "P@ss", " ", "ÀÉÎ", "1" * 50]
        samples += [analyzer.generate_strong_password(n) for n in range(1, 40)]
        for pwd in samples:
            score = analyzer.analyze_strength(pwd).score
            assert 0 <= score <= 100, pwd


# ===================================================================
# TestLevelBands
# ===================================================================


class TestLevelBands:
    """Score to level mapping."""

    @pytest.mark.parametrize("score,level", [
        (0, StrengthLevel.WEAK),
        (29, StrengthLevel.WEAK),
        (30, StrengthLevel.FAIR),
        (49, StrengthLevel.FAIR),
        (50, StrengthLevel.GOOD),
        (69, StrengthLevel.GOOD),
        (70, StrengthLevel.STRONG),
        (89, StrengthLevel.STRONG),
        (90, StrengthLevel.VERY_STRONG),
        (100, StrengthLevel.VERY_STRONG),
    ])
    def test_band_edges(self, score, level):
        assert level_for_score(score) == level

    def test_scored_passwords_never_very_weak(self):
        result = _make_analyzer().analyze_strength("a")
        assert result.level != StrengthLevel.VERY_WEAK

    def test_levels_are_ordered(self):
        assert StrengthLevel.VERY_WEAK.rank < StrengthLevel.WEAK.rank
        assert StrengthLevel.STRONG.rank < StrengthLevel.VERY_STRONG.rank


# ===================================================================
# TestEmptyInput
# ===================================================================


class TestEmptyInput:
    """Empty or missing input is VERY_WEAK, never an error."""

    @pytest.mark.parametrize("password", ["", None])
    def test_empty_is_very_weak(self, password):
        result = _make_analyzer().analyze_strength(password)
        assert result.score == 0
        assert result.level == StrengthLevel.VERY_WEAK
        assert result.feedback == EMPTY_FEEDBACK
        assert result.length == 0
        assert result.entropy == 0.0
        assert not (result.has_upper or result.has_lower or result.has_digit or result.has_special)

    def test_whitespace_only_is_scored(self):
        result = _make_analyzer().analyze_strength("   ")
        assert result.level == StrengthLevel.WEAK
        assert result.entropy == 0.0
        assert result.length == 3


# ===================================================================
# TestCharacterClasses
# ===================================================================


class TestCharacterClasses:
    """Class flags and their score contribution."""

    def test_flags(self):
        result = _make_analyzer().analyze_strength("Tr0ub4dor&3")
        assert result.has_upper and result.has_lower
        assert result.has_digit and result.has_special
        assert result.length == 11

    def test_space_is_not_special(self):
        result = _make_analyzer().analyze_strength("a b")
        assert result.has_special is False

    def test_only_decimal_digits_count(self):
        # Superscripts are digits to str.isdigit but not decimal digits
        result = _make_analyzer().analyze_strength("abc\u00b2")
        assert result.has_digit is False
        assert result.entropy == pytest.approx(4 * math.log2(26))

    def test_special_set_size(self):
        assert len(SPECIAL_CHARS) == 26
        assert len(set(SPECIAL_CHARS)) == 26

    def test_each_class_adds_ten(self):
        analyzer = _make_analyzer()
        # Same length (no length bonus) and low entropy across all three
        assert analyzer.analyze_strength("zq").score == 10
        assert analyzer.analyze_strength("zQ").score == 20
        assert analyzer.analyze_strength("z9").score == 20


# ===================================================================
# TestEntropy
# ===================================================================


class TestEntropy:
    """length * log2(charset size)."""

    def test_lowercase_only(self):
        assert calculate_entropy("abcd") == pytest.approx(4 * math.log2(26))

    def test_all_classes(self):
        assert calculate_entropy("aB3!") == pytest.approx(4 * math.log2(88))

    def test_no_known_class(self):
        assert calculate_entropy("   ") == 0.0

    def test_result_carries_entropy(self):
        result = _make_analyzer().analyze_strength("password123")
        assert result.entropy == pytest.approx(11 * math.log2(36))


# ===================================================================
# TestPenalties
# ===================================================================


class TestPenalties:
    """Common list, ascending runs and triple repeats."""

    def test_common_match_is_case_insensitive(self):
        result = _make_analyzer().analyze_strength("PaSsWoRd")
        assert result.is_common_password is True

    def test_common_list_size(self):
        assert len(COMMON_PASSWORDS) == 18

    def test_sequential_detection(self):
        assert has_sequential_chars("xabcx")
        assert has_sequential_chars("x789")
        assert not has_sequential_chars("cba")
        assert not has_sequential_chars("ab")

    def test_repeat_detection(self):
        assert has_repeated_chars("xaaax")
        assert not has_repeated_chars("aabbaa")

    def test_sequence_costs_ten(self):
        analyzer = _make_analyzer()
        # "abd" vs "abc": same classes, length and entropy
        assert analyzer.analyze_strength("abd").score - analyzer.analyze_strength("abc").score == 10

    def test_repeat_costs_ten(self):
        analyzer = _make_analyzer()
        assert analyzer.analyze_strength("aba").score - analyzer.analyze_strength("aaa").score == 10


# ===================================================================
# TestGeneration
# ===================================================================


class TestGeneration:
    """Generated passwords meet their class and length guarantees."""

    def test_default_length(self):
        assert len(_make_analyzer().generate_strong_password()) == 16

    @pytest.mark.parametrize("requested", [-5, 0, 1, 7])
    def test_short_lengths_clamped(self, requested):
        pwd = _make_analyzer().generate_strong_password(requested)
        assert len(pwd) == MIN_GENERATED_LENGTH

    def test_requested_length_honored(self):
        assert len(_make_analyzer().generate_strong_password(40)) == 40

    def test_all_classes_present(self):
        analyzer = _make_analyzer(seed=1)
        for _ in range(200):
            pwd = analyzer.generate_strong_password(8, True)
            assert any(c in string.ascii_uppercase for c in pwd)
            assert any(c in string.ascii_lowercase for c in pwd)
            assert any(c in string.digits for c in pwd)
            assert any(c in SPECIAL_CHARS for c in pwd)

    def test_without_special(self):
        analyzer = _make_analyzer(seed=2)
        for _ in range(200):
            pwd = analyzer.generate_strong_password(12, False)
            assert pwd.isalnum()
            assert any(c.isupper() for c in pwd)
            assert any(c.islower() for c in pwd)
            assert any(c.isdigit() for c in pwd)

    def test_seeded_generation_is_reproducible(self):
        a = _make_analyzer(seed=99).generate_strong_password(20)
        b = _make_analyzer(seed=99).generate_strong_password(20)
        assert a == b

    def test_default_rng_varies(self):
        analyzer = _make_analyzer()
        generated = {analyzer.generate_strong_password(16) for _ in range(20)}
        assert len(generated) > 1


# ===================================================================
# TestValidation
# ===================================================================


class TestValidation:
    """The strength gate for new vault entries."""

    @pytest.mark.parametrize("password", ["Tr0ub4dor&3", "Sun$hine99", "correcthorsebatterystaple"])
    def test_accepts_strong(self, password):
        assert _make_analyzer().validate_password(password) is True

    def test_rejects_none(self):
        assert _make_analyzer().validate_password(None) is False

    def test_rejects_short_even_if_varied(self):
        assert _make_analyzer().validate_password("aB3!x") is False

    def test_rejects_low_score(self):
        # Length 11 but only scores 40
        assert _make_analyzer().validate_password("password123") is False

    def test_rejects_common(self):
        assert _make_analyzer().validate_password("12345678") is False

    def test_generated_passwords_pass(self):
        analyzer = _make_analyzer(seed=3)
        for _ in range(50):
            assert analyzer.validate_password(analyzer.generate_strong_password(16)) is True


# ===================================================================
# TestCompromised
# ===================================================================


class TestCompromised:
    """Common-list lookup."""

    def test_common(self):
        assert _make_analyzer().is_compromised("Sunshine") is True

    def test_not_common(self):
        assert _make_analyzer().is_compromised("Sun$hine99") is False

    def test_none(self):
        assert _make_analyzer().is_compromised(None) is False

    def test_implements_interface(self):
        assert isinstance(_make_analyzer(), PasswordAnalyzer)
