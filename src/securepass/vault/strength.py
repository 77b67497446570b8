# Vault - Password Strength Analyzer
#
# Scoring (0-100), entropy estimate, strong password generation and the
# strength gate applied before an entry is accepted into the vault.
# Pure logic: only static tables plus a CSPRNG.

import math
import random
import secrets
from typing import Optional

from ..core.interfaces import PasswordAnalyzer
from .models import StrengthLevel, StrengthResult


UPPERCASE = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
LOWERCASE = "abcdefghijklmnopqrstuvwxyz"
DIGITS = "0123456789"
SPECIAL_CHARS = "!@#$%^&*()_+-=[]{}|;:,.<>?"

# Well-known weak passwords (compared lower-cased)
COMMON_PASSWORDS = frozenset({
    "password", "123456", "123456789", "12345678", "12345", "1234567",
    "password1", "qwerty", "abc123", "111111", "123123", "admin",
    "letmein", "welcome", "monkey", "dragon", "master", "sunshine",
})

MIN_GENERATED_LENGTH = 8
VALIDATION_MIN_LENGTH = 8
VALIDATION_MIN_SCORE = 50

# Score contributions
LENGTH_STEPS = ((8, 20), (12, 10), (16, 10))     # (min length, points)
CLASS_POINTS = 10
ENTROPY_STEPS = (30, 50, 70, 90)                 # bits, +5 each when exceeded
ENTROPY_POINTS = 5
COMMON_PENALTY = 50
SEQUENCE_PENALTY = 10
REPEAT_PENALTY = 10

EMPTY_FEEDBACK = "Password is empty"
COMMON_FEEDBACK = "⚠️ This is a commonly used password! Please choose a unique one."

LEVEL_FEEDBACK = {
    StrengthLevel.WEAK: "This password is too weak. Add more characters and variety.",
    StrengthLevel.FAIR: "Password could be stronger. Consider adding special characters.",
    StrengthLevel.GOOD: "Good password! Consider making it longer for better security.",
    StrengthLevel.STRONG: "Strong password! Well done.",
    StrengthLevel.VERY_STRONG: "Excellent password! Maximum security achieved.",
}


def level_for_score(score: int) -> StrengthLevel:
    """Map a clamped score to its strength band."""
    if score < 30:
        return StrengthLevel.WEAK
    if score < 50:
        return StrengthLevel.FAIR
    if score < 70:
        return StrengthLevel.GOOD
    if score < 90:
        return StrengthLevel.STRONG
    return StrengthLevel.VERY_STRONG


def calculate_entropy(password: str) -> float:
    """
    Estimate entropy as length * log2(charset size).

    Charset size sums the classes present: upper 26, lower 26,
    digits 10, special 26. A string with none of those classes
    (e.g. only spaces) yields 0.0.
    """
    charset_size = 0
    if any(c.isupper() for c in password):
        charset_size += len(UPPERCASE)
    if any(c.islower() for c in password):
        charset_size += len(LOWERCASE)
    if any(c.isdecimal() for c in password):
        charset_size += len(DIGITS)
    if any(c in SPECIAL_CHARS for c in password):
        charset_size += len(SPECIAL_CHARS)

    if charset_size == 0:
        return 0.0
    return len(password) * math.log2(charset_size)


def has_sequential_chars(password: str) -> bool:
    """True if any 3 consecutive characters ascend by one code point."""
    for i in range(len(password) - 2):
        a, b, c = (ord(ch) for ch in password[i:i + 3])
        if b == a + 1 and c == b + 1:
            return True
    return False


def has_repeated_chars(password: str) -> bool:
    """True if any character appears 3 times in a row."""
    for i in range(len(password) - 2):
        if password[i] == password[i + 1] == password[i + 2]:
            return True
    return False


class StrengthAnalyzer(PasswordAnalyzer):
    """
    Default password analyzer.

    Args:
        rng: Random source for generation. Defaults to secrets.SystemRandom
             (OS CSPRNG); generated passwords are real secrets.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._random = rng or secrets.SystemRandom()

    def analyze_strength(self, password: Optional[str]) -> StrengthResult:
        if not password:
            return StrengthResult(
                score=0,
                level=StrengthLevel.VERY_WEAK,
                feedback=EMPTY_FEEDBACK,
                has_upper=False,
                has_lower=False,
                has_digit=False,
                has_special=False,
                length=0,
                is_common_password=False,
                entropy=0.0,
            )

        length = len(password)
        has_upper = any(c.isupper() for c in password)
        has_lower = any(c.islower() for c in password)
        has_digit = any(c.isdecimal() for c in password)
        has_special = any(c in SPECIAL_CHARS for c in password)
        is_common = password.lower() in COMMON_PASSWORDS
        entropy = calculate_entropy(password)

        score = 0

        # Length (max 40)
        for min_length, points in LENGTH_STEPS:
            if length >= min_length:
                score += points

        # Character variety (max 40)
        score += CLASS_POINTS * sum((has_upper, has_lower, has_digit, has_special))

        # Entropy bonus (max 20)
        for threshold in ENTROPY_STEPS:
            if entropy > threshold:
                score += ENTROPY_POINTS

        if is_common:
            score -= COMMON_PENALTY
        if has_sequential_chars(password):
            score -= SEQUENCE_PENALTY
        if has_repeated_chars(password):
            score -= REPEAT_PENALTY

        score = max(0, min(100, score))
        level = level_for_score(score)
        feedback = COMMON_FEEDBACK if is_common else LEVEL_FEEDBACK[level]

        return StrengthResult(
            score=score,
            level=level,
            feedback=feedback,
            has_upper=has_upper,
            has_lower=has_lower,
            has_digit=has_digit,
            has_special=has_special,
            length=length,
            is_common_password=is_common,
            entropy=entropy,
        )

    def is_compromised(self, password: Optional[str]) -> bool:
        """
        Check the password against the built-in common list.

        There is no breach-database lookup behind this; a False result
        only means "not one of the well-known weak passwords".
        """
        if password is None:
            return False
        return password.lower() in COMMON_PASSWORDS

    def generate_strong_password(self, length: int = 16, include_special: bool = True) -> str:
        """
        Generate a random password of max(length, 8) characters.

        At least one upper, lower and digit (and special, if requested)
        is guaranteed; the seeded prefix is then shuffled away.
        """
        length = max(length, MIN_GENERATED_LENGTH)

        charset = UPPERCASE + LOWERCASE + DIGITS
        required = [UPPERCASE, LOWERCASE, DIGITS]
        if include_special:
            charset += SPECIAL_CHARS
            required.append(SPECIAL_CHARS)

        chars = [self._random.choice(pool) for pool in required]
        while len(chars) < length:
            chars.append(self._random.choice(charset))

        # Fisher-Yates, backward pass
        for i in range(len(chars) - 1, 0, -1):
            j = self._random.randrange(i + 1)
            chars[i], chars[j] = chars[j], chars[i]

        return "".join(chars)

    def validate_password(self, password: Optional[str]) -> bool:
        """Gate for new vault entries: length >= 8, score >= 50, not common."""
        if password is None or len(password) < VALIDATION_MIN_LENGTH:
            return False

        result = self.analyze_strength(password)
        return result.score >= VALIDATION_MIN_SCORE and not result.is_common_password
