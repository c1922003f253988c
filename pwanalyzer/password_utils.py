import math
import re
import secrets
import string
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

import zxcvbn as zx

UPPERCASE = string.ascii_uppercase
LOWERCASE = string.ascii_lowercase
DIGITS    = string.digits
SPECIAL   = '!@#$%^&*(),.?":{}|<>'

MIN_LENGTH = 8
MIN_GENERATED_LENGTH = 8
MAX_GENERATED_LENGTH = 32

# zxcvbn refuses longer input
ADVISORY_MAX_LENGTH = 72

COMMON_PASSWORDS = frozenset(['password', '123456', 'qwerty', 'admin', 'letmein', 'welcome'])

MSG_LENGTH    = 'Password should be at least 8 characters long.'
MSG_UPPERCASE = 'Include at least one uppercase letter.'
MSG_LOWERCASE = 'Include at least one lowercase letter.'
MSG_NUMBER    = 'Include at least one number.'
MSG_SPECIAL   = 'Include at least one special character.'
MSG_COMMON    = 'This is a commonly used password. Please choose a more unique password.'

_UPPER_RE   = re.compile(r'[A-Z]')
_LOWER_RE   = re.compile(r'[a-z]')
_DIGIT_RE   = re.compile(r'[0-9]')
_SPECIAL_RE = re.compile('[' + re.escape(SPECIAL) + ']')
_OTHER_RE   = re.compile(r'[^A-Za-z0-9]')

# (check, message) pairs, in the order feedback is reported
_RULES = (
    (lambda pwd: len(pwd) >= MIN_LENGTH,              MSG_LENGTH),
    (lambda pwd: _UPPER_RE.search(pwd) is not None,   MSG_UPPERCASE),
    (lambda pwd: _LOWER_RE.search(pwd) is not None,   MSG_LOWERCASE),
    (lambda pwd: _DIGIT_RE.search(pwd) is not None,   MSG_NUMBER),
    (lambda pwd: _SPECIAL_RE.search(pwd) is not None, MSG_SPECIAL),
)
POINTS_PER_RULE = 20


class InvalidConfiguration(ValueError):
    """Raised when a generator configuration cannot produce a password."""


@dataclass(frozen=True)
class ScoreResult:
    score: int
    feedback: Tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {'score': self.score, 'feedback': list(self.feedback)}


class CrackTime(Enum):
    INSTANT = 'instant'
    HOURS   = 'hours'
    DAYS    = 'days'
    MONTHS  = 'months'
    YEARS   = 'years'

    @property
    def display(self) -> str:
        return _CRACK_TIME_DISPLAY[self]


_CRACK_TIME_DISPLAY = {
    CrackTime.INSTANT: 'Less than a second',
    CrackTime.HOURS:   'A few hours',
    CrackTime.DAYS:    'A few days',
    CrackTime.MONTHS:  'A few months',
    CrackTime.YEARS:   'Several years',
}


@dataclass(frozen=True)
class GeneratorConfig:
    length: int = 16
    include_upper: bool = True
    include_lower: bool = True
    include_numbers: bool = True
    include_special: bool = True

    def __post_init__(self):
        if isinstance(self.length, bool) or not isinstance(self.length, int):
            raise InvalidConfiguration('Password length must be an integer.')
        if not MIN_GENERATED_LENGTH <= self.length <= MAX_GENERATED_LENGTH:
            raise InvalidConfiguration(
                f'Password length must be between {MIN_GENERATED_LENGTH} '
                f'and {MAX_GENERATED_LENGTH}.'
            )

    @property
    def charset(self) -> str:
        """Enabled alphabets joined in upper, lower, digits, special order."""
        pools = []
        if self.include_upper:   pools.append(UPPERCASE)
        if self.include_lower:   pools.append(LOWERCASE)
        if self.include_numbers: pools.append(DIGITS)
        if self.include_special: pools.append(SPECIAL)
        return ''.join(pools)


# ── Evaluation ────────────────────────────────────────────────────────────────
def evaluate(password: str) -> ScoreResult:
    """Score a password against the five rules and the common-password list."""
    score = 0
    feedback = []
    for check, message in _RULES:
        if check(password):
            score += POINTS_PER_RULE
        else:
            feedback.append(message)

    if password.lower() in COMMON_PASSWORDS:
        score = 0
        feedback.append(MSG_COMMON)

    return ScoreResult(score=score, feedback=tuple(feedback))


def strength_label(score: int) -> str:
    if score < 60:
        return 'Weak'
    if score < 100:
        return 'Moderate'
    return 'Strong'


# ── Estimates ─────────────────────────────────────────────────────────────────
def estimate_entropy(password: str) -> float:
    """
    Bits of entropy for a password drawn uniformly from its inferred charset.
    Computed as length * log2(charset) so long inputs cannot overflow.
    """
    charset = 0
    if _LOWER_RE.search(password): charset += 26
    if _UPPER_RE.search(password): charset += 26
    if _DIGIT_RE.search(password): charset += 10
    if _OTHER_RE.search(password): charset += 33

    if charset == 0:
        return 0.0
    return len(password) * math.log2(charset)


def estimate_crack_time(score: int) -> CrackTime:
    if score < 20:
        return CrackTime.INSTANT
    if score < 40:
        return CrackTime.HOURS
    if score < 60:
        return CrackTime.DAYS
    if score < 80:
        return CrackTime.MONTHS
    return CrackTime.YEARS


def advisory_analysis(password: str) -> Optional[dict]:
    """Use zxcvbn for a second opinion. Never affects the rule-based score."""
    if not password or len(password) > ADVISORY_MAX_LENGTH:
        return None
    result = zx.zxcvbn(password)
    return {
        'score':       result['score'],
        'guesses':     result['guesses'],
        'crack_time':  result['crack_times_display']['offline_slow_hashing_1e4_per_second'],
        'warning':     result['feedback'].get('warning', ''),
        'suggestions': list(result['feedback'].get('suggestions', [])),
    }


# ── Generation ────────────────────────────────────────────────────────────────
def generate_password(config: GeneratorConfig) -> str:
    """Generate a random password; every position is drawn from the whole charset."""
    chars = config.charset
    if not chars:
        raise InvalidConfiguration('Select at least one character type.')
    return ''.join(secrets.choice(chars) for _ in range(config.length))
