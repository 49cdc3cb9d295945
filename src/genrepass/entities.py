from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
import random
import re
import string
from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict, field_validator, model_validator


DEFAULT_SPECIAL_CHARS = "^!(-_=)$<[@.#]>%{~,+}&*"

_REPEATED_DASHES = re.compile(r"-+")


class GenrepassError(Exception):
    "Base class for every error raised by genrepass."


class ConfigError(GenrepassError):
    "Raised when the password configuration cannot be used."


class InvalidRangeError(ConfigError):
    "Raised when a quantity has a negative bound or min > max."


class EmptySpecialCharsError(ConfigError):
    "Raised when special characters are requested but the alphabet is empty."


class NonAsciiSpecialCharsError(ConfigError):
    "Raised when the special character alphabet contains non-ASCII characters."


class InvalidPassAmountError(ConfigError):
    "Raised when fewer than one password is requested."


class InvalidResetAmountError(ConfigError):
    "Raised when the reset budget is negative."


class InputError(GenrepassError):
    "Raised when the word list handed to the generator is unusable."


class EmptyWordListError(InputError):
    "Raised when there are no usable words to build a password from."


class InvalidWordError(InputError):
    "Raised when a word is not a whitespace-free ASCII token."


class CharClass(StrEnum):
    LOWER = "lower"
    UPPER = "upper"
    DIGIT = "digit"
    SPECIAL = "special"


def char_class(ch: str) -> CharClass:
    if ch in string.ascii_lowercase:
        return CharClass.LOWER
    if ch in string.ascii_uppercase:
        return CharClass.UPPER
    if ch in string.digits:
        return CharClass.DIGIT
    return CharClass.SPECIAL


class BuildState(StrEnum):
    """States a single password build moves through"""

    ASSEMBLING = "assembling"
    INJECTING = "injecting"
    CHECKING = "checking"
    ACCEPTED = "accepted"
    RETRYING = "retrying"
    TRUNCATED = "truncated"


class Quantity(BaseModel):
    """An exact amount or an inclusive range of amounts.

    An exact quantity is simply one where ``min == max``.
    """

    min: int
    max: int

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_bounds(self) -> Quantity:
        if self.min < 0:
            raise InvalidRangeError(f"range can't start below zero: {self.min}")
        if self.min > self.max:
            raise InvalidRangeError(
                f"right side of range can't be smaller than left side: {self.min}-{self.max}"
            )
        return self

    @classmethod
    def exact(cls, amount: int) -> Quantity:
        return cls(min=amount, max=amount)

    @classmethod
    def between(cls, minimum: int, maximum: int) -> Quantity:
        return cls(min=minimum, max=maximum)

    @classmethod
    def parse(cls, text: str) -> Quantity:
        """Parse ``"20-50"`` into a range and ``"25"`` into an exact amount.

        Dashes at either end are ignored and runs of dashes count as one.
        """
        cleaned = _REPEATED_DASHES.sub("-", text.strip().strip("-"))

        if cleaned.count("-") > 1:
            raise InvalidRangeError(f"more than two sides: {text!r}")

        if not cleaned or not all(c in string.digits or c == "-" for c in cleaned):
            raise InvalidRangeError(
                f"contains something other than integers and a - (dash): {text!r}"
            )

        if "-" in cleaned:
            left, right = cleaned.split("-")
            return cls.between(int(left), int(right))

        return cls.exact(int(cleaned))

    @classmethod
    def coerce(cls, value: Any) -> Any:
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, int) and not isinstance(value, bool):
            return cls.exact(value)
        if isinstance(value, (tuple, list)) and len(value) == 2:
            return cls.between(*value)
        return value

    @property
    def is_exact(self) -> bool:
        return self.min == self.max

    def resolve(self, rng: random.Random) -> int:
        if self.is_exact:
            return self.min
        return rng.randint(self.min, self.max)

    def __str__(self) -> str:
        return str(self.min) if self.is_exact else f"{self.min}-{self.max}"


class PasswordConfig(BaseModel):
    """Every option that shapes a password.

    Quantity fields also accept range strings such as ``"24-30"``.
    ``dont_lower``/``dont_upper`` take precedence over
    ``force_lower``/``force_upper``.
    """

    length: Quantity = Quantity.between(24, 30)
    lower_amount: Quantity = Quantity.between(1, 2)
    upper_amount: Quantity = Quantity.between(1, 2)
    number_amount: Quantity = Quantity.between(1, 2)
    special_amount: Quantity = Quantity.between(1, 2)
    special_chars: str = DEFAULT_SPECIAL_CHARS

    # Uppercase the first character of every word
    capitalise: bool = False
    force_lower: bool = False
    force_upper: bool = False
    dont_lower: bool = False
    dont_upper: bool = False
    # Keep digit-only words from the source instead of skipping them
    keep_numbers: bool = False
    # Shuffle the words for every attempt
    randomise: bool = False
    # Overwrite characters instead of inserting new ones
    replace: bool = False

    max_resets: int = 10
    pass_amount: int = 1

    model_config = ConfigDict(frozen=True)

    @field_validator(
        "length",
        "lower_amount",
        "upper_amount",
        "number_amount",
        "special_amount",
        mode="before",
    )
    @classmethod
    def _coerce_quantity(cls, value: Any) -> Any:
        return Quantity.coerce(value)

    @model_validator(mode="after")
    def _check_consistency(self) -> PasswordConfig:
        if not self.special_chars.isascii():
            raise NonAsciiSpecialCharsError(
                "non-ASCII special characters aren't allowed for insertables"
            )
        if not self.special_chars and self.special_amount.max > 0:
            raise EmptySpecialCharsError(
                "special characters were requested but none are configured"
            )
        if self.length.max < 1:
            raise InvalidRangeError("password length must allow at least one character")
        if self.pass_amount < 1:
            raise InvalidPassAmountError(
                f"at least one password must be requested, got {self.pass_amount}"
            )
        if self.max_resets < 0:
            raise InvalidResetAmountError(
                f"reset amount can't be negative, got {self.max_resets}"
            )
        return self


class ClassCounts(NamedTuple):
    lower: int
    upper: int
    digit: int
    special: int


@dataclass
class PasswordDraft:
    """Character buffer for a single build attempt."""

    chars: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.chars)

    def __str__(self) -> str:
        return "".join(self.chars)

    def append_word(self, word: str) -> None:
        self.chars.extend(word)

    def insert(self, index: int, ch: str) -> None:
        self.chars.insert(index, ch)

    def replace(self, index: int, ch: str) -> None:
        self.chars[index] = ch

    def truncate(self, length: int) -> None:
        del self.chars[length:]

    def copy(self) -> PasswordDraft:
        return PasswordDraft(chars=list(self.chars))

    def positions(self, cls: CharClass) -> list[int]:
        return [i for i, ch in enumerate(self.chars) if char_class(ch) == cls]

    def counts(self) -> ClassCounts:
        tally = dict.fromkeys(CharClass, 0)
        for ch in self.chars:
            tally[char_class(ch)] += 1
        return ClassCounts(
            lower=tally[CharClass.LOWER],
            upper=tally[CharClass.UPPER],
            digit=tally[CharClass.DIGIT],
            special=tally[CharClass.SPECIAL],
        )


@dataclass
class BuildResult:
    password: str
    state: BuildState
    attempts: int
    inserted: int
    target_length: int

    @property
    def truncated(self) -> bool:
        return self.state == BuildState.TRUNCATED
