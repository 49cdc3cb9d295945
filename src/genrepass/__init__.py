"""Readable password generator.

Builds passwords out of words taken from text, with numbers and special
characters inserted at random places.
"""

from loguru import logger

from genrepass.batch import PasswordBatch, generate_passwords
from genrepass.entities import (
    BuildResult,
    BuildState,
    ConfigError,
    EmptySpecialCharsError,
    EmptyWordListError,
    GenrepassError,
    InputError,
    InvalidPassAmountError,
    InvalidRangeError,
    InvalidResetAmountError,
    InvalidWordError,
    NonAsciiSpecialCharsError,
    PasswordConfig,
    Quantity,
)
from genrepass.lexicon import Lexicon, Split, extract_words
from genrepass.resolver import build_password


logger.disable("genrepass")

__all__ = [
    "BuildResult",
    "BuildState",
    "ConfigError",
    "EmptySpecialCharsError",
    "EmptyWordListError",
    "GenrepassError",
    "InputError",
    "InvalidPassAmountError",
    "InvalidRangeError",
    "InvalidResetAmountError",
    "InvalidWordError",
    "Lexicon",
    "NonAsciiSpecialCharsError",
    "PasswordBatch",
    "PasswordConfig",
    "Quantity",
    "Split",
    "build_password",
    "extract_words",
    "generate_passwords",
]
