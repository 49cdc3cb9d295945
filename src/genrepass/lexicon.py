from __future__ import annotations

from enum import StrEnum
import os
from pathlib import Path
import random
import re

from loguru import logger
from unidecode import unidecode


LETTERS_REGEX = re.compile(r"[^\W\d_]+", re.ASCII)
LETTERS_OR_NUMBERS_REGEX = re.compile(r"[^\W\d_]+|\d+", re.ASCII)


class Split(StrEnum):
    """How source text is cut into words"""

    WORDS = "words"  # every run of letters (and digits) is its own word
    WHITESPACE = "whitespace"  # whitespace-separated chunks, punctuation dropped


def extract_words(
    text: str,
    *,
    keep_numbers: bool = False,
    transliterate: bool = True,
    split: Split = Split.WORDS,
) -> list[str]:
    """Turn arbitrary text into ASCII word tokens.

    Non-ASCII text is transliterated with unidecode first, so "Straße" becomes
    "Strasse" and emoji turn into their names. With ``keep_numbers`` runs of
    digits become words of their own; otherwise they are dropped.
    """
    if not text:
        return []

    if transliterate and not text.isascii():
        text = unidecode(text)

    pattern = LETTERS_OR_NUMBERS_REGEX if keep_numbers else LETTERS_REGEX

    if split == Split.WORDS:
        return pattern.findall(text)

    words = []
    for chunk in text.split():
        word = "".join(pattern.findall(chunk))
        if word:
            words.append(word)
    return words


class Lexicon:
    """Accumulates words from strings, files and directories."""

    def __init__(
        self,
        split: Split = Split.WORDS,
        *,
        keep_numbers: bool = False,
        transliterate: bool = True,
    ) -> None:
        self.split = split
        self.keep_numbers = keep_numbers
        self.transliterate = transliterate
        self._words: list[str] = []

    def __len__(self) -> int:
        return len(self._words)

    @property
    def words(self) -> list[str]:
        return list(self._words)

    def extend_from_text(self, text: str) -> int:
        words = extract_words(
            text,
            keep_numbers=self.keep_numbers,
            transliterate=self.transliterate,
            split=self.split,
        )
        self._words.extend(words)
        return len(words)

    def extend_from_path(self, path: str | os.PathLike[str]) -> int:
        """Add the words of a text file, or of every text file under a directory.

        Raises ``OSError`` when ``path`` can't be accessed. Files that aren't
        UTF-8 text are skipped.
        """
        path = Path(path)
        path.stat()

        if path.is_file():
            files = [path]
        else:
            files = sorted(p for p in path.rglob("*") if p.is_file())

        added = 0
        for file_path in files:
            text = self._read_text(file_path, strict=file_path == path)
            if text:
                added += self.extend_from_text(text)

        logger.debug("Extracted {} words from {}", added, path)
        return added

    @staticmethod
    def _read_text(path: Path, strict: bool) -> str | None:
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            logger.warning("Skipping {}, it isn't UTF-8 text", path)
        except OSError:
            if strict:
                raise
            logger.warning("Skipping {}, it couldn't be read", path)
        return None

    def shuffle(self, rng: random.Random | None = None) -> None:
        (rng or random.SystemRandom()).shuffle(self._words)

    def clear(self) -> None:
        self._words.clear()

    def remove_word_at(self, index: int) -> None:
        del self._words[index]
