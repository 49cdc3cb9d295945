from __future__ import annotations

import random
import string

from loguru import logger

from genrepass.entities import PasswordConfig, PasswordDraft


class Injector:
    """Places digits and special characters at random positions of a draft."""

    def __init__(self, special_chars: str, *, replace: bool = False) -> None:
        self.special_chars = special_chars
        self.replace = replace

    @classmethod
    def from_config(cls, config: PasswordConfig) -> Injector:
        return cls(config.special_chars, replace=config.replace)

    def draw_insertables(
        self,
        number: int,
        special: int,
        max_length: int,
        rng: random.Random,
    ) -> list[str]:
        """Draw the characters to place, shuffled together.

        In insert mode no more than ``max_length`` characters are kept since
        anything beyond that could never fit in the password.
        """
        chars = [rng.choice(string.digits) for _ in range(number)]
        chars.extend(rng.choice(self.special_chars) for _ in range(special))
        rng.shuffle(chars)

        if not self.replace and len(chars) > max_length:
            logger.debug(
                "Capping {} insertables to the maximum length of {}",
                len(chars),
                max_length,
            )
            del chars[max_length:]

        return chars

    def inject(
        self, draft: PasswordDraft, insertables: list[str], rng: random.Random
    ) -> int:
        """Insert or overwrite characters in place and return how many were placed."""
        if self.replace:
            return self._replace_chars(draft, insertables, rng)
        return self._insert_chars(draft, insertables, rng)

    @staticmethod
    def _insert_chars(
        draft: PasswordDraft, insertables: list[str], rng: random.Random
    ) -> int:
        for ch in insertables:
            draft.insert(rng.randint(0, len(draft)), ch)
        return len(insertables)

    @staticmethod
    def _replace_chars(
        draft: PasswordDraft, insertables: list[str], rng: random.Random
    ) -> int:
        if not len(draft):
            logger.debug("Nothing to replace in an empty draft")
            return 0

        # Positions may repeat, the last write wins
        for ch in insertables:
            draft.replace(rng.randrange(len(draft)), ch)
        return len(insertables)
