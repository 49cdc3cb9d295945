from __future__ import annotations

from dataclasses import dataclass
import random
from typing import Iterable, Sequence

from loguru import logger

from genrepass.entities import (
    EmptyWordListError,
    InvalidWordError,
    PasswordConfig,
    PasswordDraft,
)
from genrepass.utils import capitalise_first, is_number_word


def validate_words(words: Iterable[str], keep_numbers: bool) -> tuple[str, ...]:
    """Check the word list before any password is built.

    Blank entries are dropped. Raises ``EmptyWordListError`` when nothing
    usable is left and ``InvalidWordError`` for tokens that are not plain
    ASCII without whitespace.
    """
    cleaned: list[str] = []
    for word in words:
        token = word.strip()
        if not token:
            continue
        if not token.isascii() or any(
            ch.isspace() or not ch.isprintable() for ch in token
        ):
            raise InvalidWordError(f"word is not a plain ASCII token: {token!r}")
        cleaned.append(token)

    if not cleaned:
        raise EmptyWordListError("not enough words for password generation")

    if not keep_numbers and all(is_number_word(token) for token in cleaned):
        raise EmptyWordListError(
            "only numbers were given and keeping numbers is turned off"
        )

    return tuple(cleaned)


@dataclass
class AssembledWords:
    draft: PasswordDraft
    headroom: int
    order: Sequence[str]
    # index of the next unread word in ``order``
    position: int


class WordAssembler:
    def __init__(
        self,
        words: Sequence[str],
        *,
        capitalise: bool = False,
        keep_numbers: bool = False,
        randomise: bool = False,
    ) -> None:
        self.words = tuple(words)
        self.capitalise = capitalise
        self.keep_numbers = keep_numbers
        self.randomise = randomise

    @classmethod
    def from_config(cls, words: Sequence[str], config: PasswordConfig) -> WordAssembler:
        return cls(
            words,
            capitalise=config.capitalise,
            keep_numbers=config.keep_numbers,
            randomise=config.randomise,
        )

    def _prepare(self, word: str) -> str | None:
        if is_number_word(word):
            return word if self.keep_numbers else None
        return capitalise_first(word) if self.capitalise else word

    def assemble(self, target: int, rng: random.Random) -> AssembledWords:
        """Concatenate whole words while they fit within ``target`` characters.

        Stops at the first word that doesn't fit or once every word has been
        read. Shuffled lists are read from the start; ordered lists from a
        random cursor, wrapping around the end.
        """
        if not self.words:
            raise EmptyWordListError("not enough words for password generation")

        if self.randomise:
            order: Sequence[str] = list(self.words)
            rng.shuffle(order)
            position = 0
        else:
            order = self.words
            position = rng.randrange(len(order))

        draft = PasswordDraft()
        for _ in range(len(order)):
            piece = self._prepare(order[position])
            if piece is not None:
                if len(draft) + len(piece) > target:
                    break
                draft.append_word(piece)
            position = (position + 1) % len(order)

        logger.debug(
            "Assembled {} characters of words for target {} (headroom {})",
            len(draft),
            target,
            target - len(draft),
        )
        return AssembledWords(
            draft=draft,
            headroom=target - len(draft),
            order=order,
            position=position,
        )

    def overfill(self, assembled: AssembledWords, limit: int) -> PasswordDraft:
        """Keep appending words past the fit rule until ``limit`` is reached.

        Stops early when a full pass over the words adds nothing.
        """
        draft = assembled.draft
        position = assembled.position
        order = assembled.order

        while len(draft) < limit:
            before = len(draft)
            for _ in range(len(order)):
                piece = self._prepare(order[position])
                position = (position + 1) % len(order)
                if piece is not None:
                    draft.append_word(piece)
                    break
            if len(draft) == before:
                logger.debug("No usable words left to fill {} characters", limit)
                break

        return draft
