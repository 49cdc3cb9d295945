"""Retry loop that turns words into one finished password.

Each attempt assembles words, injects digits and special characters and
checks the length against the configured bounds. Missed attempts are
retried up to ``max_resets`` times, after which the last attempt is
overfilled and truncated to the maximum length.
"""

from __future__ import annotations

import random
from typing import Iterable, NamedTuple

from loguru import logger

from genrepass.assembler import AssembledWords, WordAssembler, validate_words
from genrepass.entities import BuildResult, BuildState, PasswordConfig, PasswordDraft
from genrepass.injector import Injector
from genrepass.policy import CharacterClassPolicy


# Length ranges wider than this are narrowed to a random sub-window per build
MAX_LENGTH_SPREAD = 50


class LengthWindow(NamedTuple):
    min: int
    max: int

    def contains(self, length: int) -> bool:
        return self.min <= length <= self.max

    def narrow(self, spread: int, rng: random.Random) -> LengthWindow:
        if self.max - self.min <= spread:
            return self
        start = rng.randint(self.min, self.max - spread)
        return LengthWindow(start, start + spread)


class ResolvedAmounts(NamedTuple):
    target: int
    number: int
    special: int
    upper: int
    lower: int


class PasswordBuilder:
    """Builds single passwords for a fixed word list and configuration.

    Holds no per-build state, so one builder can serve several threads as
    long as each passes its own random source.
    """

    def __init__(self, words: Iterable[str], config: PasswordConfig) -> None:
        self.config = config
        self.words = validate_words(words, config.keep_numbers)
        self.assembler = WordAssembler.from_config(self.words, config)
        self.injector = Injector.from_config(config)
        self.policy = CharacterClassPolicy.from_config(config)

    def length_bounds(self, rng: random.Random) -> LengthWindow:
        length = self.config.length
        return LengthWindow(length.min, length.max).narrow(MAX_LENGTH_SPREAD, rng)

    def resolve_amounts(
        self, bounds: LengthWindow, rng: random.Random
    ) -> ResolvedAmounts:
        config = self.config
        target = bounds.min if bounds.min == bounds.max else rng.randint(*bounds)
        return ResolvedAmounts(
            target=target,
            number=config.number_amount.resolve(rng),
            special=config.special_amount.resolve(rng),
            upper=config.upper_amount.resolve(rng),
            lower=config.lower_amount.resolve(rng),
        )

    def build(self, rng: random.Random) -> BuildResult:
        config = self.config
        bounds = self.length_bounds(rng)
        amounts = self.resolve_amounts(bounds, rng)
        insertables = self.injector.draw_insertables(
            amounts.number, amounts.special, bounds.max, rng
        )

        if config.replace:
            window = bounds
            word_target = amounts.target
        else:
            # Leave room for the characters that will be inserted
            reserved = len(insertables)
            window = LengthWindow(max(bounds.min - reserved, 0), bounds.max - reserved)
            word_target = max(amounts.target - reserved, 0)

        attempts = config.max_resets + 1
        attempt = 1
        while True:
            logger.trace("Attempt {}: {}", attempt, BuildState.ASSEMBLING)
            assembled = self.assembler.assemble(word_target, rng)
            accepted = self._try_attempt(assembled, window, bounds, insertables, rng)
            if accepted is not None:
                draft, placed = accepted
                return self._finish(
                    draft, BuildState.ACCEPTED, attempt, placed, amounts, rng
                )

            logger.trace("Attempt {}: {}", attempt, BuildState.RETRYING)
            if attempt == attempts:
                break
            attempt += 1

        logger.debug(
            "No fitting word selection after {} resets, truncating to {} characters",
            config.max_resets,
            bounds.max,
        )
        draft = self.assembler.overfill(assembled, window.max)
        draft.truncate(window.max)
        placed = self.injector.inject(draft, insertables, rng)
        return self._finish(
            draft, BuildState.TRUNCATED, attempts, placed, amounts, rng
        )

    def _try_attempt(
        self,
        assembled: AssembledWords,
        window: LengthWindow,
        bounds: LengthWindow,
        insertables: list[str],
        rng: random.Random,
    ) -> tuple[PasswordDraft, int] | None:
        if self.config.replace and not window.contains(len(assembled.draft)):
            return None

        logger.trace("{} {} characters", BuildState.INJECTING, len(insertables))
        draft = assembled.draft.copy()
        placed = self.injector.inject(draft, insertables, rng)

        logger.trace("{} length {}", BuildState.CHECKING, len(draft))
        if not bounds.contains(len(draft)):
            return None
        return draft, placed

    def _finish(
        self,
        draft: PasswordDraft,
        state: BuildState,
        attempts: int,
        placed: int,
        amounts: ResolvedAmounts,
        rng: random.Random,
    ) -> BuildResult:
        self.policy.apply(draft, amounts.lower, amounts.upper, rng)
        logger.debug(
            "Password {} after {} attempt(s) with {} injected characters",
            state,
            attempts,
            placed,
        )
        return BuildResult(
            password=str(draft),
            state=state,
            attempts=attempts,
            inserted=placed,
            target_length=amounts.target,
        )


def build_password(
    words: Iterable[str], config: PasswordConfig, rng: random.Random
) -> BuildResult:
    return PasswordBuilder(words, config).build(rng)
