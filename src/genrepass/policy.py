from __future__ import annotations

import random

from loguru import logger

from genrepass.entities import CharClass, PasswordConfig, PasswordDraft


_OPPOSITE = {CharClass.UPPER: CharClass.LOWER, CharClass.LOWER: CharClass.UPPER}


def force_case(
    draft: PasswordDraft,
    target: CharClass,
    amount: int,
    rng: random.Random,
    prefer_not: set[int] | None = None,
) -> set[int]:
    """Flip up to ``amount`` random letters of the other case into ``target``.

    Letters in ``prefer_not`` are only flipped once every other eligible
    letter has been used. Returns the flipped positions. Falls short
    silently when there aren't enough letters to flip.
    """
    avoided = prefer_not or set()
    candidates = draft.positions(_OPPOSITE[target])
    preferred = [i for i in candidates if i not in avoided]
    fallback = [i for i in candidates if i in avoided]
    if amount > len(candidates):
        logger.debug(
            "Only {} letters available to make {}, wanted {}",
            len(candidates),
            target,
            amount,
        )

    flipped: set[int] = set()
    for _ in range(min(amount, len(candidates))):
        eligible = preferred or fallback
        index = eligible.pop(rng.randrange(len(eligible)))
        ch = draft.chars[index]
        draft.chars[index] = ch.upper() if target == CharClass.UPPER else ch.lower()
        flipped.add(index)

    return flipped


def amount_to_force(present: int, required: int, explicit: bool) -> int:
    # An explicit force flag adds the full amount on top of what's there
    if explicit:
        return required
    return max(required - present, 0)


class CharacterClassPolicy:
    """Makes sure a candidate holds enough upper and lowercase letters."""

    def __init__(
        self,
        *,
        force_lower: bool = False,
        force_upper: bool = False,
        dont_lower: bool = False,
        dont_upper: bool = False,
    ) -> None:
        self.dont_lower = dont_lower
        self.dont_upper = dont_upper
        self.force_lower = force_lower and not dont_lower
        self.force_upper = force_upper and not dont_upper

    @classmethod
    def from_config(cls, config: PasswordConfig) -> CharacterClassPolicy:
        return cls(
            force_lower=config.force_lower,
            force_upper=config.force_upper,
            dont_lower=config.dont_lower,
            dont_upper=config.dont_upper,
        )

    def apply(
        self,
        draft: PasswordDraft,
        lower_amount: int,
        upper_amount: int,
        rng: random.Random,
    ) -> None:
        forced: set[int] = set()

        if not self.dont_upper:
            amount = amount_to_force(
                draft.counts().upper, upper_amount, self.force_upper
            )
            forced |= force_case(draft, CharClass.UPPER, amount, rng)

        if not self.dont_lower:
            amount = amount_to_force(
                draft.counts().lower, lower_amount, self.force_lower
            )
            # Lowercase goes last and may take back letters the upper pass forced
            forced |= force_case(
                draft, CharClass.LOWER, amount, rng, prefer_not=forced
            )

        if forced:
            logger.debug("Flipped the case of {} letters", len(forced))
