import random
import secrets
from typing import Sequence


def is_number_word(word: str) -> bool:
    return word.isascii() and word.isdigit()


def capitalise_first(word: str) -> str:
    return word[:1].upper() + word[1:]


def format_passwords(passwords: Sequence[str]) -> str:
    return "\n".join(passwords)


def spawn_rngs(amount: int, rng: random.Random | None = None) -> list[random.Random]:
    """One independent random source per password.

    Seeds are drawn from ``rng`` up front so the result does not depend on the
    order in which the sources are later consumed. Without ``rng`` every
    source is a fresh ``secrets.SystemRandom``.
    """
    if rng is None:
        return [secrets.SystemRandom() for _ in range(amount)]

    seeds = [rng.getrandbits(64) for _ in range(amount)]
    return [random.Random(seed) for seed in seeds]
