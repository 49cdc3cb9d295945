from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
import random
from typing import Iterable

from loguru import logger

from genrepass.entities import BuildResult, PasswordConfig
from genrepass.resolver import PasswordBuilder
from genrepass.utils import spawn_rngs


class PasswordBatch:
    """Generates ``config.pass_amount`` independent passwords.

    The word list is checked on construction, before any randomness is used, so an
    unusable list fails the same way whatever the seed.
    """

    def __init__(
        self, words: Iterable[str], config: PasswordConfig | None = None
    ) -> None:
        self.config = config or PasswordConfig()
        self.builder = PasswordBuilder(words, self.config)
        self.words = self.builder.words

    def build_all(self, rng: random.Random | None = None) -> list[BuildResult]:
        rngs = spawn_rngs(self.config.pass_amount, rng)
        results = [self.builder.build(worker_rng) for worker_rng in rngs]
        self._log_summary(results)
        return results

    def generate(self, rng: random.Random | None = None) -> list[str]:
        return [result.password for result in self.build_all(rng)]

    def build_all_parallel(
        self, rng: random.Random | None = None, max_workers: int | None = None
    ) -> list[BuildResult]:
        # Every build gets its own random source; the builder itself is read-only
        rngs = spawn_rngs(self.config.pass_amount, rng)
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(executor.map(self.builder.build, rngs))
        self._log_summary(results)
        return results

    def generate_parallel(
        self, rng: random.Random | None = None, max_workers: int | None = None
    ) -> list[str]:
        return [
            result.password
            for result in self.build_all_parallel(rng, max_workers=max_workers)
        ]

    @staticmethod
    def _log_summary(results: list[BuildResult]) -> None:
        truncated = sum(result.truncated for result in results)
        logger.info(
            "Generated {} password(s), {} truncated after exhausting resets",
            len(results),
            truncated,
        )


def generate_passwords(
    words: Iterable[str],
    config: PasswordConfig | None = None,
    rng: random.Random | None = None,
) -> list[str]:
    return PasswordBatch(words, config).generate(rng)
