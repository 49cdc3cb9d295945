import random

from loguru import logger
import pytest


SOURCE_TEXT = (
    "It was a bright cold day in April and the clocks were striking thirteen "
    "Winston Smith his chin nuzzled into his breast in an effort to escape the "
    "vile wind slipped quickly through the glass doors of Victory Mansions"
)


@pytest.fixture
def words() -> list[str]:
    """A realistic ordered word list with words of mixed length"""
    return SOURCE_TEXT.split()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    # The CLI enables logging to pytest's captured streams, drop those sinks
    logger.remove()
    logger.disable("genrepass")
