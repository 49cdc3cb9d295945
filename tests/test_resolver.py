import random
import string

import pytest

from genrepass.entities import (
    DEFAULT_SPECIAL_CHARS,
    BuildState,
    EmptyWordListError,
    PasswordConfig,
)
from genrepass.resolver import (
    MAX_LENGTH_SPREAD,
    LengthWindow,
    PasswordBuilder,
    build_password,
)


def count(password: str, chars: str) -> int:
    return sum(ch in chars for ch in password)


def test_length_window_contains():
    window = LengthWindow(3, 5)
    assert window.contains(3)
    assert window.contains(5)
    assert not window.contains(2)
    assert not window.contains(6)


def test_wide_length_ranges_are_narrowed(rng):
    for _ in range(20):
        window = LengthWindow(10, 200).narrow(MAX_LENGTH_SPREAD, rng)

        assert window.max - window.min == MAX_LENGTH_SPREAD
        assert window.min >= 10
        assert window.max <= 200


def test_narrow_length_ranges_are_kept(rng):
    assert LengthWindow(24, 30).narrow(MAX_LENGTH_SPREAD, rng) == (24, 30)
    assert LengthWindow(0, 50).narrow(MAX_LENGTH_SPREAD, rng) == (0, 50)


def test_wide_length_range_passwords_stay_in_a_narrowed_window(words):
    config = PasswordConfig(length="20-300", max_resets=0)
    builder = PasswordBuilder(words, config)

    for seed in range(20):
        result = builder.build(random.Random(seed))

        assert 20 <= len(result.password) <= 300
        assert 20 <= result.target_length <= 300


@pytest.mark.parametrize(
    ("words", "keep_numbers"),
    [([], False), (["", "  "], True), (["123"], False), (["12", "345"], False)],
)
def test_unusable_word_lists_are_rejected_before_building(words, keep_numbers):
    config = PasswordConfig(length=5, max_resets=0, keep_numbers=keep_numbers)

    with pytest.raises(EmptyWordListError):
        build_password(words, config, random.Random(0))


def test_builder_keeps_cleaned_words():
    builder = PasswordBuilder([" apple ", "", "pear"], PasswordConfig())

    assert builder.words == ("apple", "pear")


def test_fruit_example_yields_exact_length():
    config = PasswordConfig(
        length=20,
        lower_amount=1,
        upper_amount=1,
        number_amount=1,
        special_amount=1,
        capitalise=True,
    )

    for seed in range(25):
        result = build_password(
            ["apple", "banana", "cherry"], config, random.Random(seed)
        )
        password = result.password

        assert len(password) == 20
        assert password.isascii()
        assert count(password, string.digits) == 1
        assert count(password, DEFAULT_SPECIAL_CHARS) == 1
        assert count(password, string.ascii_lowercase) >= 1
        assert count(password, string.ascii_uppercase) >= 1


def test_unreachable_insert_count_is_capped():
    config = PasswordConfig(length=10, special_amount=50)
    result = build_password(["apple", "banana"], config, random.Random(0))

    assert len(result.password) == 10
    assert result.inserted == 10
    assert result.state == BuildState.ACCEPTED


def test_zero_resets_truncates_on_first_attempt():
    config = PasswordConfig(
        length=8, number_amount=1, special_amount=1, max_resets=0
    )
    result = build_password(["extraordinarily"], config, random.Random(0))

    assert result.state == BuildState.TRUNCATED
    assert result.truncated
    assert result.attempts == 1
    assert len(result.password) == 8
    assert count(result.password, string.digits) == 1


def test_truncation_uses_whole_reset_budget():
    config = PasswordConfig(length=8, max_resets=4)
    result = build_password(["extraordinarily"], config, random.Random(0))

    assert result.truncated
    assert result.attempts == 5


@pytest.mark.parametrize("replace", [False, True])
def test_lengths_within_bounds_or_truncated_to_max(words, replace):
    config = PasswordConfig(length="16-22", replace=replace)
    builder = PasswordBuilder(words, config)

    for seed in range(60):
        result = builder.build(random.Random(seed))
        length = len(result.password)

        if result.truncated:
            assert length == 22
        else:
            assert 16 <= length <= 22
        assert 16 <= result.target_length <= 22


def test_replace_mode_does_not_add_characters():
    config = PasswordConfig(
        length=11, number_amount=2, special_amount=2, replace=True, max_resets=50
    )

    for seed in range(20):
        result = build_password(["hello", "world", "a"], config, random.Random(seed))

        assert len(result.password) == 11
        if result.state == BuildState.ACCEPTED:
            letters = sum(ch.isalpha() for ch in result.password)
            assert 11 - 4 <= letters < 11


def test_insert_mode_adds_exactly_the_placed_characters():
    config = PasswordConfig(
        length="10-40", number_amount=2, special_amount=3, max_resets=50
    )

    for seed in range(20):
        result = build_password(["alpha", "beta", "gamma"], config, random.Random(seed))
        letters = sum(ch.isalpha() for ch in result.password)

        assert result.inserted == 5
        assert len(result.password) == letters + result.inserted


def test_lowercase_is_forced_into_uppercase_words():
    words = ["ALPHA", "BRAVO", "CHARLIE", "DELTA", "ECHO", "FOXTROT"]
    config = PasswordConfig(lower_amount=3)

    for seed in range(20):
        password = build_password(words, config, random.Random(seed)).password
        assert count(password, string.ascii_lowercase) >= 3


def test_dont_lower_keeps_uppercase_words():
    words = ["ALPHA", "BRAVO", "CHARLIE", "DELTA", "ECHO", "FOXTROT"]
    config = PasswordConfig(lower_amount=3, dont_lower=True)

    for seed in range(20):
        password = build_password(words, config, random.Random(seed)).password
        assert count(password, string.ascii_lowercase) == 0


def test_number_words_appear_only_when_kept():
    kept = PasswordConfig(
        length=9, number_amount=0, special_amount=0, keep_numbers=True
    )
    skipped = kept.model_copy(update={"keep_numbers": False})

    for seed in range(20):
        assert "1234" in build_password(
            ["apple", "1234"], kept, random.Random(seed)
        ).password
        assert "1234" not in build_password(
            ["apple", "1234"], skipped, random.Random(seed)
        ).password


def test_same_seed_same_password(words):
    config = PasswordConfig(capitalise=True)
    first = build_password(words, config, random.Random(42))
    second = build_password(words, config, random.Random(42))

    assert first == second


def test_different_seeds_differ(words):
    config = PasswordConfig(capitalise=True)
    passwords = {
        build_password(words, config, random.Random(seed)).password
        for seed in range(10)
    }

    assert len(passwords) > 1


def test_lowercase_requirement_holds_when_uppercase_takes_every_letter():
    config = PasswordConfig(
        length=2, lower_amount=1, upper_amount=2, number_amount=0, special_amount=0
    )

    for seed in range(20):
        password = build_password(["ab"], config, random.Random(seed)).password

        assert len(password) == 2
        assert count(password, string.ascii_lowercase) == 1
        assert count(password, string.ascii_uppercase) == 1
