"""Command-line entry point: ``genrepass [options] PATH...``."""

import argparse
from pathlib import Path
import random
import sys
from typing import Sequence

from loguru import logger
from pydantic import ValidationError

from genrepass.batch import PasswordBatch
from genrepass.config import Settings, configure_logging
from genrepass.entities import DEFAULT_SPECIAL_CHARS, GenrepassError, PasswordConfig
from genrepass.lexicon import Lexicon
from genrepass.utils import format_passwords


DESCRIPTION = """\
Generate a readable password from an ordered list of words extracted from text.
For improved security, numbers and special characters are inserted at random places.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="genrepass", description=DESCRIPTION)
    parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        metavar="PATH",
        help="Text file or directory with text files to source words from",
    )
    parser.add_argument(
        "-C",
        "--capitalise",
        action="store_true",
        help="Uppercase the first character of every word",
    )
    parser.add_argument(
        "-r",
        "--replace",
        action="store_true",
        help="Replace characters at random positions instead of inserting",
    )
    parser.add_argument(
        "-X",
        "--randomize",
        action="store_true",
        help="Shuffle the words",
    )
    parser.add_argument(
        "-p",
        "--pass-amount",
        type=int,
        default=1,
        help="Amount of passwords to generate, one per line (default: %(default)s)",
    )
    parser.add_argument(
        "-R",
        "--resets",
        type=int,
        default=10,
        help="Attempts at finding fitting words before truncating (default: %(default)s)",
    )
    parser.add_argument(
        "-L",
        "--length",
        default="24-30",
        help="Password length, a range like 24-30 or an exact number (default: %(default)s)",
    )
    parser.add_argument(
        "-n",
        "--num",
        default="1-2",
        help="Amount of numbers to insert (default: %(default)s)",
    )
    parser.add_argument(
        "-s",
        "--special",
        default="1-2",
        help="Amount of special characters to insert (default: %(default)s)",
    )
    parser.add_argument(
        "-S",
        "--chars",
        default=DEFAULT_SPECIAL_CHARS,
        help="The special characters to insert (default: %(default)s)",
    )
    parser.add_argument(
        "-u",
        "--upper",
        default="1-2",
        help="Amount of uppercase characters (default: %(default)s)",
    )
    parser.add_argument(
        "-l",
        "--lower",
        default="1-2",
        help="Amount of lowercase characters (default: %(default)s)",
    )
    parser.add_argument(
        "-k",
        "--keep-nums",
        action="store_true",
        help="Keep numbers from the source as words of their own",
    )
    parser.add_argument(
        "-F",
        "--force-upper",
        action="store_true",
        help="Force the specified amount of uppercase characters",
    )
    parser.add_argument(
        "-f",
        "--force-lower",
        action="store_true",
        help="Force the specified amount of lowercase characters",
    )
    parser.add_argument(
        "-D",
        "--dont-upper",
        action="store_true",
        help="Don't uppercase at all, overrides --force-upper",
    )
    parser.add_argument(
        "-d",
        "--dont-lower",
        action="store_true",
        help="Don't lowercase at all, overrides --force-lower",
    )
    parser.add_argument(
        "--parallel",
        action="store_true",
        help="Generate the passwords on a thread pool",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed the random source for reproducible output",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log every build step to stderr",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> PasswordConfig:
    return PasswordConfig(
        length=args.length,
        lower_amount=args.lower,
        upper_amount=args.upper,
        number_amount=args.num,
        special_amount=args.special,
        special_chars=args.chars,
        capitalise=args.capitalise,
        force_lower=args.force_lower,
        force_upper=args.force_upper,
        dont_lower=args.dont_lower,
        dont_upper=args.dont_upper,
        keep_numbers=args.keep_nums,
        randomise=args.randomize,
        replace=args.replace,
        max_resets=args.resets,
        pass_amount=args.pass_amount,
    )


def run(args: argparse.Namespace, settings: Settings) -> str:
    config = config_from_args(args)

    lexicon = Lexicon(keep_numbers=config.keep_numbers)
    for path in args.paths:
        lexicon.extend_from_path(path)
    logger.info("Loaded {} words from {} path(s)", len(lexicon), len(args.paths))

    batch = PasswordBatch(lexicon.words, config)
    rng = random.Random(args.seed) if args.seed is not None else None

    if args.parallel:
        passwords = batch.generate_parallel(rng, max_workers=settings.max_workers)
    else:
        passwords = batch.generate(rng)

    return format_passwords(passwords)


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()
    configure_logging(settings, level="DEBUG" if args.verbose else None)

    try:
        output = run(args, settings)
    except (GenrepassError, ValidationError, OSError) as e:
        logger.debug("Generation failed: {}", e)
        print(f"Error: {e}.", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
