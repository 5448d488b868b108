# run_filter.py

import sys

from pathlib import Path
from typing import List, Optional

import structlog

from errors import ConfigurationError
from hash_family import HashFamilyBuilder
from membership import MembershipFilter
from settings import configure_logging, get_settings

logger = structlog.get_logger(__name__)

DEFAULT_PROBES = ("ABA", "Something that does not exist", "AIDS", "йtrenness")


def read_wordlist(path: Path) -> List[str]:
    with path.open("r", encoding="utf-8") as f:
        return [line.rstrip("\r\n") for line in f]


def check(bloom: MembershipFilter, words: set, value: str) -> str:
    in_list = value in words
    in_filter = bloom.contains(value)
    return (
        f"Result: {in_list == in_filter} "
        f"(value: [{value}], existsInList: {in_list}, existsByFilter: {in_filter})"
    )


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    settings = get_settings()
    configure_logging(settings.log_level)

    if argv and argv[0] in ("-h", "--help"):
        print("Usage: python run_filter.py [wordlist] [query ...]")
        return 2

    path = Path(argv[0] if argv else settings.wordlist_path)
    probes = argv[1:] or list(DEFAULT_PROBES)

    try:
        lines = read_wordlist(path)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Cannot read word list {path}: {e}", file=sys.stderr)
        return 1
    logger.info("wordlist_loaded", path=str(path), lines=len(lines))
    print(len(lines))

    try:
        hashes = (
            HashFamilyBuilder()
            .algorithm(settings.hash_algorithm)
            .function_count(settings.function_count)
            .build()
        )
        bloom = MembershipFilter(settings.bits_amount, hashes)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    bloom.insert_all(lines)
    logger.info("wordlist_inserted", inserted=bloom.inserted_count)

    words = set(lines)
    for value in probes:
        print(check(bloom, words, value))

    print(f"False positive probability: {bloom.false_positive_probability()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
