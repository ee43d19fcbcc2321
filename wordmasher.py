'''
wordmasher.py

Purpose:
    Generate "frankenwords": pseudo-random words built by mashing together
    fragments of real words. Useful for password seeds, placeholder names,
    test data, or just for fun.

Features:
    - Picks 2 or 3 unused words from a word list and mashes a random prefix,
      suffix or inner fragment of each into a single word.
    - Applies standard (Title/lower) or "weird" per-letter capitalization.
    - Optionally injects characters from a special-character list.
    - Optionally splits the result into two or three space-separated pieces.
    - Logs every session to a dated file under 'logs/'.

Usage:
    python wordmasher.py -w words.txt -o frankenwords.txt -n 50
    python wordmasher.py -w words.txt -s special.txt -o - -n 10 --split
    python wordmasher.py --config wordmasher.yaml
'''

import sys
import argparse
import yaml
import logging
import os
import copy
import random
import string
from datetime import datetime
from enum import IntEnum
from types import SimpleNamespace
from typing import Any, Mapping, MutableMapping, MutableSet, Optional, Sequence
from tqdm import tqdm  # For progress bars; install via `pip install tqdm`


# ANSI Color Codes
BLUE = "\033[1;34m"
GREEN = "\033[1;32m"
RESET = "\033[0m"
BOLD = "\033[1m"

# Disable colors if not running in a terminal
if not sys.stdout.isatty():
    BLUE = GREEN = RESET = BOLD = ""


# Bounds for one_in_n_chance
MIN_CHANCE = 1
MAX_CHANCE = 100

# Words fed to make_subword must fall within these (inclusive) lengths
MIN_SUBWORD_SOURCE_LENGTH = 2
MAX_SUBWORD_SOURCE_LENGTH = 10

# Candidate words must be strictly longer / shorter than these
MIN_WORD_LENGTH = 2
MAX_WORD_LENGTH = 10

MAX_WORDS_PER_SELECTION = 10
MIN_FRANKENWORD_LENGTH = 3
MAX_SPLITTABLE_LENGTH = 27
MIN_FRANKENWORDS = 1
MAX_FRANKENWORDS = 1000

DEFAULT_RETRY_LIMIT = 1000
WEIRD_CAPITALIZATION_ODDS = 11

LOG_TIME_FORMAT = "%H:%M:%S"


class WordMasherError(Exception):
    """Base class for frankenword generation failures."""


class InvalidArgumentError(WordMasherError, ValueError):
    """Raised when a core function receives malformed input."""


class ExhaustedRetriesError(WordMasherError, RuntimeError):
    """Raised when a bounded random loop fails to converge."""


class InvariantViolationError(WordMasherError, RuntimeError):
    """Raised when the pipeline produces an impossible result."""


class SubwordPattern(IntEnum):
    PREFIX = 1
    SUFFIX = 2
    INNER = 3


class MinimalFormatter(logging.Formatter):
    """A logging formatter that removes prefixes for INFO level messages."""

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno == logging.INFO:
            return record.getMessage()
        return f"{record.levelname}: {record.getMessage()}"


class SessionLogFormatter(logging.Formatter):
    """Prefix each log file entry with an HH:MM:SS:mmm timestamp."""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        created = datetime.fromtimestamp(record.created)
        return f"{created.strftime(LOG_TIME_FORMAT)}:{int(record.msecs):03d}"

    def format(self, record: logging.LogRecord) -> str:
        return f"{self.formatTime(record)} {record.getMessage()}"


DEFAULT_CONFIG: dict[str, Any] = {
    'special_characters_file': None,
    'seed': None,
    'decoration': {
        'special_characters': True,
        'split_words': False,
        'weird_capitalization_odds': WEIRD_CAPITALIZATION_ODDS,
    },
    'generation': {
        'retry_limit': DEFAULT_RETRY_LIMIT,
    },
    'logging': {
        'log_file': True,
        'log_dir': 'logs',
    },
}


def _merge_defaults(
    config: MutableMapping[str, Any],
    defaults: Mapping[str, Any],
    path: list[str] | None = None,
) -> None:
    """Recursively merge default configuration values into the provided config."""

    if path is None:
        path = []

    for key, default_value in defaults.items():
        dotted_path = '.'.join(path + [key])
        if isinstance(default_value, dict):
            existing = config.setdefault(key, {})
            if existing is None:
                existing = config[key] = {}
            if not isinstance(existing, dict):
                logging.error(f"Configuration value for '{dotted_path}' must be a mapping.")
                sys.exit(1)
            _merge_defaults(existing, default_value, path + [key])
        else:
            if key not in config:
                logging.debug(f"Applying default for '{dotted_path}': {default_value}")
            config.setdefault(key, default_value)


# ---------------------------------------------------------------------------
# Randomness primitives
# ---------------------------------------------------------------------------

def random_int_inclusive(low: int, high: int, rng: random.Random | None = None) -> int:
    """
    Return a uniformly distributed integer in [low, high], both ends inclusive.

    Raises:
        InvalidArgumentError: If low is greater than high.
    """
    if low > high:
        raise InvalidArgumentError(
            f"random_int_inclusive requires low <= high (received low={low}, high={high})."
        )
    return (rng or random).randint(low, high)


def one_in_n_chance(n: int, rng: random.Random | None = None) -> bool:
    """
    Return True with a probability of exactly 1/n.

    A list of n flags holding a single True is shuffled and the first flag
    is returned, so the odds are exact rather than approximated.

    Args:
        n (int): The chance range, between 1 and 100 inclusive.
        rng (random.Random, optional): Random source; defaults to the random module.

    Returns:
        bool: True once in n calls on average.

    Raises:
        InvalidArgumentError: If n is outside [1, 100].
    """
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidArgumentError(f"one_in_n_chance requires an integer (received {n!r}).")
    if n < MIN_CHANCE:
        raise InvalidArgumentError(f"one_in_n_chance received an integer less than {MIN_CHANCE}: {n}")
    if n > MAX_CHANCE:
        raise InvalidArgumentError(f"one_in_n_chance received an integer greater than {MAX_CHANCE}: {n}")

    flags = [True] + [False] * (n - 1)
    (rng or random).shuffle(flags)
    return flags[0]


# ---------------------------------------------------------------------------
# Sub-word extraction
# ---------------------------------------------------------------------------

def _coerce_pattern(pattern: Any) -> SubwordPattern:
    try:
        return SubwordPattern(pattern)
    except ValueError:
        raise InvalidArgumentError(
            f"Unknown sub-word pattern {pattern!r}. Expected one of "
            f"{', '.join(f'{p.value} ({p.name})' for p in SubwordPattern)}."
        ) from None


def substring_inclusive(word: str, start: int, end: int) -> str:
    """
    Return word[start..end] with both indices inclusive.

    Raises:
        InvalidArgumentError: Unless 0 <= start <= end <= len(word) - 1.
    """
    if not 0 <= start <= end <= len(word) - 1:
        raise InvalidArgumentError(
            f"substring_inclusive requires 0 <= start <= end <= {len(word) - 1} "
            f"for '{word}' (received start={start}, end={end})."
        )
    return word[start:end + 1]


def make_subword(word: str, pattern: Any, rng: random.Random | None = None) -> str:
    """
    Extract a random contiguous piece of a word.

    Args:
        word (str): Source word, 2 to 10 characters long.
        pattern (SubwordPattern | int): PREFIX (1), SUFFIX (2) or INNER (3).
        rng (random.Random, optional): Random source.

    Returns:
        str: A prefix, a suffix or an inner span of the word. An inner span
        may be a single character.

    Raises:
        InvalidArgumentError: If the word length or the pattern is invalid.
    """
    if not MIN_SUBWORD_SOURCE_LENGTH <= len(word) <= MAX_SUBWORD_SOURCE_LENGTH:
        raise InvalidArgumentError(
            f"make_subword requires a word of {MIN_SUBWORD_SOURCE_LENGTH} to "
            f"{MAX_SUBWORD_SOURCE_LENGTH} characters (received '{word}', length {len(word)})."
        )
    pattern = _coerce_pattern(pattern)
    last = len(word) - 1

    if pattern is SubwordPattern.PREFIX:
        return substring_inclusive(word, 0, random_int_inclusive(0, last, rng))
    if pattern is SubwordPattern.SUFFIX:
        return substring_inclusive(word, random_int_inclusive(0, last, rng), last)

    start = random_int_inclusive(0, last, rng)
    end = random_int_inclusive(start, last, rng)
    return substring_inclusive(word, start, end)


# ---------------------------------------------------------------------------
# Word selection and mashing
# ---------------------------------------------------------------------------

def select_words_to_mash(
    count: int,
    pool: Sequence[str],
    used_words: MutableSet[str] | None = None,
    rng: random.Random | None = None,
    retry_limit: int = DEFAULT_RETRY_LIMIT,
) -> list[str]:
    """
    Pick distinct, unused words of a mashable length from the pool.

    Every picked word is added to used_words straight away so it is never
    picked again while the same set is passed in.

    Args:
        count (int): Number of words to pick, 1 to 10.
        pool (Sequence[str]): Candidate words.
        used_words (set, optional): Words already consumed. A fresh set is
            used when omitted.
        rng (random.Random, optional): Random source.
        retry_limit (int): Maximum number of random draws.

    Returns:
        list: The picked words, in pick order.

    Raises:
        InvalidArgumentError: If count is out of range or the pool is empty.
        ExhaustedRetriesError: If retry_limit draws did not yield enough words.
    """
    if not 1 <= count <= MAX_WORDS_PER_SELECTION:
        raise InvalidArgumentError(
            f"select_words_to_mash requires a count between 1 and {MAX_WORDS_PER_SELECTION} (received {count})."
        )
    if not pool:
        raise InvalidArgumentError("select_words_to_mash requires a non-empty word pool.")
    if used_words is None:
        used_words = set()

    picked: list[str] = []
    attempts = 0
    while len(picked) < count:
        if attempts >= retry_limit:
            raise ExhaustedRetriesError(
                f"Unable to select {count} unused words of length {MIN_WORD_LENGTH + 1}-"
                f"{MAX_WORD_LENGTH - 1} after {retry_limit} attempts "
                f"(pool size {len(pool)}, {len(used_words)} words already used)."
            )
        attempts += 1
        candidate = pool[random_int_inclusive(0, len(pool) - 1, rng)]
        if candidate in used_words or candidate in picked:
            continue
        if not MIN_WORD_LENGTH < len(candidate) < MAX_WORD_LENGTH:
            continue
        picked.append(candidate)
        used_words.add(candidate)

    logging.debug("Selected %s after %d attempts.", picked, attempts)
    return picked


def mash_words(words: Sequence[str], rng: random.Random | None = None) -> str:
    """
    Mash 2 or 3 words into one by joining a random sub-word of each.

    The words are shuffled first and every word gets its own randomly drawn
    pattern.

    Raises:
        InvalidArgumentError: If words does not hold 2 or 3 entries.
    """
    if len(words) not in (2, 3):
        raise InvalidArgumentError(f"mash_words requires 2 or 3 words (received {len(words)}).")

    shuffled = list(words)
    (rng or random).shuffle(shuffled)
    patterns = list(SubwordPattern)

    mashed = ""
    for word in shuffled:
        pattern = patterns[random_int_inclusive(0, len(patterns) - 1, rng)]
        mashed += make_subword(word, pattern, rng)
    return mashed


# ---------------------------------------------------------------------------
# Decorations
# ---------------------------------------------------------------------------

def pad_short_word(word: str, rng: random.Random | None = None) -> str:
    """Append random lowercase letters until the word is at least 3 characters long."""
    while len(word) < MIN_FRANKENWORD_LENGTH:
        word += string.ascii_lowercase[random_int_inclusive(0, len(string.ascii_lowercase) - 1, rng)]
    return word


def add_standard_capitalization(word: str, rng: random.Random | None = None) -> str:
    """Title-case the word half the time, lowercase it otherwise."""
    if one_in_n_chance(2, rng):
        return word[:1].upper() + word[1:].lower()
    return word.lower()


def add_weird_capitalization(
    word: str,
    odds: int = WEIRD_CAPITALIZATION_ODDS,
    rng: random.Random | None = None,
) -> str:
    """Lowercase the word, then uppercase each letter with a 1-in-odds chance."""
    return "".join(
        char.upper() if one_in_n_chance(odds, rng) else char
        for char in word.lower()
    )


def capitalize_word(
    word: str,
    weird_odds: int = WEIRD_CAPITALIZATION_ODDS,
    rng: random.Random | None = None,
) -> str:
    if one_in_n_chance(2, rng):
        return add_standard_capitalization(word, rng)
    return add_weird_capitalization(word, weird_odds, rng)


def add_special_characters(
    word: str,
    special_characters: Sequence[str],
    rng: random.Random | None = None,
    retry_limit: int = DEFAULT_RETRY_LIMIT,
) -> str:
    """
    Overwrite one or two letters of a word with special characters.

    Words shorter than 6 characters get one special character; longer words
    get one or two. Every character lands on a distinct position and the
    word length never changes.

    Args:
        word (str): The word to decorate.
        special_characters (Sequence[str]): Single-character strings to draw from.
        rng (random.Random, optional): Random source.
        retry_limit (int): Maximum number of position draws.

    Returns:
        str: The decorated word.

    Raises:
        InvalidArgumentError: If the word is empty, or the special characters
            are empty or hold entries longer than one character.
        ExhaustedRetriesError: If distinct positions could not be found.
    """
    if not word:
        raise InvalidArgumentError("add_special_characters requires a non-empty word.")
    if not special_characters:
        raise InvalidArgumentError("add_special_characters requires at least one special character.")
    for char in special_characters:
        if len(char) != 1:
            raise InvalidArgumentError(
                f"Special characters must be exactly one character long (received {char!r})."
            )

    if len(word) < 6 or not one_in_n_chance(2, rng):
        insert_count = 1
    else:
        insert_count = 2

    chars = list(word)
    used_positions: set[int] = set()
    attempts = 0
    while len(used_positions) < insert_count:
        if attempts >= retry_limit:
            raise ExhaustedRetriesError(
                f"Unable to place {insert_count} special characters in '{word}' after {retry_limit} attempts."
            )
        attempts += 1
        position = random_int_inclusive(0, len(chars) - 1, rng)
        if position in used_positions:
            continue
        used_positions.add(position)
        chars[position] = special_characters[random_int_inclusive(0, len(special_characters) - 1, rng)]

    return "".join(chars)


def break_in_two(word: str, rng: random.Random | None = None) -> str:
    """
    Insert a single space at a random position inside the word.

    Raises:
        InvalidArgumentError: Unless 3 <= len(word) <= 27.
    """
    if not 3 <= len(word) <= MAX_SPLITTABLE_LENGTH:
        raise InvalidArgumentError(
            f"break_in_two requires a word of 3 to {MAX_SPLITTABLE_LENGTH} characters "
            f"(received '{word}', length {len(word)})."
        )
    cut = random_int_inclusive(1, len(word) - 1, rng)
    return word[:cut] + " " + word[cut:]


def break_in_three(word: str, rng: random.Random | None = None) -> str:
    """
    Insert two spaces into the word by cutting it in half and breaking each half in two.

    Raises:
        InvalidArgumentError: Unless 7 <= len(word) <= 27.
    """
    if not 7 <= len(word) <= MAX_SPLITTABLE_LENGTH:
        raise InvalidArgumentError(
            f"break_in_three requires a word of 7 to {MAX_SPLITTABLE_LENGTH} characters "
            f"(received '{word}', length {len(word)})."
        )
    split_at = random_int_inclusive(3, len(word) - 4, rng)
    return break_in_two(word[:split_at], rng) + break_in_two(word[split_at:], rng)


def split_word(word: str, rng: random.Random | None = None) -> str:
    # Only words longer than 6 can hold two spaces
    if len(word) > 6 and one_in_n_chance(2, rng):
        return break_in_three(word, rng)
    return break_in_two(word, rng)


# ---------------------------------------------------------------------------
# Generation session
# ---------------------------------------------------------------------------

class MashSession:
    """
    State for one generation run: the word pool, decoration settings, the
    random source and the set of words consumed so far.
    """

    def __init__(
        self,
        words: Sequence[str],
        special_characters: Optional[Sequence[str]] = None,
        use_special_characters: bool = True,
        split_words: bool = False,
        weird_capitalization_odds: int = WEIRD_CAPITALIZATION_ODDS,
        retry_limit: int = DEFAULT_RETRY_LIMIT,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        if not words:
            raise InvalidArgumentError("A generation session requires a non-empty word list.")
        if not MIN_CHANCE <= weird_capitalization_odds <= MAX_CHANCE:
            raise InvalidArgumentError(
                f"weird_capitalization_odds must be between {MIN_CHANCE} and {MAX_CHANCE} "
                f"(received {weird_capitalization_odds})."
            )
        if retry_limit < 1:
            raise InvalidArgumentError(f"retry_limit must be at least 1 (received {retry_limit}).")

        self.words = tuple(words)
        self.special_characters = tuple(special_characters or ())
        self.use_special_characters = use_special_characters
        self.split_words = split_words
        self.weird_capitalization_odds = weird_capitalization_odds
        self.retry_limit = retry_limit
        self.rng = rng if rng is not None else random.Random(seed)
        self.used_words: set[str] = set()

    @property
    def injects_special_characters(self) -> bool:
        return self.use_special_characters and bool(self.special_characters)


def decorate_word(word: str, session: MashSession) -> str:
    """
    Apply the decoration pipeline to a freshly mashed word.

    Order: pad to 3 letters, capitalize, maybe inject special characters
    (1 in 4), maybe split into pieces (1 in 4).
    """
    rng = session.rng
    word = pad_short_word(word, rng)
    word = capitalize_word(word, session.weird_capitalization_odds, rng)
    if session.injects_special_characters and one_in_n_chance(4, rng):
        word = add_special_characters(word, session.special_characters, rng, session.retry_limit)
    if session.split_words and one_in_n_chance(4, rng):
        word = split_word(word, rng)
    return word


def generate_frankenwords(
    requested_count: int,
    session: MashSession,
    progress: bool = False,
) -> list[str]:
    """
    Generate the requested number of frankenwords.

    Each frankenword mashes 2 or 3 (even odds) unused words from the session
    pool and decorates the result. Any failure aborts the whole batch.

    Args:
        requested_count (int): How many frankenwords to produce.
        session (MashSession): Generation state; its used-word set grows.
        progress (bool): Whether to show a progress bar.

    Returns:
        list: Frankenwords in generation order.
    """
    if requested_count < 1:
        raise InvalidArgumentError(
            f"generate_frankenwords requires a positive count (received {requested_count})."
        )

    frankenwords: list[str] = []
    for _ in tqdm(range(requested_count), desc="Mashing words", disable=not progress):
        word_count = 2 if one_in_n_chance(2, session.rng) else 3
        words = select_words_to_mash(
            word_count,
            session.words,
            session.used_words,
            session.rng,
            session.retry_limit,
        )
        frankenword = decorate_word(mash_words(words, session.rng), session)
        if not frankenword:
            raise InvariantViolationError(
                f"Mashing {words} produced an empty frankenword."
            )
        logging.debug("Mashed %s into '%s'.", words, frankenword)
        frankenwords.append(frankenword)

    return frankenwords


# ---------------------------------------------------------------------------
# Input, configuration and output
# ---------------------------------------------------------------------------

def _read_lines(file_path: str) -> list[str]:
    try:
        with open(file_path, 'r', encoding='utf-8') as file:
            return file.read().splitlines()
    except FileNotFoundError:
        logging.error(f"File '{file_path}' not found.")
        sys.exit(1)
    except Exception as e:
        logging.error(f"Error reading '{file_path}': {e}")
        sys.exit(1)


def load_word_list(file_path: str) -> list[str]:
    """
    Load candidate words from a file, one word per line.

    Surrounding whitespace is stripped and blank lines are skipped. Exits if
    the file is missing or holds no words.

    Args:
        file_path (str): Path to the word list.

    Returns:
        list: Words in file order.
    """
    words = [line.strip() for line in _read_lines(file_path)]
    words = [word for word in words if word]
    if not words:
        logging.error(f"File '{file_path}' does not contain any words.")
        sys.exit(1)
    logging.debug(f"Loaded {len(words)} words from '{file_path}'.")
    return words


def load_special_characters(file_path: Optional[str]) -> list[str]:
    """
    Load special characters from a file, one character per line.

    Lines that are not exactly one character long, or hold only whitespace,
    are skipped with a warning. Spaces are reserved for word splitting.

    Args:
        file_path (Optional[str]): Path to the special-character list.

    Returns:
        list: The special characters, or an empty list if no path was given.
    """
    if file_path is None:
        return []

    characters = []
    for line_number, line in enumerate(_read_lines(file_path), start=1):
        if not line:
            continue
        if len(line) != 1 or line.isspace():
            logging.warning(
                "Skipping line %d of '%s': expected a single non-whitespace character, got %r.",
                line_number,
                file_path,
                line,
            )
            continue
        characters.append(line)

    if not characters:
        logging.warning(
            "No special characters found in '%s'. Special character injection is disabled.",
            file_path,
        )
    logging.debug(f"Loaded {len(characters)} special characters from '{file_path}'.")
    return characters


def parse_yaml_config(config_path: str) -> dict[str, Any]:
    """
    Parse the YAML configuration file.

    Args:
        config_path (str): Path to the YAML configuration file.

    Returns:
        dict: Parsed configuration.
    """
    try:
        with open(config_path, 'r', encoding='utf-8') as file:
            config = yaml.safe_load(file)
    except FileNotFoundError:
        logging.error(f"Configuration file '{config_path}' not found.")
        sys.exit(1)
    except yaml.YAMLError as e:
        logging.error(f"Error parsing YAML file '{config_path}': {e}")
        sys.exit(1)
    except Exception as e:
        logging.error(f"Error reading '{config_path}': {e}")
        sys.exit(1)

    if config is None:
        config = {}
    if not isinstance(config, dict):
        logging.error(f"Configuration file '{config_path}' must contain a mapping.")
        sys.exit(1)
    logging.debug(f"Parsed YAML configuration from '{config_path}'.")
    return config


def validate_config(config: MutableMapping[str, Any], config_defaults: Mapping[str, Any] | None = None) -> None:
    """
    Check that required fields are present and fill in defaults.

    Args:
        config (dict): Configuration after command-line overrides.
        config_defaults (dict): Defaults to merge into config.
    """
    required_fields = ['word_list_file', 'output_file', 'count']

    for field in required_fields:
        if config.get(field) is None:
            logging.error(f"Missing required configuration field: '{field}'")
            sys.exit(1)

    _merge_defaults(config, config_defaults or DEFAULT_CONFIG)


def _parse_int_setting(value: Any, name: str, low: int | None = None, high: int | None = None) -> int:
    try:
        if isinstance(value, bool):
            raise ValueError
        if isinstance(value, float) and not value.is_integer():
            raise ValueError
        number = int(value)
    except (TypeError, ValueError):
        logging.error(f"Unable to parse '{name}'. Value received: {value!r}.")
        sys.exit(1)

    if low is not None and high is not None and not low <= number <= high:
        logging.error(f"'{name}' must be between {low} and {high}. Value received: {number}.")
        sys.exit(1)
    if low is not None and high is None and number < low:
        logging.error(f"'{name}' must be at least {low}. Value received: {number}.")
        sys.exit(1)
    return number


def _extract_config_settings(config: MutableMapping[str, Any], quiet: bool = False) -> SimpleNamespace:
    """Extract validated configuration values into a structured namespace."""

    decoration = config.get('decoration') or {}
    generation = config.get('generation') or {}
    log_options = config.get('logging') or {}

    count = _parse_int_setting(config.get('count'), 'count', MIN_FRANKENWORDS, MAX_FRANKENWORDS)
    weird_odds = _parse_int_setting(
        decoration.get('weird_capitalization_odds', WEIRD_CAPITALIZATION_ODDS),
        'decoration.weird_capitalization_odds',
        MIN_CHANCE,
        MAX_CHANCE,
    )
    retry_limit = _parse_int_setting(
        generation.get('retry_limit', DEFAULT_RETRY_LIMIT),
        'generation.retry_limit',
        1,
    )

    seed = config.get('seed')
    if seed is not None:
        seed = _parse_int_setting(seed, 'seed')

    settings = SimpleNamespace(
        word_list_file=config.get('word_list_file'),
        special_characters_file=config.get('special_characters_file'),
        output_file=config.get('output_file'),
        count=count,
        seed=seed,
        use_special_characters=bool(decoration.get('special_characters', True)),
        split_words=bool(decoration.get('split_words', False)),
        weird_capitalization_odds=weird_odds,
        retry_limit=retry_limit,
        log_file=bool(log_options.get('log_file', True)),
        log_dir=log_options.get('log_dir', 'logs'),
        quiet=quiet,
    )

    return settings


def write_frankenwords(frankenwords: Sequence[str], output_file: str) -> None:
    """
    Write frankenwords one per line, replacing any existing content.

    Args:
        frankenwords (Sequence[str]): Words to write.
        output_file (str): Destination path, or '-' for stdout.
    """
    if output_file == '-':
        for word in frankenwords:
            print(word)
        return

    try:
        with open(output_file, 'w', encoding='utf-8') as file:
            for word in frankenwords:
                file.write(f"{word}\n")
    except Exception as e:
        logging.error("Error writing to '%s': %s", output_file, e)
        sys.exit(1)
    logging.info(
        "Successfully generated %d frankenwords and saved to '%s'.",
        len(frankenwords),
        output_file,
    )


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Route log messages to the console, keeping INFO output unprefixed."""
    log_level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    handler = logging.StreamHandler()
    handler.setLevel(log_level)
    handler.setFormatter(MinimalFormatter())
    # The root stays at DEBUG so the session log file gets everything
    logging.basicConfig(level=logging.DEBUG, handlers=[handler])


def open_session_log(log_dir: str) -> Optional[logging.FileHandler]:
    """
    Attach a handler that appends to today's log file in log_dir.

    The handler records DEBUG messages whatever the console level is; the
    root logger is lowered to DEBUG while it is attached.

    Returns:
        logging.FileHandler | None: The attached handler, or None if the log
        file could not be opened.
    """
    log_path = os.path.join(log_dir, f"{datetime.now():%Y-%m-%d}.txt")
    try:
        os.makedirs(log_dir, exist_ok=True)
        handler = logging.FileHandler(log_path, mode='a', encoding='utf-8')
    except OSError as e:
        logging.warning(f"Unable to open log file '{log_path}': {e}")
        return None

    handler.setLevel(logging.DEBUG)
    handler.setFormatter(SessionLogFormatter())
    root = logging.getLogger()
    handler.previous_root_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)
    logging.debug("New log started.")
    return handler


def close_session_log(handler: Optional[logging.FileHandler]) -> None:
    if handler is None:
        return
    root = logging.getLogger()
    root.removeHandler(handler)
    root.setLevel(handler.previous_root_level)
    handler.close()


def main() -> None:
    """
    Main function to generate frankenwords and save them based on command-line
    arguments and an optional YAML configuration.
    """
    parser = argparse.ArgumentParser(
        description=f"{BOLD}Word Masher: Mash fragments of real words into new ones.{RESET}",
        formatter_class=argparse.RawTextHelpFormatter,
        epilog=f"""{BLUE}Examples:{RESET}
  {GREEN}python wordmasher.py -w words.txt -o frankenwords.txt -n 50{RESET}
  {GREEN}python wordmasher.py -w words.txt -s special.txt -o - -n 10 --split{RESET}
  {GREEN}python wordmasher.py --config my_config.yaml --seed 42{RESET}
""",
    )

    io_group = parser.add_argument_group(f"{BLUE}INPUT/OUTPUT OPTIONS{RESET}")
    io_group.add_argument(
        '-w', '--words',
        type=str,
        help="The path to your word list (one word per line).",
    )
    io_group.add_argument(
        '-s', '--special-characters',
        type=str,
        help="The path to a list of special characters (one per line).",
    )
    io_group.add_argument(
        '-o', '--output',
        type=str,
        help="Save results to this file. Use '-' to print to the screen.",
    )
    io_group.add_argument(
        '-c', '--config',
        type=str,
        default="wordmasher.yaml",
        help="The path to your YAML configuration file.",
    )

    gen_group = parser.add_argument_group(f"{BLUE}GENERATION OPTIONS{RESET}")
    gen_group.add_argument(
        '-n', '--count',
        type=str,
        help=f"How many frankenwords to generate ({MIN_FRANKENWORDS}-{MAX_FRANKENWORDS}).",
    )
    gen_group.add_argument(
        '--split',
        action='store_true',
        help="Sometimes split frankenwords into two or three pieces.",
    )
    gen_group.add_argument(
        '--no-special-characters',
        action='store_true',
        help="Never inject special characters, even if a list is given.",
    )
    gen_group.add_argument(
        '--seed',
        type=str,
        help="Seed the random generator to make results repeatable.",
    )

    log_group = parser.add_argument_group(f"{BLUE}LOGGING OPTIONS{RESET}")
    log_group.add_argument(
        '--log-dir',
        type=str,
        help="Write the session log to this directory (default: logs).",
    )
    log_group.add_argument(
        '--no-log-file',
        action='store_true',
        help="Do not write a session log file.",
    )
    log_group.add_argument(
        '-v', '--verbose',
        action='store_true',
        help="Show more detailed log messages.",
    )
    log_group.add_argument(
        '-q', '--quiet',
        action='store_true',
        help="Hide the progress bar and show fewer log messages.",
    )

    args = parser.parse_args()

    setup_logging(verbose=args.verbose, quiet=args.quiet)
    if args.verbose:
        logging.debug("Verbose mode enabled.")
    elif args.quiet:
        logging.debug("Quiet mode enabled.")

    config: dict[str, Any] = {}
    if os.path.exists(args.config):
        config = parse_yaml_config(args.config)
    elif args.config != "wordmasher.yaml":
        logging.error(f"Configuration file '{args.config}' not found.")
        sys.exit(1)

    # Avoid mutating the module-level defaults between runs
    run_defaults = copy.deepcopy(DEFAULT_CONFIG)

    if args.words:
        config['word_list_file'] = args.words
    if args.special_characters:
        config['special_characters_file'] = args.special_characters
    if args.output:
        config['output_file'] = args.output
    if args.count is not None:
        config['count'] = args.count
    if args.seed is not None:
        config['seed'] = args.seed

    validate_config(config, config_defaults=run_defaults)

    if args.split:
        config['decoration']['split_words'] = True
    if args.no_special_characters:
        config['decoration']['special_characters'] = False
    if args.log_dir:
        config['logging']['log_dir'] = args.log_dir
    if args.no_log_file:
        config['logging']['log_file'] = False

    settings = _extract_config_settings(config, quiet=args.quiet)

    log_handler = open_session_log(settings.log_dir) if settings.log_file else None
    try:
        logging.debug("All program arguments validated.")

        logging.info("Loading word list...")
        words = load_word_list(settings.word_list_file)
        logging.info("Loaded %d words from '%s'.", len(words), settings.word_list_file)

        special_characters: list[str] = []
        if settings.use_special_characters and settings.special_characters_file:
            special_characters = load_special_characters(settings.special_characters_file)
            logging.info(
                "Loaded %d special characters from '%s'.",
                len(special_characters),
                settings.special_characters_file,
            )

        session = MashSession(
            words,
            special_characters=special_characters,
            use_special_characters=settings.use_special_characters,
            split_words=settings.split_words,
            weird_capitalization_odds=settings.weird_capitalization_odds,
            retry_limit=settings.retry_limit,
            seed=settings.seed,
        )

        logging.info("Generating %d frankenwords...", settings.count)
        try:
            frankenwords = generate_frankenwords(
                settings.count,
                session,
                progress=not settings.quiet,
            )
        except WordMasherError as e:
            logging.error(f"Frankenword generation failed: {e}")
            if log_handler is not None:
                logging.error(f"See '{log_handler.baseFilename}' for details.")
            sys.exit(1)

        write_frankenwords(frankenwords, settings.output_file)
    finally:
        close_session_log(log_handler)


if __name__ == "__main__":
    main()
