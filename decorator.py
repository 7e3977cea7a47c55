"""
Zalgo text decoration.

Distributes randomized combining marks over the characters of a text. Every
category runs a number of passes; each pass spreads `frequency` marks over
randomly chosen positions. When a maximum output length is requested, the
per-pass sizes are scaled so the total roughly fits the budget, and rendering
stops adding marks once the budget is spent.
"""

import math
import random
import re

import unicode_marks
from errors import ConfigParseError

AUTO = "auto"

_INTEGER_RE = re.compile(r"^\s*\d+\s*$")
_PERCENT_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*%\s*$")


def is_valid_amount(value):
    """True if `value` is a non-negative integer or an 'N%' string."""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value >= 0
    if isinstance(value, str):
        return bool(_INTEGER_RE.match(value) or _PERCENT_RE.match(value))
    return False


def resolve(length, amount, key="amount"):
    """Resolves an absolute or percentage amount against a text length.

    Integers pass through (clamped at 0). "N%" resolves to
    ceil(length * N / 100). Integer strings are parsed as integers.
    Anything else raises ConfigParseError.
    """
    if isinstance(amount, int) and not isinstance(amount, bool):
        return max(0, amount)
    if isinstance(amount, str):
        match = _PERCENT_RE.match(amount)
        if match:
            return math.ceil(length * float(match.group(1)) / 100)
        if _INTEGER_RE.match(amount):
            return int(amount)
    raise ConfigParseError(key, amount, "expected an integer or a percentage like '60%'")


class Category:
    """A named decoration channel: which marks to use, how often and how deep."""

    def __init__(self, name, count=1, frequency="60%", charset=None):
        self.name = name
        self.charset = tuple(charset) if charset is not None else unicode_marks.charset_for(name)
        if not self.charset:
            raise ValueError(f"Category '{name}' has an empty charset.")
        self.count = count
        self.frequency = frequency

    def __repr__(self):
        return f"Category({self.name!r}, count={self.count!r}, frequency={self.frequency!r})"


class SizeLimit:
    """Either `auto` (unbounded) or an absolute/percentage target output length."""

    def __init__(self, value=AUTO):
        if isinstance(value, SizeLimit):
            value = value.value
        if isinstance(value, str) and value.strip().lower() == AUTO:
            value = AUTO
        elif not is_valid_amount(value):
            raise ConfigParseError("max", value, "expected 'auto', an integer or a percentage")
        self.value = value

    @property
    def is_auto(self):
        return self.value == AUTO

    def target(self, length):
        """Target total length for a text of `length` characters (None if auto)."""
        if self.is_auto:
            return None
        return resolve(length, self.value, key="max")

    def __eq__(self, other):
        return isinstance(other, SizeLimit) and other.value == self.value

    def __repr__(self):
        return f"SizeLimit({self.value!r})"


def _ordered(categories):
    if isinstance(categories, dict):
        return [
            data if isinstance(data, Category) else Category(name, **data)
            for name, data in categories.items()
        ]
    return list(categories)


def _assign(length, pass_counts, pass_sizes, freq_mod, rng):
    """Runs all passes and returns one list of per-category counts per character."""
    buckets = [[0] * len(pass_counts) for _ in range(length)]
    passes = max(pass_counts, default=0)

    for current_pass in range(passes):
        for index, pass_size in enumerate(pass_sizes):
            if current_pass >= pass_counts[index]:
                continue

            marked = math.ceil(freq_mod * pass_size)
            marked = min(max(marked, 0), length)
            mask = [True] * marked + [False] * (length - marked)
            rng.shuffle(mask)

            for position, hit in enumerate(mask):
                if hit:
                    buckets[position][index] += 1

    return buckets


def transform(text, limit=AUTO, categories=(), rng=None):
    """Returns `text` decorated with combining marks.

    `limit` is a SizeLimit (or a raw value accepted by it). `categories` is an
    ordered sequence of Category objects, or a mapping of name to Category /
    keyword dict whose order is used as the render order. `rng` needs
    `shuffle` and `choice`; defaults to the `random` module.
    """
    rng = rng or random
    limit = SizeLimit(limit)
    categories = _ordered(categories)
    length = len(text)

    pass_counts = [resolve(length, c.count, key=f"{c.name.lower()}-count") for c in categories]
    pass_sizes = [resolve(length, c.frequency, key=f"{c.name.lower()}-frequency") for c in categories]

    target = limit.target(length)
    budget = math.inf if target is None else target - length

    freq_mod = 1
    if target is not None:
        added = sum(count * size for count, size in zip(pass_counts, pass_sizes))
        if added > 0:
            freq_mod = budget / added

    buckets = _assign(length, pass_counts, pass_sizes, freq_mod, rng)

    remaining = budget
    segments = []
    for char, bucket in zip(text, buckets):
        segment = [char]
        if remaining > 0 and char != " ":
            for index, category in enumerate(categories):
                count = min(bucket[index], remaining)
                remaining -= count
                segment.extend(
                    unicode_marks.random_from(category.charset, rng) for _ in range(count)
                )
        segments.append("".join(segment))

    return "".join(segments)


class Decorator:
    """A configured transform: fixed limit, categories and random source."""

    def __init__(self, limit=AUTO, categories=(), rng=None):
        self.limit = SizeLimit(limit)
        self.categories = _ordered(categories)
        self.rng = rng

    def transform(self, text):
        return transform(text, self.limit, self.categories, self.rng)

    __call__ = transform
