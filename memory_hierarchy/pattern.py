from dataclasses import dataclass
from typing import List, Optional, Union

import numpy as np

from memory_hierarchy.base_model import PatternError
from memory_hierarchy.utils.base_utils import RandomSource
from memory_hierarchy.utils.config_utils import BaseEnum

import logging
logger = logging.getLogger(__name__)

DEFAULT_STEP = 10
DEFAULT_COUNT = 20
DEFAULT_ITERATIONS = 5


class PatternKind(BaseEnum):
    SEQUENTIAL = 1
    RANDOM = 2
    LOOP = 3

    @classmethod
    def _missing_(cls, value):
        # menu choices are the values themselves, no positional codes
        return cls._missing_name(value)


@dataclass(frozen=True)
class SequentialPattern:
    start: int
    end: int
    step: int = DEFAULT_STEP


@dataclass(frozen=True)
class RandomPattern:
    start: int
    end: int
    count: int = DEFAULT_COUNT


@dataclass(frozen=True)
class LoopPattern:
    start: int
    end: int
    iterations: int = DEFAULT_ITERATIONS


AddressPattern = Union[SequentialPattern, RandomPattern, LoopPattern]


def _check_int(name: str, value, minimum: Optional[int] = None):
    if not isinstance(value, (int, np.integer)) or isinstance(value, bool):
        raise PatternError(f"{name} must be an integer, got {value!r}")
    if minimum is not None and value < minimum:
        raise PatternError(f"{name} must be >= {minimum}, got {value}")


def _check_range(pattern: AddressPattern):
    _check_int("start", pattern.start, 0)
    _check_int("end", pattern.end)
    if pattern.start > pattern.end:
        raise PatternError(f"start {pattern.start} > end {pattern.end}")


def generate(pattern: AddressPattern, rng: Optional[RandomSource] = None) -> List[int]:
    """Materialize the ordered address sequence of ``pattern``."""
    _check_range(pattern)
    if isinstance(pattern, SequentialPattern):
        _check_int("step", pattern.step, 1)
        addresses = np.arange(pattern.start, pattern.end + 1, pattern.step)
    elif isinstance(pattern, RandomPattern):
        _check_int("count", pattern.count, 0)
        rng = rng or RandomSource()
        return rng.integers(pattern.start, pattern.end, pattern.count)
    elif isinstance(pattern, LoopPattern):
        _check_int("iterations", pattern.iterations, 0)
        addresses = np.tile(np.arange(pattern.start, pattern.end + 1), pattern.iterations)
    else:
        raise PatternError(f"unknown address pattern {pattern!r}")
    return addresses.tolist()


def pattern_from_choice(choice, start: int, end: int) -> AddressPattern:
    """Map the numeric menu choice (1 sequential, 2 random, 3 loop) to a pattern."""
    try:
        kind = PatternKind(choice)
    except ValueError:
        logger.warning("invalid pattern choice %r, using sequential access", choice)
        kind = PatternKind.SEQUENTIAL

    if kind == PatternKind.RANDOM:
        return RandomPattern(start, end)
    if kind == PatternKind.LOOP:
        return LoopPattern(start, end)
    return SequentialPattern(start, end)


__all__ = [
    "AddressPattern",
    "LoopPattern",
    "PatternKind",
    "RandomPattern",
    "SequentialPattern",
    "generate",
    "pattern_from_choice",
]
