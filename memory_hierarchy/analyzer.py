from dataclasses import asdict, dataclass, field
from typing import Dict, List

from memory_hierarchy.base_model import SimulationResult
from memory_hierarchy.config import AccountingMode
from memory_hierarchy.utils.base_utils import BaseDataclass

import logging
logger = logging.getLogger(__name__)


@dataclass
class PerformanceCounters(BaseDataclass):
    total_accesses: int = 0
    total_hits: int = 0
    total_misses: int = 0
    hits: List[int] = field(default_factory=list)
    misses: List[int] = field(default_factory=list)

    def copy(self) -> "PerformanceCounters":
        return PerformanceCounters(self.total_accesses, self.total_hits, self.total_misses,
                                   list(self.hits), list(self.misses))


@dataclass
class LevelReport(BaseDataclass):
    name: str
    hits: int
    misses: int
    hit_rate: float
    miss_rate: float


@dataclass
class PerformanceReport(BaseDataclass):
    accounting: AccountingMode
    total_accesses: int
    total_hits: int
    total_misses: int
    hit_rate: float
    miss_rate: float
    levels: List[LevelReport] = field(default_factory=list)

    def level(self, name: str) -> LevelReport:
        for lvl in self.levels:
            if lvl.name == name:
                return lvl
        raise KeyError(name)

    def to_dict(self) -> Dict:
        report = asdict(self)
        report["accounting"] = self.accounting.name
        report["levels"] = {lvl.pop("name"): lvl for lvl in report["levels"]}
        return report


class PerformanceAnalyzer:
    """
    Running per-level hit/miss counters.

    In ``CASCADE`` mode a hit at level L is also credited as a hit to every
    level after L, and a level's hit rate is taken over all logged events with
    ``miss_rate = 1 - hit_rate``.  ``STRICT`` mode counts each level on its own
    events only.
    """

    def __init__(self, level_names: List[str], accounting: AccountingMode = AccountingMode.CASCADE):
        self.level_names = list(level_names)
        self.accounting = accounting
        self.counters = PerformanceCounters(
            hits=[0] * len(self.level_names),
            misses=[0] * len(self.level_names),
        )

    def record(self, level: int, hit: bool):
        if not 0 <= level < len(self.level_names):
            raise IndexError(f"level {level} out of range for {self.level_names}")
        c = self.counters
        c.total_accesses += 1
        if hit:
            c.total_hits += 1
            c.hits[level] += 1
            if self.accounting == AccountingMode.CASCADE:
                for lvl in range(level + 1, len(c.hits)):
                    c.hits[lvl] += 1
        else:
            c.total_misses += 1
            c.misses[level] += 1

    def record_result(self, result: SimulationResult):
        for outcome in result.outcomes:
            self.record(outcome.level, outcome.hit)

    def snapshot(self) -> PerformanceCounters:
        return self.counters.copy()

    def _level_rates(self, level: int):
        c = self.counters
        if self.accounting == AccountingMode.CASCADE:
            if not c.total_accesses:
                return 0.0, 0.0
            hit_rate = c.hits[level] / c.total_accesses
            return hit_rate, 1 - hit_rate
        events = c.hits[level] + c.misses[level]
        if not events:
            return 0.0, 0.0
        return c.hits[level] / events, c.misses[level] / events

    def report(self) -> PerformanceReport:
        c = self.counters
        total = c.total_accesses
        levels = []
        for level, name in enumerate(self.level_names):
            hit_rate, miss_rate = self._level_rates(level)
            levels.append(LevelReport(name, c.hits[level], c.misses[level], hit_rate, miss_rate))
        report = PerformanceReport(
            accounting=self.accounting,
            total_accesses=total,
            total_hits=c.total_hits,
            total_misses=c.total_misses,
            hit_rate=c.total_hits / total if total else 0.0,
            miss_rate=c.total_misses / total if total else 0.0,
            levels=levels,
        )
        logger.debug("performance report: %s", report)
        return report


__all__ = ["LevelReport", "PerformanceAnalyzer", "PerformanceCounters", "PerformanceReport"]
