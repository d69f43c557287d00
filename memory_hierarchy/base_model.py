from dataclasses import dataclass, field
from typing import List, Optional

from memory_hierarchy.utils.base_utils import BaseDataclass, RandomSource, TickClock

INVALID_TAG = -1


class ConfigError(ValueError):
    """Raised when hierarchy parameters are invalid."""


class PatternError(ValueError):
    """Raised when address pattern parameters are invalid."""


@dataclass
class Slot:
    tag: int = INVALID_TAG
    valid: bool = False


@dataclass
class ModelContext:
    clock: TickClock = field(default_factory=TickClock)
    rng: RandomSource = field(default_factory=RandomSource)

    @classmethod
    def seeded(cls, seed: Optional[int]) -> "ModelContext":
        return cls(TickClock(), RandomSource(seed))


@dataclass
class AccessOutcome(BaseDataclass):
    level: int
    name: str
    hit: bool
    latency: int
    translation: bool = False

    def describe(self, elapsed: int) -> str:
        if self.name == "TLB":
            if self.hit:
                return f"TLB Hit (Access time: {elapsed}ms)"
            return f"TLB Miss, Accessing RAM to get Physical Address (Access time: {elapsed}ms)"
        if self.name == "DISK":
            return f"Hit in Disk (Access time: {elapsed}ms)"
        label = self.name if self.name == "RAM" else f"{self.name} Cache"
        if self.hit:
            return f"Hit in {label} (Access time: {elapsed}ms)"
        return f"Miss in {label}"


@dataclass
class SimulationResult(BaseDataclass):
    address: int
    outcomes: List[AccessOutcome] = field(default_factory=list)
    total_latency: int = 0

    def add(self, outcome: AccessOutcome):
        self.outcomes.append(outcome)
        self.total_latency += outcome.latency

    @property
    def tlb_hit(self) -> bool:
        return bool(self.outcomes) and self.outcomes[0].hit

    @property
    def resolved_by(self) -> Optional[str]:
        """Name of the level that finally served the data."""
        if self.outcomes and self.outcomes[-1].hit and not self.outcomes[-1].translation:
            return self.outcomes[-1].name
        return None

    @property
    def disk_latency(self) -> int:
        return sum(o.latency for o in self.outcomes if o.name == "DISK")

    def trace_lines(self) -> List[str]:
        lines = [f"Address: {self.address}"]
        elapsed = 0
        for outcome in self.outcomes:
            elapsed += outcome.latency
            lines.append(outcome.describe(elapsed))
        return lines


__all__ = [
    "AccessOutcome",
    "ConfigError",
    "INVALID_TAG",
    "ModelContext",
    "PatternError",
    "SimulationResult",
    "Slot",
]
