from dataclasses import dataclass, field
from typing import List

from memory_hierarchy.base_model import ConfigError
from memory_hierarchy.utils.config_utils import BaseEnum, load_config

DEFAULT_DISK_SIZE = 32768
DEFAULT_TLB_SIZE = 64
MAX_CACHE_LEVELS = 3


class ReplacementPolicyType(str, BaseEnum):
    FIFO = "FIFO"
    LRU = "LRU"
    RANDOM = "RANDOM"


class AccountingMode(str, BaseEnum):
    # a hit at level L is also credited to every level after L
    CASCADE = "CASCADE"
    # every level only counts its own events
    STRICT = "STRICT"


def _check_int(owner: str, name: str, value, minimum: int):
    if not isinstance(value, int) or isinstance(value, bool):
        raise ConfigError(f"{owner}.{name} must be an integer, got {value!r}")
    if value < minimum:
        raise ConfigError(f"{owner}.{name} must be >= {minimum}, got {value}")


def _check_policy(owner: str, value):
    if not isinstance(value, ReplacementPolicyType):
        raise ConfigError(f"{owner}.POLICY {value!r} is not one of "
                          f"{[p.name for p in ReplacementPolicyType]}")


@dataclass(frozen=True)
class AbstractStoreConfig:
    SIZE: int = field(default=None)
    BLOCK_SIZE: int = field(default=None)
    ACCESS_TIME: int = field(default=0)
    POLICY: ReplacementPolicyType = field(default=ReplacementPolicyType.FIFO)

    @property
    def num_slots(self) -> int:
        return self.SIZE // self.BLOCK_SIZE

    def validate(self, owner: str):
        _check_int(owner, "SIZE", self.SIZE, 1)
        _check_int(owner, "BLOCK_SIZE", self.BLOCK_SIZE, 1)
        _check_int(owner, "ACCESS_TIME", self.ACCESS_TIME, 0)
        _check_policy(owner, self.POLICY)
        if self.SIZE % self.BLOCK_SIZE:
            raise ConfigError(
                f"{owner}.BLOCK_SIZE {self.BLOCK_SIZE} does not divide SIZE {self.SIZE}")
        if self.num_slots < 1:
            raise ConfigError(f"{owner} has zero capacity")


@dataclass(frozen=True)
class CacheConfig(AbstractStoreConfig):
    pass


@dataclass(frozen=True)
class RamConfig(AbstractStoreConfig):
    pass


@dataclass(frozen=True)
class DiskConfig:
    SIZE: int = field(default=DEFAULT_DISK_SIZE)
    ACCESS_TIME: int = field(default=0)

    def validate(self, owner: str = "disk"):
        _check_int(owner, "SIZE", self.SIZE, 1)
        _check_int(owner, "ACCESS_TIME", self.ACCESS_TIME, 0)


@dataclass(frozen=True)
class TLBConfig:
    ENTRIES: int = field(default=DEFAULT_TLB_SIZE)
    ACCESS_TIME: int = field(default=0)
    POLICY: ReplacementPolicyType = field(default=ReplacementPolicyType.FIFO)
    # None means: same as the L1 block size
    PAGE_SIZE: int = field(default=None)

    def validate(self, owner: str = "tlb"):
        _check_int(owner, "ENTRIES", self.ENTRIES, 1)
        _check_int(owner, "ACCESS_TIME", self.ACCESS_TIME, 0)
        _check_policy(owner, self.POLICY)
        if self.PAGE_SIZE is not None:
            _check_int(owner, "PAGE_SIZE", self.PAGE_SIZE, 1)


@dataclass(frozen=True)
class HierarchyConfig:
    caches: List[CacheConfig]
    ram: RamConfig
    disk: DiskConfig = field(default_factory=DiskConfig)
    tlb: TLBConfig = field(default_factory=TLBConfig)
    accounting: AccountingMode = field(default=AccountingMode.CASCADE)
    name: str = field(default="default")

    def __post_init__(self):
        # freeze the level list as well
        object.__setattr__(self, "caches", tuple(self.caches))
        self.validate()

    @property
    def num_levels(self) -> int:
        return len(self.caches)

    @property
    def page_size(self) -> int:
        if self.tlb.PAGE_SIZE is not None:
            return self.tlb.PAGE_SIZE
        return self.caches[0].BLOCK_SIZE

    def level_names(self) -> List[str]:
        return ["TLB"] + [f"L{i + 1}" for i in range(self.num_levels)] + ["RAM", "DISK"]

    def validate(self):
        if not 1 <= len(self.caches) <= MAX_CACHE_LEVELS:
            raise ConfigError(
                f"number of cache levels must be 1-{MAX_CACHE_LEVELS}, got {len(self.caches)}")
        for i, cache in enumerate(self.caches):
            if not isinstance(cache, AbstractStoreConfig):
                raise ConfigError(f"L{i + 1} config is invalid: {cache!r}")
            cache.validate(f"L{i + 1}")
        if not isinstance(self.ram, AbstractStoreConfig):
            raise ConfigError(f"ram config is invalid: {self.ram!r}")
        self.ram.validate("ram")
        self.disk.validate()
        self.tlb.validate()
        if not isinstance(self.accounting, AccountingMode):
            raise ConfigError(f"accounting mode {self.accounting!r} is invalid")


def load_hierarchy_config(config_path: str) -> HierarchyConfig:
    return load_config(config_path, HierarchyConfig)


__all__ = [
    "AccountingMode",
    "CacheConfig",
    "DiskConfig",
    "HierarchyConfig",
    "RamConfig",
    "ReplacementPolicyType",
    "TLBConfig",
    "load_hierarchy_config",
]
