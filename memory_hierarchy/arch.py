from typing import Iterable, List, Optional

from memory_hierarchy.base_model import AccessOutcome, ModelContext, SimulationResult
from memory_hierarchy.config import HierarchyConfig
from memory_hierarchy.memory.store import AssociativeStore

import logging
logger = logging.getLogger(__name__)


class MemoryHierarchy:
    """
    TLB -> L1..Ln -> RAM -> disk.

    Level numbering, shared with the analyzer: 0 is the TLB, 1..n the cache
    levels, n+1 RAM and n+2 the disk.
    """

    def __init__(self, config: HierarchyConfig, context: Optional[ModelContext] = None):
        config.validate()
        self.config = config
        self.context = context or ModelContext()

        self.tlb = AssociativeStore.from_tlb_config(config.tlb, config.page_size, self.context)
        self.caches: List[AssociativeStore] = [
            AssociativeStore.from_config(f"L{i + 1}", cache_config, self.context)
            for i, cache_config in enumerate(config.caches)
        ]
        self.ram = AssociativeStore.from_config("RAM", config.ram, self.context)
        self.disk_access_time = config.disk.ACCESS_TIME

        self.ram_level = len(self.caches) + 1
        self.disk_level = len(self.caches) + 2

    @property
    def num_levels(self) -> int:
        return len(self.caches)

    @property
    def level_names(self) -> List[str]:
        return self.config.level_names()

    def simulate(self, address: int) -> SimulationResult:
        result = SimulationResult(address)

        # the TLB store is indexed by page, its block size is the page size
        tlb_hit = self.tlb.access(address)
        result.add(AccessOutcome(0, self.tlb.name, tlb_hit, self.tlb.access_time))

        if not tlb_hit:
            # page walk: RAM resolves the physical address, disk on a page fault
            if not self._access_ram(result, translation=True):
                self._access_disk(result, translation=True)

        if not self._scan_caches(result) and not self._access_ram(result):
            self._access_disk(result)

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("\n".join(result.trace_lines()))
        return result

    def run(self, addresses: Iterable[int]) -> List[SimulationResult]:
        return [self.simulate(address) for address in addresses]

    def _scan_caches(self, result: SimulationResult) -> bool:
        for level, cache in enumerate(self.caches, start=1):
            hit = cache.access(result.address)
            result.add(AccessOutcome(level, cache.name, hit, cache.access_time))
            if hit:
                return True
        return False

    def _access_ram(self, result: SimulationResult, translation: bool = False) -> bool:
        hit = self.ram.access(result.address)
        result.add(AccessOutcome(self.ram_level, self.ram.name, hit,
                                 self.ram.access_time, translation))
        return hit

    def _access_disk(self, result: SimulationResult, translation: bool = False) -> bool:
        # the disk backs every address
        result.add(AccessOutcome(self.disk_level, "DISK", True,
                                 self.disk_access_time, translation))
        return True


__all__ = ["MemoryHierarchy"]
