from __future__ import annotations

from typing import List, Optional

from memory_hierarchy.base_model import ConfigError, ModelContext, Slot
from memory_hierarchy.config import AbstractStoreConfig, ReplacementPolicyType, TLBConfig
from memory_hierarchy.memory import replacement
from memory_hierarchy.memory.addr_converter import addr_to_block, addr_to_index

import logging
logger = logging.getLogger(__name__)


class AssociativeStore:
    """
    Fixed set of ``{tag, valid}`` slots used for every cache level, the TLB
    and RAM.  Only tags are tracked, no data.
    """

    def __init__(
        self,
        name: str,
        num_slots: int,
        block_size: int,
        access_time: int = 0,
        policy: ReplacementPolicyType = ReplacementPolicyType.FIFO,
        context: Optional[ModelContext] = None,
    ):
        for label, value, minimum in (("num_slots", num_slots, 1),
                                      ("block_size", block_size, 1),
                                      ("access_time", access_time, 0)):
            if not isinstance(value, int) or isinstance(value, bool) or value < minimum:
                raise ConfigError(f"{name}: {label} must be an integer >= {minimum}, got {value!r}")
        if not isinstance(policy, ReplacementPolicyType):
            raise ConfigError(f"{name}: unsupported replacement policy {policy!r}")

        self.name = name
        self.num_slots = num_slots
        self.block_size = block_size
        self.access_time = access_time
        self.policy = policy
        self.context = context or ModelContext()
        self.slots: List[Slot] = [Slot() for _ in range(num_slots)]
        self.state = replacement.make_state(policy, num_slots)

    @classmethod
    def from_config(cls, name: str, config: AbstractStoreConfig, context: Optional[ModelContext] = None):
        config.validate(name)
        return cls(name, config.num_slots, config.BLOCK_SIZE,
                   config.ACCESS_TIME, config.POLICY, context)

    @classmethod
    def from_tlb_config(cls, config: TLBConfig, page_size: int, context: Optional[ModelContext] = None):
        config.validate()
        return cls("TLB", config.ENTRIES, page_size,
                   config.ACCESS_TIME, config.POLICY, context)

    def index_of(self, address: int) -> int:
        return addr_to_index(address, self.block_size, self.num_slots)

    def tag_of(self, address: int) -> int:
        return addr_to_block(address, self.block_size)

    def lookup(self, index: int, tag: int) -> bool:
        slot = self.slots[index]
        if slot.valid and slot.tag == tag:
            replacement.on_hit(self.state, index, self.context)
            return True
        return False

    def insert_on_miss(self, index: int, tag: int) -> int:
        slot_idx = replacement.choose_slot(self.state, self.slots, index, self.context)
        slot = self.slots[slot_idx]
        if slot.valid:
            logger.debug("%s: evict tag %d from slot %d for tag %d",
                         self.name, slot.tag, slot_idx, tag)
        slot.tag = tag
        slot.valid = True
        return slot_idx

    def access(self, address: int) -> bool:
        index = self.index_of(address)
        tag = self.tag_of(address)
        if self.lookup(index, tag):
            return True
        self.insert_on_miss(index, tag)
        return False

    def contains(self, tag: int) -> bool:
        return any(s.valid and s.tag == tag for s in self.slots)

    def resident_tags(self) -> List[int]:
        return [s.tag for s in self.slots if s.valid]

    @property
    def occupancy(self) -> int:
        return sum(1 for s in self.slots if s.valid)

    @property
    def policy_occupancy(self) -> int:
        return replacement.occupancy(self.state, self.slots)

    def __repr__(self):
        return (f"AssociativeStore({self.name}, slots={self.num_slots}, "
                f"block={self.block_size}, policy={self.policy.name})")


__all__ = ["AssociativeStore"]
