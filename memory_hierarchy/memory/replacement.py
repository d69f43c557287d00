"""
Replacement policy state and the operations dispatched over it.

Each store owns exactly one state object, one of FIFOState, LRUState or
RandomState.  Every operation below handles all three and raises
``TypeError`` for anything else.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List, Sequence, Union

from memory_hierarchy.base_model import ConfigError, ModelContext, Slot
from memory_hierarchy.config import ReplacementPolicyType


@dataclass
class FIFOState:
    # occupied slot indices, front = oldest insertion
    queue: Deque[int] = field(default_factory=deque)


@dataclass
class LRUState:
    # occupied slot index -> last access stamp, in insertion order
    stamps: Dict[int, int] = field(default_factory=dict)


@dataclass
class RandomState:
    permutation: List[int] = field(default_factory=list)


PolicyState = Union[FIFOState, LRUState, RandomState]


def make_state(policy: ReplacementPolicyType, num_slots: int) -> PolicyState:
    if policy == ReplacementPolicyType.FIFO:
        return FIFOState()
    elif policy == ReplacementPolicyType.LRU:
        return LRUState()
    elif policy == ReplacementPolicyType.RANDOM:
        return RandomState(list(range(num_slots)))
    raise ConfigError(f"unsupported replacement policy {policy!r}")


def on_hit(state: PolicyState, slot: int, context: ModelContext) -> None:
    if isinstance(state, LRUState):
        state.stamps[slot] = context.clock.tick()
    elif not isinstance(state, (FIFOState, RandomState)):
        raise TypeError(f"unknown policy state {state!r}")


def choose_slot(state: PolicyState, slots: Sequence[Slot], index: int, context: ModelContext) -> int:
    """
    Pick the slot that receives a new tag after a miss at ``index`` and
    update the policy state for the installation.

    Below capacity FIFO and LRU fill the naturally indexed slot; at capacity
    they evict by queue order / oldest stamp, which may be any slot.
    """
    full = all(s.valid for s in slots)

    if isinstance(state, FIFOState):
        if full:
            slot = state.queue.popleft()
        else:
            slot = index
            if slots[slot].valid:
                # collision below capacity, the slot is re-inserted
                state.queue.remove(slot)
        state.queue.append(slot)
        return slot

    if isinstance(state, LRUState):
        if full:
            slot = min(state.stamps, key=state.stamps.get)
        else:
            slot = index
        state.stamps.pop(slot, None)
        state.stamps[slot] = context.clock.tick()
        return slot

    if isinstance(state, RandomState):
        context.rng.shuffle(state.permutation)
        if not full:
            for slot in state.permutation:
                if not slots[slot].valid:
                    return slot
        return context.rng.randrange(len(slots))

    raise TypeError(f"unknown policy state {state!r}")


def occupancy(state: PolicyState, slots: Sequence[Slot]) -> int:
    """Number of slots the policy state tracks as occupied."""
    if isinstance(state, FIFOState):
        return len(state.queue)
    if isinstance(state, LRUState):
        return len(state.stamps)
    if isinstance(state, RandomState):
        return sum(1 for s in slots if s.valid)
    raise TypeError(f"unknown policy state {state!r}")


__all__ = [
    "FIFOState",
    "LRUState",
    "PolicyState",
    "RandomState",
    "choose_slot",
    "make_state",
    "occupancy",
    "on_hit",
]
