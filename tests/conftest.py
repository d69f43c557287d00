from __future__ import annotations

from pathlib import Path

import pytest

from memory_hierarchy.base_model import ModelContext
from memory_hierarchy.config import (
    AccountingMode,
    CacheConfig,
    DiskConfig,
    HierarchyConfig,
    RamConfig,
    ReplacementPolicyType,
    TLBConfig,
)

FIFO = ReplacementPolicyType.FIFO


@pytest.fixture(scope="session")
def config_dir() -> Path:
    return Path(__file__).resolve().parents[1] / "config"


@pytest.fixture
def context() -> ModelContext:
    return ModelContext.seeded(1234)


@pytest.fixture
def small_config() -> HierarchyConfig:
    """One 8-slot cache, 128-slot RAM, 8-entry TLB with 8 byte pages."""
    return HierarchyConfig(
        caches=[CacheConfig(SIZE=64, BLOCK_SIZE=8, ACCESS_TIME=1, POLICY=FIFO)],
        ram=RamConfig(SIZE=1024, BLOCK_SIZE=8, ACCESS_TIME=10, POLICY=FIFO),
        disk=DiskConfig(SIZE=32768, ACCESS_TIME=50),
        tlb=TLBConfig(ENTRIES=8, ACCESS_TIME=1, POLICY=FIFO, PAGE_SIZE=8),
        name="small",
    )


@pytest.fixture
def make_config():
    def _make(cache_policies=(FIFO,), tlb_entries=8, accounting=AccountingMode.CASCADE,
              ram_policy=FIFO, tlb_policy=FIFO):
        caches = [
            CacheConfig(SIZE=64 * (2 ** i), BLOCK_SIZE=8, ACCESS_TIME=1 + 2 * i, POLICY=policy)
            for i, policy in enumerate(cache_policies)
        ]
        return HierarchyConfig(
            caches=caches,
            ram=RamConfig(SIZE=1024, BLOCK_SIZE=8, ACCESS_TIME=10, POLICY=ram_policy),
            disk=DiskConfig(ACCESS_TIME=50),
            tlb=TLBConfig(ENTRIES=tlb_entries, ACCESS_TIME=1, POLICY=tlb_policy, PAGE_SIZE=8),
            accounting=accounting,
        )
    return _make
