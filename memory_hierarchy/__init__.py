"""
Memory hierarchy simulator: TLB -> L1..L3 caches -> RAM -> disk, with FIFO,
LRU and RANDOM replacement and per-level hit/miss accounting.
"""

from memory_hierarchy.analyzer import PerformanceAnalyzer, PerformanceCounters, PerformanceReport
from memory_hierarchy.arch import MemoryHierarchy
from memory_hierarchy.base_model import (
    AccessOutcome,
    ConfigError,
    ModelContext,
    PatternError,
    SimulationResult,
)
from memory_hierarchy.config import (
    AccountingMode,
    CacheConfig,
    DiskConfig,
    HierarchyConfig,
    RamConfig,
    ReplacementPolicyType,
    TLBConfig,
    load_hierarchy_config,
)
from memory_hierarchy.memory.store import AssociativeStore
from memory_hierarchy.pattern import LoopPattern, RandomPattern, SequentialPattern, generate
from memory_hierarchy.pipeline import SimulationPipeline, run_simulation

__all__ = [
    "AccessOutcome",
    "AccountingMode",
    "AssociativeStore",
    "CacheConfig",
    "ConfigError",
    "DiskConfig",
    "HierarchyConfig",
    "LoopPattern",
    "MemoryHierarchy",
    "ModelContext",
    "PatternError",
    "PerformanceAnalyzer",
    "PerformanceCounters",
    "PerformanceReport",
    "RamConfig",
    "RandomPattern",
    "ReplacementPolicyType",
    "SequentialPattern",
    "SimulationPipeline",
    "SimulationResult",
    "TLBConfig",
    "generate",
    "load_hierarchy_config",
    "run_simulation",
]
