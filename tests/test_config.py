import dataclasses

import pytest

from memory_hierarchy.base_model import ConfigError
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

L1 = CacheConfig(SIZE=64, BLOCK_SIZE=8, ACCESS_TIME=1)
RAM = RamConfig(SIZE=1024, BLOCK_SIZE=8, ACCESS_TIME=10)


@pytest.mark.ci
def test_defaults():
    config = HierarchyConfig(caches=[L1], ram=RAM)
    assert config.disk == DiskConfig(SIZE=32768, ACCESS_TIME=0)
    assert config.tlb.ENTRIES == 64
    assert config.tlb.POLICY == ReplacementPolicyType.FIFO
    assert config.page_size == 8
    assert config.accounting == AccountingMode.CASCADE
    assert config.level_names() == ["TLB", "L1", "RAM", "DISK"]
    assert L1.num_slots == 8


@pytest.mark.ci
def test_config_is_immutable():
    config = HierarchyConfig(caches=[L1], ram=RAM)
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.name = "other"
    with pytest.raises(dataclasses.FrozenInstanceError):
        L1.SIZE = 128
    assert isinstance(config.caches, tuple)


@pytest.mark.ci
@pytest.mark.parametrize("kwargs", [
    dict(caches=[]),
    dict(caches=[L1, L1, L1, L1]),
    dict(caches=[CacheConfig(SIZE=0, BLOCK_SIZE=8)]),
    dict(caches=[CacheConfig(SIZE=64, BLOCK_SIZE=0)]),
    dict(caches=[CacheConfig(SIZE=4, BLOCK_SIZE=8)]),
    dict(caches=[CacheConfig(SIZE=60, BLOCK_SIZE=8)]),
    dict(caches=[CacheConfig(SIZE=-64, BLOCK_SIZE=8)]),
    dict(caches=[CacheConfig(SIZE=64, BLOCK_SIZE=8, ACCESS_TIME=-1)]),
    dict(caches=[CacheConfig(SIZE=64, BLOCK_SIZE=8, POLICY="MRU")]),
    dict(caches=[CacheConfig(SIZE=64.0, BLOCK_SIZE=8)]),
    dict(ram=RamConfig(SIZE=1024)),
    dict(disk=DiskConfig(SIZE=0)),
    dict(tlb=TLBConfig(ENTRIES=0)),
    dict(tlb=TLBConfig(PAGE_SIZE=0)),
    dict(tlb=TLBConfig(POLICY=7)),
    dict(accounting="cascade"),
])
def test_invalid_config_rejected(kwargs):
    params = dict(caches=[L1], ram=RAM)
    params.update(kwargs)
    with pytest.raises(ConfigError):
        HierarchyConfig(**params)


@pytest.mark.ci
def test_load_yaml_config(config_dir):
    config = load_hierarchy_config(str(config_dir / "default_hierarchy.yaml"))
    assert config.name == "default_hierarchy"
    assert config.num_levels == 3
    assert config.caches[1].SIZE == 2048
    assert [c.POLICY for c in config.caches] == [
        ReplacementPolicyType.LRU, ReplacementPolicyType.FIFO, ReplacementPolicyType.RANDOM]
    # included from ram.yaml
    assert config.ram == RamConfig(SIZE=65536, BLOCK_SIZE=64, ACCESS_TIME=100,
                                   POLICY=ReplacementPolicyType.LRU)
    assert config.disk.ACCESS_TIME == 500
    assert config.tlb.ENTRIES == 16
    assert config.page_size == 16


def _write(tmp_path, text):
    path = tmp_path / "hierarchy.yaml"
    path.write_text(text)
    return str(path)


MINIMAL = """
caches:
  - {{SIZE: 64, BLOCK_SIZE: 8, ACCESS_TIME: 1, POLICY: {policy}}}
ram: {{SIZE: 1024, BLOCK_SIZE: 8, ACCESS_TIME: 10}}
accounting: {accounting}
"""


@pytest.mark.ci
@pytest.mark.parametrize("raw,expected", [
    ("LRU", ReplacementPolicyType.LRU),
    ("random", ReplacementPolicyType.RANDOM),
    (0, ReplacementPolicyType.FIFO),
    (1, ReplacementPolicyType.LRU),
    (2, ReplacementPolicyType.RANDOM),
])
def test_policy_names_and_codes(tmp_path, raw, expected):
    config = load_hierarchy_config(_write(tmp_path, MINIMAL.format(policy=raw, accounting="strict")))
    assert config.caches[0].POLICY == expected
    assert config.accounting == AccountingMode.STRICT


@pytest.mark.ci
@pytest.mark.parametrize("text", [
    MINIMAL.format(policy="MRU", accounting="CASCADE"),
    MINIMAL.format(policy=3, accounting="CASCADE"),
    MINIMAL.format(policy="LRU", accounting="sometimes"),
    "caches:\n  - {SIZE: 64, BLOCK_SIZE: 8}\n",
    "caches:\n  - {SIZE: 64, BLOCK_SIZE: 8, SPEED: 2}\nram: {SIZE: 1024, BLOCK_SIZE: 8}\n",
    "caches:\n  - {SIZE: 60, BLOCK_SIZE: 8}\nram: {SIZE: 1024, BLOCK_SIZE: 8}\n",
    "caches: {SIZE: 64, BLOCK_SIZE: 8}\nram: {SIZE: 1024, BLOCK_SIZE: 8}\n",
    "caches:\n  - {SIZE: 64.9, BLOCK_SIZE: 8, ACCESS_TIME: 1}\nram: {SIZE: 1024, BLOCK_SIZE: 8}\n",
    "caches:\n  - {SIZE: 64, BLOCK_SIZE: 8, ACCESS_TIME: 1.7}\nram: {SIZE: 1024, BLOCK_SIZE: 8}\n",
    "caches:\n  - {SIZE: '64', BLOCK_SIZE: 8}\nram: {SIZE: 1024, BLOCK_SIZE: 8}\n",
    "caches:\n  - {SIZE: 64, BLOCK_SIZE: 8, ACCESS_TIME: true}\nram: {SIZE: 1024, BLOCK_SIZE: 8}\n",
    "caches:\n  - {SIZE: 64, BLOCK_SIZE: 8}\nram: {SIZE: 1024, BLOCK_SIZE: 8}\ntlb: {ENTRIES: 4.5}\n",
    "",
])
def test_invalid_yaml_rejected(tmp_path, text):
    with pytest.raises(ConfigError):
        load_hierarchy_config(_write(tmp_path, text))
