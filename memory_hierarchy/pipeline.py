from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

import yaml

from memory_hierarchy.analyzer import PerformanceAnalyzer, PerformanceCounters, PerformanceReport
from memory_hierarchy.arch import MemoryHierarchy
from memory_hierarchy.base_model import ModelContext, SimulationResult
from memory_hierarchy.config import HierarchyConfig, load_hierarchy_config
from memory_hierarchy.pattern import AddressPattern, generate

import logging
logger = logging.getLogger(__name__)


@dataclass
class SimulationRun:
    """Everything one run over an address sequence produced."""

    results: List[SimulationResult]
    counters: PerformanceCounters
    report: PerformanceReport
    report_path: Optional[Path] = field(default=None)

    @property
    def total_latency(self) -> int:
        return sum(r.total_latency for r in self.results)


def run_simulation(
    config: HierarchyConfig,
    addresses: Iterable[int],
    context: Optional[ModelContext] = None,
) -> SimulationRun:
    hierarchy = MemoryHierarchy(config, context)
    analyzer = PerformanceAnalyzer(hierarchy.level_names, config.accounting)

    results = []
    for address in addresses:
        result = hierarchy.simulate(address)
        analyzer.record_result(result)
        results.append(result)

    report = analyzer.report()
    logger.info("%s: %d addresses, %d level events, hit rate %.2f%%",
                config.name, len(results), report.total_accesses, report.hit_rate * 100)
    return SimulationRun(results, analyzer.snapshot(), report)


def dump_report(run: SimulationRun, report_path: str | Path) -> Path:
    report_path = Path(report_path)
    report_path.parent.mkdir(parents=True, exist_ok=True)
    report = run.report.to_dict()
    report["total_latency"] = run.total_latency
    report_path.write_text(yaml.dump(report, sort_keys=False, indent=2))
    run.report_path = report_path
    logger.info("report generated at %s", report_path)
    return report_path


class SimulationPipeline:
    """
    Load a hierarchy config, generate a pattern, simulate it and write
    ``report.yaml`` under ``output_root``.
    """

    def __init__(self, config_path: str | Path, output_root: str | Path | None = None, seed: Optional[int] = None):
        self.config_path = Path(config_path)
        self.config = load_hierarchy_config(str(self.config_path))
        self.output_root = Path(output_root) if output_root is not None else None
        self.seed = seed

    def run(self, pattern: AddressPattern) -> SimulationRun:
        context = ModelContext.seeded(self.seed)
        addresses = generate(pattern, context.rng)
        run = run_simulation(self.config, addresses, context)
        if self.output_root is not None:
            dump_report(run, self.output_root / self.config.name / "report.yaml")
        return run


__all__ = ["SimulationPipeline", "SimulationRun", "dump_report", "run_simulation"]
