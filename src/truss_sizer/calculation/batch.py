"""
Run many independent canopy calculations, optionally in parallel.
"""

from __future__ import annotations

import json
import multiprocessing as mp
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

import numpy as np

from truss_sizer.calculation.calculator import TrussCalculator
from truss_sizer.calculation.config import CanopyConfig, DesignSettings
from truss_sizer.calculation.result import CalculationResult


@dataclass
class BatchResults:
    """
    Container for results from a batch of calculations.

    Results are stored in the same order as the configurations that
    produced them.

    Example:
        >>> batch = run_batch(configs, processes=4)
        >>> print(batch.lightest().total_mass)
    """

    results: List[CalculationResult] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.results)

    def lightest(self) -> CalculationResult:
        """Result with the smallest truss mass."""
        if not self.results:
            raise ValueError("No results available")
        return min(self.results, key=lambda r: r.total_mass)

    def heaviest(self) -> CalculationResult:
        """Result with the largest truss mass."""
        if not self.results:
            raise ValueError("No results available")
        return max(self.results, key=lambda r: r.total_mass)

    def needing_review(self) -> List[CalculationResult]:
        return [r for r in self.results if r.needs_review]

    def statistics(self) -> Dict[str, Dict[str, float]]:
        """
        Compute statistics across all results.

        Returns:
            Dict with mean, std, min, max for mass and peak forces
        """
        if not self.results:
            raise ValueError("No results available")

        def stats(values):
            arr = np.asarray(values, dtype=float)
            return {
                'mean': float(np.mean(arr)),
                'std': float(np.std(arr)),
                'min': float(np.min(arr)),
                'max': float(np.max(arr)),
            }

        return {
            'total_mass': stats([r.total_mass for r in self.results]),
            'max_compression': stats([r.max_compression for r in self.results]),
            'max_tension': stats([r.max_tension for r in self.results]),
        }

    def summary(self) -> str:
        """Generate summary of the batch."""
        stats = self.statistics()
        lightest = self.lightest()
        heaviest = self.heaviest()

        lines = [
            "=" * 60,
            f"  BATCH SUMMARY ({len(self.results)} calculations)",
            "=" * 60,
            "",
            "  Truss Mass (kg):",
            f"    Mean: {stats['total_mass']['mean']:.2f}",
            f"    Std:  {stats['total_mass']['std']:.2f}",
            f"    Min:  {stats['total_mass']['min']:.2f} "
            f"(region {lightest.config.region}, span {lightest.config.span:.0f} mm)",
            f"    Max:  {stats['total_mass']['max']:.2f} "
            f"(region {heaviest.config.region}, span {heaviest.config.span:.0f} mm)",
            "",
            "  Peak Forces (kN):",
            f"    Compression: {stats['max_compression']['min']:.2f}",
            f"    Tension:     {stats['max_tension']['max']:.2f}",
            "",
            f"  Needing review: {len(self.needing_review())}",
            "",
            "=" * 60,
        ]

        return "\n".join(lines)

    def save(self, path: Union[str, Path]) -> None:
        """
        Save every result and a summary to a directory.

        Args:
            path: Directory path to save results
        """
        path = Path(path)
        path.mkdir(parents=True, exist_ok=True)

        for i, result in enumerate(self.results):
            with open(path / f"calculation_{i:04d}.json", 'w') as f:
                json.dump(result.to_dict(), f, indent=2)

        with open(path / "summary.json", 'w') as f:
            json.dump({
                'n_calculations': len(self.results),
                'statistics': self.statistics(),
                'lightest_index': self.results.index(self.lightest()),
            }, f, indent=2)


def _calculate(config: CanopyConfig, settings: Optional[DesignSettings]) -> CalculationResult:
    """Run one calculation. Module-level so it can be pickled for a Pool."""
    return TrussCalculator(settings=settings).calculate(config)


def run_batch(
    configs: Iterable[CanopyConfig],
    settings: Optional[DesignSettings] = None,
    processes: Optional[int] = None,
    verbose: bool = False,
) -> BatchResults:
    """
    Calculate every configuration in `configs`.

    Args:
        configs: Configurations to calculate
        settings: Shared engineering constants
        processes: Worker processes. None or 1 runs sequentially.
        verbose: Print progress

    Returns:
        BatchResults in input order

    Example:
        >>> from truss_sizer import CanopyConfig, run_batch
        >>> from truss_sizer.loads import SNOW_REGIONS
        >>>
        >>> configs = [
        ...     CanopyConfig(span=6000, rise=900, column_spacing=5500,
        ...                  truss_spacing=3000, region=r)
        ...     for r in SNOW_REGIONS
        ... ]
        >>> batch = run_batch(configs, processes=4)
        >>> print(batch.summary())
    """
    configs = list(configs)
    tasks = [(config, settings) for config in configs]

    if verbose:
        mode = "sequentially" if not processes or processes <= 1 else f"with {processes} workers"
        print(f"Running {len(configs)} calculations {mode}...")
        print("-" * 50)

    if processes and processes > 1:
        with mp.Pool(processes=processes) as pool:
            results = pool.starmap(_calculate, tasks)
    else:
        results = []
        for i, task in enumerate(tasks):
            result = _calculate(*task)
            results.append(result)
            if verbose:
                print(f"Calculation {i + 1}/{len(tasks)}: region {task[0].region}, "
                      f"mass {result.total_mass:.2f} kg")

    batch = BatchResults(results=list(results))

    if verbose and batch.results:
        print("-" * 50)
        print(f"Lightest: {batch.lightest().total_mass:.2f} kg")

    return batch
