"""
Advanced example: sizing a whole range of canopies in parallel.

This demonstrates:
- Building a grid of configurations over spans and snow regions
- Parallel execution using multiprocessing
- Comparing masses across the grid
- Picking out the designs that need a manual check
- Saving every result as JSON for the drawing tools

Every calculation is independent, so the grid scales with the number of
cores. It is quick either way; the pool is here to show how.
"""

import multiprocessing as mp

from truss_sizer import CanopyConfig, run_batch
from truss_sizer.loads import SNOW_REGIONS


def build_grid(spans, regions, rise_ratio=0.15, truss_spacing=3000, overhang=250):
    """
    Build one configuration per (span, region) pair.

    Args:
        spans: Truss spans (mm)
        regions: Snow region codes
        rise_ratio: Ridge height as a fraction of the span
        truss_spacing: Distance between trusses (mm)
        overhang: Distance from each truss end to its column (mm)

    Returns:
        List of CanopyConfig
    """
    return [
        CanopyConfig(
            span=span,
            rise=span * rise_ratio,
            column_spacing=span - 2 * overhang,
            truss_spacing=truss_spacing,
            region=region,
        )
        for span in spans
        for region in regions
    ]


if __name__ == "__main__":
    # =========================================================================
    # CONFIGURATION
    # =========================================================================

    spans = [3000, 4500, 6000, 7500, 9000, 12000]
    configs = build_grid(spans, SNOW_REGIONS)

    # =========================================================================
    # RUN PARALLEL CALCULATIONS
    # =========================================================================

    batch = run_batch(configs, processes=mp.cpu_count(), verbose=True)
    print(batch.summary())

    # =========================================================================
    # ANALYZE RESULTS
    # =========================================================================

    print("\nTruss mass (kg) by span and region:")
    print(f"  {'Span':>6} " + " ".join(f"{r:>7}" for r in SNOW_REGIONS))
    for i, span in enumerate(spans):
        row = batch.results[i * len(SNOW_REGIONS):(i + 1) * len(SNOW_REGIONS)]
        print(f"  {span:>6} " + " ".join(f"{r.total_mass:>7.1f}" for r in row))

    review = batch.needing_review()
    if review:
        print(f"\n{len(review)} designs need a manual check:")
        for result in review:
            names = ", ".join(m.member.name for m in result.oversized_members)
            print(f"  span {result.config.span:.0f} mm, region {result.config.region}: {names}")

    batch.save("./canopy_results")
    print("\nResults saved to ./canopy_results")
