"""
Example 2: Snow Region Comparison

The same canopy sized for every snow region, to see how the load drives
the profiles and the mass.
"""

from truss_sizer import CanopyConfig, run_batch
from truss_sizer.loads import SNOW_REGIONS


def main():
    print("=" * 60)
    print("  Snow Region Comparison")
    print("=" * 60)

    configs = [
        CanopyConfig(
            span=7500,
            rise=1100,
            column_spacing=7000,
            truss_spacing=3000,
            region=region,
        )
        for region in SNOW_REGIONS
    ]

    batch = run_batch(configs, verbose=True)

    print(f"\n  {'Region':<8} {'Snow':>8} {'Line':>8} {'Max comp':>10} {'Mass':>8}")
    print("  " + "-" * 46)
    for result in batch.results:
        print(f"  {result.config.region:<8} {result.snow_load:>8.1f} "
              f"{result.line_load:>8.2f} {result.max_compression:>10.2f} "
              f"{result.total_mass:>8.1f}")

    print("\n" + batch.summary())


if __name__ == "__main__":
    main()
