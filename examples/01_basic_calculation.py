"""
Example 1: Basic Canopy Calculation

Size a single canopy truss and print the summary and bill of materials.
"""

from truss_sizer import CanopyConfig, run_calculation


def main():
    print("=" * 60)
    print("  Basic Canopy Calculation")
    print("=" * 60)

    config = CanopyConfig(
        span=6000,
        rise=900,
        column_spacing=5500,
        truss_spacing=3000,
        region="III",
        roof_angle=15,
    )

    result = run_calculation(config)
    result.print_summary()

    print("\n  Bill of materials:")
    for item in result.bill_of_materials:
        print(f"    {item.category:<14} {item.profile_name:<11} x{item.count:<3} "
              f"{item.total_length:>6.2f} m  {item.mass:>7.2f} kg")

    print(f"\n  Columns at x = {', '.join(f'{c.x:.0f}' for c in result.columns)} mm")


if __name__ == "__main__":
    main()
