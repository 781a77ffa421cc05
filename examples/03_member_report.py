"""
Example 3: Member Report and Custom Settings

Run a calculation with a stronger steel and a shorter chord buckling
length, print the full member table and save it to a file.
"""

from truss_sizer import CanopyConfig, DesignSettings, MemberReport, TrussCalculator, materials


def main():
    print("=" * 60)
    print("  Member Report")
    print("=" * 60)

    steel = materials.Custom(
        E=2.06e4,
        yield_strength=34.0,  # C345, kN/cm²
        condition_factor=0.9,
        name="Steel C345",
    )
    settings = DesignSettings.for_material(steel, chord_effective_length=0.9)

    config = CanopyConfig(
        span=9000,
        rise=1350,
        column_spacing=8400,
        truss_spacing=4000,
        region="V",
    )

    calculator = TrussCalculator(settings=settings, verbose=True)
    result = calculator.calculate(config)

    report = MemberReport(result)
    report.print_report()
    report.save_report("member_report.txt")
    print("Report saved to member_report.txt")


if __name__ == "__main__":
    main()
