"""A quick canopy calculation: a 6 m truss in snow region III."""

import json

from truss_sizer import CanopyConfig, MemberReport, run_calculation

# Canopy dimensions, all in millimeters
config = CanopyConfig(
    span=6000,            # distance between the truss supports
    rise=900,             # ridge height above the lower chord
    column_spacing=5500,  # columns sit 250 mm in from each end
    truss_spacing=3000,   # each truss carries a 3 m strip of roof
    region="III",         # SP 20.13330 snow region
    roof_angle=15,        # degrees; leave out to use the truss slope
)

result = run_calculation(config, verbose=True)

result.print_summary()
MemberReport(result).print_report()

print("Bill of materials:\n", json.dumps(result.to_dict()["bill_of_materials"], indent=4))

if result.needs_review:
    print("Some members need a manual check, see the warnings above.")

if True:
    # Plot the truss colored by force (requires matplotlib)
    result.visualize(show=True)
