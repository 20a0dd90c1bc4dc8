import argparse
import sys

from .errors import InvalidScenarioData
from .impact import compute_impact
from .log import configure_logging
from .mitigation import evaluate_mitigations
from .schemas import Scenario


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="impact-engine",
        description="Compute asteroid impact effects and rank deflection options.",
    )
    sub = ap.add_subparsers(dest="command", required=True)
    for name, help_text in (
        ("impact", "energy, crater and blast rings"),
        ("mitigate", "ranked deflection strategies"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument("--name", type=str, default="cli")
        p.add_argument("--diameter", type=float, required=True, help="meters")
        p.add_argument("--density", type=float, default=3000.0, help="kg/m^3")
        p.add_argument("--velocity", type=float, required=True, help="km/s")
        p.add_argument("--angle", type=float, default=45.0, help="degrees")
        p.add_argument("--time-to-impact", type=float, default=None, help="years")
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging()

    scenario = Scenario(
        name=args.name,
        diameter_meters=args.diameter,
        density_kg_m3=args.density,
        velocity_km_s=args.velocity,
        impact_angle_deg=args.angle,
        time_to_impact_years=args.time_to_impact,
    )
    try:
        if args.command == "impact":
            out = compute_impact(scenario)
        else:
            out = evaluate_mitigations(scenario)
    except InvalidScenarioData as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    print(out.model_dump_json(indent=2, exclude_none=True))
    return 0


if __name__ == "__main__":
    sys.exit(main())
