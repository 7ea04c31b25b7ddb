from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

# Ensure project root is on path when running this script directly
_script_dir = Path(__file__).resolve().parent
_project_root = _script_dir.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import yaml

from rover_sim.config import RoverConfig, build_rover, load_world
from rover_sim.rover import RoverNotLanded
from telemetry.logger import TelemetryLogger


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Land a rover and run command strings against a map.")
    parser.add_argument(
        "commands",
        nargs="*",
        help="Command strings, executed in order (e.g. ffrf lb).",
    )
    parser.add_argument(
        "--config",
        type=str,
        default="configs/sim.yaml",
        help="Path to sim YAML config.",
    )
    parser.add_argument(
        "--map",
        type=str,
        default=None,
        help="Override the JSON map from the config.",
    )
    parser.add_argument(
        "--telemetry",
        type=str,
        default=None,
        help="JSONL telemetry output path (overrides logging.telemetry_path).",
    )
    parser.add_argument(
        "--no-land",
        action="store_true",
        help="Skip landing (commands then fail with 'not landed').",
    )
    args = parser.parse_args(argv)

    try:
        cfg = RoverConfig.from_yaml(args.config)
        if args.map is not None:
            cfg.map_path = args.map
        world = load_world(cfg)
    except (OSError, ValueError, KeyError, yaml.YAMLError) as exc:
        print(f"Failed to load configuration: {exc}", file=sys.stderr)
        return 2

    telemetry_path = args.telemetry or cfg.telemetry_path
    try:
        telemetry_logger = TelemetryLogger(telemetry_path) if telemetry_path else None
    except OSError as exc:
        print(f"Failed to open telemetry log: {exc}", file=sys.stderr)
        return 2

    rover = build_rover(cfg, world=world, telemetry=telemetry_logger)
    print(f"Rover with commands {''.join(sorted(rover.commands))}, {len(world)} obstacles.")

    try:
        if not args.no_land:
            rover.land(cfg.landing, cfg.heading)
            print(f"Landed: {rover}")
        for batch in args.commands:
            rover.execute(batch)
            print(f"{batch} -> {rover}")
    except RoverNotLanded as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        if telemetry_logger is not None:
            telemetry_logger.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
