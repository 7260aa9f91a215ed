#!/usr/bin/env python3
"""
Compute the heating load of a saved wizard state and print the sizing summary
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path

# Add this directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from app.config import setup_logging
from domain.calculations.zone_loads import ensure_zones_initialized
from services.error_types import SizingError, log_error_with_context
from services.wizard import load_state_file, refresh_derived_fields

logger = logging.getLogger(__name__)


def process_project(state_path: str, output_path: str = None) -> dict:
    """Load a state file, refresh its derived fields and optionally save a JSON report"""
    state = load_state_file(state_path)
    ensure_zones_initialized(state.project)

    summary = refresh_derived_fields(state)
    report = {
        "beneficiary": state.beneficiary.to_json(),
        "technology": state.technology.to_json(),
        "sizing": summary.to_json(),
    }

    if output_path:
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(report, f, indent=2, ensure_ascii=False)
        logger.info(f"Saved sizing report to: {output_path}")

    # Print summary
    beneficiary = state.beneficiary
    print("\n=== HEAT PUMP SIZING ===")
    print(f"Beneficiary: {beneficiary.name or '-'} ({beneficiary.postal_code or 'no postal code'})")
    print(f"Climate zone: {summary.climate_zone}  Altitude: {summary.altitude_band} m"
          f"{'  Seaside' if summary.seaside else ''}")
    print(f"Base temperature: {summary.base_temperature:g}°C")
    print("\n--- Zones ---")
    for zone in summary.zones:
        print(f"{zone.zone_name}: {zone.loss_w:.0f} W ({zone.source})")
    print(f"\nTotal heating load: {summary.total_loss_w:.0f} W ({summary.total_loss_kw:.2f} kW)")

    return report


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Compute the heating load of a saved sizing wizard state')
    parser.add_argument('state_file', help='Wizard state JSON file')
    parser.add_argument('--output', '-o', help='Write the sizing report as JSON to this path')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Override LOG_LEVEL')
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    try:
        process_project(args.state_file, args.output)
    except SizingError as e:
        log_error_with_context(e, {"state_file": str(Path(args.state_file))})
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
