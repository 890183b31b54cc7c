"""
Command-line report for Year 5 history indicators

Example:
    python -m acquisitions.history.history_runner --data-dir ./data --output-dir ./out
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import pandas as pd

from ..data_ingestion import load_class_records
from .history_analysis import AnalysisOverrideStore, analysis_context_id, resolve_analysis
from .history_data import (
    get_scopes,
    load_config_file,
    load_config_from_args,
    resolve_config,
    select_history_records,
)
from .history_definitions import ANALYSIS_SECTIONS
from .history_indicators import compute_history_indicators

REPORT_FILENAME = "history_y5_indicators.json"
CRITERIA_FILENAME = "history_y5_criteria.csv"


def generate_history_report(records, config=None, overrides=None):
    """
    Indicators and analysis text for every configured scope.

    Args:
        records: Normalized class records for all subjects (history + Arabic)
        config: Analysis config dict (see history_data.DEFAULT_CONFIG)
        overrides: Optional AnalysisOverrideStore with inspector-edited text

    Returns:
        List of per-scope report dicts
    """
    cfg = resolve_config(config)
    history_records = select_history_records(records, cfg)
    print(f"[History Y5] {len(history_records)} history class records selected")

    reports = []
    for scope_records, scope, context_name, folder in get_scopes(history_records, cfg):
        indicators = compute_history_indicators(scope_records, records, cfg)
        context_id = analysis_context_id(context_name, scope)
        reports.append(
            {
                "scope": scope,
                "context_name": context_name,
                "folder": folder,
                "indicators": indicators,
                "analysis": {
                    section: resolve_analysis(section, indicators, overrides, context_id)
                    for section in ANALYSIS_SECTIONS
                },
            }
        )
    return reports


def write_report(reports, output_dir):
    """Write the JSON report and a per-criterion CSV; returns written paths."""
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    report_path = out_dir / REPORT_FILENAME
    with open(report_path, "w", encoding="utf-8") as f:
        json.dump(reports, f, ensure_ascii=False, indent=2)

    rows = []
    for rep in reports:
        for crit in rep["indicators"]["criteria"]:
            rows.append({"scope": rep["scope"], "context_name": rep["context_name"], **crit})
    criteria_path = out_dir / CRITERIA_FILENAME
    pd.DataFrame(rows).to_csv(criteria_path, index=False)

    print(f"✅ History report saved: {len(reports)} scopes -> {report_path}")
    return [str(report_path), str(criteria_path)]


def main(argv=None):
    parser = argparse.ArgumentParser(description="Generate Year 5 history indicators")
    parser.add_argument("--data-dir", help="Directory containing acquisitions.json")
    parser.add_argument("--records", help="Path to a records JSON file (overrides --data-dir)")
    parser.add_argument("--raw-cells", action="store_true", help="Records hold raw sheet cells; clean names and grade letters")
    parser.add_argument("--output-dir", required=True, help="Output directory path")
    parser.add_argument("--config", help="YAML config file")
    parser.add_argument("--config-json", default="{}", help="Config JSON string (applied over --config)")
    parser.add_argument("--overrides", help="JSON file of saved analysis overrides")
    parser.add_argument("--verbose", action="store_true", help="Debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(message)s",
    )

    cfg = load_config_file(args.config) if args.config else {}
    cfg.update(load_config_from_args(args.config_json))

    if args.records:
        with open(args.records, "r", encoding="utf-8") as f:
            records = load_class_records(records=json.load(f), normalize=args.raw_cells)
    elif args.data_dir:
        records = load_class_records(args.data_dir, normalize=args.raw_cells)
    else:
        parser.error("one of --data-dir or --records is required")

    overrides = None
    if args.overrides:
        with open(args.overrides, "r", encoding="utf-8") as f:
            overrides = AnalysisOverrideStore(json.load(f))

    reports = generate_history_report(records, cfg, overrides)
    return write_report(reports, args.output_dir)


if __name__ == "__main__":
    try:
        main()
        sys.exit(0)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
