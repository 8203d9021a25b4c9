"""
Chart Engine - CLI entry point
==============================

Reads Health Connect style records from a JSON file, buckets them into
chart series per record kind and writes the marks as JSON.

Defaults come from EngineSettings (CHART_ENGINE_* environment variables or
.env); command line flags override them.
"""

import argparse
import json
import math
import sys
import time
from dataclasses import asdict
from typing import Any

import structlog
from pydantic import ValidationError

from .chart.marks import BaseChartMark
from .common.logging import log_transform_result, setup_logging
from .config.options import TransformOptions
from .config.settings import get_settings
from .errors import ChartEngineError
from .ingest.record_parser import load_records
from .sleep.stage_merger import merge_consecutive_stages, stage_minutes, to_sleep_stage_range_marks
from .types.common import AggregationType, MassUnit, TimeUnit
from .types.health_records import SleepSession

logger = structlog.get_logger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create and return the argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog='chart-engine',
        description='Buckets health records into chart-ready series per record kind.',
        epilog='Example: chart-engine data/records.json --time-unit week --aggregation daily_average --measurement Diet=protein',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        'input',
        type=str,
        help='Path to a JSON file with a list of records (or {"records": [...]})'
    )

    parser.add_argument(
        '--time-unit',
        choices=[unit.value for unit in TimeUnit],
        default=None,
        help='Bucket granularity (default: from settings, "day")'
    )

    parser.add_argument(
        '--aggregation',
        choices=[aggregation.value for aggregation in AggregationType],
        default=None,
        help='Aggregation policy (default: from settings, "sum")'
    )

    parser.add_argument(
        '--time-zone',
        type=str,
        default=None,
        help='IANA time zone for bucket boundaries and labels (default: from settings, "UTC")'
    )

    parser.add_argument(
        '--measurement',
        action='append',
        default=[],
        metavar='KIND=NAME',
        help='Measurement to chart for a multi-valued kind, e.g. Diet=protein (repeatable)'
    )

    parser.add_argument(
        '--fill-gaps',
        action='store_true',
        default=None,
        help='Insert empty buckets between the first and last bucket'
    )

    parser.add_argument(
        '--fill-value',
        type=float,
        default=None,
        help='Value of inserted buckets, e.g. nan to leave gaps empty (default: from settings, 0.0)'
    )

    parser.add_argument(
        '--mass-unit',
        choices=[unit.value for unit in MassUnit],
        default=None,
        help='Unit for weight series (default: from settings, "kg")'
    )

    parser.add_argument(
        '--merge-stages',
        action='store_true',
        help='Also output merged sleep stages for every sleep session'
    )

    parser.add_argument(
        '--output',
        type=str,
        default=None,
        help='Output file path (default: print to stdout)'
    )

    return parser


def parse_measurements(values: list[str]) -> dict[str, str]:
    """Parse KIND=NAME pairs."""
    measurements = {}
    for value in values:
        kind, separator, name = value.partition('=')
        if not separator or not kind or not name:
            raise ValueError(f"Expected KIND=NAME, got {value!r}")
        measurements[kind.strip()] = name.strip()
    return measurements


def mark_to_dict(mark: BaseChartMark) -> dict[str, Any]:
    """Serialize a chart mark, including its derived y."""
    data = asdict(mark)
    data['y'] = mark.y
    return data


def json_safe(value: Any) -> Any:
    """Replace non-finite floats (NaN gap fill values) with None."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {key: json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [json_safe(item) for item in value]
    return value


def sleep_stage_output(sessions: list[SleepSession]) -> list[dict[str, Any]]:
    output = []
    for session in sessions:
        merged = merge_consecutive_stages(sorted(session.stages, key=lambda s: s.start_time))
        output.append({
            'startTime': session.start_time.isoformat(),
            'endTime': session.end_time.isoformat(),
            'stages': [
                {
                    'stage': stage.stage.name,
                    'startTime': stage.start_time.isoformat(),
                    'endTime': stage.end_time.isoformat(),
                }
                for stage in merged
            ],
            'stageMinutes': {stage.name: minutes for stage, minutes in stage_minutes(merged).items()},
            'marks': [mark_to_dict(mark) for mark in to_sleep_stage_range_marks(merged)],
        })
    return output


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the application."""
    parser = create_parser()
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Invalid settings: {e}", file=sys.stderr)
        return 2
    setup_logging(settings.log_level, settings.log_format, settings.service_name)

    started = time.perf_counter()
    try:
        options = TransformOptions.from_settings(
            settings,
            time_unit=args.time_unit,
            aggregation=args.aggregation,
            time_zone=args.time_zone,
            measurements=parse_measurements(args.measurement),
            fill_gaps=args.fill_gaps,
            fill_value=args.fill_value,
            mass_unit=args.mass_unit,
        )
        parsed = load_records(args.input)
        series = options.dispatch(parsed.records)

        output: dict[str, Any] = {
            'timeUnit': options.time_unit.value,
            'aggregation': options.aggregation.value,
            'timeZone': options.time_zone,
            'massUnit': options.mass_unit.value,
            'series': {
                kind: [mark_to_dict(mark) for mark in marks]
                for kind, marks in series.items()
            },
            'skippedRecords': parsed.skipped + parsed.unsupported,
        }
        if args.merge_stages:
            sessions = [record for record in parsed.records if isinstance(record, SleepSession)]
            output['sleepStages'] = sleep_stage_output(sessions)

        text = json.dumps(json_safe(output), indent=2, allow_nan=False)
        if args.output:
            with open(args.output, 'w', encoding='utf-8') as f:
                f.write(text + '\n')
        else:
            print(text)

    except FileNotFoundError as e:
        print(f"File Error: {e}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as e:
        print(f"Invalid JSON input: {e}", file=sys.stderr)
        return 1
    except ValidationError as e:
        print(f"Invalid options: {e}", file=sys.stderr)
        return 2
    except (ChartEngineError, ValueError) as e:
        log_transform_result(
            logger,
            operation='dispatch_by_type',
            success=False,
            duration_ms=(time.perf_counter() - started) * 1000,
            error_message=str(e),
        )
        print(f"Error: {e}", file=sys.stderr)
        return 1

    log_transform_result(
        logger,
        operation='dispatch_by_type',
        success=True,
        duration_ms=(time.perf_counter() - started) * 1000,
        record_count=len(parsed.records),
        kinds=list(series),
    )
    return 0


if __name__ == '__main__':
    sys.exit(main())
