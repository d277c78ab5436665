"""Command-line replay of sensor samples through the conversion pipeline.

Stands in for the sensor-event callback: samples come from the command
line or a recorded samples.v1 YAML file, each is converted with
``build_reading`` and the rows are printed as a table or as JSON.

Usage:
    # One sample given inline
    sensecolor-read --profiles configs/sensors_v1.yaml --sensor tcs3472 \
        --values 1200 3400 560 5000

    # Replay a recording, JSON to a file
    sensecolor-read --profiles configs/sensors_v1.yaml \
        --samples_file configs/samples_example.yaml --format json \
        --output outputs/readings.json

Exit codes:
    0  success
    2  missing/invalid config, samples file or sensor name, or bad arguments
"""

import argparse
import json
import sys
from typing import List, Optional, Sequence

import yaml

from sensecolor.readings import build_reading, group_readings
from sensecolor.readings.models import SensorReading
from sensecolor.utils import fs, logging_config, validators

logger = logging_config.get_logger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 2

NAME_COLUMN_WIDTH = 16

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Convert raw light/color sensor samples into readable values",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        '--profiles',
        type=str,
        required=True,
        help='Path to sensors.v1 YAML file'
    )

    input_group = parser.add_mutually_exclusive_group(required=True)
    input_group.add_argument(
        '--samples_file',
        type=str,
        help='Path to samples.v1 YAML file to replay'
    )
    input_group.add_argument(
        '--sensor',
        type=str,
        help='Sensor name for a single inline sample (use with --values)'
    )

    parser.add_argument('--values', type=float, nargs='*', default=None,
                        help='Raw channel values for --sensor')
    parser.add_argument('--timestamp', type=int, default=None,
                        help='Event timestamp (ns) for --sensor (default: 0)')
    parser.add_argument('--accuracy', type=int, default=None,
                        help='Accuracy status for --sensor (default: 0)')

    parser.add_argument('--format', choices=['table', 'json'], default='table',
                        help='Output format (default: table)')
    parser.add_argument('--output', type=str, default=None,
                        help='Write output to this file instead of stdout')

    parser.add_argument('--log_level', type=str.upper, default='WARNING',
                        choices=LOG_LEVELS,
                        help='Logging level (default: WARNING)')
    parser.add_argument('--log_file', type=str, default=None,
                        help='Optional log file path')
    parser.add_argument('--log_json', action='store_true',
                        help='Write the log file as JSON lines')

    args = parser.parse_args(argv)

    if args.samples_file is not None:
        inline = [
            flag for flag, value in (('--values', args.values),
                                     ('--timestamp', args.timestamp),
                                     ('--accuracy', args.accuracy))
            if value is not None
        ]
        if inline:
            parser.error(f"{', '.join(inline)} can only be used with --sensor")

    if args.values is None:
        args.values = []
    if args.timestamp is None:
        args.timestamp = 0
    if args.accuracy is None:
        args.accuracy = 0
    return args


def collect_readings(args: argparse.Namespace) -> List[SensorReading]:
    """Load profiles and samples named by ``args`` and convert every sample.

    Raises
    ------
    FileNotFoundError, ValueError, yaml.YAMLError
        Config or samples file problems
    KeyError
        A sample names a sensor missing from the profiles file
    """
    sensors = validators.load_sensor_profiles(args.profiles)
    logger.info(f"Loaded {len(sensors.sensors)} sensor profile(s) from {args.profiles}")

    if args.sensor is not None:
        profile = sensors.get(args.sensor)
        return [build_reading(profile, args.values, args.timestamp, args.accuracy)]

    samples = validators.load_samples_file(args.samples_file)
    logger.info(f"Replaying {len(samples.samples)} sample(s) from {args.samples_file}")

    readings = []
    for sample in samples.samples:
        profile = sensors.get(sample.sensor)
        logging_config.push_context(sensor=profile.name)
        try:
            readings.append(
                build_reading(profile, sample.values, sample.timestamp, sample.accuracy)
            )
        finally:
            logging_config.pop_context(keys=["sensor"])
    return readings


def render_table(readings: Sequence[SensorReading]) -> str:
    """Render readings grouped by category as a monospaced text table."""
    blocks = []
    for group in group_readings(readings):
        lines = [f"== {group.category.value.upper()} =="]
        for reading in group.readings:
            profile = reading.profile
            header = f"{profile.name} ({profile.vendor})" if profile.vendor else profile.name
            lines.append(f"-- {header} @ {reading.timestamp} [accuracy {reading.accuracy}]")
            for value in reading.converted_values:
                text_lines = value.text.split("\n")
                lines.append(f"{value.name.ljust(NAME_COLUMN_WIDTH)}{text_lines[0]}")
                pad = " " * NAME_COLUMN_WIDTH
                lines.extend(f"{pad}{line}" for line in text_lines[1:])
        blocks.append("\n".join(lines))
    return "\n\n".join(blocks) + "\n"


def render_json(readings: Sequence[SensorReading]) -> str:
    return json.dumps([r.as_dict() for r in readings], indent=2, ensure_ascii=False) + "\n"


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    logging_config.setup_logging(
        log_level=args.log_level,
        log_file=args.log_file,
        json=args.log_json,
        quiet_libs=["torch"],
        context={"app": "read_sensor"},
    )

    try:
        try:
            readings = collect_readings(args)
        except (FileNotFoundError, ValueError, KeyError, yaml.YAMLError) as e:
            logger.error(f"Cannot read samples: {e}")
            return EXIT_CONFIG_ERROR

        output = render_json(readings) if args.format == 'json' else render_table(readings)

        if args.output:
            fs.atomic_write_text(args.output, output)
            logger.info(f"Wrote {len(readings)} reading(s) to {args.output}")
        else:
            sys.stdout.write(output)

        return EXIT_OK
    finally:
        logging_config.reset_logging()


if __name__ == "__main__":
    sys.exit(main())
