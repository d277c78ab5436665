#!/usr/bin/env python3
"""Replay light/color sensor samples and print their conversions.

Thin wrapper around sensecolor.cli for running from a source checkout;
installed environments get the same tool as ``sensecolor-read``.

Usage:
    python scripts/read_sensor.py --profiles configs/sensors_v1.yaml \
        --samples_file configs/samples_example.yaml
"""

import sys

from sensecolor.cli import main


if __name__ == "__main__":
    sys.exit(main())
