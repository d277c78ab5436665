"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - Color science (color)
    - Illuminance-derived quantities (photometry)
    - Config validation (validators)
    - YAML loading and atomic writes (fs)
    - Unified logging (logging_config)

No module in utils/ may import from upper layers (readings, cli).

Convenience imports:
    from sensecolor.utils import color, photometry, validators
    from sensecolor.utils.logging_config import setup_logging, get_logger
"""

from . import color
from . import fs
from . import logging_config
from . import photometry
from . import validators

from .logging_config import get_logger, push_context, setup_logging

__all__ = [
    # Modules
    'color',
    'fs',
    'logging_config',
    'photometry',
    'validators',
    # Direct exports
    'setup_logging',
    'get_logger',
    'push_context',
]
