"""
Logging setup for the VidSeek client.

Everything logs into one "vidseek" logger tree. The application installs the
console and file handlers once, on the root of the tree; each component then
logs through its own child (vidseek.app, vidseek.api, vidseek.managers, ...).
The [VIDSEEK] tag and the component name come from the formatter.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

ROOT_LOGGER = "vidseek"
LOG_FORMAT = '%(asctime)s - %(levelname)s - [VIDSEEK] %(name)s: %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def configure_logging(log_file: Optional[str] = None, verbose: bool = True) -> logging.Logger:
    """
    Install handlers on the vidseek logger tree, replacing any from an earlier call.

    Args:
        log_file: Also write DEBUG and above to this file
        verbose: Write INFO and above to stdout

    Returns:
        The root "vidseek" logger
    """
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(logging.DEBUG)
    root.propagate = False
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if verbose:
        console = logging.StreamHandler(sys.stdout)
        console.setLevel(logging.INFO)
        console.setFormatter(formatter)
        root.addHandler(console)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    # Quiet mode without a file: swallow records instead of hitting logging's last resort
    if not root.handlers:
        root.addHandler(logging.NullHandler())
    return root


def get_component_logger(component: str) -> logging.Logger:
    """Child logger for one part of the client, e.g. "api" -> vidseek.api."""
    return logging.getLogger(f"{ROOT_LOGGER}.{component}")


def get_logger(log_file: Optional[str] = None, verbose: bool = True) -> logging.Logger:
    """Configure the tree and return the application's own logger (vidseek.app)."""
    configure_logging(log_file, verbose)
    return get_component_logger("app")
