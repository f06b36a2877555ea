# template_profiler/utils/helpers.py - Helper functions
"""
Formatting and file helpers shared by the exporters and the CLI.
"""

import json
from pathlib import Path
from typing import Any, Dict
import logging


logger = logging.getLogger(__name__)


def format_bytes(bytes_count: float) -> str:
    """
    Format bytes into a human-readable string.

    Args:
        bytes_count: Number of bytes

    Returns:
        Formatted string (e.g., "1.5 MB")
    """
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if abs(bytes_count) < 1024.0:
            return f"{bytes_count:.1f} {unit}"
        bytes_count /= 1024.0

    return f"{bytes_count:.1f} PB"


def format_duration(duration_s: float) -> str:
    """
    Format a duration in seconds.

    Args:
        duration_s: Duration in seconds

    Returns:
        Formatted string (e.g., "12.5ms")
    """
    if duration_s < 0.001:
        return f"{duration_s * 1_000_000:.0f}us"
    elif duration_s < 1:
        return f"{duration_s * 1000:.1f}ms"
    else:
        return f"{duration_s:.2f}s"


def load_collector_data(path: str) -> Dict[str, Any]:
    """
    Read collector data from a snapshot file.

    Accepts either a raw profile snapshot or a file written by
    JSONExporter.export_collector().

    Args:
        path: File to read

    Returns:
        Collector data dictionary with at least a 'profile' entry
    """
    raw = Path(path).read_bytes()

    try:
        document = json.loads(raw)
    except ValueError:
        # Not JSON (or not UTF-8) at all, let the snapshot decoder report it
        return {'profile': raw}

    if isinstance(document, dict) and isinstance(document.get('data'), dict):
        logger.debug(f"Loaded exported collector data from {path}")
        return dict(document['data'])

    logger.debug(f"Loaded raw profile snapshot from {path}")
    return {'profile': raw}
