# template_profiler/exporters/json_exporter.py - JSON format exporter
"""
Writes collector data and analysis summaries as JSON files.
"""

import json
from pathlib import Path
from datetime import datetime
from typing import Dict, Optional
import logging


class JSONExporter:
    """
    Exports collector data and analysis results to JSON files.

    export_collector() output can be read back with
    utils.helpers.load_collector_data() to analyze a profile later.
    """

    def __init__(self, output_dir: Optional[str] = None):
        """
        Initialize the JSON exporter.

        Args:
            output_dir: Directory to save JSON files (default: current directory)
        """
        self.output_dir = Path(output_dir) if output_dir else Path('.')
        self.logger = logging.getLogger(__name__)

        self.output_dir.mkdir(parents=True, exist_ok=True)

    def export_collector(self, collector, filename: Optional[str] = None) -> str:
        """
        Export the data of a collector after late_collect().

        Args:
            collector: TemplateDataCollector
            filename: Output filename (auto-generated if not provided)

        Returns:
            Path to output file
        """
        output_path = self.output_dir / (filename or self._default_name('profile'))

        self._write(output_path, {
            'timestamp': datetime.now().isoformat(),
            'collector': collector.get_name(),
            'data': collector.export_data(),
        })

        self.logger.info(f"Exported collector data to {output_path}")
        return str(output_path)

    def export_summary(self, summary: Dict, filename: Optional[str] = None) -> str:
        """
        Export an analysis summary.

        Args:
            summary: Dictionary from TemplateDataCollector.get_summary()
            filename: Output filename (auto-generated if not provided)

        Returns:
            Path to output file
        """
        output_path = self.output_dir / (filename or self._default_name('analysis'))

        self._write(output_path, {
            'timestamp': datetime.now().isoformat(),
            'analysis': summary,
        })

        self.logger.info(f"Exported analysis to {output_path}")
        return str(output_path)

    @staticmethod
    def _default_name(prefix: str) -> str:
        return f"{prefix}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"

    @staticmethod
    def _write(output_path: Path, document: Dict):
        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(document, f, indent=2)
