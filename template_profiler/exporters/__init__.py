# template_profiler/exporters/__init__.py - Exporters module
"""
Exporters for outputting analysis results in various formats.

This module provides:
- html_dumper.py: Call graph HTML dumper
- json_exporter.py: JSON format exporter
- stdout.py: Console output exporter
- prometheus.py: Prometheus metrics exporter
"""
