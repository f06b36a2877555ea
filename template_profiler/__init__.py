# template_profiler/__init__.py - Template rendering profile analyzer
"""
Post-hoc analysis of template rendering profiles.

This package provides:
- collector: profile tree model, snapshot codec and the data collector
- analyzer: aggregation, template path resolution, call graph and reports
- exporters: HTML dumper, JSON, stdout and Prometheus output
- loader.py: filesystem template loader
"""

__version__ = '0.1.0'
