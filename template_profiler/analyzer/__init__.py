# template_profiler/analyzer/__init__.py - Analysis module
"""
Analyzer module for processing collected profiles.

This module provides:
- aggregator.py: Template/block/macro counts and per-template tallies
- template_paths.py: Template name to source path resolution
- call_graph.py: Themeable HTML call graph
- report_generator.py: Report generation
"""
