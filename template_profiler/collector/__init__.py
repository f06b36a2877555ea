# template_profiler/collector/__init__.py - Profile collection module
"""
Collector module for holding and persisting template profiles.

This module provides:
- profile.py: Profile tree model
- snapshot.py: Snapshot codec with a type allow-list
- data_collector.py: Collector session with lazy, cached analysis
"""
