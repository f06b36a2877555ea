# template_profiler/collector/data_collector.py - Template profile data collector
"""
Collects a template profile at the end of a request and analyzes it later.

The live profile is snapshotted by late_collect(). A collector restored from
exported data decodes that snapshot on first access and computes aggregates
lazily, at most once per session.
"""

from typing import Any, Dict, Mapping, Optional
import logging

from markupsafe import Markup

from template_profiler.analyzer.aggregator import AggregateResult, compute_data
from template_profiler.analyzer.call_graph import render_call_graph
from template_profiler.analyzer.template_paths import resolve_template_paths
from template_profiler.collector.profile import Profile
from template_profiler.collector.snapshot import decode, encode


class TemplateDataCollector:
    """
    Data collector for template rendering profiles.

    The host framework calls reset(), collect() and late_collect() during
    its own lifecycle; everything else is a read-only accessor.
    """

    def __init__(self, profile: Optional[Profile] = None, loader=None, dumper=None):
        """
        Initialize the collector.

        Args:
            profile: Live root profile fed by the template engine
            loader: Template loader exposing resolve(name), or None
            dumper: Call graph dumper exposing dump(profile), or None for
                the default HtmlDumper
        """
        self.profile = profile
        self.loader = loader
        self.dumper = dumper
        self.data: Dict[str, Any] = {}

        self._computed: Optional[AggregateResult] = None
        self._decoded = False
        self.logger = logging.getLogger(__name__)

    def get_name(self) -> str:
        return 'template'

    def collect(self, request=None, response=None, exception=None):
        """Nothing to collect before the response is sent"""

    def late_collect(self):
        """
        Snapshot the profile and resolve template paths.

        Runs after the response has been sent, once the profile is final.
        """
        profile = self.get_profile()

        self.data['profile'] = encode(profile).decode('utf-8')
        self.data['template_paths'] = resolve_template_paths(profile, self.loader)

        self.logger.debug(
            f"Collected profile with {len(self.data['template_paths'])} resolved template paths"
        )

    def reset(self):
        """
        Drop the profile, the cached aggregates and the collected data.
        """
        if self._decoded:
            self.profile = None
            self._decoded = False
        elif self.profile is not None:
            self.profile.reset()
        self._computed = None
        self.data = {}
        self.logger.debug("Collector reset")

    def get_profile(self) -> Profile:
        """
        Return the profile, decoding the snapshot on first access.

        Raises:
            DeserializationError: If the stored snapshot is invalid
            LookupError: If there is neither a live profile nor a snapshot
        """
        if self.profile is None:
            if 'profile' not in self.data:
                raise LookupError("No profile collected")
            self.profile = decode(self.data['profile'])
            self._decoded = True
        return self.profile

    def get_time(self) -> int:
        """Total rendering time in milliseconds"""
        return int(self.get_profile().get_duration() * 1000)

    def get_template_count(self) -> int:
        return self._get_computed_data().template_count

    def get_block_count(self) -> int:
        return self._get_computed_data().block_count

    def get_macro_count(self) -> int:
        return self._get_computed_data().macro_count

    def get_templates(self) -> Mapping[str, int]:
        return self._get_computed_data().templates

    def get_template_paths(self) -> Dict[str, str]:
        return self.data.get('template_paths', {})

    def get_html_call_graph(self) -> Markup:
        return render_call_graph(self.get_profile(), self.dumper)

    def get_summary(self) -> Dict:
        """
        Get the analysis as a plain dictionary.

        Returns:
            Dictionary with time, counts, per-template tallies and paths
        """
        summary = {'time_ms': self.get_time()}
        summary.update(self._get_computed_data().to_dict())
        summary['template_paths'] = dict(self.get_template_paths())
        return summary

    def export_data(self) -> Dict[str, Any]:
        """
        Get the collected data for persisting across the report boundary.
        """
        return dict(self.data)

    @classmethod
    def from_data(cls, data: Dict[str, Any], loader=None, dumper=None) -> 'TemplateDataCollector':
        """
        Restore a collector from exported data.

        The snapshot is only decoded when the profile is first needed.

        Args:
            data: Dictionary returned by export_data()
            loader: Template loader, or None
            dumper: Call graph dumper, or None
        """
        collector = cls(loader=loader, dumper=dumper)
        collector.data = dict(data)
        return collector

    def _get_computed_data(self) -> AggregateResult:
        if self._computed is None:
            self._computed = compute_data(self.get_profile())
        return self._computed
