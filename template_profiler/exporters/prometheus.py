# template_profiler/exporters/prometheus.py - Prometheus metrics exporter
"""
Exposes template profile analysis as Prometheus metrics.
"""

from prometheus_client import CollectorRegistry, Gauge, generate_latest, start_http_server
from typing import Dict, Optional
import logging


class PrometheusExporter:
    """
    Publishes the counts of an analyzed profile as gauges.

    Metrics live in their own registry so several exporters can coexist
    in one process.
    """

    def __init__(self, port: int = 9090, registry: Optional[CollectorRegistry] = None):
        """
        Initialize the Prometheus exporter.

        Args:
            port: Port to expose metrics on
            registry: Registry to register metrics with (default: a new one)
        """
        self.port = port
        self.registry = registry or CollectorRegistry()
        self.logger = logging.getLogger(__name__)

        self.render_time = Gauge(
            'template_profiler_render_time_milliseconds',
            'Total template rendering time in milliseconds',
            registry=self.registry
        )

        self.span_count = Gauge(
            'template_profiler_spans',
            'Number of rendered spans by kind',
            ['kind'],
            registry=self.registry
        )

        self.template_calls = Gauge(
            'template_profiler_template_calls',
            'Number of times a template was rendered',
            ['template'],
            registry=self.registry
        )

    def start(self):
        """
        Start the Prometheus HTTP server.
        """
        try:
            start_http_server(self.port, registry=self.registry)
            self.logger.info(f"Prometheus metrics available at http://localhost:{self.port}/metrics")
        except OSError as e:
            self.logger.error(f"Failed to start Prometheus server: {e}")
            raise

    def record_summary(self, summary: Dict):
        """
        Set gauges from an analysis summary.

        Args:
            summary: Dictionary from TemplateDataCollector.get_summary()
        """
        self.render_time.set(summary.get('time_ms', 0))
        self.span_count.labels(kind='template').set(summary.get('template_count', 0))
        self.span_count.labels(kind='block').set(summary.get('block_count', 0))
        self.span_count.labels(kind='macro').set(summary.get('macro_count', 0))

        # Templates from a previous summary must not linger
        self.template_calls.clear()
        for template, count in summary.get('templates', {}).items():
            self.template_calls.labels(template=template).set(count)

    def get_metrics_text(self) -> str:
        """
        Get current metrics in Prometheus text format.
        """
        return generate_latest(self.registry).decode('utf-8')
