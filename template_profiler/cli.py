# template_profiler/cli.py - Command-line interface
"""
Command-line interface for the template profiler.
"""

import click
import logging
import sys
from pathlib import Path

from template_profiler.collector.data_collector import TemplateDataCollector
from template_profiler.collector.snapshot import DeserializationError, decode
from template_profiler.exporters.html_dumper import HtmlDumper
from template_profiler.loader import TemplateLoader
from template_profiler.utils.config import Config
from template_profiler.utils.helpers import load_collector_data
from template_profiler.utils.logger import setup_logging


logger = logging.getLogger(__name__)


@click.group()
@click.option('--log-level', default='WARNING', type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR']))
@click.option('--log-file', type=click.Path(), help='Log file path')
@click.option('--config', 'config_file', type=click.Path(exists=True), help='Configuration file')
@click.pass_context
def cli(ctx, log_level, log_file, config_file):
    """
    Template Profiler

    Analyzes template rendering profiles: span counts, template source
    paths and the rendered call graph.
    """
    ctx.ensure_object(dict)

    setup_logging(level=log_level, log_file=log_file)

    ctx.obj['config'] = Config(config_file)


def _build_collector(config: Config, snapshot: str) -> TemplateDataCollector:
    paths = config.get('loader.paths', [])
    namespaces = config.get('loader.namespaces', {})
    loader = TemplateLoader(paths, namespaces) if paths or namespaces else None

    dumper = HtmlDumper(
        time_threshold_ms=config.get('call_graph.time_threshold_ms', 1.0),
        big_percent=config.get('call_graph.big_percent', 20.0),
    )

    collector = TemplateDataCollector.from_data(load_collector_data(snapshot), loader=loader, dumper=dumper)

    # Local resolution takes precedence; exported paths fill the gaps
    if loader is not None:
        exported = dict(collector.get_template_paths())
        collector.late_collect()
        collector.data['template_paths'] = {**exported, **collector.get_template_paths()}

    return collector


@cli.command()
@click.argument('snapshot', type=click.Path(exists=True, dir_okay=False))
@click.option('--templates-dir', multiple=True, type=click.Path(file_okay=False), help='Template search directory (repeatable)')
@click.option('--output-format', type=click.Choice(['stdout', 'json', 'markdown', 'prometheus']), help='Output format')
@click.option('--output', type=click.Path(), help='Output file (for json and markdown formats)')
@click.option('--tree/--no-tree', default=False, help='Also print the call tree (stdout format)')
@click.option('--serve', is_flag=True, help='Keep serving the metrics over HTTP (prometheus format)')
@click.option('--port', type=int, help='Prometheus HTTP port (default: output.prometheus_port)')
@click.pass_context
def analyze(ctx, snapshot, templates_dir, output_format, output, tree, serve, port):
    """
    Analyze a profile snapshot.

    With --templates-dir, template paths are resolved against the given
    directories. Paths stored in an exported collector file are kept for
    templates those directories do not contain.

    Example:
        template-profiler analyze profile.json
        template-profiler analyze profile.json --templates-dir templates --output-format json
    """
    from template_profiler.analyzer.report_generator import ReportGenerator
    from template_profiler.exporters.json_exporter import JSONExporter
    from template_profiler.exporters.prometheus import PrometheusExporter
    from template_profiler.exporters.stdout import StdoutExporter

    cfg = ctx.obj['config']

    if templates_dir:
        cfg.set('loader.paths', list(templates_dir))
    if output_format:
        cfg.set('output.format', output_format)
    output_format = cfg.get('output.format', 'stdout')

    try:
        collector = _build_collector(cfg, snapshot)
        summary = collector.get_summary()
    except (DeserializationError, LookupError) as e:
        logger.error(f"Invalid snapshot {snapshot}: {e}")
        click.echo(f"Error: invalid snapshot: {e}", err=True)
        sys.exit(1)

    if output_format == 'json':
        if output:
            exporter = JSONExporter(str(Path(output).parent))
            path = exporter.export_summary(summary, Path(output).name)
        else:
            exporter = JSONExporter(cfg.get('output.directory', '.'))
            path = exporter.export_summary(summary)
        click.echo(f"Analysis written to {path}")

    elif output_format == 'markdown':
        report = ReportGenerator().generate_markdown_report(summary)
        if output:
            Path(output).write_text(report, encoding='utf-8')
            click.echo(f"Report written to {output}")
        else:
            click.echo(report)

    elif output_format == 'prometheus':
        exporter = PrometheusExporter(port=port or cfg.get('output.prometheus_port', 9090))
        exporter.record_summary(summary)

        if not serve:
            click.echo(exporter.get_metrics_text(), nl=False)
            return

        try:
            exporter.start()
        except OSError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

        click.echo(f"Serving metrics on port {exporter.port}. Press Ctrl+C to stop.")
        try:
            import time
            while True:
                time.sleep(1)
        except KeyboardInterrupt:
            logger.info("Stopping metrics server...")

    else:
        exporter = StdoutExporter(big_percent=cfg.get('call_graph.big_percent', 20.0))
        exporter.print_summary(summary)
        if tree:
            exporter.print_tree(collector.get_profile())


@cli.command()
@click.argument('snapshot', type=click.Path(exists=True, dir_okay=False))
@click.option('--output', type=click.Path(), help='Output HTML file (default: stdout)')
@click.pass_context
def callgraph(ctx, snapshot, output):
    """
    Render the call graph of a profile snapshot as HTML.

    Example:
        template-profiler callgraph profile.json --output callgraph.html
    """
    try:
        collector = _build_collector(ctx.obj['config'], snapshot)
        html = collector.get_html_call_graph()
    except (DeserializationError, LookupError) as e:
        logger.error(f"Invalid snapshot {snapshot}: {e}")
        click.echo(f"Error: invalid snapshot: {e}", err=True)
        sys.exit(1)

    if output:
        Path(output).write_text(str(html), encoding='utf-8')
        click.echo(f"Call graph written to {output}")
    else:
        click.echo(str(html))


@cli.command('check-snapshot')
@click.argument('snapshot', type=click.Path(exists=True, dir_okay=False))
def check_snapshot(snapshot):
    """
    Check that a profile snapshot can be decoded.
    """
    data = load_collector_data(snapshot)

    try:
        profile = decode(data.get('profile', ''))
    except DeserializationError as e:
        click.echo(f"✗ {snapshot}: {e}")
        sys.exit(1)

    click.echo(f"✓ {snapshot}: {len(profile)} top-level spans")


if __name__ == '__main__':
    cli(obj={})
