# template_profiler/analyzer/report_generator.py - Report generation
"""
Generates human-readable reports from an analysis summary.
"""

from typing import Dict, List, Tuple
from datetime import datetime
import logging


class ReportGenerator:
    """
    Generates text and Markdown reports from
    TemplateDataCollector.get_summary() output.
    """

    def __init__(self, top: int = 10):
        """
        Initialize the report generator.

        Args:
            top: Number of most rendered templates listed in reports
        """
        self.top = top
        self.logger = logging.getLogger(__name__)

    def generate_text_report(self, summary: Dict) -> str:
        lines = []
        lines.append("=" * 80)
        lines.append("Template Profiler - Report")
        lines.append("=" * 80)
        lines.append(f"Generated at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        lines.append("")

        lines.append("SUMMARY")
        lines.append("-" * 80)
        lines.append(f"Render Time: {summary.get('time_ms', 0)}ms")
        lines.append(f"Templates:   {summary.get('template_count', 0)}")
        lines.append(f"Blocks:      {summary.get('block_count', 0)}")
        lines.append(f"Macros:      {summary.get('macro_count', 0)}")
        lines.append("")

        top_templates = self._top_templates(summary)
        if top_templates:
            paths = summary.get('template_paths', {})
            lines.append("RENDERED TEMPLATES")
            lines.append("-" * 80)
            for i, (name, count) in enumerate(top_templates, 1):
                lines.append(f"{i}. {name} ({count} calls)")
                if name in paths:
                    lines.append(f"   Path: {paths[name]}")
            lines.append("")

        lines.append("=" * 80)

        return "\n".join(lines)

    def generate_markdown_report(self, summary: Dict) -> str:
        lines = []
        lines.append("# Template Profiler Report")
        lines.append(f"\n**Generated:** {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")

        lines.append("## Summary\n")
        lines.append(f"- **Render Time:** {summary.get('time_ms', 0)}ms")
        lines.append(f"- **Templates:** {summary.get('template_count', 0)}")
        lines.append(f"- **Blocks:** {summary.get('block_count', 0)}")
        lines.append(f"- **Macros:** {summary.get('macro_count', 0)}\n")

        top_templates = self._top_templates(summary)
        if top_templates:
            paths = summary.get('template_paths', {})
            lines.append("## Rendered Templates\n")
            lines.append("| Template | Calls | Path |")
            lines.append("|----------|-------|------|")
            for name, count in top_templates:
                lines.append(f"| {name} | {count} | {paths.get(name, '-')} |")
            lines.append("")

        return "\n".join(lines)

    def generate_summary(self, summary: Dict) -> str:
        """One-line summary"""
        return (f"Time: {summary.get('time_ms', 0)}ms | "
                f"Templates: {summary.get('template_count', 0)} | "
                f"Blocks: {summary.get('block_count', 0)} | "
                f"Macros: {summary.get('macro_count', 0)}")

    def _top_templates(self, summary: Dict) -> List[Tuple[str, int]]:
        templates = summary.get('templates', {})
        return sorted(templates.items(), key=lambda x: (-x[1], x[0]))[:self.top]
