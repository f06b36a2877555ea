# template_profiler/exporters/stdout.py - Console output exporter
"""
Prints analysis results to stdout in a human-readable format.
"""

from typing import Dict
from colorama import Fore, Style
import logging

from template_profiler.collector.profile import Profile
from template_profiler.utils.helpers import format_bytes, format_duration


class StdoutExporter:
    """
    Prints summaries and the call tree to stdout with colored output.
    """

    KIND_COLORS = {
        'template': Fore.YELLOW,
        'block': Fore.GREEN,
        'macro': Fore.BLUE,
    }

    def __init__(self, use_colors: bool = True, big_percent: float = 20.0):
        """
        Initialize the stdout exporter.

        Args:
            use_colors: Whether to use colored output
            big_percent: Share of the total time above which a span is
                highlighted in the tree
        """
        self.use_colors = use_colors
        self.big_percent = big_percent
        self.logger = logging.getLogger(__name__)

    def print_summary(self, summary: Dict):
        """
        Print counts and per-template tallies.

        Args:
            summary: Dictionary from TemplateDataCollector.get_summary()
        """
        self._print_header("Template Rendering Summary")

        print(f"{self._color(Fore.YELLOW)}Summary:{self._reset()}")
        print(f"  Render Time: {summary.get('time_ms', 0)}ms")
        print(f"  Templates: {summary.get('template_count', 0)}")
        print(f"  Blocks: {summary.get('block_count', 0)}")
        print(f"  Macros: {summary.get('macro_count', 0)}")

        templates = summary.get('templates', {})
        paths = summary.get('template_paths', {})
        if templates:
            print()
            print(f"{'Template':<40} {'Calls':<8} {'Path'}")
            print(f"{'-'*80}")
            for name, count in sorted(templates.items(), key=lambda x: (-x[1], x[0])):
                print(f"{name:<40} {count:<8} {paths.get(name, '-')}")

        print()

    def print_tree(self, profile: Profile):
        """
        Print the call tree with per-span durations.

        Args:
            profile: Root of the profile tree
        """
        self._print_header("Call Graph")
        total = profile.get_duration()
        print(profile.name)
        self._print_children(profile, '', total)
        print()

    def _print_children(self, profile: Profile, prefix: str, total: float):
        count = len(profile.profiles)
        for i, child in enumerate(profile.profiles):
            last = i + 1 == count
            kind = child.type.value
            color = self._color(self.KIND_COLORS.get(kind, ''))

            if child.is_template():
                label = f"{color}{child.template}{self._reset()}"
            else:
                label = f"{child.template}::{kind}({color}{child.name}{self._reset()})"

            duration = child.get_duration()
            percent = duration / total * 100 if total else 0.0
            time_color = self._color(Fore.RED) if percent > self.big_percent else ''

            line = (f"{prefix}{'└' if last else '├'} {label} "
                    f"{time_color}{format_duration(duration)}/{percent:.0f}%{self._reset()}")

            memory = child.get_memory_usage()
            if memory:
                line += f" {format_bytes(memory)}"

            print(line)

            self._print_children(child, prefix + ('  ' if last else '│ '), total)

    def _print_header(self, title: str):
        print(f"\n{self._color(Fore.CYAN)}{'='*80}{self._reset()}")
        print(f"{self._color(Fore.CYAN)}{title}{self._reset()}")
        print(f"{self._color(Fore.CYAN)}{'='*80}{self._reset()}\n")

    def _color(self, color: str) -> str:
        return color if self.use_colors else ''

    def _reset(self) -> str:
        return Style.RESET_ALL if self.use_colors else ''
