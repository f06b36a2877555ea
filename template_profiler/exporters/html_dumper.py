# template_profiler/exporters/html_dumper.py - Call graph HTML dumper
"""
Renders a profile tree as an indented HTML call graph with inline styles.
"""

from html import escape
from typing import Dict, Optional

from template_profiler.collector.profile import Profile


class HtmlDumper:
    """
    Dumps a profile tree as a ``<pre>`` block.

    Each span is one line, nested spans are indented with tree glyphs and
    spans longer than the threshold get a time/percentage suffix.
    """

    COLORS: Dict[str, str] = {
        'block': '#dfd',
        'macro': '#ddf',
        'template': '#ffd',
        'big': '#d44',
    }

    def __init__(self, time_threshold_ms: float = 1.0, big_percent: float = 20.0):
        """
        Initialize the dumper.

        Args:
            time_threshold_ms: Spans shorter than this get no time suffix
            big_percent: Share of the root duration above which a time is
                highlighted
        """
        self.time_threshold_ms = time_threshold_ms
        self.big_percent = big_percent
        self._root_duration: Optional[float] = None

    def dump(self, profile: Profile) -> str:
        """
        Render a profile tree.

        Args:
            profile: Root of the tree

        Returns:
            HTML string
        """
        self._root_duration = None
        return '<pre>' + self._dump_profile(profile) + '</pre>'

    def format_template(self, profile: Profile, prefix: str) -> str:
        return (f'{prefix}└ <span style="background-color: {self.COLORS["template"]}">'
                f'{escape(profile.template)}</span>')

    def format_non_template(self, profile: Profile, prefix: str) -> str:
        kind = profile.type.value
        color = self.COLORS.get(kind, 'auto')
        return (f'{prefix}└ {escape(profile.template)}::{kind}'
                f'(<span style="background-color: {color}">{escape(profile.name)}</span>)')

    def format_time(self, profile: Profile, percent: float) -> str:
        color = self.COLORS['big'] if percent > self.big_percent else 'auto'
        return f'<span style="color: {color}">{profile.get_duration() * 1000:.2f}ms/{percent:.0f}%</span>'

    def _dump_profile(self, profile: Profile, prefix: str = '', sibling: bool = False) -> str:
        if profile.is_root():
            self._root_duration = profile.get_duration()
            start = escape(profile.name)
        else:
            if profile.is_template():
                start = self.format_template(profile, prefix)
            else:
                start = self.format_non_template(profile, prefix)
            prefix += '│ ' if sibling else '  '

        duration = profile.get_duration()
        percent = duration / self._root_duration * 100 if self._root_duration else 0.0

        if duration * 1000 < self.time_threshold_ms:
            output = f"{start}\n"
        else:
            output = f"{start} {self.format_time(profile, percent)}\n"

        count = len(profile.profiles)
        for i, child in enumerate(profile.profiles):
            output += self._dump_profile(child, prefix, i + 1 != count)

        return output
