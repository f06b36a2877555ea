# template_profiler/analyzer/call_graph.py - Themeable call graph rendering
"""
Renders the call graph through a dumper and swaps its hardcoded inline
styles for semantic class names.
"""

from typing import List, Optional, Tuple

from markupsafe import Markup

from template_profiler.collector.profile import Profile
from template_profiler.exporters.html_dumper import HtmlDumper


# Applied in order
STYLE_REPLACEMENTS: List[Tuple[str, str]] = [
    ('<span style="background-color: #ffd">', '<span class="status-warning">'),
    ('<span style="color: #d44">', '<span class="status-error">'),
    ('<span style="background-color: #dfd">', '<span class="status-success">'),
    ('<span style="background-color: #ddf">', '<span class="status-info">'),
]


def replace_inline_styles(dump: str) -> str:
    """
    Replace the known inline style tokens with class tokens.

    Args:
        dump: Dumper output

    Returns:
        Output with every known token replaced, anything else untouched
    """
    for search, replace in STYLE_REPLACEMENTS:
        dump = dump.replace(search, replace)
    return dump


def render_call_graph(profile: Profile, dumper: Optional[HtmlDumper] = None) -> Markup:
    """
    Render a profile tree as themeable HTML.

    Args:
        profile: Root of the profile tree
        dumper: Object exposing dump(profile) -> str (default: HtmlDumper)

    Returns:
        Markup that downstream templating will not escape again
    """
    if dumper is None:
        dumper = HtmlDumper()

    return Markup(replace_inline_styles(dumper.dump(profile)))
