# tests/conftest.py - Shared fixtures
"""
Profile trees shared by the test modules.
"""

import pytest

from template_profiler.collector.profile import Profile, ProfileType


def _make_span(template, profile_type, name=None, start=0.0, duration=0.0):
    """Build a finished span with fixed timings"""
    profile = Profile(template, profile_type, name or template)
    profile.starts = {'wt': start, 'mu': 0, 'pmu': 0}
    profile.ends = {'wt': start + duration, 'mu': 0, 'pmu': 0}
    return profile


@pytest.fixture
def make_span():
    """Factory for finished spans with fixed timings"""
    return _make_span


@pytest.fixture
def sample_profile():
    """
    ROOT -> a.tpl -> [header block, b.tpl -> m macro]
    """
    root = Profile()
    a = _make_span('a.tpl', ProfileType.TEMPLATE, start=0.0, duration=0.010)
    header = _make_span('a.tpl', ProfileType.BLOCK, 'header', start=0.001, duration=0.002)
    b = _make_span('b.tpl', ProfileType.TEMPLATE, start=0.004, duration=0.005)
    macro = _make_span('b.tpl', ProfileType.MACRO, 'm', start=0.005, duration=0.001)

    b.add_profile(macro)
    a.add_profile(header)
    a.add_profile(b)
    root.add_profile(a)
    return root


@pytest.fixture
def repeated_profile():
    """
    ROOT -> [layout.html -> item.html, list.html -> [item.html, item.html]]
    """
    root = Profile()
    layout = _make_span('layout.html', ProfileType.TEMPLATE, duration=0.004)
    layout.add_profile(_make_span('item.html', ProfileType.TEMPLATE, duration=0.001))

    listing = _make_span('list.html', ProfileType.TEMPLATE, start=0.004, duration=0.006)
    listing.add_profile(_make_span('item.html', ProfileType.TEMPLATE, start=0.004, duration=0.001))
    listing.add_profile(_make_span('item.html', ProfileType.TEMPLATE, start=0.005, duration=0.001))
    listing.add_profile(_make_span('list.html', ProfileType.BLOCK, 'content', start=0.006, duration=0.002))

    root.add_profile(layout)
    root.add_profile(listing)
    return root
