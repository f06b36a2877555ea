# template_profiler/collector/profile.py - Trace tree model
"""
In-memory representation of one recorded template rendering.
A Profile is a node in a rooted tree of timed spans.
"""

from enum import Enum
from typing import Dict, Iterator, List, Optional
import time
import tracemalloc
import weakref


class ProfileType(str, Enum):
    """
    Kind of span recorded by a Profile node.
    """
    ROOT = 'ROOT'
    TEMPLATE = 'template'
    BLOCK = 'block'
    MACRO = 'macro'


class Profile:
    """
    A single span of a template rendering trace.

    Children are kept in chronological start order. The parent link is a
    weak reference and only used for navigation.
    """

    def __init__(self, template: str = 'main', profile_type: ProfileType = ProfileType.ROOT,
                 name: str = 'main'):
        """
        Initialize a profile node and start its clock.

        Args:
            template: Logical template name the span belongs to
            profile_type: Span kind
            name: Span name (template, block or macro name)
        """
        self._template = template
        self._type = ProfileType(profile_type)
        self._name = 'INTERNAL' if name.startswith('__internal_') else name

        self.profiles: List['Profile'] = []
        self.starts: Dict[str, float] = {}
        self.ends: Dict[str, float] = {}
        self._parent: Optional[weakref.ref] = None

        self.enter()

    @property
    def type(self) -> ProfileType:
        return self._type

    @property
    def template(self) -> str:
        return self._template

    @property
    def name(self) -> str:
        return self._name

    @property
    def parent(self) -> Optional['Profile']:
        """Parent node, or None for the root (or a detached node)"""
        return self._parent() if self._parent is not None else None

    def is_root(self) -> bool:
        return self._type is ProfileType.ROOT

    def is_template(self) -> bool:
        return self._type is ProfileType.TEMPLATE

    def is_block(self) -> bool:
        return self._type is ProfileType.BLOCK

    def is_macro(self) -> bool:
        return self._type is ProfileType.MACRO

    def add_profile(self, profile: 'Profile'):
        """
        Append a child span.

        Args:
            profile: Child node, must not already belong to another parent
        """
        if profile.is_root():
            raise ValueError("A root profile cannot be nested")
        if profile.parent is not None:
            raise ValueError(f"Profile {profile.name!r} already has a parent")

        profile._parent = weakref.ref(self)
        self.profiles.append(profile)

    def get_duration(self) -> float:
        """
        Duration in seconds.

        A root with children reports the sum of its children's durations.
        """
        if self.is_root() and self.profiles:
            return sum(p.get_duration() for p in self.profiles)

        if 'wt' in self.ends and 'wt' in self.starts:
            return self.ends['wt'] - self.starts['wt']

        return 0.0

    def get_memory_usage(self) -> int:
        """Memory delta in bytes (0 unless tracemalloc was tracing)"""
        if 'mu' in self.ends and 'mu' in self.starts:
            return int(self.ends['mu'] - self.starts['mu'])
        return 0

    def get_peak_memory_usage(self) -> int:
        """Peak memory delta in bytes (0 unless tracemalloc was tracing)"""
        if 'pmu' in self.ends and 'pmu' in self.starts:
            return int(self.ends['pmu'] - self.starts['pmu'])
        return 0

    def enter(self):
        """Start the span clock"""
        self.starts = self._sample()

    def leave(self):
        """Stop the span clock"""
        self.ends = self._sample()

    def reset(self):
        """
        Drop all recorded children and restart the clock.
        """
        for profile in self.profiles:
            profile._parent = None
        self.profiles = []
        self.starts = {}
        self.ends = {}
        self.enter()

    def __iter__(self) -> Iterator['Profile']:
        return iter(self.profiles)

    def __len__(self) -> int:
        return len(self.profiles)

    def __repr__(self) -> str:
        return (f"Profile(type={self._type.value!r}, template={self._template!r}, "
                f"name={self._name!r}, children={len(self.profiles)})")

    @staticmethod
    def _sample() -> Dict[str, float]:
        current, peak = tracemalloc.get_traced_memory() if tracemalloc.is_tracing() else (0, 0)
        return {
            'wt': time.perf_counter(),
            'mu': current,
            'pmu': peak,
        }
