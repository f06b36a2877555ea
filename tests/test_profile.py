# tests/test_profile.py - Tests for the profile tree model
"""
Unit tests for the Profile class.
"""

import pytest
from template_profiler.collector.profile import Profile, ProfileType


class TestProfile:
    """Test cases for Profile"""

    def test_root_defaults(self):
        """Test a default profile is the root"""
        root = Profile()

        assert root.is_root()
        assert root.type is ProfileType.ROOT
        assert root.name == 'main'
        assert root.parent is None
        assert len(root) == 0

    def test_predicates_follow_type(self):
        """Test kind predicates are derived from the type"""
        template = Profile('a.tpl', ProfileType.TEMPLATE, 'a.tpl')
        block = Profile('a.tpl', ProfileType.BLOCK, 'body')
        macro = Profile('a.tpl', ProfileType.MACRO, 'input')

        assert template.is_template() and not template.is_block() and not template.is_macro()
        assert block.is_block() and not block.is_template()
        assert macro.is_macro() and not macro.is_root()

    def test_type_accepts_string_value(self):
        """Test the type can be given by value"""
        profile = Profile('a.tpl', 'block', 'body')
        assert profile.type is ProfileType.BLOCK

    def test_type_is_read_only(self):
        """Test the type cannot be reassigned"""
        profile = Profile('a.tpl', ProfileType.TEMPLATE, 'a.tpl')
        with pytest.raises(AttributeError):
            profile.type = ProfileType.BLOCK

    def test_internal_names_are_collapsed(self):
        """Test generated internal template names are hidden"""
        profile = Profile('__internal_1234', ProfileType.TEMPLATE, '__internal_1234')
        assert profile.name == 'INTERNAL'

    def test_children_keep_order_and_parent(self, make_span):
        """Test children are iterated in insertion order with a parent link"""
        root = Profile()
        first = make_span('a.tpl', ProfileType.TEMPLATE)
        second = make_span('b.tpl', ProfileType.TEMPLATE)

        root.add_profile(first)
        root.add_profile(second)

        assert list(root) == [first, second]
        assert first.parent is root
        assert second.parent is root

    def test_add_profile_rejects_root_and_reparenting(self, make_span):
        """Test tree invariants are enforced when adding children"""
        root = Profile()
        other = Profile()
        child = make_span('a.tpl', ProfileType.TEMPLATE)
        root.add_profile(child)

        with pytest.raises(ValueError):
            root.add_profile(Profile())
        with pytest.raises(ValueError):
            other.add_profile(child)

    def test_duration_of_span(self, make_span):
        """Test a span's duration comes from its clock"""
        span = make_span('a.tpl', ProfileType.TEMPLATE, start=1.0, duration=0.25)
        assert span.get_duration() == pytest.approx(0.25)

    def test_root_duration_sums_children(self, sample_profile):
        """Test the root duration is the sum of its children"""
        assert sample_profile.get_duration() == pytest.approx(0.010)

    def test_duration_without_clock(self):
        """Test a span without timings has no duration"""
        span = Profile('a.tpl', ProfileType.TEMPLATE, 'a.tpl')
        span.ends = {}
        assert span.get_duration() == 0.0

    def test_enter_leave_measures_time(self):
        """Test enter/leave record a non-negative duration"""
        span = Profile('a.tpl', ProfileType.TEMPLATE, 'a.tpl')
        span.enter()
        span.leave()

        assert span.get_duration() >= 0.0
        assert span.get_memory_usage() == span.ends['mu'] - span.starts['mu']

    def test_reset_drops_children(self, sample_profile):
        """Test reset clears the recorded spans"""
        child = sample_profile.profiles[0]

        sample_profile.reset()

        assert len(sample_profile) == 0
        assert child.parent is None
        assert 'wt' in sample_profile.starts
