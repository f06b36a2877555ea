# tests/test_snapshot.py - Tests for the snapshot codec
"""
Unit tests for snapshot encode/decode.
"""

import json

import pytest
from template_profiler.collector.profile import Profile, ProfileType
from template_profiler.collector.snapshot import (
    LEGACY_PROFILE_TAG,
    DeserializationError,
    decode,
    encode,
)


def _shape(profile):
    return (profile.type, profile.template, profile.name, [_shape(p) for p in profile])


class TestSnapshot:
    """Test cases for the snapshot codec"""

    def test_round_trip_preserves_tree(self, sample_profile):
        """Test decode(encode(tree)) restores kind, names and child order"""
        restored = decode(encode(sample_profile))

        assert _shape(restored) == _shape(sample_profile)
        assert restored.get_duration() == pytest.approx(sample_profile.get_duration())

    def test_round_trip_restores_parents(self, sample_profile):
        """Test restored children point back to their parent"""
        restored = decode(encode(sample_profile))
        template = restored.profiles[0]

        assert template.parent is restored
        assert template.profiles[1].parent is template

    def test_encode_is_deterministic(self, sample_profile):
        """Test encoding the same tree twice yields the same blob"""
        assert encode(sample_profile) == encode(sample_profile)

    def test_decode_accepts_text(self, sample_profile):
        """Test a str snapshot is accepted"""
        restored = decode(encode(sample_profile).decode('utf-8'))
        assert restored.is_root()

    def test_legacy_tag_is_accepted(self, sample_profile):
        """Test snapshots using the legacy type name decode to the same tree"""
        blob = encode(sample_profile).replace(
            b'template_profiler.Profile', LEGACY_PROFILE_TAG.encode('utf-8')
        )

        assert _shape(decode(blob)) == _shape(sample_profile)

    def test_disallowed_type_is_rejected(self, sample_profile):
        """Test a node with a type outside the allow-list fails the decode"""
        document = json.loads(encode(sample_profile))
        document['profiles'][0]['profiles'][1]['__type__'] = 'os.system'

        with pytest.raises(DeserializationError):
            decode(json.dumps(document))

    def test_missing_type_tag_is_rejected(self, sample_profile):
        """Test an untagged node fails the decode"""
        document = json.loads(encode(sample_profile))
        del document['profiles'][0]['__type__']

        with pytest.raises(DeserializationError):
            decode(json.dumps(document))

    @pytest.mark.parametrize('blob', [
        b'',
        b'not json',
        b'\xff\xfe',
        b'[]',
        b'{"__type__": "template_profiler.Profile"}',
    ])
    def test_malformed_blob_is_rejected(self, blob):
        """Test malformed snapshots raise DeserializationError"""
        with pytest.raises(DeserializationError):
            decode(blob)

    def test_unknown_span_type_is_rejected(self, sample_profile):
        """Test an unknown span kind fails the decode"""
        document = json.loads(encode(sample_profile))
        document['profiles'][0]['type'] = 'filter'

        with pytest.raises(DeserializationError):
            decode(json.dumps(document))

    def test_non_root_top_level_is_rejected(self):
        """Test a snapshot must start at a ROOT node"""
        span = Profile('a.tpl', ProfileType.TEMPLATE, 'a.tpl')

        with pytest.raises(DeserializationError):
            decode(encode(span))

    def test_nested_root_is_rejected(self, sample_profile):
        """Test a ROOT node below the top fails the decode"""
        document = json.loads(encode(sample_profile))
        document['profiles'][0]['type'] = 'ROOT'

        with pytest.raises(DeserializationError):
            decode(json.dumps(document))

    def test_non_numeric_metric_is_rejected(self, sample_profile):
        """Test metrics must be numbers"""
        document = json.loads(encode(sample_profile))
        document['profiles'][0]['starts']['wt'] = 'yesterday'

        with pytest.raises(DeserializationError):
            decode(json.dumps(document))
