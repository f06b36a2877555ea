# template_profiler/collector/snapshot.py - Profile snapshot codec
"""
Serializes a Profile tree to an opaque blob and restores it.

Every node is written as a JSON object tagged with its type name. Decoding
only accepts the tags listed in ALLOWED_TYPES, so a snapshot can never make
the decoder build anything other than a Profile tree.
"""

from typing import Any, Dict, Union
import json
import logging

from template_profiler.collector.profile import Profile, ProfileType


PROFILE_TAG = 'template_profiler.Profile'
LEGACY_PROFILE_TAG = 'Twig_Profiler_Profile'

ALLOWED_TYPES = frozenset({PROFILE_TAG, LEGACY_PROFILE_TAG})

METRIC_KEYS = ('wt', 'mu', 'pmu')

logger = logging.getLogger(__name__)


class DeserializationError(ValueError):
    """
    Raised when a snapshot is malformed or references a disallowed type.
    """


def encode(profile: Profile) -> bytes:
    """
    Serialize a profile tree.

    Args:
        profile: Root of the tree to serialize

    Returns:
        UTF-8 encoded JSON snapshot
    """
    payload = json.dumps(_encode_node(profile), sort_keys=True, separators=(',', ':'))
    return payload.encode('utf-8')


def decode(blob: Union[bytes, str]) -> Profile:
    """
    Restore a profile tree from a snapshot.

    Args:
        blob: Snapshot produced by encode()

    Returns:
        Root Profile of the restored tree

    Raises:
        DeserializationError: If the snapshot is malformed or contains a
            type outside ALLOWED_TYPES. No partial tree is returned.
    """
    if isinstance(blob, bytes):
        try:
            blob = blob.decode('utf-8')
        except UnicodeDecodeError as e:
            raise DeserializationError(f"Snapshot is not valid UTF-8: {e}") from e

    if not isinstance(blob, str):
        raise DeserializationError(f"Snapshot must be bytes or str, got {type(blob).__name__}")

    try:
        raw = json.loads(blob)
    except ValueError as e:
        raise DeserializationError(f"Snapshot is not valid JSON: {e}") from e

    try:
        profile = _decode_node(raw, path='$')
    except RecursionError as e:
        raise DeserializationError("Snapshot is nested too deeply") from e

    if not profile.is_root():
        raise DeserializationError(f"Snapshot root must be a ROOT profile, got {profile.type.value!r}")

    return profile


def _encode_node(profile: Profile) -> Dict[str, Any]:
    return {
        '__type__': PROFILE_TAG,
        'template': profile.template,
        'name': profile.name,
        'type': profile.type.value,
        'starts': dict(profile.starts),
        'ends': dict(profile.ends),
        'profiles': [_encode_node(p) for p in profile],
    }


def _decode_node(raw: Any, path: str) -> Profile:
    if not isinstance(raw, dict):
        raise DeserializationError(f"{path}: expected an object, got {type(raw).__name__}")

    tag = raw.get('__type__')
    if tag not in ALLOWED_TYPES:
        raise DeserializationError(f"{path}: type {tag!r} is not allowed")

    template = _require(raw, 'template', str, path)
    name = _require(raw, 'name', str, path)
    type_value = _require(raw, 'type', str, path)
    children = _require(raw, 'profiles', list, path)

    try:
        profile_type = ProfileType(type_value)
    except ValueError as e:
        raise DeserializationError(f"{path}: unknown profile type {type_value!r}") from e

    profile = Profile(template, profile_type, name)
    profile.starts = _decode_metrics(raw.get('starts', {}), f"{path}.starts")
    profile.ends = _decode_metrics(raw.get('ends', {}), f"{path}.ends")

    for i, child in enumerate(children):
        node = _decode_node(child, f"{path}.profiles[{i}]")
        if node.is_root():
            raise DeserializationError(f"{path}.profiles[{i}]: a ROOT profile cannot be nested")
        profile.add_profile(node)

    return profile


def _decode_metrics(raw: Any, path: str) -> Dict[str, float]:
    if not isinstance(raw, dict):
        raise DeserializationError(f"{path}: expected an object, got {type(raw).__name__}")

    metrics = {}
    for key, value in raw.items():
        if key not in METRIC_KEYS:
            logger.debug(f"{path}: ignoring unknown metric {key!r}")
            continue
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise DeserializationError(f"{path}.{key}: expected a number, got {type(value).__name__}")
        metrics[key] = value

    return metrics


def _require(raw: Dict[str, Any], key: str, expected: type, path: str) -> Any:
    if key not in raw:
        raise DeserializationError(f"{path}: missing field {key!r}")

    value = raw[key]
    if not isinstance(value, expected):
        raise DeserializationError(
            f"{path}.{key}: expected {expected.__name__}, got {type(value).__name__}"
        )

    return value
