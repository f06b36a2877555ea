# template_profiler/analyzer/aggregator.py - Template/block/macro aggregation
"""
Computes span counts and per-template invocation tallies over a profile tree.
"""

from collections import Counter
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping

from template_profiler.collector.profile import Profile


@dataclass(frozen=True)
class AggregateResult:
    """
    Counts computed over one profile tree.
    """
    template_count: int = 0
    block_count: int = 0
    macro_count: int = 0

    # Invocations per template name, read-only since results are cached
    templates: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))

    def to_dict(self) -> Dict:
        return {
            'template_count': self.template_count,
            'block_count': self.block_count,
            'macro_count': self.macro_count,
            'templates': dict(self.templates),
        }


def compute_data(profile: Profile) -> AggregateResult:
    """
    Aggregate counts below a profile node.

    Walks the tree post-order: each child's subtree is aggregated first,
    then the child's own span is added. The node passed in is never counted
    itself, so calling this on the root excludes the root.

    Args:
        profile: Node whose descendants are counted

    Returns:
        AggregateResult for all descendants
    """
    template_count = 0
    block_count = 0
    macro_count = 0
    templates: Counter = Counter()

    for child in profile:
        sub = compute_data(child)

        template_count += int(child.is_template()) + sub.template_count
        block_count += int(child.is_block()) + sub.block_count
        macro_count += int(child.is_macro()) + sub.macro_count

        if child.is_template():
            templates[child.template] += 1
        templates.update(sub.templates)

    return AggregateResult(
        template_count=template_count,
        block_count=block_count,
        macro_count=macro_count,
        templates=MappingProxyType(dict(templates)),
    )
