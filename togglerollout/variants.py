"""
This submodule contains helpers for combining the variants an application defines locally with
the variants defined on a toggle in the rollout service.
"""

from collections import OrderedDict
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Sequence

from togglerollout.impl.model import Variant


class MergePolicy(Enum):
    """
    Decides which definition is kept when a local variant and a remote variant share a name.
    """

    LOCAL_WINS = 'local-wins'
    """
    The local definition is kept and the remote variant is ignored.
    """

    REMOTE_WINS = 'remote-wins'
    """
    The remote variant's payload replaces the local value, in the local variant's position.
    """


def merge_variants(
    local: Mapping[str, Any],
    remote: Sequence[Variant],
    policy: MergePolicy = MergePolicy.LOCAL_WINS,
    value_for: Optional[Callable[[Variant], Any]] = None,
) -> 'OrderedDict[str, Any]':
    """Combines locally defined variants with the variants of a remote toggle.

    Local variants come first, in their original order, followed by the remote variants that are
    not defined locally. The value of a remote variant is its payload, which may be None, unless
    ``value_for`` is given.
    Neither input is modified.

    :param local: variant names mapped to whatever values the application uses for them
    :param remote: the variants of the toggle, in their defined order
    :param policy: how to treat a name defined in both places
    :param value_for: if set, called with each remote variant that is added to produce its value
    :return: the merged variants
    """
    merged = OrderedDict(local)
    for variant in remote:
        if variant.name not in merged or policy is MergePolicy.REMOTE_WINS:
            merged[variant.name] = variant.payload if value_for is None else value_for(variant)
    return merged
