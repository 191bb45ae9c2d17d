"""
The togglerollout module contains the most common top-level entry points for the library.
"""

from togglerollout.config import Config
from togglerollout.engine import RolloutEngine
from togglerollout.evaluation import Decision, DecisionSource
from togglerollout.impl.model import Toggle, Variant
from togglerollout.interfaces import (Evaluator, ToggleChange,
                                      ToggleRequester, ValidationError)
from togglerollout.rollout import Assignment, ExperimentRollout
from togglerollout.toggle_store import ToggleStore
from togglerollout.variants import MergePolicy, merge_variants
from togglerollout.version import VERSION

__version__ = VERSION

__all__ = [
    'Assignment',
    'Config',
    'Decision',
    'DecisionSource',
    'Evaluator',
    'ExperimentRollout',
    'MergePolicy',
    'RolloutEngine',
    'Toggle',
    'ToggleChange',
    'ToggleRequester',
    'ToggleStore',
    'ValidationError',
    'Variant',
    'merge_variants',
]
