"""
This submodule contains interfaces for various components of the library.

They may be useful in writing new implementations of these components, or for testing.
"""

from abc import ABCMeta, abstractmethod
from typing import Sequence

from togglerollout.evaluation import Decision


class ValidationError(ValueError):
    """
    Raised when toggle data is malformed: a property of the wrong type, a missing required
    property, a negative variant weight, or a name that appears more than once where it must be
    unique. When this is raised for a batch of toggles, the whole batch has been rejected and the
    previously stored toggles are still in effect.
    """


class Evaluator(metaclass=ABCMeta):
    """
    The narrow interface that a host experiment framework depends on to obtain variant
    assignments. :class:`togglerollout.engine.RolloutEngine` is the standard implementation.
    """

    @abstractmethod
    def evaluate(self, toggle_name: str, key: str) -> Decision:
        """
        Determines the variant of a toggle for an assignment key.

        Implementations must not raise for toggles that are missing, inactive or have no
        variants; those conditions are reported through :attr:`Decision.source`.

        :param toggle_name: the unique name of the toggle
        :param key: the stable assignment key, such as a user or session identifier
        :return: the decision for this toggle and key
        """


class ToggleRequester(metaclass=ABCMeta):
    """
    Interface for the component that retrieves raw toggle definitions from the remote rollout
    service. The transport is entirely up to the implementation.
    """

    @abstractmethod
    def get_all_toggles(self) -> Sequence[dict]:
        """
        Gets every toggle definition currently known to the remote service.

        Each item is a dict with at least a ``name`` property; see
        :class:`togglerollout.impl.model.Toggle` for the full format. Any exception raised here
        is logged by the caller, and the previously stored toggles stay in effect.
        """


class ToggleChange:
    """
    Change event fired when the definition of the named toggle has been added, removed or
    modified by a refresh.
    """

    __slots__ = ['__name']

    def __init__(self, name: str):
        self.__name = name

    @property
    def name(self) -> str:
        """
        :return: The name of the toggle that was modified.
        """
        return self.__name

    def __eq__(self, other) -> bool:
        return isinstance(other, ToggleChange) and other.name == self.__name

    def __hash__(self) -> int:
        return hash(self.__name)

    def __repr__(self) -> str:
        return "ToggleChange(%s)" % self.__name
