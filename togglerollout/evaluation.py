"""
This submodule contains the public types that describe the result of evaluating a toggle.
"""

from enum import Enum
from typing import Optional


class DecisionSource(Enum):
    """
    Describes how a :class:`Decision` was reached.
    """

    RESOLVED = 'resolved'
    """
    The toggle was found, was active, and a variant was selected for the key.
    """

    FALLBACK_MISSING = 'fallback-missing'
    """
    No toggle with the requested name was known.
    """

    FALLBACK_INACTIVE = 'fallback-inactive'
    """
    The toggle was found but is not active.
    """

    FALLBACK_NO_VARIANTS = 'fallback-no-variants'
    """
    The toggle was found and is active, but defines no variants.
    """


class Decision:
    """
    The result of evaluating a toggle for an assignment key.

    Decisions are immutable; the same instance may safely be shared between callers.
    """

    __slots__ = ['__toggle_name', '__enabled', '__variant_name', '__payload', '__source']

    def __init__(self, toggle_name: str, enabled: bool, variant_name: Optional[str], payload: Optional[str], source: DecisionSource):
        """
        :param toggle_name: the name of the toggle that was evaluated
        :param enabled: True only if a variant was resolved
        :param variant_name: the name of the selected variant, if any
        :param payload: the payload of the selected variant, if any
        :param source: how the decision was reached
        """
        self.__toggle_name = toggle_name
        self.__enabled = enabled
        self.__variant_name = variant_name
        self.__payload = payload
        self.__source = source

    @classmethod
    def resolved(cls, toggle_name: str, variant_name: str, payload: Optional[str]) -> 'Decision':
        return cls(toggle_name, True, variant_name, payload, DecisionSource.RESOLVED)

    @classmethod
    def fallback(cls, toggle_name: str, source: DecisionSource) -> 'Decision':
        return cls(toggle_name, False, None, None, source)

    @property
    def toggle_name(self) -> str:
        return self.__toggle_name

    @property
    def enabled(self) -> bool:
        """True if a variant was resolved for the key.
        """
        return self.__enabled

    @property
    def variant_name(self) -> Optional[str]:
        """The name of the selected variant, or None if the toggle could not be resolved.
        """
        return self.__variant_name

    @property
    def payload(self) -> Optional[str]:
        """The payload carried by the selected variant, if it has one.
        """
        return self.__payload

    @property
    def source(self) -> DecisionSource:
        return self.__source

    def to_json_dict(self) -> dict:
        """Returns a dictionary representation of the decision, suitable for logging or serializing.
        """
        ret = {'toggleName': self.__toggle_name, 'enabled': self.__enabled, 'source': self.__source.value}
        if self.__variant_name is not None:
            ret['variantName'] = self.__variant_name
        if self.__payload is not None:
            ret['payload'] = self.__payload
        return ret

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Decision)
            and self.toggle_name == other.toggle_name
            and self.enabled == other.enabled
            and self.variant_name == other.variant_name
            and self.payload == other.payload
            and self.source == other.source
        )

    def __hash__(self) -> int:
        return hash((self.__toggle_name, self.__enabled, self.__variant_name, self.__payload, self.__source))

    def __repr__(self) -> str:
        return "(toggle_name=%s, enabled=%s, variant_name=%s, payload=%s, source=%s)" % (
            self.__toggle_name, self.__enabled, self.__variant_name, self.__payload, self.__source.value)
