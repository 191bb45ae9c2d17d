"""
This submodule connects an experimentation framework to toggle evaluation.

An experiment asks :class:`ExperimentRollout` which variant to run for a given run key. If the
toggle cannot be resolved (it is missing, inactive, or has no variants) the experiment is
skipped and the framework runs its control behavior instead.

Variants can be defined locally, remotely on the toggle, or both:
::

    rollout = ExperimentRollout(engine, "MyExperiment")
    variants = rollout.register_variants({"green": "green", "red": "red"}, engine)
    rollout.resolve(current_user.id, variants)  # => "red", or the payload of "blue"

Local definitions are never overridden by default. A variant that only exists remotely resolves
to the payload of the current assignment, falling back to the payload it had when it was
registered.
"""

from typing import Any, Mapping, Optional

from togglerollout.evaluation import Decision
from togglerollout.interfaces import Evaluator
from togglerollout.variants import MergePolicy, merge_variants


class Assignment:
    """
    The variant assigned to one run of an experiment.
    """

    __slots__ = ['__variant', '__payload', '__decision']

    def __init__(self, variant: str, payload: Optional[str], decision: Decision):
        self.__variant = variant
        self.__payload = payload
        self.__decision = decision

    @property
    def variant(self) -> str:
        """The variant to run. This is the variant forced by the caller, if there was one.
        """
        return self.__variant

    @property
    def payload(self) -> Optional[str]:
        """The payload of the variant selected by the toggle.
        """
        return self.__payload

    @property
    def decision(self) -> Decision:
        return self.__decision

    def __repr__(self) -> str:
        return "Assignment(variant=%s, payload=%s)" % (self.__variant, self.__payload)


class _RemoteVariant:
    # The value registered for a variant defined on the toggle.
    __slots__ = ['fallback']

    def __init__(self, fallback: Optional[str]):
        self.fallback = fallback

    def __call__(self, assignment: Assignment) -> Optional[str]:
        return self.fallback if assignment.payload is None else assignment.payload

    def __eq__(self, other) -> bool:
        return isinstance(other, _RemoteVariant) and other.fallback == self.fallback

    def __repr__(self) -> str:
        return "RemoteVariant(fallback=%s)" % self.fallback


class ExperimentRollout:
    """Assigns experiment variants using a toggle.
    """

    def __init__(self, evaluator: Evaluator, toggle_name: str):
        """
        :param evaluator: evaluates the toggle; normally a :class:`togglerollout.engine.RolloutEngine`
        :param toggle_name: the name of the toggle backing this experiment
        :raises ValueError: if either argument is missing
        """
        if evaluator is None:
            raise ValueError("an evaluator is required")
        if not toggle_name:
            raise ValueError("missing toggle_name")
        self.__evaluator = evaluator
        self.__toggle_name = toggle_name

    @property
    def toggle_name(self) -> str:
        return self.__toggle_name

    def assign(self, run_key: str, variant: Optional[str] = None) -> Optional[Assignment]:
        """Evaluates the toggle for a run key.

        :param run_key: the stable key of this run, such as a user id
        :param variant: a variant already chosen for this run; it is kept if the toggle resolves
        :return: the assignment, or None if the experiment should be skipped
        """
        decision = self.__evaluator.evaluate(self.__toggle_name, run_key)
        if not decision.enabled:
            return None
        return Assignment(variant or decision.variant_name, decision.payload, decision)

    def is_skipped(self, run_key: str) -> bool:
        return self.assign(run_key) is None

    def resolve(self, run_key: str, variants: Mapping[str, Any], variant: Optional[str] = None) -> Any:
        """Assigns a variant and returns the value registered for it.

        A callable value is called with the :class:`Assignment` and its result is returned, so
        variants registered from the toggle yield the current payload.

        :param variants: variant names mapped to values, as returned by :func:`register_variants`
        :return: the value, or None if the experiment is skipped or the variant is not registered
        """
        assignment = self.assign(run_key, variant)
        if assignment is None or assignment.variant not in variants:
            return None
        value = variants[assignment.variant]
        return value(assignment) if callable(value) else value

    def register_variants(self, local: Mapping[str, Any], toggle_source, policy: MergePolicy = MergePolicy.LOCAL_WINS) -> Mapping[str, Any]:
        """Adds the variants defined on the toggle to locally defined variants.

        :param local: variant names mapped to values; not modified
        :param toggle_source: an object with a ``toggle(name)`` method, such as the engine
        :param policy: how to treat a variant defined in both places
        :return: the merged variants; unchanged from ``local`` if the toggle is not known
        """
        toggle = toggle_source.toggle(self.__toggle_name)
        if toggle is None:
            return dict(local)
        return merge_variants(local, toggle.variants, policy, lambda remote: _RemoteVariant(remote.payload))
