import copy
from typing import Optional, Tuple

from togglerollout.impl.model.entity import *
from togglerollout.impl.model.value_parsing import parse_time


def _payload_value(data: dict) -> Optional[str]:
    # The payload is either a plain string or an object of the form {"type": ..., "value": ...}.
    payload = data.get('payload')
    if payload is None or isinstance(payload, str):
        return payload
    if isinstance(payload, dict):
        return opt_str(payload, 'value')
    raise ValidationError('error in toggle data: property "payload" should be a string or an object but was %s' % payload.__class__)


class Variant:
    __slots__ = ['_name', '_weight', '_payload']

    def __init__(self, data: dict):
        self._name = req_str(data, 'name')
        self._weight = req_int(data, 'weight')
        if self._weight < 0:
            raise ValidationError('error in toggle data: variant "%s" has negative weight %d' % (self._name, self._weight))
        self._payload = _payload_value(data)

    @property
    def name(self) -> str:
        return self._name

    @property
    def weight(self) -> int:
        return self._weight

    @property
    def payload(self) -> Optional[str]:
        return self._payload

    def __repr__(self) -> str:
        return "Variant(name=%s, weight=%d, payload=%s)" % (self._name, self._weight, self._payload)


class Toggle(ModelEntity):
    """
    A named feature toggle, decoded from its JSON representation:
    ::

        {
            "name": "Promo",
            "enabled": true,
            "lastUpdated": "2024-03-01T12:00:00Z",
            "variants": [
                {"name": "red", "weight": 1},
                {"name": "blue", "weight": 1, "payload": {"type": "string", "value": "blue payload"}}
            ]
        }

    ``lastUpdated`` may also be given in milliseconds since the epoch, and a variant ``payload``
    may also be a plain string. The order of ``variants`` is significant: it is the order used
    when assigning buckets.
    """

    __slots__ = ['_data', '_name', '_active', '_variants', '_last_updated']

    def __init__(self, data: dict):
        super().__init__(copy.deepcopy(data))
        self._name = req_str(data, 'name')
        self._active = opt_bool(data, 'enabled')
        self._variants = tuple(Variant(item) for item in opt_dict_list(data, 'variants'))
        seen = set()
        for variant in self._variants:
            if variant.name in seen:
                raise ValidationError('error in toggle data: variant "%s" is defined more than once in toggle "%s"' % (variant.name, self._name))
            seen.add(variant.name)
        self._last_updated = None
        if data.get('lastUpdated') is not None:
            self._last_updated = parse_time(data['lastUpdated'])
            if self._last_updated is None:
                raise ValidationError('error in toggle data: property "lastUpdated" of toggle "%s" is not a valid timestamp' % self._name)

    @property
    def name(self) -> str:
        return self._name

    @property
    def active(self) -> bool:
        return self._active

    @property
    def variants(self) -> Tuple[Variant, ...]:
        return self._variants

    @property
    def last_updated(self) -> Optional[float]:
        """Milliseconds since the epoch, or None if the service did not report it.
        """
        return self._last_updated

    def variant(self, name: str) -> Optional[Variant]:
        for variant in self._variants:
            if variant.name == name:
                return variant
        return None
