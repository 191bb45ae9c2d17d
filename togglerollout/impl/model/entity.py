import json
from typing import Any, List, Optional

from togglerollout.interfaces import ValidationError

# This file provides support for our data model classes.
#
# Model classes are decoded from a dict that corresponds to the JSON representation received
# from the rollout service. The constructor for each class captures and validates individual
# properties using the opt_ and req_ functions, so that values of invalid types cause immediate
# rejection of the whole data set rather than surfacing later as errors during evaluation.
#
# Toggle subclasses ModelEntity, which also keeps the original dict so we can re-serialize it or
# compare two definitions. Variant is not derived from ModelEntity because it is never stored or
# compared outside of its enclosing Toggle.


def opt_type(data: dict, name: str, desired_type) -> Any:
    value = data.get(name)
    if value is not None and not isinstance(value, desired_type):
        raise ValidationError('error in toggle data: property "%s" should be type %s but was %s' % (name, desired_type, value.__class__))
    return value


def opt_bool(data: dict, name: str) -> bool:
    return opt_type(data, name, bool) is True


def opt_dict_list(data: dict, name: str) -> list:
    return validate_list_type(opt_list(data, name), name, dict)


def opt_int(data: dict, name: str) -> Optional[int]:
    value = opt_type(data, name, int)
    # bool is a subtype of int, but a weight of True is never intended
    if isinstance(value, bool):
        raise ValidationError('error in toggle data: property "%s" should be type %s but was %s' % (name, int, bool))
    return value


def opt_list(data: dict, name: str) -> list:
    return opt_type(data, name, list) or []


def opt_str(data: dict, name: str) -> Optional[str]:
    return opt_type(data, name, str)


def req_type(data: dict, name: str, desired_type) -> Any:
    value = opt_type(data, name, desired_type)
    if value is None:
        raise ValidationError('error in toggle data: required property "%s" is missing' % name)
    return value


def req_int(data: dict, name: str) -> int:
    value = opt_int(data, name)
    if value is None:
        raise ValidationError('error in toggle data: required property "%s" is missing' % name)
    return value


def req_str(data: dict, name: str) -> str:
    return req_type(data, name, str)


def validate_list_type(items: list, name: str, desired_type) -> List[Any]:
    for item in items:
        if not isinstance(item, desired_type):
            raise ValidationError('error in toggle data: property %s should be an array of %s but an item was %s' % (name, desired_type, item.__class__))
    return items


class ModelEntity:
    def __init__(self, data: dict):
        self._data = data

    def to_json_dict(self):
        return self._data

    def __eq__(self, other) -> bool:
        return self.__class__ == other.__class__ and self._data == other._data

    def __repr__(self) -> str:
        return json.dumps(self._data, separators=(',', ':'))
