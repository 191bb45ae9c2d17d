import pytest

from togglerollout.impl.model import *
from togglerollout.interfaces import ValidationError
from togglerollout.testing.builders import *


def test_toggle_properties_are_decoded():
    toggle = Toggle({
        'name': 'Promo',
        'enabled': True,
        'variants': [
            {'name': 'red', 'weight': 2},
            {'name': 'blue', 'weight': 1, 'payload': {'type': 'string', 'value': 'blue payload'}},
        ],
    })
    assert toggle.name == 'Promo'
    assert toggle.active is True
    assert [v.name for v in toggle.variants] == ['red', 'blue']
    assert [v.weight for v in toggle.variants] == [2, 1]
    assert toggle.variants[0].payload is None
    assert toggle.variants[1].payload == 'blue payload'
    assert toggle.last_updated is None


def test_enabled_defaults_to_false():
    assert Toggle({'name': 't'}).active is False


def test_variants_default_to_empty():
    assert Toggle({'name': 't', 'enabled': True}).variants == ()


def test_plain_string_payload():
    toggle = ToggleBuilder('t').variant('a', 1, 'plain').build()
    assert toggle.variants[0].payload == 'plain'


def test_variant_lookup_by_name():
    toggle = make_toggle('t', 'red', 'blue')
    assert toggle.variant('blue').name == 'blue'
    assert toggle.variant('green') is None


def test_last_updated_as_millis():
    toggle = ToggleBuilder('t').last_updated(1000).build()
    assert toggle.last_updated == 1000


def test_last_updated_as_rfc3339_string():
    toggle = ToggleBuilder('t').last_updated('1970-01-01T00:00:02Z').build()
    assert toggle.last_updated == 2000


def test_invalid_last_updated_is_rejected():
    with pytest.raises(ValidationError):
        ToggleBuilder('t').last_updated('yesterday').build()


def test_toggle_keeps_its_own_copy_of_the_data():
    data = ToggleBuilder('t').variant('a', 1).build_dict()
    toggle = Toggle(data)
    data['variants'].append({'name': 'b', 'weight': 1})
    assert toggle.to_json_dict()['variants'] == [{'name': 'a', 'weight': 1}]


def test_toggles_with_same_data_are_equal():
    assert make_toggle('t', 'a', 'b') == make_toggle('t', 'a', 'b')
    assert make_toggle('t', 'a', 'b') != make_toggle('t', 'b', 'a')
    assert make_toggle('t', 'a') != make_toggle('t', 'a', enabled=False)


@pytest.mark.parametrize('data', [
    {},
    {'name': 5},
    {'name': 't', 'enabled': 'yes'},
    {'name': 't', 'variants': {'name': 'a'}},
    {'name': 't', 'variants': ['a']},
    {'name': 't', 'variants': [{'weight': 1}]},
    {'name': 't', 'variants': [{'name': 'a'}]},
    {'name': 't', 'variants': [{'name': 'a', 'weight': '1'}]},
    {'name': 't', 'variants': [{'name': 'a', 'weight': True}]},
    {'name': 't', 'variants': [{'name': 'a', 'weight': 1, 'payload': 3}]},
])
def test_malformed_data_is_rejected(data):
    with pytest.raises(ValidationError):
        Toggle(data)


def test_negative_weight_is_rejected():
    with pytest.raises(ValidationError, match='negative weight'):
        ToggleBuilder('t').variant('a', -1).build()


def test_duplicate_variant_name_is_rejected():
    with pytest.raises(ValidationError, match='more than once'):
        make_toggle('t', 'a', 'a')


def test_validation_error_is_a_value_error():
    with pytest.raises(ValueError):
        Toggle({})
