import pytest

from togglerollout.impl.selector import VariantSelector, _bucket
from togglerollout.testing.builders import *


def colors_toggle():
    return ToggleBuilder('colors').variant('red', 1).variant('blue', 1).build()


class TestBucketing:
    def test_bucket_by_key(self):
        assert _bucket(None, 'hashKey', 'userKeyA', 100000) == 55262
        assert _bucket(None, 'hashKey', 'userKeyB', 100000) == 93579
        assert _bucket(None, 'hashKey', 'userKeyC', 100000) == 61996

    def test_bucket_by_key_with_seed(self):
        assert _bucket(61, 'hashKey', 'userKeyA', 100000) == 66725
        assert _bucket(61, 'hashKey', 'userKeyB', 100000) == 52990
        assert _bucket(61, 'hashKey', 'userKeyC', 100000) == 52881

    def test_bucket_is_within_total_weight(self):
        for i in range(1000):
            assert 0 <= _bucket(None, 'toggle', 'key%d' % i, 7) < 7

    def test_bucket_depends_on_toggle_name(self):
        buckets_a = [_bucket(None, 'toggleA', 'key%d' % i, 100000) for i in range(20)]
        buckets_b = [_bucket(None, 'toggleB', 'key%d' % i, 100000) for i in range(20)]
        assert buckets_a != buckets_b


class TestVariantSelector:
    def test_no_variants_selects_nothing(self):
        toggle = ToggleBuilder('empty').build()
        assert VariantSelector().select(toggle, 'user-1') is None

    def test_variant_is_returned_for_bucket(self):
        # userKeyA falls in bucket 55262 of 100000; the first variant's range ends just before it,
        # and the second variant covers exactly that bucket
        toggle = ToggleBuilder('hashKey') \
            .variant('bad-a', 55262) \
            .variant('matched', 1) \
            .variant('bad-b', 100000 - 55263) \
            .build()
        assert VariantSelector().select(toggle, 'userKeyA').name == 'matched'

    def test_upper_bound_of_variant_range_is_exclusive(self):
        toggle = ToggleBuilder('hashKey').variant('first', 55262).variant('second', 44738).build()
        assert VariantSelector().select(toggle, 'userKeyA').name == 'second'

    def test_variant_range_includes_its_last_bucket(self):
        toggle = ToggleBuilder('hashKey').variant('first', 55263).variant('second', 44737).build()
        assert VariantSelector().select(toggle, 'userKeyA').name == 'first'

    def test_known_assignments(self):
        selector = VariantSelector()
        toggle = colors_toggle()
        assert [selector.select(toggle, k).name for k in ['u1', 'u2', 'u3', 'u4']] == ['red', 'blue', 'red', 'blue']

    def test_seed_changes_assignments(self):
        selector = VariantSelector(seed=7)
        toggle = colors_toggle()
        assert selector.select(toggle, 'u1').name == 'blue'
        assert selector.select(toggle, 'u5').name == 'red'

    def test_selection_is_repeatable_across_instances(self):
        toggle = colors_toggle()
        first = [VariantSelector().select(toggle, 'user-%d' % i).name for i in range(100)]
        second = [VariantSelector().select(toggle, 'user-%d' % i).name for i in range(100)]
        assert first == second

    @pytest.mark.parametrize('seed', ['7', 7.0, False])
    def test_seed_must_be_an_integer(self, seed):
        with pytest.raises(ValueError):
            VariantSelector(seed=seed)

    def test_key_with_lone_surrogate_is_assigned(self):
        toggle = colors_toggle()
        selector = VariantSelector()
        assert selector.select(toggle, '\ud800').name in ('red', 'blue')
        assert selector.select(toggle, '\ud800') is selector.select(toggle, '\ud800')

    def test_payload_is_carried_by_selected_variant(self):
        toggle = ToggleBuilder('Promo').variant('blue', 1, 'blue payload').build()
        variant = VariantSelector().select(toggle, 'user-1')
        assert variant.name == 'blue'
        assert variant.payload == 'blue payload'

    def test_zero_weights_are_treated_as_equal(self):
        toggle = ToggleBuilder('colors').variant('red', 0).variant('blue', 0).build()
        selector = VariantSelector()
        assert [selector.select(toggle, k).name for k in ['u1', 'u2', 'u3', 'u4']] == ['red', 'blue', 'red', 'blue']

    def test_zero_weight_variant_is_never_selected_when_others_have_weight(self):
        toggle = ToggleBuilder('colors').variant('never', 0).variant('always', 3).build()
        selector = VariantSelector()
        for i in range(200):
            assert selector.select(toggle, 'user-%d' % i).name == 'always'

    def test_single_variant_always_selected(self):
        toggle = ToggleBuilder('solo').variant('only', 5).build()
        selector = VariantSelector()
        for i in range(100):
            assert selector.select(toggle, 'user-%d' % i).name == 'only'

    @pytest.mark.parametrize('weights', [(1, 1), (50, 50), (0, 0)])
    def test_equal_weights_split_evenly(self, weights):
        toggle = ToggleBuilder('split').variant('red', weights[0]).variant('blue', weights[1]).build()
        selector = VariantSelector()
        counts = {'red': 0, 'blue': 0}
        for i in range(10000):
            counts[selector.select(toggle, 'user-%d' % i).name] += 1
        assert 4500 <= counts['red'] <= 5500
        assert 4500 <= counts['blue'] <= 5500

    def test_uneven_weights_split_proportionally(self):
        toggle = ToggleBuilder('split').variant('small', 1).variant('large', 3).build()
        selector = VariantSelector()
        small = sum(1 for i in range(10000) if selector.select(toggle, 'user-%d' % i).name == 'small')
        assert 2000 <= small <= 3000
