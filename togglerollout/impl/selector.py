import hashlib
from typing import Optional

from togglerollout.impl.model import Toggle, Variant

# Number of bits of the SHA-1 digest used for bucketing (the first 15 hex digits).
_HASH_BITS = 60


def _bucket_hash(seed: Optional[int], toggle_name: str, key: str) -> int:
    if seed is not None:
        hash_key = '%d:%s:%s' % (seed, toggle_name, key)
    else:
        hash_key = '%s:%s' % (toggle_name, key)
    hash_hex = hashlib.sha1(hash_key.encode('utf-8', 'surrogatepass')).hexdigest()[:15]
    return int(hash_hex, 16)


def _bucket(seed: Optional[int], toggle_name: str, key: str, total_weight: int) -> int:
    """Maps the toggle name and key to an integer in [0, total_weight).
    """
    return (_bucket_hash(seed, toggle_name, key) * total_weight) >> _HASH_BITS


class VariantSelector:
    """
    Deterministically assigns an assignment key to one of a toggle's variants, in proportion to
    the variants' weights.

    The assignment depends only on the toggle name, the key, the names and weights of the
    variants in their defined order, and the optional seed. It is stable across processes and
    across implementations in other languages, since it uses SHA-1 over UTF-8 bytes rather than
    the interpreter's own ``hash()``.

    Instances hold no mutable state and can be shared between threads without locking.
    """

    def __init__(self, seed: Optional[int] = None):
        """
        :param seed: if set, it is mixed into every hash, producing a different but equally stable
          assignment; intended for testing
        """
        if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
            raise ValueError("seed must be an integer, was %r" % (seed,))
        self.__seed = seed

    @property
    def seed(self) -> Optional[int]:
        return self.__seed

    def select(self, toggle: Toggle, key: str) -> Optional[Variant]:
        """
        Returns the variant for this key, or None if the toggle has no variants. The ``active``
        state of the toggle is not considered here.
        """
        variants = toggle.variants
        if not variants:
            return None

        total_weight = sum(v.weight for v in variants)
        equal_weights = total_weight == 0
        if equal_weights:
            total_weight = len(variants)

        bucket = _bucket(self.__seed, toggle.name, key, total_weight)
        sum_weights = 0
        for variant in variants:
            sum_weights += 1 if equal_weights else variant.weight
            if bucket < sum_weights:
                return variant

        # not reached: bucket is always less than total_weight
        return variants[-1]
