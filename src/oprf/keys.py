"""
.. module:: keys

keys module
===========

Server key material: a private scalar and the corresponding public point.

>>> key = KeyPair.generate()
>>> key.public == point.base(key.private)
True
"""
from __future__ import annotations
from typing import NamedTuple
import doctest
import logging

from oprf import randomness
from oprf.errors import DecodingError, DerivationError
from oprf.hashing import hash_to_scalar, DERIVE_KEY_PAIR_DST
from oprf.ristretto import point, scalar, UNIFORM_LEN

logger = logging.getLogger(__name__)

SEED_LEN = 32

def random_scalar(rng: randomness.Randomness = randomness.system) -> scalar:
    """
    Sample a uniformly distributed nonzero scalar by drawing 64 bytes from
    the randomness provider and reducing them modulo the group order. A
    zero result (which occurs with negligible probability) is discarded and
    the draw is repeated.

    >>> s = random_scalar()
    >>> len(s), s.is_zero()
    (32, False)
    """
    while True:
        s = scalar.from_uniform(randomness.draw(rng, UNIFORM_LEN))
        if not s.is_zero():
            return s

class KeyPair(NamedTuple):
    """
    Private scalar held by the server together with its public point
    (*i.e.*, the private scalar multiplied by the base point).
    """
    private: scalar
    public: point

    @classmethod
    def generate(cls, rng: randomness.Randomness = randomness.system) -> KeyPair:
        """
        Generate a key pair using the supplied randomness provider.

        >>> KeyPair.generate(lambda n: bytes([7] * n)) == KeyPair.generate(lambda n: bytes([7] * n))
        True
        """
        private = random_scalar(rng)
        key = cls(private, point.base(private))
        logger.debug('generated key pair with public key %s', key.public.hex())
        return key

    @classmethod
    def derive(cls, seed: bytes, info: bytes = b'') -> KeyPair:
        """
        Derive a key pair deterministically from a 32-byte seed and an
        optional public info string.

        >>> seed = bytes([0xa3] * 32)
        >>> KeyPair.derive(seed, b'test key') == KeyPair.derive(seed, b'test key')
        True
        >>> KeyPair.derive(seed, b'test key') == KeyPair.derive(seed, b'other key')
        False
        """
        if len(seed) != SEED_LEN:
            raise ValueError('seed must be ' + str(SEED_LEN) + ' bytes')
        if len(info) > 65535:
            raise ValueError('info must be at most 65535 bytes')

        derive_input = bytes(seed) + len(info).to_bytes(2, 'big') + bytes(info)
        for counter in range(256):
            private = hash_to_scalar(derive_input + bytes([counter]), DERIVE_KEY_PAIR_DST)
            if not private.is_zero():
                key = cls(private, point.base(private))
                logger.debug('derived key pair with public key %s', key.public.hex())
                return key

        raise DerivationError('key derivation produced only zero scalars') # pragma: no cover

    @classmethod
    def from_private(cls, bs: bytes) -> KeyPair:
        """
        Load a key pair from the 32-byte encoding of a stored private scalar.

        >>> key = KeyPair.generate()
        >>> KeyPair.from_private(key.private.to_bytes()) == key
        True
        >>> KeyPair.from_private(bytes(32))
        Traceback (most recent call last):
          ...
        oprf.errors.DecodingError: private key cannot be zero
        """
        private = scalar.decode(bs)
        if private.is_zero():
            raise DecodingError('private key cannot be zero')
        return cls(private, point.base(private))

    def __repr__(self) -> str:
        # The private scalar is never included in the representation.
        return 'KeyPair(public=' + self.public.hex() + ')'

if __name__ == '__main__':
    doctest.testmod() # pragma: no cover
