"""
.. module:: randomness

randomness module
=================

Every operation in this library that samples a scalar accepts a randomness
provider: any callable that takes a length and returns that many random
bytes. The default provider :obj:`system` draws from the operating system's
secure source.

>>> len(system(64))
64

A deterministic provider can be supplied wherever reproducible output is
needed (*e.g.*, in tests).

>>> draw(lambda n: bytes(n), 4)
b'\\x00\\x00\\x00\\x00'
"""
from __future__ import annotations
from typing import Callable
import doctest
import secrets

from oprf.errors import RandomnessError

Randomness = Callable[[int], bytes]

def system(length: int) -> bytes:
    """
    Return the specified number of bytes from the operating system's
    cryptographically secure source.
    """
    return secrets.token_bytes(length)

def draw(rng: Randomness, length: int) -> bytes:
    """
    Obtain the specified number of bytes from a randomness provider.

    Any failure of the provider is reported as a :obj:`RandomnessError`.

    >>> def unavailable(length):
    ...     raise OSError('entropy source unavailable')
    >>> draw(unavailable, 64)
    Traceback (most recent call last):
      ...
    oprf.errors.RandomnessError: randomness provider failed: entropy source unavailable

    A provider that returns the wrong number of bytes is also rejected.

    >>> draw(lambda n: bytes(n - 1), 64)
    Traceback (most recent call last):
      ...
    oprf.errors.RandomnessError: randomness provider returned 63 bytes (expected 64)
    """
    try:
        bs = rng(length)
    except Exception as e:
        raise RandomnessError('randomness provider failed: ' + str(e)) from e

    if not isinstance(bs, (bytes, bytearray)) or len(bs) != length:
        raise RandomnessError(
            'randomness provider returned ' +
            (str(len(bs)) + ' bytes' if isinstance(bs, (bytes, bytearray)) else 'a non-bytes value') +
            ' (expected ' + str(length) + ')'
        )

    return bytes(bs)

if __name__ == '__main__':
    doctest.testmod() # pragma: no cover
