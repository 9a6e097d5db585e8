"""
.. module:: protocol

protocol module
===============

The oblivious evaluation protocol. A client holding an input ``x`` blinds
it, a server holding a private scalar evaluates the blinded element, and
the client finalizes the response into a 32-byte output that depends only
on the private scalar and ``x``.

>>> key = KeyPair.generate()
>>> (r, blinded) = blind(b'password123')            # Client.
>>> evaluated = evaluate(key.private, blinded)      # Server.
>>> output = finalize(r, evaluated)                 # Client.
>>> len(output)
32
>>> output == compute(key.private, b'password123')
True

Only the blinded and evaluated elements are exchanged. Both are 32-byte
canonical encodings; the server and the client each validate what they
receive before multiplying it by a secret scalar.
"""
from __future__ import annotations
from typing import Optional, Tuple
import doctest
import hashlib

from oprf import randomness
from oprf.errors import InversionError
from oprf.hashing import (
    hash_to_group, hash_to_group_constant_time, HASH_TO_GROUP_DST
)
from oprf.keys import KeyPair, random_scalar # pylint: disable=W0611
from oprf.ristretto import point, scalar

OUTPUT_LEN = 32

def _output(p: point) -> bytes:
    return hashlib.sha512(p.to_bytes()).digest()[:OUTPUT_LEN]

def blind(
        x: bytes,
        rng: randomness.Randomness = randomness.system,
        dst: bytes = HASH_TO_GROUP_DST
    ) -> Tuple[scalar, point]:
    """
    Blind an input on the client side. Return the blinding factor (which
    the client keeps) and the blinded element (which the client sends to
    the server).

    >>> (r, blinded) = blind(b'password123')
    >>> (r_, blinded_) = blind(b'password123')
    >>> r == r_ or blinded == blinded_
    False

    A fresh blinding factor must be drawn for every invocation; a
    deterministic randomness provider should only be used to reproduce
    test vectors.
    """
    r = random_scalar(rng)
    p = hash_to_group(x, dst)
    return (r, r * p)

def blind_constant_time(
        x: bytes,
        rng: randomness.Randomness = randomness.system,
        dst: bytes = HASH_TO_GROUP_DST,
        pad_to: Optional[int] = None
    ) -> Tuple[scalar, point]:
    """
    Variant of :obj:`blind` with the same contract and the same results,
    but without secret-dependent branches and with hashing padded so that
    the elapsed time does not reveal the length of the input (see
    :obj:`~oprf.hashing.hash_to_group_constant_time`).

    >>> rng = lambda n: bytes([1] * n)
    >>> blind_constant_time(b'secret', rng) == blind(b'secret', rng)
    True

    Scalar multiplication is constant-time in both group backends, but the
    Python interpreter itself makes no timing guarantees; this variant
    removes the variance that the library code controls.
    """
    r = random_scalar(rng)
    p = hash_to_group_constant_time(x, dst, pad_to)
    return (r, r * p)

def evaluate(sk: scalar, blinded: bytes) -> point:
    """
    Evaluate a blinded element on the server side by multiplying it by the
    private scalar.

    The blinded element is untrusted: it is validated before any scalar
    multiplication takes place, and a
    :obj:`~oprf.errors.DecodingError` is raised if it is not the canonical
    encoding of a valid non-identity point.

    >>> key = KeyPair.generate()
    >>> evaluate(key.private, bytes([1] + [0] * 31))
    Traceback (most recent call last):
      ...
    oprf.errors.DecodingError: not a valid ristretto255 point encoding
    """
    return sk * point.decode(blinded)

def finalize(r: scalar, evaluated: bytes) -> bytes:
    """
    Remove the blinding factor from the server's response and derive the
    32-byte protocol output (the first half of the SHA-512 digest of the
    unblinded element's canonical encoding).

    >>> key = KeyPair.generate()
    >>> (r, blinded) = blind(b'')
    >>> len(finalize(r, evaluate(key.private, blinded)))
    32

    The zero scalar cannot be a blinding factor.

    >>> finalize(scalar.from_int(0), blinded)
    Traceback (most recent call last):
      ...
    oprf.errors.InversionError: blinding factor cannot be zero
    """
    if r.is_zero():
        raise InversionError('blinding factor cannot be zero')

    return _output((~r) * point.decode(evaluated))

def compute(sk: scalar, x: bytes, dst: bytes = HASH_TO_GROUP_DST) -> bytes:
    """
    Compute the function directly (without blinding) for an input known
    to the holder of the private scalar. The result equals the output of a
    complete protocol run on the same input and private scalar.

    >>> key = KeyPair.derive(bytes(32))
    >>> compute(key.private, b'x') == compute(key.private, b'x')
    True
    """
    return _output(sk * hash_to_group(x, dst))

if __name__ == '__main__':
    doctest.testmod() # pragma: no cover
