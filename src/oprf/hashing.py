"""
.. module:: hashing

hashing module
==============

Deterministic, domain-separated mappings from arbitrary byte strings to
group elements and scalars. Inputs are expanded to 64 uniform bytes with
``expand_message_xmd`` (instantiated with SHA-512) and then passed to the
one-way map (for points) or to wide reduction (for scalars) exported by
:obj:`~oprf.ristretto`.

>>> p = hash_to_group(b'password123')
>>> len(p)
32
>>> p == hash_to_group(b'password123')
True
>>> p == hash_to_group(b'password123', dst=b'HashToGroup-other-application')
False
"""
from __future__ import annotations
from typing import Optional
import doctest
import hashlib
from parts import parts

from oprf.errors import MappingError
from oprf.ristretto import point, scalar, UNIFORM_LEN

CHUNK_LEN = 128 # SHA-512 block size; the message is fed to the hash in chunks of this size.
PAD_MINIMUM = 4096

CONTEXT_STRING = b'OPRFV1-' + bytes([0]) + b'-ristretto255-SHA512'
HASH_TO_GROUP_DST = b'HashToGroup-' + CONTEXT_STRING
HASH_TO_SCALAR_DST = b'HashToScalar-' + CONTEXT_STRING
DERIVE_KEY_PAIR_DST = b'DeriveKeyPair' + CONTEXT_STRING

_ZERO_CHUNK = bytes(CHUNK_LEN)

def _i2osp(value: int, length: int) -> bytes:
    if value < 0 or value >= (1 << (8 * length)):
        raise ValueError('value does not fit in ' + str(length) + ' byte(s)')
    return value.to_bytes(length, 'big')

def _update_in_chunks(h, msg: bytes):
    for chunk in parts(msg, length=CHUNK_LEN):
        h.update(bytes(chunk))

def expand_message_xmd(msg: bytes, dst: bytes, length: int) -> bytes:
    """
    Expand a message into the requested number of pseudorandom bytes under
    a domain separation tag, following Section 5.3.1 of RFC 9380 with
    SHA-512 as the hash function.

    >>> len(expand_message_xmd(b'abc', b'QUUX-V01-CS02-with-expander-SHA512-256', 32))
    32
    >>> a = expand_message_xmd(b'', b'tag-one', 64)
    >>> a == expand_message_xmd(b'', b'tag-two', 64)
    False

    An empty domain separation tag is rejected.

    >>> expand_message_xmd(b'abc', b'', 64)
    Traceback (most recent call last):
      ...
    oprf.errors.MappingError: domain separation tag must be nonempty
    """
    b_in_bytes = hashlib.sha512().digest_size
    r_in_bytes = hashlib.sha512().block_size

    if len(dst) == 0:
        raise MappingError('domain separation tag must be nonempty')
    if len(dst) > 255:
        dst = hashlib.sha512(b'H2C-OVERSIZE-DST-' + dst).digest()

    # Number of hash blocks in the output.
    ell = (length + b_in_bytes - 1) // b_in_bytes
    if ell < 1 or ell > 255 or length > 65535:
        raise MappingError('requested output length ' + str(length) + ' is out of range')

    dst_prime = dst + _i2osp(len(dst), 1)

    h = hashlib.sha512(_i2osp(0, r_in_bytes))
    _update_in_chunks(h, msg)
    h.update(_i2osp(length, 2) + _i2osp(0, 1) + dst_prime)
    b_0 = h.digest()

    b_vals = [hashlib.sha512(b_0 + _i2osp(1, 1) + dst_prime).digest()]
    for i in range(1, ell):
        b_vals.append(hashlib.sha512(
            bytes(x ^ y for (x, y) in zip(b_0, b_vals[i - 1])) +
            _i2osp(i + 1, 1) + dst_prime
        ).digest())

    return b''.join(b_vals)[:length]

def hash_to_group(x: bytes, dst: bytes = HASH_TO_GROUP_DST) -> point:
    """
    Map an arbitrary byte string to a group element.

    The same input and tag always yield the same element. The one-way map
    yields the identity only with negligible probability; if it does, a
    :obj:`~oprf.errors.MappingError` is raised and the caller must change
    the domain separation tag rather than retry the same input.

    >>> hash_to_group(b'').is_identity()
    False
    """
    p = point.from_uniform(expand_message_xmd(x, dst, UNIFORM_LEN))
    if p.is_identity():
        raise MappingError('input maps to the identity element')
    return p

def padded_length(length: int, pad_to: Optional[int] = None) -> int:
    """
    Return the total number of bytes hashed by
    :obj:`hash_to_group_constant_time` for an input of the given length.

    >>> padded_length(0)
    4096
    >>> padded_length(4097)
    8192
    >>> padded_length(10, pad_to=64)
    64
    >>> padded_length(100, pad_to=64)
    Traceback (most recent call last):
      ...
    ValueError: input is longer than the padding target
    """
    if pad_to is not None:
        if pad_to < length:
            raise ValueError('input is longer than the padding target')
        return pad_to

    total = PAD_MINIMUM
    while total < length:
        total *= 2
    return total

def hash_to_group_constant_time(
        x: bytes,
        dst: bytes = HASH_TO_GROUP_DST,
        pad_to: Optional[int] = None
    ) -> point:
    """
    Map an arbitrary byte string to a group element exactly as
    :obj:`hash_to_group` does, while hashing additional padding so that the
    total amount of hashed data is :obj:`padded_length` of the input. The
    elapsed time therefore reveals the input length only up to the next
    power of two (and not at all for inputs of at most ``PAD_MINIMUM`` bytes
    or at most ``pad_to`` bytes).

    >>> x = b'password123'
    >>> hash_to_group_constant_time(x) == hash_to_group(x)
    True
    """
    total = padded_length(len(x), pad_to)
    uniform = expand_message_xmd(x, dst, UNIFORM_LEN)

    padding = total - len(x)
    dummy = hashlib.sha512()
    for _ in range(padding // CHUNK_LEN):
        dummy.update(_ZERO_CHUNK)
    dummy.update(_ZERO_CHUNK[:padding % CHUNK_LEN])

    p = point.from_uniform(uniform)
    if p.is_identity():
        raise MappingError('input maps to the identity element')
    return p

def hash_to_scalar(x: bytes, dst: bytes = HASH_TO_SCALAR_DST) -> scalar:
    """
    Map an arbitrary byte string to a scalar by expanding it to 64 bytes
    and reducing modulo the group order.

    >>> hash_to_scalar(b'abc') == hash_to_scalar(b'abc')
    True
    >>> hash_to_scalar(b'abc') == hash_to_scalar(b'abd')
    False
    """
    return scalar.from_uniform(expand_message_xmd(x, dst, UNIFORM_LEN))

if __name__ == '__main__':
    doctest.testmod() # pragma: no cover
