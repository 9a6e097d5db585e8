"""
.. module:: ristretto

ristretto module
================

This module exports the classes :obj:`~oprf.ristretto.point` and
:obj:`~oprf.ristretto.scalar` for representing elements and scalars of the
prime-order ristretto255 group. It also exports the two wrapper
classes/namespaces :obj:`~oprf.ristretto.python` and
:obj:`~oprf.ristretto.sodium` that encapsulate pure-Python and
shared/dynamic library variants of the above (respectively), together with
the small set of low-level operations the protocol needs.

* Under all conditions, the wrapper class :obj:`~oprf.ristretto.python` is
  defined and delegates curve arithmetic to the
  `ge25519 <https://pypi.org/project/ge25519>`__ library.

* If a shared/dynamic library instance of the
  `libsodium <https://doc.libsodium.org>`__ library is found on the system
  (and successfully loaded at the time this module is imported) or the
  optional `rbcl <https://pypi.org/project/rbcl>`__ package is installed,
  then the wrapper class :obj:`~oprf.ristretto.sodium` is defined.
  Otherwise, the exported variable ``sodium`` is assigned ``None``.

* If a dynamic/shared library instance is loaded, the classes exported by
  this module correspond to the variants defined within
  :obj:`~oprf.ristretto.sodium`. Otherwise, they correspond to the
  variants defined within :obj:`~oprf.ristretto.python`.

Both variants accept and emit the same 32-byte encodings. Wide reduction of
scalars and validation of untrusted encodings are performed by shared
helpers, so the two variants reject exactly the same inputs.
"""
from __future__ import annotations
from typing import Any, NoReturn, Union
import doctest
import logging
import platform
import os
import hashlib
import ctypes
import ctypes.util
import ge25519

from oprf.errors import InversionError, DecodingError

logger = logging.getLogger(__name__)

#
# Attempt to load rbcl. If no local libsodium shared/dynamic library file
# is found, only pure-Python implementations of the operations will be
# available.
#

try: # pragma: no cover
    import rbcl # pylint: disable=E0401

    # Add synonyms to deal with variations in capitalization of function names.
    setattr(
        rbcl,
        'crypto_core_ristretto255_scalarbytes',
        lambda: rbcl.crypto_core_ristretto255_SCALARBYTES
    )
    setattr(
        rbcl,
        'crypto_core_ristretto255_bytes',
        lambda: rbcl.crypto_core_ristretto255_BYTES
    )
except ImportError: # pragma: no cover
    rbcl = None

POINT_LEN = 32
SCALAR_LEN = 32
UNIFORM_LEN = 64 # Width of the uniform byte strings mapped to points and scalars.

ORDER = pow(2, 252) + 27742317777372353535851937790883648493

#
# Helpers shared by all variants.
#

def _zero(n: bytes) -> bool:
    """
    Determine whether every byte in the bytes-like object is zero without
    branching on the individual bytes.
    """
    d = 0
    for b in n:
        d |= b
    return ((d - 1) >> 8) % 2 == 1

_sc25519_is_canonical_L = [ # 2^252+27742317777372353535851937790883648493.
    0xed, 0xd3, 0xf5, 0x5c, 0x1a, 0x63, 0x12, 0x58, 0xd6, 0x9c, 0xf7,
    0xa2, 0xde, 0xf9, 0xde, 0x14, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00,
    0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x10
]

def _sc25519_is_canonical(s: bytes) -> bool:
    """
    Confirm that the bytes-like object represents a canonical
    scalar (*i.e.*, a little-endian integer less than the group order).
    """
    c = 0
    n = 1
    for i in range(31, -1, -1):
        c |= ((s[i] - _sc25519_is_canonical_L[i]) >> 8) & n
        n &= ((s[i] ^ _sc25519_is_canonical_L[i]) - 1) >> 8
    return c != 0

def _sc25519_reduce(s: bytes) -> bytes:
    """
    Reduce a 64-byte little-endian integer modulo the group order.
    """
    return (int.from_bytes(s, 'little') % ORDER).to_bytes(32, 'little')

def _sc25519_mul(a: bytes, b: bytes) -> bytes:
    """
    Multiply the two scalars represented by the bytes-like objects.
    """
    (a, b) = (int.from_bytes(a, 'little'), int.from_bytes(b, 'little'))
    return ((a * b) % ORDER).to_bytes(32, 'little')

def _ristretto255_is_canonical(s: bytes) -> bool:
    """
    Confirm that the bytes-like object represents a canonical
    Ristretto point.
    """
    c = ((s[31] & 0x7f) ^ 0x7f) % 256
    for i in range(30, 0, -1):
        c |= (s[i] ^ 0xff) % 256
    c = (c - 1) >> 8
    d = ((0xed - 1 - s[0]) >> 8) % 256
    return (1 - (((c & d) | s[0]) & 1)) == 1

def red(s: bytes) -> bytes:
    """
    Return the scalar obtained by reducing a 64-byte vector (normally
    obtained from a randomness source or a hash function) modulo the group
    order. Using twice the width of the order makes the bias of the
    resulting distribution negligible.

    >>> int.from_bytes(red(bytes([255] * 64)), 'little') == (pow(2, 512) - 1) % ORDER
    True
    """
    if len(s) != UNIFORM_LEN:
        raise ValueError('wide reduction requires a 64-byte vector')
    return _sc25519_reduce(s)

def val(p: bytes) -> bool:
    """
    Confirm that a bytes-like object is the canonical encoding of a valid
    point that is not the identity.

    >>> val(bytes.fromhex(
    ...     'e2f2ae0a6abc4e71a884a961c500515f58e30b6aa582dd8db6a65945e08d2d76'
    ... ))
    True
    >>> val(bytes(32))
    False
    >>> val(bytes([1] + [0] * 31))
    False
    """
    if len(p) != POINT_LEN:
        return False

    return (
        _ristretto255_is_canonical(p) and
        not _zero(p) and
        ge25519.ge25519_p3.from_bytes_ristretto255(bytes(p)) is not None
    )

class python:
    """
    Wrapper class for pure-Python implementations of primitive operations.

    This class encapsulates pure-Python variants of the low-level operations
    and of both classes exported by this module:
    :obj:`python.pnt <pnt>`, :obj:`python.bas <bas>`,
    :obj:`python.mul <mul>`, :obj:`python.inv <inv>`,
    :obj:`python.smu <smu>`,
    :obj:`python.point <oprf.ristretto.python.point>`, and
    :obj:`python.scalar <oprf.ristretto.python.scalar>`.

    >>> s = python.scalar.from_int(7)
    >>> p = python.point.base(s)
    >>> python.mul(python.inv(s), p) == python.bas(python.scalar.from_int(1))
    True
    """
    @staticmethod
    def pnt(h: bytes) -> bytes:
        """
        Return the point obtained by applying the one-way map to a 64-byte
        vector (normally obtained via hashing).

        >>> python.pnt(hashlib.sha512('123'.encode()).digest()).hex()
        '047f39a6c6dd156531a25fa605f017d4bec13b0b6c42f0e9b641c8ee73359c5f'
        """
        return bytes(ge25519.ge25519_p3.from_hash_ristretto255(bytes(h)))

    @staticmethod
    def bas(s: bytes) -> bytes:
        """
        Return the base point multiplied by the supplied scalar.

        >>> python.bas(python.scalar.from_int(1)).hex()
        'e2f2ae0a6abc4e71a884a961c500515f58e30b6aa582dd8db6a65945e08d2d76'
        """
        t = bytearray(s)
        t[31] &= 127

        return ge25519.ge25519_p3.scalar_mult_base(t).to_bytes_ristretto255()

    @staticmethod
    def mul(s: bytes, p: bytes) -> bytes:
        """
        Multiply the point by the supplied scalar and return the result.
        The point must already have been validated (see :obj:`val`).

        >>> p = python.pnt(hashlib.sha512('123'.encode()).digest())
        >>> s = bytes.fromhex(
        ...     '35c141f1c2c43543de9d188805a210abca3cd39a1e986304991ceded42b11709'
        ... )
        >>> python.mul(s, p).hex()
        '183a06e0fe6af5d7913afb40baefc4dd52ae718fee77a3a0af8777c89fe16210'
        """
        p3 = ge25519.ge25519_p3.from_bytes_ristretto255(bytes(p))
        if not _ristretto255_is_canonical(p) or p3 is None:
            raise DecodingError('point is not a canonical ristretto255 encoding')

        t = bytearray(s)
        t[31] &= 127

        return p3.scalar_mult(t).to_bytes_ristretto255()

    @staticmethod
    def inv(s: bytes) -> bytes:
        """
        Return the inverse of a nonzero scalar (modulo the group order).

        >>> s = python.scalar.from_int(5)
        >>> python.smu(python.inv(s), s) == python.scalar.from_int(1)
        True
        """
        return pow(int.from_bytes(s, 'little'), ORDER - 2, ORDER).to_bytes(32, 'little')

    @staticmethod
    def smu(s: bytes, t: bytes) -> bytes:
        """
        Return scalar multiplied by another scalar.

        >>> s = python.scalar.from_int(3)
        >>> t = python.scalar.from_int(4)
        >>> python.smu(s, t) == python.scalar.from_int(12)
        True
        """
        return _sc25519_mul(s, t)

#
# Attempt to load primitives from libsodium, if it is present;
# otherwise, use the rbcl library, if it is present. Otherwise,
# assign ``None`` to ``sodium``.
#

def _call_variant_unwrapped(length, function, x=None, y=None):
    """
    Wrapper to invoke external function.
    """
    buf = ctypes.create_string_buffer(length)
    if y is not None:
        function(buf, x, y)
    elif x is not None:
        function(buf, x)
    else:
        function(buf)
    return buf.raw

def _call_variant_wrapped(_, function, x=None, y=None): # pragma: no cover
    """
    Wrapper to invoke external (wrapped) function.
    """
    if y is not None:
        return function(x, y)
    if x is not None:
        return function(x)
    return function()

def _load_sodium():
    """
    Locate a libsodium shared/dynamic library or, failing that, the rbcl
    bindings. Return the library and the calling convention it requires.
    """
    lib = None
    call = _call_variant_unwrapped

    # Attempt to load libsodium shared/dynamic library file.
    xdll = ctypes.cdll if platform.system() != 'Windows' else ctypes.windll
    libf = ctypes.util.find_library('sodium') or ctypes.util.find_library('libsodium')
    if libf is not None:
        try:
            lib = xdll.LoadLibrary(libf)
        except OSError: # pragma: no cover
            lib = None

    if lib is None: # pragma: no cover
        # Perform explicit search in case `ld` is not present in environment.
        libf = 'libsodium.so' if platform.system() != 'Windows' else 'libsodium.dll'
        for var in ['PATH', 'LD_LIBRARY_PATH']:
            for path in os.environ.get(var, '').split(os.pathsep):
                if path == '':
                    continue
                try:
                    lib = ctypes.cdll.LoadLibrary(path + os.path.sep + libf)
                    break
                except OSError:
                    continue
            if lib is not None:
                break

    # Default to bindings exported by the rbcl library if the above attempts
    # failed and rbcl is available.
    if lib is None and rbcl is not None: # pragma: no cover
        return (rbcl, _call_variant_wrapped)

    if lib is None:
        return (None, None)

    # Add method variants that are not present in libsodium.
    def _crypto_scalarmult_ristretto255_allow_scalar_zero(buf, s, p):
        """
        Variant of scalar-point multiplication function that permits
        a scalar corresponding to the zero residue.
        """
        r = lib.crypto_scalarmult_ristretto255(buf, s, p)

        if (1 - _zero(s)) * int(r == -1):
            raise DecodingError('libsodium rejected the point or scalar')

        return buf

    def _crypto_scalarmult_ristretto255_base_allow_scalar_zero(buf, s):
        """
        Variant of base point multiplication function that permits
        a scalar corresponding to the zero residue.
        """
        r = lib.crypto_scalarmult_ristretto255_base(buf, s)

        if (1 - _zero(s)) * int(r == -1): # pragma: no cover
            raise DecodingError('libsodium rejected the scalar')

        return buf

    setattr(
        lib,
        'crypto_scalarmult_ristretto255_allow_scalar_zero',
        _crypto_scalarmult_ristretto255_allow_scalar_zero
    )
    setattr(
        lib,
        'crypto_scalarmult_ristretto255_base_allow_scalar_zero',
        _crypto_scalarmult_ristretto255_base_allow_scalar_zero
    )

    return (lib, call)

(_sodium, _call_variant) = _load_sodium()

if _sodium is not None and all(
        hasattr(_sodium, name)
        for name in [
            'crypto_core_ristretto255_bytes',
            'crypto_core_ristretto255_scalarbytes',
            'crypto_core_ristretto255_scalar_invert',
            'crypto_core_ristretto255_scalar_mul',
            'crypto_core_ristretto255_from_hash',
            'crypto_scalarmult_ristretto255_base',
            'crypto_scalarmult_ristretto255'
        ]
    ):
    # Exported symbol.
    class sodium:
        """
        Wrapper class for binary implementations of primitive operations.

        When this module is imported, it makes a number of attempts to
        locate an instance of the shared/dynamic library file of the
        `libsodium <https://doc.libsodium.org>`__ library on the host
        system. The sequence of attempts is listed below, in order.

        1. It uses ``ctypes.util.find_library`` to look for ``'sodium'`` or
           ``'libsodium'``.

        2. It attempts to find a file ``libsodium.so`` or ``libsodium.dll`` in
           the paths specified by the ``PATH`` and ``LD_LIBRARY_PATH``
           environment variables.

        3. If the `rbcl <https://pypi.org/project/rbcl>`__ package is
           installed, it reverts to the compiled subset of libsodium included
           in that package.

        If all of the above fail, then :obj:`sodium` is assigned the value
        ``None`` and all classes exported by this module default to their
        pure-Python variants (*i.e.*, those encapsulated within :obj:`python`).

        >>> s = sodium.scalar.from_int(7)
        >>> sodium.mul(sodium.inv(s), sodium.bas(s)) == python.bas(python.scalar.from_int(1))
        True
        """
        _lib = _sodium
        _call = _call_variant

        @staticmethod
        def pnt(h: bytes) -> bytes:
            """
            Return the point obtained by applying the one-way map to a 64-byte
            vector (normally obtained via hashing).

            >>> sodium.pnt(hashlib.sha512('123'.encode()).digest()).hex()
            '047f39a6c6dd156531a25fa605f017d4bec13b0b6c42f0e9b641c8ee73359c5f'
            """
            return sodium._call(
                sodium._lib.crypto_core_ristretto255_bytes(),
                sodium._lib.crypto_core_ristretto255_from_hash,
                bytes(h)
            )

        @staticmethod
        def bas(s: bytes) -> bytes:
            """
            Return the base point multiplied by the supplied scalar.

            >>> sodium.bas(sodium.scalar.from_int(1)).hex()
            'e2f2ae0a6abc4e71a884a961c500515f58e30b6aa582dd8db6a65945e08d2d76'
            """
            return sodium._call(
                sodium._lib.crypto_core_ristretto255_bytes(),
                sodium._lib.crypto_scalarmult_ristretto255_base_allow_scalar_zero,
                bytes(s)
            )

        @staticmethod
        def mul(s: bytes, p: bytes) -> bytes:
            """
            Multiply a point by a scalar and return the result.

            >>> p = sodium.pnt(hashlib.sha512('123'.encode()).digest())
            >>> s = bytes.fromhex(
            ...     '35c141f1c2c43543de9d188805a210abca3cd39a1e986304991ceded42b11709'
            ... )
            >>> sodium.mul(s, p).hex()
            '183a06e0fe6af5d7913afb40baefc4dd52ae718fee77a3a0af8777c89fe16210'
            """
            return sodium._call(
                sodium._lib.crypto_core_ristretto255_bytes(),
                sodium._lib.crypto_scalarmult_ristretto255_allow_scalar_zero,
                bytes(s), bytes(p)
            )

        @staticmethod
        def inv(s: bytes) -> bytes:
            """
            Return the inverse of a nonzero scalar (modulo the group order).

            >>> s = sodium.scalar.from_int(5)
            >>> sodium.smu(sodium.inv(s), s) == sodium.scalar.from_int(1)
            True
            """
            return sodium._call(
                sodium._lib.crypto_core_ristretto255_scalarbytes(),
                sodium._lib.crypto_core_ristretto255_scalar_invert,
                bytes(s)
            )

        @staticmethod
        def smu(s: bytes, t: bytes) -> bytes:
            """
            Return the product of two scalars.

            >>> s = sodium.scalar.from_int(3)
            >>> t = sodium.scalar.from_int(4)
            >>> sodium.smu(s, t) == sodium.scalar.from_int(12)
            True
            """
            return sodium._call(
                sodium._lib.crypto_core_ristretto255_scalarbytes(),
                sodium._lib.crypto_core_ristretto255_scalar_mul,
                bytes(s), bytes(t)
            )

else:
    # Exported symbol.
    sodium = None # pragma: no cover

#
# Dedicated point and scalar data structures derived from `bytes`.
#

for _implementation in [python] + ([sodium] if sodium is not None else []):
    # pylint: disable=cell-var-from-loop
    class point(bytes): # pylint: disable=E0102
        """
        Class for representing a group element by its 32-byte canonical
        encoding. Because this class is derived from :obj:`bytes`, it
        inherits methods such as :obj:`bytes.hex` and :obj:`bytes.fromhex`.

        >>> p = point.from_uniform(hashlib.sha512('123'.encode()).digest())
        >>> p.hex()
        '047f39a6c6dd156531a25fa605f017d4bec13b0b6c42f0e9b641c8ee73359c5f'
        >>> point.decode(p.to_bytes()) == p
        True
        """
        _implementation = _implementation

        @classmethod
        def from_uniform(cls, bs: bytes) -> point:
            """
            Return the point obtained by applying the one-way map to a
            64-byte vector that is indistinguishable from uniform.

            >>> point.from_uniform(hashlib.sha512('123'.encode()).digest()).hex()
            '047f39a6c6dd156531a25fa605f017d4bec13b0b6c42f0e9b641c8ee73359c5f'
            """
            if len(bs) != UNIFORM_LEN:
                raise ValueError('one-way map requires a 64-byte vector')
            return bytes.__new__(cls, cls._implementation.pnt(bs))

        @classmethod
        def base(cls, s: scalar) -> point:
            """
            Return the base point multiplied by the supplied scalar.

            >>> point.base(scalar.from_int(1)).hex()
            'e2f2ae0a6abc4e71a884a961c500515f58e30b6aa582dd8db6a65945e08d2d76'
            """
            return bytes.__new__(cls, cls._implementation.bas(s))

        @classmethod
        def decode(cls, bs: bytes) -> point:
            """
            Return the point corresponding to an untrusted bytes-like object,
            raising :obj:`~oprf.errors.DecodingError` if the object is not the
            canonical encoding of a valid point or if it encodes the identity.

            >>> point.decode(bytes(32))
            Traceback (most recent call last):
              ...
            oprf.errors.DecodingError: not a valid ristretto255 point encoding
            """
            if not isinstance(bs, (bytes, bytearray)) or not val(bs):
                raise DecodingError('not a valid ristretto255 point encoding')
            return bytes.__new__(cls, bytes(bs))

        def __new__(cls, bs: bytes) -> point:
            """
            Return a point object corresponding to the supplied bytes-like
            object. No checking is performed to confirm that the bytes-like
            object is a valid point; use :obj:`decode` for untrusted input.
            """
            return bytes.__new__(cls, bs)

        def is_identity(self: point) -> bool:
            """
            Determine whether this instance encodes the identity element
            without branching on its individual bytes.

            >>> point.base(scalar.from_int(0)).is_identity()
            True
            >>> point.base(scalar.from_int(1)).is_identity()
            False
            """
            return _zero(self)

        def __mul__(self: point, other: Any) -> NoReturn:
            """
            A point cannot be a left-hand argument for a multiplication operation.

            >>> point.base(scalar.from_int(1)) * scalar.from_int(2)
            Traceback (most recent call last):
              ...
            TypeError: point must be on right-hand side of multiplication operator
            """
            raise TypeError('point must be on right-hand side of multiplication operator')

        def __rmul__(self: point, other: Any) -> NoReturn:
            """
            This functionality is implemented exclusively in the method
            :obj:`scalar.__mul__`, as that method pre-empts this method
            when the second argument has the correct type.

            >>> 2 * point.base(scalar.from_int(1))
            Traceback (most recent call last):
              ...
            TypeError: point can only be multiplied by a scalar
            """
            raise TypeError('point can only be multiplied by a scalar')

        def to_bytes(self: point) -> bytes:
            """
            Return the canonical 32-byte encoding of this instance.

            >>> p = point.base(scalar.from_int(3))
            >>> p.to_bytes() == p
            True
            """
            return bytes(self)

    class scalar(bytes):
        """
        Class for representing a scalar by its 32-byte little-endian
        encoding. Because this class is derived from :obj:`bytes`, it
        inherits methods such as :obj:`bytes.hex` and :obj:`bytes.fromhex`.

        >>> s = scalar.from_int(2)
        >>> s.hex()
        '0200000000000000000000000000000000000000000000000000000000000000'
        >>> scalar.decode(s) == s
        True
        """
        _implementation = _implementation

        @classmethod
        def from_uniform(cls, bs: bytes) -> scalar:
            """
            Return the scalar obtained by reducing a 64-byte vector modulo
            the group order.

            >>> int(scalar.from_uniform(bytes(63) + bytes([1]))) == pow(2, 504) % ORDER
            True
            """
            return bytes.__new__(cls, red(bs))

        @classmethod
        def from_int(cls, i: int) -> scalar:
            """
            Construct an instance from its integer (*i.e.*, residue) representation.

            >>> p = point.base(scalar.from_int(1))
            >>> scalar.from_int(2) * p == scalar.from_int(-1) * (scalar.from_int(-2) * p)
            True
            """
            return bytes.__new__(cls, (i % ORDER).to_bytes(32, 'little'))

        @classmethod
        def decode(cls, bs: bytes) -> scalar:
            """
            Return the scalar corresponding to an untrusted bytes-like object,
            raising :obj:`~oprf.errors.DecodingError` if it is not a canonical
            encoding.

            >>> scalar.decode(bytes([255] * 32))
            Traceback (most recent call last):
              ...
            oprf.errors.DecodingError: not a canonical scalar encoding
            """
            if (
                not isinstance(bs, (bytes, bytearray)) or
                len(bs) != SCALAR_LEN or
                not _sc25519_is_canonical(bs)
            ):
                raise DecodingError('not a canonical scalar encoding')
            return bytes.__new__(cls, bytes(bs))

        def __new__(cls, bs: bytes) -> scalar:
            """
            Return a scalar object corresponding to the supplied bytes-like
            object. No checking is performed; use :obj:`decode` for untrusted
            input.
            """
            return bytes.__new__(cls, bs)

        def is_zero(self: scalar) -> bool:
            """
            Determine whether this instance corresponds to the zero residue
            without branching on its individual bytes.

            >>> scalar.from_int(0).is_zero()
            True
            >>> scalar.from_int(ORDER + 1).is_zero()
            False
            """
            return _zero(self)

        def __invert__(self: scalar) -> scalar:
            """
            Return the inverse of this instance (modulo the group order).

            >>> s = scalar.from_int(9)
            >>> p = point.base(scalar.from_int(1))
            >>> ((~s) * (s * p)) == p
            True

            The scalar corresponding to the zero residue cannot be inverted.

            >>> ~scalar.from_int(0)
            Traceback (most recent call last):
              ...
            oprf.errors.InversionError: cannot invert scalar corresponding to zero
            """
            if _zero(self):
                raise InversionError('cannot invert scalar corresponding to zero')

            return self._implementation.scalar(self._implementation.inv(self))

        def __mul__(self: scalar, other: Union[scalar, point]) -> Union[scalar, point]:
            """
            Multiply the supplied scalar or point by this instance.

            >>> p = point.from_uniform(hashlib.sha512('123'.encode()).digest())
            >>> s = scalar(bytes.fromhex(
            ...     '35c141f1c2c43543de9d188805a210abca3cd39a1e986304991ceded42b11709'
            ... ))
            >>> (s * p).hex()
            '183a06e0fe6af5d7913afb40baefc4dd52ae718fee77a3a0af8777c89fe16210'
            >>> isinstance(s * s, scalar)
            True

            Any attempt to multiply a value or object of an incompatible type by
            this instance raises an exception.

            >>> s * 2
            Traceback (most recent call last):
              ...
            TypeError: multiplication by a scalar is defined only for scalars and points
            """
            if (
                isinstance(other, python.scalar) or
                (sodium is not None and isinstance(other, sodium.scalar))
            ):
                return self._implementation.scalar(self._implementation.smu(self, other))

            if (
                isinstance(other, python.point) or
                (sodium is not None and isinstance(other, sodium.point))
            ):
                return self._implementation.point(self._implementation.mul(self, other))

            raise TypeError(
                'multiplication by a scalar is defined only for scalars and points'
            )

        def __rmul__(self: scalar, other: Any) -> NoReturn:
            """
            A scalar cannot be on the right-hand side of a non-scalar.

            >>> 2 * scalar.from_int(1)
            Traceback (most recent call last):
              ...
            TypeError: scalar must be on left-hand side of multiplication operator
            """
            raise TypeError(
                'scalar must be on left-hand side of multiplication operator'
            )

        def __int__(self: scalar) -> int:
            """
            Return the integer (*i.e.*, least nonnegative residue) representation
            of this instance.

            >>> s = scalar.from_int(11)
            >>> int(s * (~s))
            1
            """
            return int.from_bytes(self, 'little')

        def to_bytes(self: scalar) -> bytes:
            """
            Return the 32-byte encoding of this instance.

            >>> s = scalar.from_int(4)
            >>> s.to_bytes() == s
            True
            """
            return bytes(self)

    # Encapsulate classes for this implementation, regardless of which are
    # exported as the unqualified symbols.
    _implementation.point = point
    _implementation.scalar = scalar

logger.debug(
    'ristretto255 backend: %s',
    'sodium' if sodium is not None else 'python (ge25519)'
)

# Redefine top-level wrapper classes to ensure that they appear at the end of
# the auto-generated documentation.
python = python # pylint: disable=self-assigning-variable
sodium = sodium # pylint: disable=self-assigning-variable

if __name__ == '__main__':
    doctest.testmod() # pragma: no cover
