"""
Exceptions raised by the protocol operations. Every exception defined
here is a subclass of :obj:`OPRFError`, so callers can catch all protocol
failures at once.
"""

class OPRFError(Exception):
    """
    Base class for all exceptions raised by this library.
    """

class RandomnessError(OPRFError):
    """
    The randomness provider failed or returned a value of the wrong length.
    There is never a fallback to another source of randomness.
    """

class MappingError(OPRFError):
    """
    A byte string could not be mapped to a group element. The mapping is
    deterministic, so retrying with the same input and the same domain
    separation tag fails again.
    """

class InversionError(OPRFError, ValueError):
    """
    A scalar corresponding to zero was supplied where an invertible scalar
    is required.
    """

class DecodingError(OPRFError, ValueError):
    """
    An untrusted byte string is not the canonical encoding of a valid
    point or scalar.
    """

class DerivationError(OPRFError):
    """
    Deterministic key derivation did not produce a nonzero scalar.
    """
