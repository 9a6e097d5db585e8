"""
Python library implementing a two-party oblivious pseudorandom function
(OPRF) over the ristretto255 prime-order group.

This module gives users direct access to the individual modules, each of
which is dedicated to one layer of the protocol, and exports the protocol
operations and key material at the top level.
"""
from oprf import errors
from oprf import randomness
from oprf import ristretto
from oprf import hashing
from oprf import keys
from oprf import protocol
from oprf.errors import (
    OPRFError, RandomnessError, MappingError, InversionError,
    DecodingError, DerivationError
)
from oprf.keys import KeyPair
from oprf.protocol import (
    blind, blind_constant_time, evaluate, finalize, compute, OUTPUT_LEN
)
