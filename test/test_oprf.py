"""
Test suite containing functional unit tests for the protocol operations in
the :obj:`oprf.protocol` module, covering correctness, determinism, key
separation, output width, and rejection of invalid inputs.
"""
# pylint: disable=C0103,C0116
from unittest import TestCase, mock
from concurrent.futures import ThreadPoolExecutor
import hashlib
import importlib
import importlib.util
from bitlist import bitlist
from fountains import fountains

import oprf
from oprf import ristretto
from oprf.errors import (
    OPRFError, RandomnessError, InversionError, DecodingError, MappingError
)
from oprf.hashing import hash_to_group, HASH_TO_GROUP_DST
from oprf.keys import KeyPair
from oprf.protocol import (
    blind, blind_constant_time, evaluate, finalize, compute, OUTPUT_LEN
)

TRIALS_PER_TEST = 4
INPUTS = [b'', b'password123', b'testinput', bytes(range(256)) * 20]

def deterministic(seed: bytes):
    """
    Return a randomness provider that draws reproducible bytes from a
    fountains stream.
    """
    counter = [0]
    def rng(length):
        (bs,) = fountains(length, seed=seed + counter[0].to_bytes(4, 'little'), limit=1)
        counter[0] += 1
        return bs
    return rng

def run(key, x, blinding=blind):
    (r, blinded) = blinding(x)
    evaluated = evaluate(key.private, blinded.to_bytes())
    return finalize(r, evaluated.to_bytes())

class Test_namespace(TestCase):
    """
    Check that the package exports the protocol operations.
    """
    def test_init(self):
        init = importlib.import_module('oprf.__init__')
        self.assertTrue({
            'blind', 'blind_constant_time', 'evaluate', 'finalize', 'compute',
            'KeyPair', 'OUTPUT_LEN'
        }.issubset(init.__dict__.keys()))

    def test_modules(self):
        # No module may share the package's name, so that modules can be
        # run directly as scripts to execute their doctests.
        init = importlib.import_module('oprf.__init__')
        self.assertTrue('protocol' in init.__dict__)
        self.assertIsNone(importlib.util.find_spec('oprf.oprf'))

    def test_errors(self):
        for error in [
                oprf.RandomnessError, oprf.MappingError, oprf.InversionError,
                oprf.DecodingError, oprf.DerivationError
            ]:
            self.assertTrue(issubclass(error, OPRFError))

class Test_protocol(TestCase):
    """
    Tests of complete protocol runs.
    """
    @classmethod
    def setUpClass(cls):
        cls.key = KeyPair.generate()
        cls.key2 = KeyPair.generate()

    def test_correctness(self):
        for x in INPUTS:
            self.assertEqual(run(self.key, x), compute(self.key.private, x))

    def test_correctness_direct_definition(self):
        x = b'testinput'
        direct = self.key.private * hash_to_group(x)
        expected = hashlib.sha512(direct).digest()[:32]
        self.assertEqual(run(self.key, x), expected)

    def test_determinism(self):
        outputs = {run(self.key, b'password123') for _ in range(TRIALS_PER_TEST)}
        self.assertEqual(len(outputs), 1)

    def test_key_separation(self):
        for x in INPUTS:
            self.assertNotEqual(run(self.key, x), run(self.key2, x))

    def test_key_separation_same_blinding(self):
        (r, blinded) = blind(b'password123')
        out1 = finalize(r, evaluate(self.key.private, blinded))
        out2 = finalize(r, evaluate(self.key2.private, blinded))
        self.assertNotEqual(out1, out2)
        self.assertEqual(len(out1), 32)

    def test_input_separation(self):
        self.assertNotEqual(run(self.key, b'password123'), run(self.key, b'password124'))

    def test_output_width(self):
        for x in INPUTS:
            output = run(self.key, x)
            self.assertTrue(type(output) is bytes) # pylint: disable=C0123
            self.assertEqual(len(output), OUTPUT_LEN)
            self.assertEqual(OUTPUT_LEN, 32)

    def test_empty_input(self):
        output = run(self.key, b'')
        self.assertEqual(len(output), 32)
        self.assertEqual(output, compute(self.key.private, b''))

    def test_end_to_end_example(self):
        k1 = KeyPair.derive(bytes([1] * 32), b'K1')
        k2 = KeyPair.derive(bytes([2] * 32), b'K2')
        o1 = run(k1, b'password123')
        o2 = run(k2, b'password123')
        self.assertEqual(len(o1), 32)
        self.assertEqual(len(o2), 32)
        self.assertNotEqual(o1, o2)
        self.assertEqual(o1, run(k1, b'password123'))

    def test_intermediates_vary(self):
        (r0, blinded0) = blind(b'password123')
        (r1, blinded1) = blind(b'password123')
        self.assertNotEqual(r0, r1)
        self.assertNotEqual(blinded0, blinded1)
        evaluated0 = evaluate(self.key.private, blinded0)
        evaluated1 = evaluate(self.key.private, blinded1)
        self.assertNotEqual(evaluated0, evaluated1)
        self.assertEqual(finalize(r0, evaluated0), finalize(r1, evaluated1))

    def test_blinded_differs_from_unblinded(self):
        (_, blinded) = blind(b'password123')
        self.assertNotEqual(blinded, hash_to_group(b'password123'))

    def test_constant_time_correctness(self):
        for x in INPUTS:
            self.assertEqual(run(self.key, x, blind_constant_time), compute(self.key.private, x))

    def test_constant_time_agrees_with_blind(self):
        for x in INPUTS:
            self.assertEqual(
                blind_constant_time(x, deterministic(b'ct')),
                blind(x, deterministic(b'ct'))
            )

    def test_constant_time_pad_to(self):
        (r, blinded) = blind_constant_time(b'password123', pad_to=64)
        self.assertEqual(
            finalize(r, evaluate(self.key.private, blinded)),
            compute(self.key.private, b'password123')
        )

    def test_dst(self):
        dst = b'HashToGroup-another-application'
        (r, blinded) = blind(b'password123', dst=dst)
        output = finalize(r, evaluate(self.key.private, blinded))
        self.assertEqual(output, compute(self.key.private, b'password123', dst))
        self.assertNotEqual(output, compute(self.key.private, b'password123', HASH_TO_GROUP_DST))

    def test_concurrent(self):
        with ThreadPoolExecutor(max_workers=4) as executor:
            outputs = list(executor.map(
                lambda _: run(self.key, b'password123'),
                range(TRIALS_PER_TEST)
            ))
        self.assertEqual(set(outputs), {compute(self.key.private, b'password123')})

class Test_blind(TestCase):
    """
    Tests of the client-side blinding operation.
    """
    def test_types(self):
        (r, blinded) = blind(b'abc')
        self.assertTrue(isinstance(r, ristretto.scalar))
        self.assertTrue(isinstance(blinded, ristretto.point))
        self.assertFalse(r.is_zero())
        self.assertTrue(ristretto.val(blinded))

    def test_definition(self):
        rng = deterministic(b'blind')
        (r, blinded) = blind(b'abc', rng)
        expected = ristretto.scalar.from_uniform(deterministic(b'blind')(64))
        self.assertEqual(r, expected)
        self.assertEqual(blinded, expected * hash_to_group(b'abc'))

    def test_reproducible(self):
        self.assertEqual(blind(b'abc', deterministic(b'x')), blind(b'abc', deterministic(b'x')))

    def test_known_answer(self):
        # Test vector for ristretto255-SHA512 in Appendix A.1.1 of RFC 9497.
        r = bytes.fromhex('64d37aed22a27f5191de1c1d69fadb899d8862b58eb4220029e036ec4c1f6706')
        expected = '609a0ae68c15a3cf6903766461307e5c8bb2f95e7e6550e1ffa2dc99e412803c'
        for blinding in [blind, blind_constant_time]:
            (s, blinded) = blinding(b'\x00', lambda n: r + bytes(n - len(r)))
            self.assertEqual(s.hex(), r.hex())
            self.assertEqual(blinded.hex(), expected)

    def test_randomness_error(self):
        def unavailable(length):
            raise OSError('no entropy')
        self.assertRaises(RandomnessError, lambda: blind(b'abc', unavailable))
        self.assertRaises(RandomnessError, lambda: blind_constant_time(b'abc', unavailable))

    def test_mapping_error(self):
        self.assertRaises(MappingError, lambda: blind(b'abc', dst=b''))
        self.assertRaises(MappingError, lambda: blind_constant_time(b'abc', dst=b''))

class Test_evaluate(TestCase):
    """
    Tests of the server-side evaluation operation.
    """
    @classmethod
    def setUpClass(cls):
        cls.key = KeyPair.generate()

    def test_definition(self):
        (_, blinded) = blind(b'abc')
        self.assertEqual(evaluate(self.key.private, blinded), self.key.private * blinded)

    def test_deterministic(self):
        (_, blinded) = blind(b'abc')
        self.assertEqual(
            evaluate(self.key.private, blinded),
            evaluate(self.key.private, blinded)
        )

    def test_invalid_points(self):
        for bs in [
                bytes(32),            # Identity.
                bytes([1] + [0] * 31), # Not canonical.
                bytes([255] * 32),     # Out of range.
                bytes(31),
                b''
            ]:
            self.assertRaises(DecodingError, lambda: evaluate(self.key.private, bs)) # pylint: disable=W0640

    def test_invalid_points_untrusted(self):
        for bs in fountains(32, seed=b'evaluate', limit=TRIALS_PER_TEST * 4):
            if not ristretto.val(bs):
                self.assertRaises(DecodingError, lambda: evaluate(self.key.private, bs)) # pylint: disable=W0640

    def test_rejected_before_multiplication(self):
        implementation = ristretto.scalar._implementation # pylint: disable=W0212
        with mock.patch.object(
                implementation, 'mul', side_effect=AssertionError('multiplied')
            ) as mul:
            self.assertRaises(
                DecodingError,
                lambda: evaluate(self.key.private, bytes([1] + [0] * 31))
            )
            mul.assert_not_called()

class Test_finalize(TestCase):
    """
    Tests of the client-side finalization operation.
    """
    @classmethod
    def setUpClass(cls):
        cls.key = KeyPair.generate()

    def test_zero_blinding_factor(self):
        (_, blinded) = blind(b'abc')
        evaluated = evaluate(self.key.private, blinded)
        self.assertRaises(InversionError, lambda: finalize(ristretto.scalar.from_int(0), evaluated))
        self.assertRaises(
            InversionError,
            lambda: finalize(ristretto.scalar.from_int(ristretto.ORDER), evaluated)
        )

    def test_invalid_evaluated_element(self):
        (r, _) = blind(b'abc')
        self.assertRaises(DecodingError, lambda: finalize(r, bytes(32)))
        self.assertRaises(DecodingError, lambda: finalize(r, bytes([255] * 32)))

    def test_rejected_before_multiplication(self):
        (r, _) = blind(b'abc')
        implementation = ristretto.scalar._implementation # pylint: disable=W0212
        with mock.patch.object(
                implementation, 'mul', side_effect=AssertionError('multiplied')
            ) as mul:
            for bs in [bytes(32), bytes([1] + [0] * 31), bytes([255] * 32), bytes(31)]:
                self.assertRaises(DecodingError, lambda: finalize(r, bs)) # pylint: disable=W0640
            mul.assert_not_called()

    def test_wrong_blinding_factor(self):
        (r, blinded) = blind(b'abc')
        evaluated = evaluate(self.key.private, blinded)
        output = finalize(r, evaluated)
        self.assertNotEqual(finalize(r * r, evaluated), output)

class Test_output_distribution(TestCase):
    """
    Coarse check that output bits are balanced across distinct inputs.
    """
    def test_bits_balanced(self):
        key = KeyPair.derive(bytes(32), b'distribution')
        bits = []
        for bs in fountains(16, seed=b'distribution', limit=16):
            bits.extend(list(bitlist(compute(key.private, bs))))
        self.assertEqual(len(bits), 16 * OUTPUT_LEN * 8)
        self.assertTrue(0.4 * len(bits) < sum(bits) < 0.6 * len(bits))
