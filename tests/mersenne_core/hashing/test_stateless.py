"""
tests/mersenne_core/hashing/test_stateless.py
Hash sin Estado: plegado high ^ low y extensión stateless-fold.
"""
import unittest
import random
from mersenne_core.errors import InvalidConstant
from mersenne_core.arith.widening import widening_mul
from mersenne_core.hashing.constants import Family
from mersenne_core.hashing.invariants import MASK_64, MERSENNE_61, MERSENNE_31
from mersenne_core.hashing.stateful import StatefulHasher64
from mersenne_core.hashing.stateless import (
    stateless_hash, stateless_hash_64, stateless_hash_32, stateless_fold,
)


class TestStatelessHash(unittest.TestCase):

    def test_fold_correctness_rederived(self):
        """Hash(word, M) == high ^ low, re-derivado para cada familia."""
        rng = random.Random(7)
        for family in Family:
            for _ in range(20):
                word = rng.getrandbits(family.bits)
                high, low = widening_mul(word, family.multiplier, family.bits)
                self.assertEqual(stateless_hash(word, family.multiplier, family.bits), high ^ low)

    def test_known_values(self):
        self.assertEqual(stateless_hash_64(0), 0)
        # 1 * M61: high = 0, low = M61
        self.assertEqual(stateless_hash_64(1), MERSENNE_61)
        self.assertEqual(stateless_hash_32(1), MERSENNE_31)

    def test_named_variants_match_generic(self):
        for word in (0, 1, 0xDEADBEEF, MASK_64, 1 << 63):
            self.assertEqual(stateless_hash_64(word), stateless_hash(word))
            self.assertEqual(stateless_hash_32(word & 0xFFFFFFFF), stateless_hash(word & 0xFFFFFFFF, bits=32))

    def test_deterministic(self):
        self.assertEqual(stateless_hash(0xF0F0F0F0), stateless_hash(0xF0F0F0F0))

    def test_differs_from_stateful_mode(self):
        """No es 'absorber con seed 0': el modo con estado descarta low."""
        word = 0xFEDCBA9876543210
        h = StatefulHasher64(0)
        h.absorb(word)
        high, low = widening_mul(word, MERSENNE_61)
        self.assertEqual(h.current_value(), high)
        self.assertEqual(stateless_hash(word), high ^ low)
        self.assertNotEqual(h.current_value(), stateless_hash(word))

    def test_invalid_constant(self):
        with self.assertRaises(InvalidConstant):
            stateless_hash(1, 6)
        with self.assertRaises(InvalidConstant):
            stateless_hash(1, MERSENNE_61, bits=32)
        self.assertEqual(stateless_hash(1, MERSENNE_31), MERSENNE_31)

    def test_unsupported_width_is_invalid_constant(self):
        """W=16 no es un ancho soportado: mismo error que un M fuera de rango."""
        with self.assertRaises(InvalidConstant) as ctx:
            stateless_hash(1, 7, bits=16)
        self.assertEqual(ctx.exception.bits, 16)
        with self.assertRaises(InvalidConstant):
            stateless_fold([1, 2], 7, bits=16)
        with self.assertRaises(InvalidConstant):
            stateless_hash(1, bits=16)


class TestStatelessFold(unittest.TestCase):

    def test_fold_is_xor_of_hashes(self):
        words = [1, 2, 3, 0xDEADBEEF]
        expected = 0
        for w in words:
            expected ^= stateless_hash(w)
        self.assertEqual(stateless_fold(words), expected)

    def test_fold_is_order_insensitive(self):
        """Sin estado transportado: el orden no importa (documentado)."""
        self.assertEqual(stateless_fold([0x100, 0x1]), stateless_fold([0x1, 0x100]))

    def test_repeated_word_cancels(self):
        self.assertEqual(stateless_fold([0xABC, 0xABC]), 0)

    def test_empty_and_single(self):
        self.assertEqual(stateless_fold([]), 0)
        self.assertEqual(stateless_fold([0xABC]), stateless_hash(0xABC))

    def test_fold_invalid_constant(self):
        with self.assertRaises(InvalidConstant):
            stateless_fold([1, 2], 6)
