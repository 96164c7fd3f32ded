"""
src/mersenne_core/hashing/stateless.py
Hash sin Estado (Stateless).
Pliega el producto completo de 2W bits en W bits: high ^ low.

A diferencia del modo con estado, no hay acumulador que transportar,
así que la mitad baja no se descarta: se mezcla con la alta.
"""
from typing import Iterable, Optional

from ..arith.widening import widening_mul, widening_mul_64, widening_mul_32
from ..config import FamilyManager
from .invariants import WORD_BITS_64, MERSENNE_61, MERSENNE_31, DEFAULT_MULTIPLIER


def stateless_hash(word: int, multiplier: Optional[int] = None, bits: int = WORD_BITS_64) -> int:
    """
    Hash de una palabra. Lanza InvalidConstant si M no es 2^p - 1 en rango para W
    o si W no es un ancho soportado (32, 64).
    """
    if multiplier is None:
        multiplier = DEFAULT_MULTIPLIER.get(bits, MERSENNE_61)
    FamilyManager.resolve(multiplier, bits)
    high, low = widening_mul(word, multiplier, bits)
    return high ^ low


def stateless_hash_64(word: int) -> int:
    """Variante rápida con M=2^61-1 fijo (ya validado)."""
    high, low = widening_mul_64(word, MERSENNE_61)
    return high ^ low


def stateless_hash_32(word: int) -> int:
    """Variante rápida con M=2^31-1 fijo (ya validado)."""
    high, low = widening_mul_32(word, MERSENNE_31)
    return high ^ low


def stateless_fold(words: Iterable[int], multiplier: Optional[int] = None, bits: int = WORD_BITS_64) -> int:
    """
    Extensión multi-palabra SIN estado (stateless-fold).
    XOR de stateless_hash de cada palabra, partiendo de 0.

    No transporta acumulador entre palabras, por tanto es INSENSIBLE AL ORDEN:
    [a, b] y [b, a] colisionan, y una palabra repetida dos veces se cancela.
    Para claves multi-campo donde el orden importa, usar el modo con estado.
    """
    if multiplier is None:
        multiplier = DEFAULT_MULTIPLIER.get(bits, MERSENNE_61)
    FamilyManager.resolve(multiplier, bits)

    folded = 0
    for word in words:
        high, low = widening_mul(word, multiplier, bits)
        folded ^= high ^ low
    return folded
