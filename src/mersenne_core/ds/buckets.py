"""
src/mersenne_core/ds/buckets.py
Reducción de un hash a índice de cubeta (hashing multiplicativo de Fibonacci).

El paso con estado desplaza el acumulador hacia la derecha en cada palabra:
la información de la clave queda en los bits intermedios y altos del hash y
casi nunca en los bajos. Por eso no se usa h % n ni h & mask.
Se multiplica por GOLDEN_64 (mod 2^64) y se toman los bits ALTOS del producto,
que dependen de todos los bits del hash.
"""
from ..hashing.invariants import GOLDEN_64, MASK_64, WORD_BITS_64


def spread(h: int) -> int:
    """h * GOLDEN_64 mod 2^64."""
    return (h * GOLDEN_64) & MASK_64


def bucket_index(h: int, buckets: int) -> int:
    """Índice en [0, buckets) tomado de los bits altos: (spread(h) * n) >> 64."""
    return (spread(h) * buckets) >> WORD_BITS_64


def top_bits(h: int, k: int) -> int:
    """Los k bits altos de spread(h), para tablas de 2^k ranuras."""
    return spread(h) >> (WORD_BITS_64 - k)
