"""
src/mersenne_core/arith/widening.py
Multiplicador Ensanchado (Widening Multiply).
Producto exacto de 2W bits, separado en mitad alta (overflow) y mitad baja.
"""
from typing import Tuple

from ..hashing.invariants import WORD_BITS_64, MASK_64, MASK_32, word_mask


def widening_mul(a: int, b: int, bits: int = WORD_BITS_64) -> Tuple[int, int]:
    """
    Retorna (high, low) del producto a * b en 2W bits.
    Los operandos se reducen a W bits (unsigned). Función total y pura.
    """
    mask = word_mask(bits)
    product = (a & mask) * (b & mask)
    return product >> bits, product & mask


def widening_mul_64(a: int, b: int) -> Tuple[int, int]:
    product = (a & MASK_64) * (b & MASK_64)
    return product >> 64, product & MASK_64


def widening_mul_32(a: int, b: int) -> Tuple[int, int]:
    product = (a & MASK_32) * (b & MASK_32)
    return product >> 32, product & MASK_32


def widening_mul_split(a: int, b: int, bits: int = WORD_BITS_64) -> Tuple[int, int]:
    """
    Formulación clásica con cuatro productos parciales de W/2 bits.
    Cada producto parcial cabe en W bits; solo se suman columnas y acarreos.
    Debe coincidir con widening_mul en todo el dominio.
    """
    mask = word_mask(bits)
    half = bits // 2
    half_mask = (1 << half) - 1

    a &= mask
    b &= mask
    a0, a1 = a & half_mask, a >> half
    b0, b1 = b & half_mask, b >> half

    # Productos parciales
    p00 = a0 * b0
    p01 = a0 * b1
    p10 = a1 * b0
    p11 = a1 * b1

    # Columna central con acarreo desde p00
    mid = (p00 >> half) + (p01 & half_mask) + (p10 & half_mask)

    low = ((mid & half_mask) << half) | (p00 & half_mask)
    high = p11 + (p01 >> half) + (p10 >> half) + (mid >> half)
    return high & mask, low
