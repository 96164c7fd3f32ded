"""
src/mersenne_core/hashing/constants.py
Tabla de Familias de Hash v1.0.
Validación de multiplicadores de forma Mersenne (2^p - 1) y catálogo de familias.

TEORÍA:
Una familia es la pareja (W, M). Dos familias con M distinto producen
hashes independientes (útil para doble hashing en tablas de direccionamiento abierto).
No hay jerarquía de estrategias: solo una enumeración de constantes.
"""
import logging
from enum import Enum

from sympy import isprime

from ..errors import InvalidConstant
from .invariants import (
    WORD_BITS_64, WORD_BITS_32, SUPPORTED_WIDTHS, MIN_EXPONENT, max_exponent, word_mask,
)

logger = logging.getLogger(__name__)


def mersenne_exponent(multiplier, bits: int = WORD_BITS_64) -> int:
    """
    Retorna p tal que multiplier == 2^p - 1, con MIN_EXPONENT <= p <= W - 1.
    Lanza InvalidConstant en cualquier otro caso.
    """
    if bits not in SUPPORTED_WIDTHS:
        raise InvalidConstant(multiplier, bits, f"ancho de palabra no soportado (usar {WORD_BITS_32} o {WORD_BITS_64})")

    if isinstance(multiplier, bool) or not isinstance(multiplier, int):
        raise InvalidConstant(multiplier, bits, f"se esperaba int, recibido {type(multiplier).__name__}")
    if multiplier <= 0:
        raise InvalidConstant(multiplier, bits, "debe ser positivo")

    # 2^p - 1 es una racha de unos: M & (M + 1) == 0
    if multiplier & (multiplier + 1):
        raise InvalidConstant(multiplier, bits, "no tiene la forma 2^p - 1")

    p = multiplier.bit_length()
    if p < MIN_EXPONENT or p > max_exponent(bits):
        raise InvalidConstant(
            multiplier, bits,
            f"exponente p={p} fuera de rango [{MIN_EXPONENT}, {max_exponent(bits)}]",
        )
    return p


def validate_multiplier(multiplier, bits: int = WORD_BITS_64) -> int:
    """Validación eager. Retorna el multiplicador intacto (nunca lo corrige)."""
    try:
        mersenne_exponent(multiplier, bits)
    except InvalidConstant as e:
        logger.debug("Multiplicador rechazado: %s", e)
        raise
    return multiplier


def is_mersenne_prime(multiplier: int) -> bool:
    """True si M = 2^p - 1 además es primo (M2, M3, M5, M7, M13, M17, M19, M31, M61...)."""
    return bool(isprime(multiplier))


# =============================================================================
# CATÁLOGO DE FAMILIAS (W, p)
# =============================================================================

class Family(Enum):
    """
    Elección enumerada de ancho de palabra y primo de Mersenne.
    El valor es (W, p); el multiplicador es 2^p - 1.
    """
    W64_M61 = (WORD_BITS_64, 61)  # Default W=64
    W64_M31 = (WORD_BITS_64, 31)
    W64_M19 = (WORD_BITS_64, 19)
    W64_M17 = (WORD_BITS_64, 17)
    W64_M13 = (WORD_BITS_64, 13)

    W32_M31 = (WORD_BITS_32, 31)  # Default W=32
    W32_M19 = (WORD_BITS_32, 19)
    W32_M17 = (WORD_BITS_32, 17)
    W32_M13 = (WORD_BITS_32, 13)

    @property
    def bits(self) -> int:
        return self.value[0]

    @property
    def exponent(self) -> int:
        return self.value[1]

    @property
    def multiplier(self) -> int:
        return (1 << self.value[1]) - 1

    @classmethod
    def of_width(cls, bits: int) -> list:
        """Familias disponibles para un ancho, en orden de declaración."""
        word_mask(bits)
        return [f for f in cls if f.bits == bits]

    @classmethod
    def lookup(cls, multiplier: int, bits: int) -> "Family":
        """Familia que corresponde a (W, M). KeyError si no está catalogada."""
        for f in cls:
            if f.bits == bits and f.multiplier == multiplier:
                return f
        raise KeyError(f"Familia no catalogada: W={bits} M={hex(multiplier)}")
