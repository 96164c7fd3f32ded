"""
src/mersenne_core/hashing/invariants.py
Geometría de Palabra (Word Layout) y Constantes de Mersenne.
Define los anchos soportados y las máscaras de extracción.
"""

# =============================================================================
# ANCHOS DE PALABRA (W)
# =============================================================================
# Variante canónica: 64 bits. Alternativa documentada: 32 bits.
# El producto ensanchado ocupa 2W bits: [ High (W) | Low (W) ]

WORD_BITS_64 = 64
WORD_BITS_32 = 32

SUPPORTED_WIDTHS = (WORD_BITS_32, WORD_BITS_64)

# Máscaras de Extracción
MASK_64 = 0xFFFFFFFFFFFFFFFF
MASK_32 = 0xFFFFFFFF

_MASKS = {
    WORD_BITS_64: MASK_64,
    WORD_BITS_32: MASK_32,
}

# =============================================================================
# CONSTANTES DE MERSENNE (M = 2^p - 1)
# =============================================================================
# Rango válido del exponente: 2 <= p <= W - 1.
# p = 1 degenera (M = 1, el High es siempre 0); p = W no deja hueco entre M y 2^W.

MIN_EXPONENT = 2

EXPONENT_61 = 61
EXPONENT_31 = 31

MERSENNE_61 = (1 << EXPONENT_61) - 1  # Primo de Mersenne M61 (default W=64)
MERSENNE_31 = (1 << EXPONENT_31) - 1  # Primo de Mersenne M31 (default W=32)

DEFAULT_MULTIPLIER = {
    WORD_BITS_64: MERSENNE_61,
    WORD_BITS_32: MERSENNE_31,
}

# Semilla por defecto del acumulador
DEFAULT_SEED = 0

# =============================================================================
# REDUCCIÓN A CUBETAS
# =============================================================================
# Constante áurea: floor(2^64 / phi), impar. Hashing multiplicativo de Fibonacci.
GOLDEN_64 = 0x9E3779B97F4A7C15


def word_mask(bits: int) -> int:
    """Máscara de W bits. Solo anchos soportados."""
    try:
        return _MASKS[bits]
    except KeyError:
        raise ValueError(f"Ancho de palabra no soportado: {bits} (usar 32 o 64)") from None


def max_exponent(bits: int) -> int:
    """Exponente máximo p para un ancho W."""
    return bits - 1
