"""
src/mersenne_core/config.py
Configuración de Familias y Caché de Multiplicadores Validados.
"""
import logging
import threading
from typing import Dict, Tuple

from .hashing.constants import Family, validate_multiplier, is_mersenne_prime
from .hashing.invariants import WORD_BITS_64, WORD_BITS_32, DEFAULT_SEED  # noqa: F401 (re-exportada)

logger = logging.getLogger(__name__)

# Familia por defecto y por ancho
DEFAULT_FAMILY = Family.W64_M61
FAMILY_BY_WIDTH = {
    WORD_BITS_64: Family.W64_M61,
    WORD_BITS_32: Family.W32_M31,
}

# Familia secundaria (independiente) para doble hashing
SECONDARY_FAMILY = {
    WORD_BITS_64: Family.W64_M31,
    WORD_BITS_32: Family.W32_M19,
}

# Tabla de direccionamiento abierto
TABLE_MIN_CAPACITY = 8
TABLE_MAX_LOAD = 0.5  # Ocupación (vivos + lápidas) antes de crecer


class FamilyManager:
    """
    Caché de multiplicadores ya validados.
    Evita repetir la prueba de primalidad (sympy) en cada construcción de hasher.
    """
    _lock = threading.Lock()
    _resolved: Dict[Tuple[int, int], Tuple[int, bool]] = {}

    @classmethod
    def resolve(cls, multiplier, bits: int = WORD_BITS_64) -> int:
        """
        Valida (W, M) una sola vez. Lanza InvalidConstant si M no es 2^p - 1 en rango.
        Las constantes de forma Mersenne pero compuestas se aceptan con un WARNING.
        """
        key = (bits, multiplier)
        # Lectura optimista
        if isinstance(multiplier, int) and key in cls._resolved:
            return multiplier

        validate_multiplier(multiplier, bits)
        exponent = multiplier.bit_length()
        prime = is_mersenne_prime(multiplier)

        with cls._lock:
            if key not in cls._resolved:
                if not prime:
                    logger.warning(
                        "M=2^%d-1 (%s) tiene forma Mersenne pero no es primo; la dispersión puede degradarse",
                        exponent, hex(multiplier),
                    )
                cls._resolved[key] = (exponent, prime)
        return multiplier

    @classmethod
    def stats(cls):
        """Informe de constantes resueltas: (W, M) -> {exponent, prime}."""
        with cls._lock:
            return {
                key: {"exponent": exponent, "prime": prime}
                for key, (exponent, prime) in cls._resolved.items()
            }

    @classmethod
    def reset(cls):
        """UTILIDAD DE TEST: vacía la caché."""
        with cls._lock:
            cls._resolved.clear()
