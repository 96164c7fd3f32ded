"""
src/mersenne_core/hashing/stateful.py
Hasher con Estado (Streaming) v1.0.
Acumulador de W bits que absorbe una palabra por paso.

Paso de absorción:
    x = acc ^ word
    (high, low) = widening_mul(x, M)
    acc = high          # low se descarta

No hay pasada de finalización: el valor del hash es el acumulador.
Sin candados internos; una instancia pertenece a una sola secuencia lógica.
"""
from typing import Iterable, Optional

from ..arith.widening import widening_mul_64, widening_mul_32
from ..config import FamilyManager
from .constants import Family
from .invariants import (
    WORD_BITS_64, WORD_BITS_32, MASK_64, MASK_32, DEFAULT_SEED, DEFAULT_MULTIPLIER,
)


class StatefulHasher:
    """
    Base común de las variantes con ancho fijo.
    Usar StatefulHasher64 o StatefulHasher32.
    """
    __slots__ = ('_acc', '_seed', '_multiplier')

    BITS = WORD_BITS_64
    MASK = MASK_64
    _widen = staticmethod(widening_mul_64)

    def __init__(self, seed: int = DEFAULT_SEED, multiplier: Optional[int] = None):
        if multiplier is None:
            multiplier = DEFAULT_MULTIPLIER[self.BITS]
        self._multiplier = FamilyManager.resolve(multiplier, self.BITS)
        self._seed = seed & self.MASK
        self._acc = self._seed

    @classmethod
    def for_family(cls, family: Family, seed: int = DEFAULT_SEED) -> 'StatefulHasher':
        """Construye la variante del ancho de la familia."""
        hasher_cls = _BY_WIDTH[family.bits]
        return hasher_cls(seed, family.multiplier)

    # --- Propiedades ---

    @property
    def bits(self) -> int:
        return self.BITS

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def multiplier(self) -> int:
        return self._multiplier

    # --- Operaciones ---

    def absorb(self, word: int) -> None:
        """Consume una palabra. La actualización del acumulador es un único paso."""
        high, _ = self._widen(self._acc ^ word, self._multiplier)
        self._acc = high

    def absorb_all(self, words: Iterable[int]) -> None:
        """Absorbe en orden. [a, b] y [b, a] producen valores distintos en general."""
        acc = self._acc
        widen = self._widen
        m = self._multiplier
        for word in words:
            acc, _ = widen(acc ^ word, m)
        self._acc = acc

    def current_value(self) -> int:
        """Snapshot del acumulador. No muta el estado."""
        return self._acc

    finalize = current_value

    def reset(self, seed: Optional[int] = None) -> None:
        """Recarga el acumulador. Sin argumento vuelve a la semilla de construcción."""
        if seed is not None:
            self._seed = seed & self.MASK
        self._acc = self._seed

    def copy(self) -> 'StatefulHasher':
        """Bifurca el estado actual en una instancia independiente."""
        clone = self.__class__.__new__(self.__class__)
        clone._acc = self._acc
        clone._seed = self._seed
        clone._multiplier = self._multiplier
        return clone

    def __repr__(self):
        return (f"<{self.__class__.__name__} M={hex(self._multiplier)} "
                f"seed={hex(self._seed)} acc={hex(self._acc)}>")


class StatefulHasher64(StatefulHasher):
    """Variante canónica: W=64, M=2^61-1 por defecto."""
    __slots__ = ()
    BITS = WORD_BITS_64
    MASK = MASK_64
    _widen = staticmethod(widening_mul_64)


class StatefulHasher32(StatefulHasher):
    """Variante para plataformas pequeñas: W=32, M=2^31-1 por defecto."""
    __slots__ = ()
    BITS = WORD_BITS_32
    MASK = MASK_32
    _widen = staticmethod(widening_mul_32)


_BY_WIDTH = {
    WORD_BITS_64: StatefulHasher64,
    WORD_BITS_32: StatefulHasher32,
}
