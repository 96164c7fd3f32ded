"""
src/mersenne_core/hashing/concurrent.py
Hashers para uso multi-hilo.

- SharedHasher: un único acumulador protegido por RLock. Cada absorción es atómica
  respecto a los demás hilos; el orden global entre hilos no está definido.
- ThreadLocalHasher: un acumulador por hilo (threading.local). Sin contención.

El StatefulHasher base no tiene candados: compartirlo sin uno de estos
envoltorios es un error del llamador.
"""
import threading
from typing import Iterable, Optional

from ..config import DEFAULT_FAMILY, DEFAULT_SEED
from .constants import Family
from .stateful import StatefulHasher


class SharedHasher:
    """Exclusión mutua empaquetada alrededor de un StatefulHasher."""
    __slots__ = ('_hasher', '_lock')

    def __init__(self, family: Family = DEFAULT_FAMILY, seed: int = DEFAULT_SEED):
        self._hasher = StatefulHasher.for_family(family, seed)
        self._lock = threading.RLock()

    def absorb(self, word: int) -> int:
        """Absorbe y retorna el valor resultante, leído dentro de la misma sección crítica."""
        with self._lock:
            self._hasher.absorb(word)
            return self._hasher.current_value()

    def absorb_all(self, words: Iterable[int]) -> int:
        """La secuencia completa se absorbe sin intercalarse con otros hilos."""
        with self._lock:
            self._hasher.absorb_all(words)
            return self._hasher.current_value()

    def current_value(self) -> int:
        with self._lock:
            return self._hasher.current_value()

    def reset(self, seed: Optional[int] = None) -> None:
        with self._lock:
            self._hasher.reset(seed)

    def snapshot(self) -> StatefulHasher:
        """Copia privada (sin candado) del estado actual."""
        with self._lock:
            return self._hasher.copy()


class ThreadLocalHasher:
    """
    Cada hilo ve su propio acumulador, inicializado con la misma semilla.
    Dos hilos que absorben la misma secuencia obtienen el mismo valor.
    """

    def __init__(self, family: Family = DEFAULT_FAMILY, seed: int = DEFAULT_SEED):
        self.family = family
        self.seed = seed
        self._local = threading.local()

    def _hasher(self) -> StatefulHasher:
        hasher = getattr(self._local, 'hasher', None)
        if hasher is None:
            # Inicialización lazy por hilo
            hasher = StatefulHasher.for_family(self.family, self.seed)
            self._local.hasher = hasher
        return hasher

    def absorb(self, word: int) -> int:
        hasher = self._hasher()
        hasher.absorb(word)
        return hasher.current_value()

    def absorb_all(self, words: Iterable[int]) -> int:
        hasher = self._hasher()
        hasher.absorb_all(words)
        return hasher.current_value()

    def current_value(self) -> int:
        return self._hasher().current_value()

    def reset(self, seed: Optional[int] = None) -> None:
        """Solo afecta al acumulador del hilo que llama."""
        self._hasher().reset(seed)
