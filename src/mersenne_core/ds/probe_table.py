"""
src/mersenne_core/ds/probe_table.py
Tabla Hash de Direccionamiento Abierto con Doble Hashing.

Dos builders independientes (familias con M distinto):
- primaria  -> posición inicial
- secundaria -> paso de sondeo (forzado impar)
Ambos salen de los bits altos del hash dispersado (buckets.top_bits).
Con capacidad potencia de dos y paso impar, el sondeo recorre todas las ranuras.

La identidad de una clave es su codificación (codec.encode_key):
1 y True son la misma clave; 1 y 1.0 no.
"""
import logging
from typing import Any, Iterator, Optional, Tuple

from ..config import FAMILY_BY_WIDTH, SECONDARY_FAMILY, TABLE_MIN_CAPACITY, TABLE_MAX_LOAD
from ..hashing.codec import encode_key
from ..hashing.digest import Builder, HasherBuilder
from ..hashing.invariants import WORD_BITS_64
from .buckets import top_bits

logger = logging.getLogger(__name__)

# Marca de borrado (la ranura sigue ocupada para el sondeo)
_TOMBSTONE = object()


class ProbeTable:
    __slots__ = ('_slots', '_size', '_used', '_primary', '_secondary')

    def __init__(self, capacity: int = TABLE_MIN_CAPACITY,
                 primary: Optional[Builder] = None,
                 secondary: Optional[Builder] = None):
        if capacity < 1:
            raise ValueError(f"Capacidad inválida: {capacity}")
        if primary is None:
            primary = HasherBuilder(FAMILY_BY_WIDTH[WORD_BITS_64])
        if secondary is None:
            secondary = HasherBuilder(SECONDARY_FAMILY[primary.family.bits])
        if primary == secondary:
            raise ValueError(f"Doble hashing requiere builders independientes, recibido {primary!r} dos veces")

        self._primary = primary
        self._secondary = secondary
        self._slots = [None] * _round_capacity(capacity)
        self._size = 0   # Claves vivas
        self._used = 0   # Vivas + lápidas

    # --- Propiedades ---

    @property
    def capacity(self) -> int:
        return len(self._slots)

    # --- API pública ---

    def put(self, key: Any, value: Any) -> None:
        encoded = encode_key(key)
        h1, h2 = self._hashes(encoded)

        first_free = None
        for idx in self._probe(h1, h2):
            entry = self._slots[idx]
            if entry is None:
                if first_free is None:
                    first_free = idx
                break
            if entry is _TOMBSTONE:
                if first_free is None:
                    first_free = idx
                continue
            if entry[0] == encoded:
                self._slots[idx] = (encoded, h1, h2, key, value)
                return

        # Clave nueva. Reutilizar una lápida no cambia la ocupación
        if self._slots[first_free] is None:
            if (self._used + 1) > len(self._slots) * TABLE_MAX_LOAD:
                self._grow()
                first_free = next(i for i in self._probe(h1, h2) if self._slots[i] is None)
            self._used += 1

        self._slots[first_free] = (encoded, h1, h2, key, value)
        self._size += 1

    def get(self, key: Any, default: Any = None) -> Any:
        idx = self._find(key)
        if idx is None:
            return default
        return self._slots[idx][4]

    def __getitem__(self, key: Any) -> Any:
        idx = self._find(key)
        if idx is None:
            raise KeyError(f"Clave no encontrada: {key!r}")
        return self._slots[idx][4]

    __setitem__ = put

    def __contains__(self, key: Any) -> bool:
        return self._find(key) is not None

    def remove(self, key: Any) -> Any:
        """Borra y retorna el valor. KeyError si no existe."""
        idx = self._find(key)
        if idx is None:
            raise KeyError(f"Clave no encontrada: {key!r}")
        value = self._slots[idx][4]
        self._slots[idx] = _TOMBSTONE
        self._size -= 1
        return value

    def __delitem__(self, key: Any) -> None:
        self.remove(key)

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Any]:
        for entry in self._slots:
            if entry is not None and entry is not _TOMBSTONE:
                yield entry[3]

    def items(self) -> Iterator[Tuple[Any, Any]]:
        for entry in self._slots:
            if entry is not None and entry is not _TOMBSTONE:
                yield entry[3], entry[4]

    def __repr__(self):
        return (f"<ProbeTable size={self._size} capacity={len(self._slots)} "
                f"{self._primary!r} / {self._secondary!r}>")

    # --- Lógica interna ---

    def _hashes(self, encoded: bytes) -> Tuple[int, int]:
        return self._primary.hash_bytes(encoded), self._secondary.hash_bytes(encoded)

    def _probe(self, h1: int, h2: int) -> Iterator[int]:
        capacity = len(self._slots)
        bits = capacity.bit_length() - 1
        mask = capacity - 1
        # Posición y paso desde los bits altos; paso impar => recorre todas las ranuras
        idx = top_bits(h1, bits)
        step = top_bits(h2, bits) | 1
        for _ in range(capacity):
            yield idx
            idx = (idx + step) & mask

    def _find(self, key: Any) -> Optional[int]:
        encoded = encode_key(key)
        h1, h2 = self._hashes(encoded)
        for idx in self._probe(h1, h2):
            entry = self._slots[idx]
            if entry is None:
                return None
            if entry is not _TOMBSTONE and entry[0] == encoded:
                return idx
        return None

    def _grow(self) -> None:
        old = self._slots
        # Si predominan las lápidas basta con reconstruir al mismo tamaño
        new_capacity = len(old) * 2 if self._size * 2 >= self._used else len(old)
        logger.debug("ProbeTable: rehash %d -> %d (vivas=%d, lápidas=%d)",
                     len(old), new_capacity, self._size, self._used - self._size)

        self._slots = [None] * new_capacity
        self._used = self._size
        for entry in old:
            if entry is None or entry is _TOMBSTONE:
                continue
            _, h1, h2, _, _ = entry
            idx = next(i for i in self._probe(h1, h2) if self._slots[i] is None)
            self._slots[idx] = entry


def _round_capacity(capacity: int) -> int:
    """Potencia de dos >= max(capacity, TABLE_MIN_CAPACITY)."""
    capacity = max(capacity, TABLE_MIN_CAPACITY)
    return 1 << (capacity - 1).bit_length()
