"""
src/mersenne_core/hashing/digest.py
Interfaz tipo hashlib sobre el Hasher con Estado.
Incluye los constructores de hashers (builders) para tablas y sharding.
"""
from typing import Any, Union

from ..config import DEFAULT_FAMILY, DEFAULT_SEED
from .codec import split_words, tail_words, iter_words, encode_key
from .constants import Family
from .stateful import StatefulHasher
from .stateless import stateless_fold


class MersenneHash:
    """
    Objeto de hash incremental (update / digest / hexdigest / copy).
    Cualquier troceado de los mismos bytes produce el mismo digest.
    Los métodos de digest no son destructivos.
    """
    __slots__ = ('_family', '_hasher', '_buffer', '_length')

    def __init__(self, data=b'', family: Family = DEFAULT_FAMILY, seed: int = DEFAULT_SEED):
        self._family = family
        self._hasher = StatefulHasher.for_family(family, seed)
        self._buffer = b''
        self._length = 0
        if data:
            self.update(data)

    @property
    def name(self) -> str:
        return f"mersenne{self._family.bits}-m{self._family.exponent}"

    @property
    def family(self) -> Family:
        return self._family

    @property
    def digest_size(self) -> int:
        return self._family.bits // 8

    block_size = digest_size

    def update(self, data) -> None:
        view = memoryview(data).cast('B')
        self._length += len(view)
        if self._buffer:
            view = self._buffer + bytes(view)
        words, self._buffer = split_words(view, self._family.bits)
        self._hasher.absorb_all(words)

    def intdigest(self) -> int:
        # El cierre se aplica sobre una copia: se puede seguir actualizando
        closing = self._hasher.copy()
        closing.absorb_all(tail_words(self._buffer, self._length, self._family.bits))
        return closing.current_value()

    def digest(self) -> bytes:
        return self.intdigest().to_bytes(self.digest_size, 'little')

    def hexdigest(self) -> str:
        return self.digest().hex()

    def copy(self) -> 'MersenneHash':
        clone = MersenneHash.__new__(MersenneHash)
        clone._family = self._family
        clone._hasher = self._hasher.copy()
        clone._buffer = self._buffer
        clone._length = self._length
        return clone

    def __repr__(self):
        return f"<MersenneHash {self.name} len={self._length}>"


# =============================================================================
# ATAJOS DE UN SOLO DISPARO
# =============================================================================

def hash_bytes(data, family: Family = DEFAULT_FAMILY, seed: int = DEFAULT_SEED) -> int:
    """Hash con estado de un bloque de bytes (con la convención de relleno + longitud)."""
    hasher = StatefulHasher.for_family(family, seed)
    hasher.absorb_all(iter_words(data, family.bits))
    return hasher.current_value()


def hash_bytes_stateless(data, family: Family = DEFAULT_FAMILY) -> int:
    """stateless-fold sobre las palabras del bloque. Insensible al orden de las palabras."""
    return stateless_fold(iter_words(data, family.bits), family.multiplier, family.bits)


def hash_key(key: Any, family: Family = DEFAULT_FAMILY, seed: int = DEFAULT_SEED) -> int:
    """Hash determinista de una clave Python (ver codec.encode_key)."""
    return hash_bytes(encode_key(key), family, seed)


# =============================================================================
# BUILDERS
# =============================================================================

class HasherBuilder:
    """
    Fábrica de hashers independientes con la misma familia y semilla.
    Dos builders iguales producen exactamente los mismos hashes.
    """
    __slots__ = ('family', 'seed')

    def __init__(self, family: Family = DEFAULT_FAMILY, seed: int = DEFAULT_SEED):
        self.family = family
        self.seed = seed

    def build(self) -> MersenneHash:
        return MersenneHash(family=self.family, seed=self.seed)

    def hash_bytes(self, data) -> int:
        return hash_bytes(data, self.family, self.seed)

    def hash_one(self, key: Any) -> int:
        return hash_key(key, self.family, self.seed)

    def __eq__(self, other):
        if not isinstance(other, HasherBuilder):
            return NotImplemented
        return (self.family, self.seed) == (other.family, other.seed)

    def __hash__(self):
        return hash((HasherBuilder, self.family, self.seed))

    def __repr__(self):
        return f"HasherBuilder({self.family.name}, seed={hex(self.seed)})"


class StatelessBuilder:
    """Hashing totalmente determinista, sin estado transportado."""
    __slots__ = ('family',)

    def __init__(self, family: Family = DEFAULT_FAMILY):
        self.family = family

    def hash_bytes(self, data) -> int:
        return hash_bytes_stateless(data, self.family)

    def hash_one(self, key: Any) -> int:
        return hash_bytes_stateless(encode_key(key), self.family)

    def __eq__(self, other):
        if not isinstance(other, StatelessBuilder):
            return NotImplemented
        return self.family == other.family

    def __hash__(self):
        return hash((StatelessBuilder, self.family))

    def __repr__(self):
        return f"StatelessBuilder({self.family.name})"


# Cualquiera de los dos builders: los consumidores solo usan hash_bytes / hash_one
Builder = Union[HasherBuilder, StatelessBuilder]
