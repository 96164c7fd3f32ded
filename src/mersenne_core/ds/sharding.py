"""
src/mersenne_core/ds/sharding.py
Enrutado de claves a particiones (sharding).
Determinista entre procesos: no depende de hash() ni de PYTHONHASHSEED.

El hash lo calcula un builder (HasherBuilder por defecto, modo con estado;
StatelessBuilder para stateless-fold). La partición sale de los bits altos
del hash dispersado (ver buckets.bucket_index).
"""
import logging
from typing import Any, Iterable, List, Optional

from ..hashing.digest import Builder, HasherBuilder
from .buckets import bucket_index

logger = logging.getLogger(__name__)


def shard_for(key: Any, partitions: int, builder: Optional[Builder] = None) -> int:
    """Índice de partición en [0, partitions)."""
    if partitions < 1:
        raise ValueError(f"Número de particiones inválido: {partitions}")
    if builder is None:
        builder = HasherBuilder()
    return bucket_index(builder.hash_one(key), partitions)


class ShardRouter:
    __slots__ = ('partitions', 'builder')

    def __init__(self, partitions: int, builder: Optional[Builder] = None):
        if partitions < 1:
            raise ValueError(f"Número de particiones inválido: {partitions}")
        self.partitions = partitions
        self.builder = builder if builder is not None else HasherBuilder()
        logger.debug("ShardRouter: %d particiones con %r", partitions, self.builder)

    def route(self, key: Any) -> int:
        return bucket_index(self.builder.hash_one(key), self.partitions)

    def route_many(self, keys: Iterable[Any]) -> List[int]:
        return [self.route(k) for k in keys]
