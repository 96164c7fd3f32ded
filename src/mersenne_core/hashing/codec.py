"""
src/mersenne_core/hashing/codec.py
Codificación de Bytes y Claves a Palabras.

CONVENCIÓN DE RELLENO (palabras parciales):
- Palabras de W/8 bytes en little-endian (independiente de la plataforma):
  el último byte de cada bloque queda en los bits altos.
- La última palabra parcial se alinea a la izquierda: los ceros de relleno van
  en los bits BAJOS y los datos en los altos. El paso con estado conserva la
  mitad alta del producto, así que los bits bajos de la última palabra se pierden
  y no deben llevar datos.
- SIEMPRE se añade una palabra final con la longitud en bytes, con los W bits
  invertidos: diferencias pequeñas de longitud quedan en los bits altos.
  Así b"ab" y b"\\x00ab" (misma palabra tras el relleno) no colisionan,
  y la entrada vacía produce exactamente una palabra (la longitud 0).
"""
import struct
from typing import Any, Iterator, List, Tuple

from .invariants import WORD_BITS_64, word_mask

# Etiquetas de tipo (1 byte) para que 1, "1" y b"1" no compartan codificación
TAG_BYTES = 0x01
TAG_STR   = 0x02
TAG_INT   = 0x03
TAG_FLOAT = 0x04
TAG_TUPLE = 0x05

_FLOAT = struct.Struct('<d')
_FIELD_LEN = struct.Struct('<Q')


def split_words(data, bits: int = WORD_BITS_64) -> Tuple[List[int], bytes]:
    """
    Separa las palabras completas del resto (< W/8 bytes).
    Sin relleno ni palabra de longitud: base del hashing incremental.
    """
    width = bits // 8
    view = memoryview(data).cast('B')
    full = len(view) - len(view) % width
    words = [int.from_bytes(view[pos:pos + width], 'little') for pos in range(0, full, width)]
    return words, bytes(view[full:])


def reverse_bits(value: int, bits: int = WORD_BITS_64) -> int:
    """Invierte el orden de los W bits (bit 0 <-> bit W-1). Biyectiva."""
    return int(format(value, f"0{bits}b")[::-1], 2)


def tail_words(remainder: bytes, total_length: int, bits: int = WORD_BITS_64) -> List[int]:
    """Palabras de cierre: resto alineado a la izquierda (si lo hay) + longitud total."""
    width = bits // 8
    tail = []
    if remainder:
        tail.append(int.from_bytes(remainder.rjust(width, b'\0'), 'little'))
    tail.append(reverse_bits(total_length & word_mask(bits), bits))
    return tail


def iter_words(data, bits: int = WORD_BITS_64) -> Iterator[int]:
    """Secuencia completa de palabras para un bloque de bytes."""
    words, remainder = split_words(data, bits)
    yield from words
    yield from tail_words(remainder, len(memoryview(data).cast('B')), bits)


def encode_key(key: Any) -> bytes:
    """
    Serialización determinista de claves (independiente de PYTHONHASHSEED).
    Soporta bytes, str, int/bool, float y tuplas de los anteriores.
    """
    if isinstance(key, (bytes, bytearray, memoryview)):
        return bytes((TAG_BYTES,)) + bytes(key)

    elif isinstance(key, str):
        return bytes((TAG_STR,)) + key.encode('utf-8')

    elif isinstance(key, int):
        # bool es int: True se codifica como 1
        n = (key.bit_length() + 8) // 8
        return bytes((TAG_INT,)) + key.to_bytes(n or 1, 'little', signed=True)

    elif isinstance(key, float):
        return bytes((TAG_FLOAT,)) + _FLOAT.pack(key)

    elif isinstance(key, tuple):
        # Cada campo con prefijo de longitud: ("ab", "c") != ("a", "bc")
        parts = [bytes((TAG_TUPLE,))]
        for field in key:
            encoded = encode_key(field)
            parts.append(_FIELD_LEN.pack(len(encoded)))
            parts.append(encoded)
        return b''.join(parts)

    raise TypeError(f"No se puede codificar una clave de tipo {type(key).__name__}")
