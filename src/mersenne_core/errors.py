"""
src/mersenne_core/errors.py
Único tipo de error del dominio.
"""


class InvalidConstant(ValueError):
    """
    El multiplicador M no tiene la forma 2^p - 1 dentro del rango válido
    para el ancho de palabra elegido.

    Error de configuración del llamador: nunca se corrige internamente.
    Sustituir M por un valor por defecto cambiaría la salida del hash.
    """

    def __init__(self, multiplier, bits: int, reason: str):
        self.multiplier = multiplier
        self.bits = bits
        self.reason = reason
        shown = hex(multiplier) if isinstance(multiplier, int) else repr(multiplier)
        super().__init__(f"Constante inválida M={shown} para W={bits}: {reason}")
