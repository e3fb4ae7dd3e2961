"""
Symbol variant.

A symbol is either Data(index), a quantization-interval index carrying
bits_per_symbol payload bits, or the Filler sentinel, which marks a channel
that carries no data. Consumers must check the variant explicitly.
"""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Data:
    """Interval index carried by one channel."""
    index: int


class Filler:
    """Non-data sentinel. Singleton: every Filler() is the same object."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Filler"

    def __reduce__(self):
        return (Filler, ())


FILLER = Filler()

Symbol = Union[Data, Filler]


def is_data(symbol: Symbol) -> bool:
    if isinstance(symbol, Data):
        return True
    if isinstance(symbol, Filler):
        return False
    raise TypeError(f"Not a symbol: {symbol!r}")
