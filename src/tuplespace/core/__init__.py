"""Core value type and producer contract."""

from tuplespace.core.protocol import FunctionSupplier, SupplierMixin, TupleSupplier, realize
from tuplespace.core.tuples import EMPTY, Tuple, as_tuple, t

__all__ = [
    "EMPTY",
    "FunctionSupplier",
    "SupplierMixin",
    "Tuple",
    "TupleSupplier",
    "as_tuple",
    "realize",
    "t",
]
