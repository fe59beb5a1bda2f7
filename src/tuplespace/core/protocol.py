"""TupleSupplier protocol - the contract shared by every tuple producer.

A supplier hands out a lazy, finite sequence of :class:`Tuple` objects.
Every call to :meth:`TupleSupplier.stream` must return an *independent*
iterator with identical content and ordering. Nothing in the library caches
a supplier's output: nested use re-invokes ``stream()`` each time the
sequence is needed.

Engines, filters and :class:`FunctionSupplier` all implement the protocol,
so they can be nested inside one another's pools. Third-party producers only
need a ``stream()`` method.

Example::

    class Booleans:
        def stream(self):
            yield t(True)
            yield t(False)

    Combinator().choose_one(Booleans(), "maybe")
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Hashable, Iterable, Iterator, Sequence
from typing import Any, Protocol, runtime_checkable

from tuplespace.core.tuples import Tuple, as_tuple


@runtime_checkable
class TupleSupplier(Protocol):
    """Protocol for restartable producers of tuples."""

    def stream(self) -> Iterator[Tuple]:
        """Return a fresh iterator over the produced tuples.

        Returns:
            An iterator yielding the same tuples, in the same order, on
            every call.
        """
        ...


class SupplierMixin(ABC):
    """Conveniences shared by the concrete suppliers.

    Subclasses provide ``stream()``; the mixin derives iteration and the
    eager materialization helpers from it.
    """

    @abstractmethod
    def stream(self) -> Iterator[Tuple]:
        """Return a fresh iterator over the produced tuples."""

    def __iter__(self) -> Iterator[Tuple]:
        return self.stream()

    def to_list(self) -> list[Tuple]:
        """Materialize the whole sequence as a list of tuples."""
        return list(self.stream())

    def array(self) -> list[list[Any]]:
        """Materialize the whole sequence as a two-dimensional list of values."""
        return realize(self)


class FunctionSupplier(SupplierMixin):
    """Adapt a zero-argument callable into a :class:`TupleSupplier`.

    The callable is invoked on every ``stream()`` call and must return an
    iterable of tuples or plain sequences (which are coerced to ``Tuple``).

    Example:
        >>> sizes = FunctionSupplier(lambda: [(w, h) for w in (1, 2) for h in (3, 4)])
        >>> len(sizes.to_list())
        4
    """

    def __init__(self, factory: Callable[[], Iterable[Tuple | Sequence[Hashable]]]) -> None:
        self._factory = factory

    def stream(self) -> Iterator[Tuple]:
        for item in self._factory():
            yield as_tuple(item)

    def __repr__(self) -> str:
        return f"FunctionSupplier({self._factory!r})"


def realize(supplier: TupleSupplier) -> list[list[Any]]:
    """Compute a supplier's entire output as a list of value lists."""
    return [row.to_list() for row in supplier.stream()]


__all__ = ["FunctionSupplier", "SupplierMixin", "TupleSupplier", "realize"]
