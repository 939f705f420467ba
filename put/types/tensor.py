"""Tensor value type.

A Tensor is a shape (tuple of positive ints) plus a flat float64 buffer in
row-major order. Tensors behave as values: every operation returns a new Tensor
and the backing buffer is marked read-only so operands can never be mutated.
numpy provides the kernels; IEEE results (inf, nan) are returned rather than
raised, matching scalar arithmetic in the evaluator.
"""

from __future__ import annotations

from math import prod
from typing import Callable, Iterable, Sequence

import numpy as np

from put.errors import ShapeError, ShapeMismatchError


def _check_shape(shape: Iterable[int]) -> tuple[int, ...]:
    dims = tuple(shape)
    if not dims:
        raise ShapeError("Tensor shape must have at least one dimension")
    for d in dims:
        if isinstance(d, bool) or int(d) != d:
            raise ShapeError(f"Tensor dimensions must be integers, got {d!r}")
        if d <= 0:
            raise ShapeError(f"Tensor dimensions must be positive, got {list(dims)}")
    return tuple(int(d) for d in dims)


class Tensor:
    __slots__ = ("_shape", "_data")

    def __init__(self, data: Iterable[float], shape: Iterable[int]):
        dims = _check_shape(shape)
        buf = np.array(list(data), dtype=np.float64)
        if buf.ndim != 1:
            raise ShapeError("Tensor data must be a flat sequence of numbers")
        if buf.size != prod(dims):
            raise ShapeError(
                f"Tensor data has {buf.size} elements but shape {list(dims)} needs {prod(dims)}"
            )
        buf.setflags(write=False)
        self._shape = dims
        self._data = buf

    @classmethod
    def zeros(cls, shape: Iterable[int]) -> Tensor:
        dims = _check_shape(shape)
        try:
            buf = np.zeros(prod(dims))
        except (ValueError, OverflowError, MemoryError) as e:
            raise ShapeError(f"Cannot allocate a tensor of shape {list(dims)}: {e}") from None
        return cls(buf, dims)

    @classmethod
    def from_numpy(cls, array: np.ndarray) -> Tensor:
        array = np.asarray(array, dtype=np.float64)
        return cls(array.ravel(order="C"), array.shape)

    # ------------------------------------------------------------------ accessors

    @property
    def shape(self) -> tuple[int, ...]:
        return self._shape

    @property
    def data(self) -> tuple[float, ...]:
        return tuple(self._data.tolist())

    @property
    def size(self) -> int:
        return self._data.size

    @property
    def ndim(self) -> int:
        return len(self._shape)

    def to_numpy(self) -> np.ndarray:
        """Read-only view of the buffer reshaped to the tensor's shape."""
        return self._data.reshape(self._shape)

    def _flat_index(self, indices: Sequence[int]) -> int:
        if len(indices) != len(self._shape):
            raise IndexError(f"Expected {len(self._shape)} indices, got {len(indices)}")
        index = 0
        for dim, idx in zip(self._shape, indices):
            if not 0 <= idx < dim:
                raise IndexError(f"Index {list(indices)} out of bounds for shape {list(self._shape)}")
            index = index * dim + idx
        return index

    def get(self, indices: Sequence[int]) -> float:
        return float(self._data[self._flat_index(indices)])

    def replace(self, indices: Sequence[int], value: float) -> Tensor:
        """Return a copy with the element at `indices` set to `value`."""
        buf = self._data.copy()
        buf[self._flat_index(indices)] = value
        return Tensor(buf, self._shape)

    # ------------------------------------------------------------------ elementwise

    def _elementwise(self, other: Tensor, kernel: Callable, op: str) -> Tensor:
        if not isinstance(other, Tensor):
            raise TypeError(f"Cannot {op} Tensor and {type(other).__name__}")
        if self._shape != other._shape:
            raise ShapeMismatchError(op, self._shape, other._shape)
        with np.errstate(all="ignore"):
            return Tensor(kernel(self._data, other._data), self._shape)

    def add(self, other: Tensor) -> Tensor:
        return self._elementwise(other, np.add, "add")

    def sub(self, other: Tensor) -> Tensor:
        return self._elementwise(other, np.subtract, "subtract")

    def mul(self, other: Tensor) -> Tensor:
        return self._elementwise(other, np.multiply, "multiply")

    def __add__(self, other):
        return self.add(other) if isinstance(other, Tensor) else NotImplemented

    def __sub__(self, other):
        return self.sub(other) if isinstance(other, Tensor) else NotImplemented

    def __mul__(self, other):
        return self.mul(other) if isinstance(other, Tensor) else NotImplemented

    def exp(self) -> Tensor:
        with np.errstate(all="ignore"):
            return Tensor(np.exp(self._data), self._shape)

    def log(self) -> Tensor:
        with np.errstate(all="ignore"):
            return Tensor(np.log(self._data), self._shape)

    # ------------------------------------------------------------------ linear algebra

    def matmul(self, other: Tensor) -> Tensor:
        if not isinstance(other, Tensor):
            raise TypeError(f"Cannot matrix-multiply Tensor and {type(other).__name__}")
        if self.ndim != 2 or other.ndim != 2 or self._shape[1] != other._shape[0]:
            raise ShapeMismatchError("matrix-multiply", self._shape, other._shape)
        with np.errstate(all="ignore"):
            return Tensor.from_numpy(self.to_numpy() @ other.to_numpy())

    def __matmul__(self, other):
        return self.matmul(other) if isinstance(other, Tensor) else NotImplemented

    def transpose(self) -> Tensor:
        """Reverse the axes; a 1-D tensor is returned unchanged."""
        return Tensor.from_numpy(self.to_numpy().T)

    # ------------------------------------------------------------------ reductions

    def mean(self) -> float:
        return float(np.mean(self._data))

    def variance(self) -> float:
        # population variance
        return float(np.var(self._data))

    def std_dev(self) -> float:
        return float(np.std(self._data))

    # ------------------------------------------------------------------ protocol

    def __eq__(self, other) -> bool:
        if not isinstance(other, Tensor):
            return NotImplemented
        return self._shape == other._shape and bool(np.array_equal(self._data, other._data))

    __hash__ = None

    def __str__(self) -> str:
        return f"Tensor(shape={list(self._shape)}, data={list(self.data)})"

    def __repr__(self) -> str:
        return str(self)
