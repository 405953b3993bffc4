"""Numeric kinds an accumulator can be specialised to."""

from typing import Any, Dict, Optional

import numpy as np

from moving_average.utils.exceptions import NumericKindError

SUPPORTED_DTYPES = (
    "int8",
    "int16",
    "int32",
    "int64",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
    "float16",
    "float32",
    "float64",
)


class NumericKind:
    """
    Capability description of one numeric kind.

    A kind answers two questions for the accumulator: whether values of the
    kind can ever be negative, and how a value of the kind converts to a
    64-bit float. Kinds backed by a numpy dtype carry that dtype; the Python
    ``int`` kind is unbounded and has none.

    Attributes
    ----------
    name : str
        Kind name ("uint32", "float64", "int", "float", ...)
    signed : bool
        Whether values of this kind can be negative
    is_integer : bool
        Whether this is an integer kind
    dtype : np.dtype, optional
        Backing numpy dtype, None for the unbounded Python ``int`` kind
    """

    def __init__(self, name: str, signed: bool, is_integer: bool, dtype: Optional[np.dtype] = None):
        self.name = name
        self.signed = signed
        self.is_integer = is_integer
        self.dtype = dtype

        if dtype is not None and is_integer:
            info = np.iinfo(dtype)
            self.min_value: Optional[int] = int(info.min)
            self.max_value: Optional[int] = int(info.max)
        else:
            self.min_value = None
            self.max_value = None

    @classmethod
    def of(cls, kind: Any) -> "NumericKind":
        """
        Resolve a kind from a dtype, numpy scalar type, name, or Python type.

        Parameters
        ----------
        kind : Any
            ``np.uint32``, ``np.dtype("int16")``, ``"float32"``, ``int``, ``float``
            or an existing NumericKind

        Returns
        -------
        NumericKind
            The matching kind

        Raises
        ------
        NumericKindError
            If the kind is not a supported integer or floating point kind

        Examples
        --------
        >>> NumericKind.of(np.uint8).signed
        False
        >>> NumericKind.of("float32").name
        'float32'
        """
        if isinstance(kind, NumericKind):
            return kind
        if kind is int or (isinstance(kind, str) and kind == "int"):
            return PYTHON_INT
        if kind is float or (isinstance(kind, str) and kind == "float"):
            return PYTHON_FLOAT
        if kind is None or kind is bool:
            raise NumericKindError(f"Unsupported numeric kind: {kind!r}")

        try:
            dtype = np.dtype(kind)
        except TypeError as e:
            raise NumericKindError(f"Unsupported numeric kind: {kind!r}") from e

        if dtype.name not in _DTYPE_KINDS:
            raise NumericKindError(f"Unsupported numeric kind: {dtype.name}")
        return _DTYPE_KINDS[dtype.name]

    @classmethod
    def infer(cls, value: Any) -> "NumericKind":
        """
        Infer the kind of a single value.

        numpy scalars map to their dtype, Python ``int`` and ``float`` to the
        Python kinds. Booleans are not numeric kinds.
        """
        if isinstance(value, (bool, np.bool_)):
            raise NumericKindError("Boolean values are not a numeric kind")
        # numpy float64 subclasses float, so numpy scalars are checked first
        if isinstance(value, np.generic):
            return cls.of(value.dtype)
        if isinstance(value, int):
            return PYTHON_INT
        if isinstance(value, float):
            return PYTHON_FLOAT
        raise NumericKindError(f"Cannot infer numeric kind of {type(value).__name__}")

    def accepts(self, value: Any) -> bool:
        """
        Check whether a value may be fed to an accumulator of this kind.

        numpy scalars must match the kind's dtype exactly. Python ``int``
        literals are accepted by every kind as long as they fit its upper
        bound (and lower bound, for signed kinds); negative literals for
        unsigned kinds are left to the sign check. Python ``float`` literals
        are accepted by floating point kinds only.
        """
        if isinstance(value, (bool, np.bool_)):
            return False
        if isinstance(value, np.generic):
            return self.dtype is not None and value.dtype == self.dtype
        if isinstance(value, int):
            if self.max_value is not None and value > self.max_value:
                return False
            if self.signed and self.min_value is not None and value < self.min_value:
                return False
            return True
        if isinstance(value, float):
            return not self.is_integer
        return False

    def to_float(self, value: Any) -> float:
        """
        Convert a value of this kind to a 64-bit float.

        Python ints and floats fed to a narrower floating kind are rounded
        to that kind first.

        Raises
        ------
        NumericKindError
            If the value cannot be represented as a float
        """
        try:
            if (
                isinstance(value, (int, float))
                and not isinstance(value, np.generic)
                and not self.is_integer
                and self.dtype != np.float64
            ):
                value = self.dtype.type(value)
            return float(value)
        except (OverflowError, TypeError, ValueError) as e:
            raise NumericKindError(f"Cannot convert {value!r} of kind {self.name} to float") from e

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NumericKind):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"NumericKind({self.name!r})"

    def __str__(self) -> str:
        return self.name


def _build_dtype_kinds() -> Dict[str, NumericKind]:
    kinds = {}
    for name in SUPPORTED_DTYPES:
        dtype = np.dtype(name)
        kinds[name] = NumericKind(
            name,
            signed=not np.issubdtype(dtype, np.unsignedinteger),
            is_integer=np.issubdtype(dtype, np.integer),
            dtype=dtype,
        )
    return kinds


_DTYPE_KINDS = _build_dtype_kinds()

PYTHON_INT = NumericKind("int", signed=True, is_integer=True)
PYTHON_FLOAT = NumericKind("float", signed=True, is_integer=False, dtype=np.dtype("float64"))
