"""
Unit tests for numeric kinds.
"""

import numpy as np
import pytest

from moving_average.accumulation.numeric_kind import (
    PYTHON_FLOAT,
    PYTHON_INT,
    SUPPORTED_DTYPES,
    NumericKind,
)
from moving_average.utils.exceptions import NumericKindError


class TestResolution:
    """Test resolving kinds from type descriptions."""

    @pytest.mark.parametrize("name", SUPPORTED_DTYPES)
    def test_supported_dtypes(self, name):
        """Test every supported dtype resolves from name, type and dtype."""
        kind = NumericKind.of(name)
        assert kind.name == name
        assert NumericKind.of(np.dtype(name)) is kind
        assert NumericKind.of(np.dtype(name).type) is kind

    def test_signedness(self):
        """Test signedness per family."""
        assert NumericKind.of(np.uint8).signed is False
        assert NumericKind.of(np.uint64).signed is False
        assert NumericKind.of(np.int16).signed is True
        assert NumericKind.of(np.float32).signed is True

    def test_python_types(self):
        """Test Python int and float kinds."""
        assert NumericKind.of(int) is PYTHON_INT
        assert NumericKind.of("int") is PYTHON_INT
        assert NumericKind.of(float) is PYTHON_FLOAT
        assert PYTHON_INT.signed is True
        assert PYTHON_INT.max_value is None

    def test_int64_dtype_is_not_python_int(self):
        """Test a numpy int64 dtype keeps its bounded kind."""
        kind = NumericKind.of(np.dtype("int64"))
        assert kind.name == "int64"
        assert kind.max_value == np.iinfo(np.int64).max

    def test_existing_kind_passes_through(self):
        """Test resolving a kind returns it unchanged."""
        kind = NumericKind.of("uint16")
        assert NumericKind.of(kind) is kind

    @pytest.mark.parametrize("kind", [bool, None, "complex128", "nonsense", "U10", object])
    def test_unsupported(self, kind):
        """Test unsupported kinds raise NumericKindError."""
        with pytest.raises(NumericKindError):
            NumericKind.of(kind)


class TestInference:
    """Test inferring kinds from values."""

    def test_numpy_scalars(self):
        """Test numpy scalars map to their dtype."""
        assert NumericKind.infer(np.uint8(3)).name == "uint8"
        assert NumericKind.infer(np.float32(1.0)).name == "float32"
        assert NumericKind.infer(np.float64(1.0)).name == "float64"

    def test_python_values(self):
        """Test Python literals map to the Python kinds."""
        assert NumericKind.infer(3) is PYTHON_INT
        assert NumericKind.infer(3.0) is PYTHON_FLOAT

    @pytest.mark.parametrize("value", [True, np.bool_(False), "3", None, [1]])
    def test_non_numeric(self, value):
        """Test non-numeric values cannot be inferred."""
        with pytest.raises(NumericKindError):
            NumericKind.infer(value)


class TestAcceptance:
    """Test which values a kind accepts."""

    def test_integer_bounds(self):
        """Test bounded integer kinds check literal ranges."""
        uint8 = NumericKind.of(np.uint8)
        assert uint8.accepts(255)
        assert not uint8.accepts(256)
        # Negative literals reach the sign check instead
        assert uint8.accepts(-1)

        int8 = NumericKind.of(np.int8)
        assert int8.accepts(-128)
        assert not int8.accepts(-129)

    def test_unbounded_int(self):
        """Test the Python int kind accepts any integer."""
        assert PYTHON_INT.accepts(10**30)
        assert PYTHON_INT.accepts(-(10**30))

    def test_floats(self):
        """Test float literals only go to floating kinds."""
        assert not NumericKind.of(np.uint8).accepts(1.5)
        assert NumericKind.of(np.float32).accepts(1.5)
        assert NumericKind.of(np.float32).accepts(2)

    def test_numpy_scalars_must_match(self):
        """Test numpy scalars must be of the same dtype."""
        uint8 = NumericKind.of(np.uint8)
        assert uint8.accepts(np.uint8(1))
        assert not uint8.accepts(np.uint16(1))
        assert PYTHON_FLOAT.accepts(np.float64(1.0))
        assert not PYTHON_INT.accepts(np.int64(1))

    def test_bools_rejected(self):
        """Test booleans are not accepted."""
        assert not PYTHON_INT.accepts(True)
        assert not NumericKind.of(np.float64).accepts(np.bool_(True))


class TestConversion:
    """Test float conversion."""

    def test_integer_conversion(self):
        """Test integers convert exactly where representable."""
        assert NumericKind.of(np.int32).to_float(np.int32(-7)) == -7.0
        assert PYTHON_INT.to_float(12) == 12.0

    def test_narrow_float_rounding(self):
        """Test Python floats round to the kind's precision."""
        assert NumericKind.of(np.float32).to_float(0.1) == float(np.float32(0.1))
        assert PYTHON_FLOAT.to_float(0.1) == 0.1

    def test_narrow_float_rounds_ints(self):
        """Test Python ints round to the kind's precision as well."""
        float16 = NumericKind.of(np.float16)
        assert float16.to_float(2049) == 2048.0
        assert float16.to_float(2049) == float16.to_float(2049.0)
        assert NumericKind.of(np.float32).to_float(2**24 + 1) == float(2**24)

    def test_unconvertible(self):
        """Test integers too large for a float raise NumericKindError."""
        with pytest.raises(NumericKindError):
            PYTHON_INT.to_float(10**400)

    def test_equality_and_hash(self):
        """Test kinds compare by name."""
        assert NumericKind.of("uint32") == NumericKind.of(np.uint32)
        assert NumericKind.of("uint32") != NumericKind.of("int32")
        assert len({NumericKind.of("uint32"), NumericKind.of(np.uint32)}) == 1
        assert str(NumericKind.of("int8")) == "int8"
