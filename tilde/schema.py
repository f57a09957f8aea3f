import numpy as np
import pandas as pd

from pandas.api.types import (
    is_bool_dtype,
    is_float_dtype,
    is_integer_dtype,
    is_object_dtype,
    is_string_dtype,
)

from .utils import is_categorical_dtype

INT8 = "int8"
INT16 = "int16"
INT32 = "int32"
INT64 = "int64"
FLOAT32 = "float32"
FLOAT64 = "float64"
BOOLEAN = "boolean"
STRING = "string"
CATEGORICAL = "categorical"

INTEGER_TYPES = (INT8, INT16, INT32, INT64)
FLOAT_TYPES = (FLOAT32, FLOAT64)
NUMERIC_TYPES = INTEGER_TYPES + FLOAT_TYPES + (BOOLEAN,)
DTYPES = NUMERIC_TYPES + (STRING, CATEGORICAL)

# numpy types without a counterpart are widened
_NUMPY_TYPES = {
    "int8": INT8,
    "int16": INT16,
    "int32": INT32,
    "int64": INT64,
    "uint8": INT16,
    "uint16": INT32,
    "uint32": INT64,
    "float16": FLOAT32,
    "float32": FLOAT32,
    "float64": FLOAT64,
}


class Field:
    """A named and typed column.

    Parameters
    ----------
    name: string
        The name of the column.
    dtype: string
        One of ``"int8"``, ``"int16"``, ``"int32"``, ``"int64"``, ``"float32"``, ``"float64"``,
        ``"boolean"``, ``"string"`` or ``"categorical"``.
    levels: list or tuple
        The ordered, distinct levels of a categorical field. Must be omitted for other types.
    """

    def __init__(self, name, dtype, levels=None):
        if not isinstance(name, str) or not name:
            raise ValueError("The name of a Field must be a non-empty string.")
        if dtype not in DTYPES:
            raise ValueError(f"'{dtype}' is not a valid type. Available types: {list(DTYPES)}")
        if dtype == CATEGORICAL:
            if levels is None:
                raise ValueError(f"Categorical field '{name}' requires levels.")
            levels = tuple(levels)
            if len(set(levels)) != len(levels):
                raise ValueError(f"The levels of field '{name}' are not distinct.")
        elif levels is not None:
            raise ValueError(f"Only categorical fields have levels, '{name}' is {dtype}.")
        self._name = name
        self._dtype = dtype
        self._levels = levels

    @property
    def name(self):
        return self._name

    @property
    def dtype(self):
        return self._dtype

    @property
    def levels(self):
        return self._levels

    @property
    def is_numeric(self):
        return self.dtype in NUMERIC_TYPES

    @property
    def is_categorical(self):
        return self.dtype == CATEGORICAL

    @property
    def is_string(self):
        return self.dtype == STRING

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return False
        return (self.name, self.dtype, self.levels) == (other.name, other.dtype, other.levels)

    def __hash__(self):
        return hash((self.name, self.dtype, self.levels))

    def __repr__(self):
        return self.__str__()

    def __str__(self):
        if self.is_categorical:
            return f"{self.__class__.__name__}({self.name}, {self.dtype}{list(self.levels)})"
        return f"{self.__class__.__name__}({self.name}, {self.dtype})"


class Schema:
    """An ordered collection of fields with unique names.

    Fields can be obtained by position or by name.

    Parameters
    ----------
    fields: iterable
        The :class:`.Field` objects, in order.
    """

    def __init__(self, fields):
        fields = tuple(fields)
        if not all(isinstance(field, Field) for field in fields):
            raise ValueError("All the elements of a Schema must be of class Field.")
        self._fields = fields
        self._index = {}
        for i, field in enumerate(fields):
            if field.name in self._index:
                raise ValueError(f"Field name '{field.name}' is duplicated.")
            self._index[field.name] = i

    @classmethod
    def from_dataframe(cls, data):
        """Infers the schema of a data frame.

        Integer, floating point and boolean columns keep their type, categorical columns keep
        their categories and string columns become categorical with sorted levels.
        """
        if not isinstance(data, pd.DataFrame):
            raise ValueError("'data' must be a pandas.DataFrame.")
        labels = [name for name in data.columns if not isinstance(name, str)]
        if labels:
            raise ValueError(f"Column labels must be strings, got {labels}.")
        return cls(infer_field(name, data[name]) for name in data.columns)

    @property
    def fields(self):
        return self._fields

    @property
    def names(self):
        return [field.name for field in self._fields]

    def index_of(self, name):
        return self._index[name]

    def __getitem__(self, key):
        if isinstance(key, str):
            if key not in self._index:
                raise KeyError(f"'{key}' is not a field of the schema")
            return self._fields[self._index[key]]
        return self._fields[key]

    def __contains__(self, name):
        return name in self._index

    def __iter__(self):
        return iter(self._fields)

    def __len__(self):
        return len(self._fields)

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return False
        return self._fields == other._fields

    def __hash__(self):
        return hash(self._fields)

    def __repr__(self):
        return self.__str__()

    def __str__(self):
        fields = ",\n  ".join(str(field) for field in self._fields)
        return f"{self.__class__.__name__}(\n  {fields}\n)"


def infer_field(name, x):
    """Returns the Field describing the pandas.Series ``x``."""
    dtype = x.dtype
    if is_categorical_dtype(x):
        return Field(name, CATEGORICAL, x.cat.categories.tolist())
    if is_bool_dtype(dtype):
        return Field(name, BOOLEAN)
    if is_integer_dtype(dtype) or is_float_dtype(dtype):
        # Nullable extension types such as 'Int64' wrap a numpy dtype
        numpy_dtype = np.dtype(getattr(dtype, "numpy_dtype", dtype))
        if numpy_dtype.name not in _NUMPY_TYPES:
            raise ValueError(f"Column '{name}' is of an unsupported type ({dtype}).")
        return Field(name, _NUMPY_TYPES[numpy_dtype.name])
    if is_string_dtype(dtype) or is_object_dtype(dtype):
        levels = sort_levels(x.dropna().unique().tolist())
        return Field(name, CATEGORICAL, levels)
    raise ValueError(f"Column '{name}' is of an unrecognized type ({dtype}).")


def sort_levels(levels):
    """Sorts the levels found in a column.

    Values that can't be compared with each other, such as numbers mixed with strings, are
    sorted by their string representation.
    """
    try:
        return sorted(levels)
    except TypeError:
        return sorted(levels, key=str)
