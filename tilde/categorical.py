from abc import ABC, abstractmethod

import numpy as np


class ContrastMatrix:
    """A representation of a contrast matrix

    Parameters
    ----------
    matrix: 2-dimensional np.array
        The contrast matrix as a numpy array. Row ``i`` holds the values for the level ``i``.
    labels: list or tuple
        The labels for the columns of the contrast matrix. Its length must match the number of
        columns in the contrast matrix.
    """

    def __init__(self, matrix, labels):
        self.matrix = matrix
        self.labels = labels
        if matrix.shape[1] != len(labels):  # pragma: no cover
            raise ValueError(
                "The number of columns in the contrast matrix is not equal to the number of labels"
            )

    @property
    def matrix(self):
        return self._matrix

    @matrix.setter
    def matrix(self, value):
        if not (
            isinstance(value, np.ndarray) and value.dtype.kind in "if" and value.ndim == 2
        ):  # pragma: no cover
            raise ValueError("The matrix argument must be a 2d numerical numpy array")
        self._matrix = value

    @property
    def labels(self):
        return self._labels

    @labels.setter
    def labels(self, value):
        if not isinstance(value, (list, tuple)):  # pragma: no cover
            raise ValueError("The labels argument must be a list or a tuple")

        if not all(isinstance(i, str) for i in value):  # pragma: no cover
            raise ValueError("The items in the labels argument must be of type 'str'")

        self._labels = value

    def take(self, codes):
        """Rows of the contrast matrix for each code, as floats.

        Codes equal to ``-1`` stand for missing values and produce a row of NaN.
        """
        codes = np.asarray(codes)
        result = np.full((len(codes), self.matrix.shape[1]), np.nan)
        observed = codes >= 0
        result[observed] = self.matrix[codes[observed]]
        return result

    def __str__(self):  # pragma: no cover
        msg = (
            f"{self.__class__.__name__}\n"
            f"Matrix:\n{self.matrix}\n\n"
            f"Labels:\n{', '.join(self.labels)}"
        )
        return msg

    def __repr__(self):  # pragma: no cover
        return self.__str__()


class Encoding(ABC):
    """Abstract class for the encodings of categorical predictors"""

    name = None

    @abstractmethod
    def code(self, levels):  # pragma: no cover
        """Returns the ContrastMatrix used to represent ``levels``"""
        return

    def column_labels(self, name, contrast):
        """Names of the design matrix columns for the variable ``name``."""
        return [f"{name}[{label}]" for label in contrast.labels]

    def __eq__(self, other):
        return isinstance(other, type(self)) and vars(self) == vars(other)

    def __hash__(self):
        return hash((type(self), tuple(vars(self).items())))

    def __repr__(self):  # pragma: no cover
        return f"{self.__class__.__name__}()"


class Ordinal(Encoding):
    """A single column with the position of the level, from ``0`` to ``k - 1``."""

    name = "ordinal"

    def code(self, levels):
        contrast = np.arange(len(levels), dtype=int)[:, np.newaxis]
        return ContrastMatrix(contrast, ["ordinal"])

    def column_labels(self, name, contrast):
        return [name]


class OneHot(Encoding):
    """One indicator column per level. It spans the intercept."""

    name = "one_hot"

    def code(self, levels):
        contrast = np.eye(len(levels), dtype=int)
        labels = [str(level) for level in levels]
        return ContrastMatrix(contrast, labels)


class Dummy(Encoding):
    def __init__(self, reference=None):
        """Dummy encoding

        This is also known as treatment encoding. One level is taken as reference and it
        gets no column, so there are ``k - 1`` indicator columns.

        Parameters
        ----------
        reference: str
            The level to take as reference. Defaults to ``None`` which means the first level.
        """
        self.reference = reference

    name = "dummy"

    def code(self, levels):
        levels = list(levels)
        if not levels:
            return ContrastMatrix(np.zeros((0, 0), dtype=int), [])

        # First category is the default reference
        if self.reference is None:
            reference = 0
        elif self.reference in levels:
            reference = levels.index(self.reference)
        else:
            raise ValueError(f"The reference '{self.reference}' is not one of the levels.")

        eye = np.eye(len(levels) - 1, dtype=int)
        contrast = np.vstack(
            (eye[:reference, :], np.zeros((1, len(levels) - 1), dtype=int), eye[reference:, :])
        )
        levels = levels[:reference] + levels[reference + 1 :]
        labels = [str(level) for level in levels]
        return ContrastMatrix(contrast, labels)


ENCODINGS = {"ordinal": Ordinal, "one_hot": OneHot, "dummy": Dummy}


def get_encoding(encoding):
    """Returns an Encoding instance from a name, an Encoding class or an Encoding instance."""
    if isinstance(encoding, Encoding):
        return encoding
    if isinstance(encoding, type) and issubclass(encoding, Encoding):
        return encoding()
    if isinstance(encoding, str) and encoding.lower() in ENCODINGS:
        return ENCODINGS[encoding.lower()]()
    raise ValueError(
        f"'{encoding}' is not a valid encoding. Available encodings: {list(ENCODINGS)}"
    )
