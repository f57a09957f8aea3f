import numpy as np
import pytest

from tilde.categorical import ContrastMatrix, Dummy, OneHot, Ordinal, get_encoding


def test_contrast_matrix_take():
    contrast = ContrastMatrix(np.eye(3, dtype=int), ["a", "b", "c"])
    result = contrast.take(np.array([2, -1, 0]))
    assert result.dtype == np.float64
    assert np.array_equal(result[[0, 2]], [[0, 0, 1], [1, 0, 0]])
    assert np.isnan(result[1]).all()


def test_ordinal():
    contrast = Ordinal().code(["a", "b", "c"])
    assert np.array_equal(contrast.matrix, [[0], [1], [2]])
    assert Ordinal().column_labels("g", contrast) == ["g"]


def test_one_hot():
    contrast = OneHot().code(["a", "b"])
    assert np.array_equal(contrast.matrix, [[1, 0], [0, 1]])
    assert OneHot().column_labels("g", contrast) == ["g[a]", "g[b]"]


def test_dummy():
    contrast = Dummy().code(["a", "b", "c"])
    assert np.array_equal(contrast.matrix, [[0, 0], [1, 0], [0, 1]])
    assert contrast.labels == ["b", "c"]

    contrast = Dummy(reference="b").code(["a", "b", "c"])
    assert np.array_equal(contrast.matrix, [[1, 0], [0, 0], [0, 1]])
    assert contrast.labels == ["a", "c"]

    assert Dummy().code(["a"]).matrix.shape == (1, 0)
    assert Dummy().code([]).matrix.shape == (0, 0)

    with pytest.raises(ValueError, match="The reference 'z' is not one of the levels"):
        Dummy(reference="z").code(["a", "b"])


def test_get_encoding():
    assert get_encoding("dummy") == Dummy()
    assert get_encoding("ONE_HOT") == OneHot()
    assert get_encoding(Ordinal) == Ordinal()
    assert get_encoding(Dummy(reference="b")) == Dummy(reference="b")
    assert get_encoding(Dummy(reference="b")) != Dummy()

    with pytest.raises(ValueError, match="not a valid encoding"):
        get_encoding("helmert")

    with pytest.raises(ValueError, match="not a valid encoding"):
        get_encoding(3)
