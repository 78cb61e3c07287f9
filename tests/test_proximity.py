import math

import pytest

from knnlab.dataset import Dataset
from knnlab.exceptions import LabelUnsetError
from knnlab.proximity import (
    ASCENDING,
    EuclideanProximity,
    JaccardProximity,
    get_proximity,
)


@pytest.fixture
def mixed():
    # labela u sredini, da se vidi pomeranje indeksa
    return Dataset.from_rows(
        ["x", "label", "color", "y"],
        [(1.0, "A", "red", 2.0), (4.0, "B", "blue", 6.0)],
        label="label",
    )


def test_identical_rows_are_at_zero(iris4):
    d = EuclideanProximity()
    for i in range(len(iris4)):
        assert d(iris4, iris4.row(i), iris4.row(i)) == 0.0


def test_label_is_ignored(iris4):
    d = EuclideanProximity()
    a = [5.1, 3.5, 1.4, 0.2, "setosa"]
    b = [5.1, 3.5, 1.4, 0.2, "virginica"]
    assert d(iris4, a, b) == 0.0


def test_numeric_squared_sum(mixed):
    d = EuclideanProximity()
    assert d(mixed, [0.0, "A", "red", 0.0], [3.0, "B", "red", 4.0]) == pytest.approx(5.0)


def test_categorical_mismatch_adds_one(mixed):
    d = EuclideanProximity()
    assert d(mixed, [1.0, "A", "red", 2.0], [1.0, "A", "blue", 2.0]) == pytest.approx(1.0)
    assert d(mixed, [1.0, "A", "red", 2.0], [2.0, "A", "blue", 2.0]) == pytest.approx(math.sqrt(2.0))


def test_query_without_label_is_shifted(mixed):
    d = EuclideanProximity()
    full = [1.0, "A", "red", 2.0]
    assert d(mixed, full, [1.0, "red", 2.0]) == 0.0
    assert d(mixed, full, [4.0, "red", 6.0]) == pytest.approx(5.0)
    assert d(mixed, full, [1.0, "blue", 2.0]) == pytest.approx(1.0)
    # redosled argumenata nije bitan
    assert d(mixed, [4.0, "red", 6.0], full) == pytest.approx(5.0)


def test_query_without_trailing_label(iris4):
    d = EuclideanProximity()
    assert d(iris4, iris4.row(0), [5.1, 3.5, 1.4, 0.2]) == 0.0
    assert d(iris4, iris4.row(0), [5.1, 3.5, 1.4, 1.2]) == pytest.approx(1.0)


def test_euclidean_needs_label():
    ds = Dataset.from_rows(["x", "y"], [(1.0, 2.0)])
    with pytest.raises(LabelUnsetError):
        EuclideanProximity()(ds, [1.0, 2.0], [1.0, 2.0])


def test_jaccard():
    j = JaccardProximity()
    assert j(None, ["ahmad"], ["ahmad"]) == 0.0
    assert j(None, ["listen"], ["silent"]) == 0.0
    assert j(None, ["abc"], ["xyz"]) == 1.0
    # multiskup: {a:2, b:1} i {a:1, b:1} -> presek 2, unija 3
    assert j(None, ["aab"], ["ab"]) == pytest.approx(1 / 3)
    assert j(None, [""], [""]) == 0.0


def test_jaccard_position():
    j = JaccardProximity(position=1)
    assert j(None, ["x", "omar", "m"], ["y", "amor"]) == 0.0
    assert repr(j) == "JaccardProximity(position=1)"


def test_measure_order():
    assert EuclideanProximity.order == ASCENDING
    assert JaccardProximity().order == ASCENDING


def test_get_proximity():
    assert isinstance(get_proximity("euclidean"), EuclideanProximity)
    assert isinstance(get_proximity("jaccard", position=0), JaccardProximity)
    with pytest.raises(ValueError):
        get_proximity("cosine")
