import logging

import pytest

from knnlab.dataset import Dataset
from knnlab.normalization import MinMaxNormalizer, Normalizer


def test_normalize_records_params_and_scales(iris4):
    iris4.normalize()
    p = iris4.normalization_params
    assert p["sepal_length min"] == 4.9
    assert p["sepal_length max"] == 6.9
    assert p["petal_width min"] == 0.2
    assert p["petal_width max"] == 2.1
    assert "species min" not in p
    for name in iris4.get_numerics():
        col = iris4.column(name)
        assert min(col) == pytest.approx(0.0)
        assert max(col) == pytest.approx(1.0)
    assert iris4.column("sepal_length")[0] == pytest.approx(0.1)
    assert iris4.column("species") == ["setosa", "setosa", "versicolor", "virginica"]
    assert iris4.is_fitted


def test_renormalize_raw_row(iris4):
    iris4.normalize()
    raw = [5.0, 3.4, 1.4, 0.2, "?"]
    out = iris4.renormalize(raw)
    assert out[0] == pytest.approx((5.0 - 4.9) / (6.9 - 4.9))
    assert out[1] == pytest.approx((3.4 - 2.2) / (3.5 - 2.2))
    assert out[2] == pytest.approx(0.0)
    assert out[3] == pytest.approx(0.0)
    assert out[4] == "?"
    assert raw == [5.0, 3.4, 1.4, 0.2, "?"]


def test_renormalize_row_without_label(iris4):
    iris4.normalize()
    out = iris4.renormalize([6.9, 3.5, 5.4, 2.1])
    assert out == pytest.approx([1.0, 1.0, 1.0, 1.0])


def test_renormalize_matches_training_rows(iris4):
    raw_rows = [iris4.row(i) for i in range(len(iris4))]
    iris4.normalize()
    for i, raw in enumerate(raw_rows):
        assert iris4.renormalize(raw)[:4] == pytest.approx(iris4.row(i)[:4])


def test_is_normalized(iris4):
    assert iris4.is_normalized([5.0, 3.4, 1.4, 0.2, "?"]) is False  # jos nema granica
    iris4.normalize()
    assert iris4.is_normalized([5.0, 3.4, 1.4, 0.2, "?"]) is True
    assert iris4.is_normalized([5.0, 3.4, 1.4, 0.2]) is True
    assert iris4.is_normalized([9.0, 3.4, 1.4, 0.2]) is False
    assert iris4.is_normalized([5.0, 3.4, 1.0, 0.2]) is False
    # vec skaliran red izlazi iz sirovog opsega
    assert iris4.is_normalized([0.05, 0.9, 0.0, 0.0]) is False


def test_second_normalize_is_ignored(iris4, caplog):
    iris4.normalize()
    params = dict(iris4.normalization_params)
    col = list(iris4.column("sepal_length"))
    with caplog.at_level(logging.WARNING):
        iris4.normalize()
    assert iris4.normalization_params == params
    assert iris4.column("sepal_length") == col
    assert "already normalized" in caplog.text


def test_constant_column_scales_to_zero():
    ds = Dataset.from_rows(["x", "y", "label"], [(1.0, 3.0, "a"), (2.0, 3.0, "b")], label="label")
    ds.normalize()
    assert ds.column("y") == [0.0, 0.0]
    assert ds.renormalize([1.5, 3.0, "?"]) == [0.5, 0.0, "?"]


def test_empty_dataset_normalize():
    ds = Dataset({"x": []})
    ds.normalize()
    assert ds.normalization_params == {}


def test_column_list_identity_kept(iris4):
    col = iris4.column("sepal_width")
    iris4.normalize()
    assert iris4.column("sepal_width") is col


class _Shift(Normalizer):
    """Pomera numericke kolone za -min (bez skaliranja)."""

    def fit_transform(self, dataset):
        for name in dataset.get_numerics():
            col = dataset.column(name)
            lo = min(col)
            dataset.normalization_params[f"{name} min"] = lo
            dataset.normalization_params[f"{name} max"] = max(col)
            col[:] = [v - lo for v in col]

    def transform(self, dataset, row):
        out = list(row)
        for i, name in enumerate(dataset.get_attributes()[:len(out)]):
            if dataset.is_numeric(name):
                out[i] = out[i] - dataset.normalization_params[f"{name} min"]
        return out


def test_custom_normalizer():
    ds = Dataset.from_rows(["x", "label"], [(10.0, "a"), (20.0, "b")], label="label")
    ds.set_normalizer(_Shift())
    ds.normalize()
    assert ds.column("x") == [0.0, 10.0]
    assert ds.renormalize([15.0, "?"]) == [5.0, "?"]


def test_default_normalizer():
    assert isinstance(Dataset().normalizer, MinMaxNormalizer)


def test_numeric_label_is_not_scaled():
    ds = Dataset.from_rows(["x", "cls"], [(0.0, 1.0), (5.0, 2.0), (10.0, 3.0)], label="cls")
    ds.normalize()
    assert ds.column("x") == [0.0, 0.5, 1.0]
    assert ds.column("cls") == [1.0, 2.0, 3.0]
    assert "cls min" not in ds.normalization_params
    assert ds.renormalize([5.0, 3.0]) == [0.5, 3.0]
