import json

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

from knnlab.dataset import Dataset
from knnlab.exceptions import AttributeNotFoundError
from knnlab.plotting import _row_share, generate_all_plots, plot_confusion_matrix, scatter_plot


def test_scatter_plot_by_label(iris4, tmp_path):
    out = tmp_path / "scatter.png"
    assert scatter_plot(iris4, "petal_length", "petal_width", target=(1.5, 0.3), out_path=out) == out
    assert out.exists() and out.stat().st_size > 0


def test_scatter_plot_without_label(tmp_path):
    ds = Dataset.from_rows(["x", "y"], [(1.0, 2.0), (2.0, 1.0)])
    out = tmp_path / "plain.png"
    scatter_plot(ds, "x", "y", out_path=out)
    assert out.exists()


def test_scatter_plot_bad_columns(iris4):
    with pytest.raises(AttributeNotFoundError):
        scatter_plot(iris4, "color", "petal_width")
    with pytest.raises(ValueError):
        scatter_plot(iris4, "species", "petal_width")


def test_confusion_matrix_from_dict(tmp_path):
    out = tmp_path / "cm.png"
    plot_confusion_matrix({"a": {"a": 3, "b": 1}, "b": {"b": 2}}, out_path=out)
    assert out.exists()


def test_generate_all_plots(tmp_path):
    assert generate_all_plots(tmp_path) == []
    (tmp_path / "metrics.json").write_text(json.dumps({
        "k": 3,
        "classes": ["a", "b"],
        "confusion_matrix_array": [[3, 1], [0, 2]],
    }), encoding="utf-8")
    paths = generate_all_plots(tmp_path)
    assert paths == [tmp_path / "confusion_matrix.png"]
    assert paths[0].exists()


def test_row_share_keeps_empty_rows_at_zero():
    share = _row_share(np.array([[3.0, 1.0], [0.0, 0.0]]))
    assert share.tolist() == [[0.75, 0.25], [0.0, 0.0]]
