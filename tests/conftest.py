from pathlib import Path

import pytest

from knnlab.dataset import Dataset

DATA_DIR = Path(__file__).resolve().parents[1] / "data"

IRIS_COLUMNS = ["sepal_length", "sepal_width", "petal_length", "petal_width", "species"]
IRIS_ROWS = [
    (5.1, 3.5, 1.4, 0.2, "setosa"),
    (4.9, 3.0, 1.4, 0.2, "setosa"),
    (6.0, 2.2, 4.0, 1.0, "versicolor"),
    (6.9, 3.1, 5.4, 2.1, "virginica"),
]


@pytest.fixture
def iris4():
    return Dataset.from_rows(IRIS_COLUMNS, IRIS_ROWS, label="species")


@pytest.fixture
def iris_sample_csv():
    return str(DATA_DIR / "iris_sample.csv")


@pytest.fixture
def names_sample_csv():
    return str(DATA_DIR / "names_sample.csv")
