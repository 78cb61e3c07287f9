from __future__ import annotations
import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from ..dataset import Dataset, Value
from ..exceptions import LabelUnsetError
from ..metrics import ConfusionMatrix, EvaluationReport, classification_report, format_report
from ..proximity import ASCENDING, DESCENDING, ORDERS, EuclideanProximity, ProximityMeasure

logger = logging.getLogger(__name__)

Proximity = Union[ProximityMeasure, Callable[[Dataset, Sequence[Value], Sequence[Value]], float]]


def _select_k(scores: np.ndarray, k: int, order: str) -> np.ndarray:
    """
    Indeksi k najboljih skorova, najbolji prvi, bez kompletnog sortiranja.
    Jednaki skorovi -> manji indeks reda ide prvi.
    """
    key = scores if order == ASCENDING else -scores
    # O(n) izbor granice, pa sortiranje samo kandidata (svi <= k-ti skor)
    kth = np.partition(key, k - 1)[k - 1]
    cand = np.flatnonzero(key <= kth)
    cand = cand[np.lexsort((cand, key[cand]))]
    return cand[:k]


class KNN:
    def __init__(self, train_dataset: Dataset, k: int = 1, proximity: Optional[Proximity] = None):
        self.dataset: Dataset = None
        # k: broj najblizih suseda
        self.k = k
        # mera blizine (razdaljina ili slicnost, vidi proximity.order)
        self.proximity = proximity if proximity is not None else EuclideanProximity()
        self.last_report: Optional[EvaluationReport] = None
        self.set_dataset(train_dataset)

    @classmethod
    def from_csv(cls, path: str, label: str, k: int = 1, proximity: Optional[Proximity] = None) -> "KNN":
        from ..data_loader import read_csv

        return cls(read_csv(path, label=label), k=k, proximity=proximity)

    @property
    def k(self) -> int:
        return self._k

    @k.setter
    def k(self, value: int) -> None:
        value = int(value)
        if value < 1:
            raise ValueError("k must be >= 1.")
        if self.dataset is not None and value > len(self.dataset):
            raise ValueError(f"k={value} is larger than the training set ({len(self.dataset)} rows).")
        self._k = value

    def set_dataset(self, dataset: Dataset) -> None:
        # KNN drzi svoju kopiju, normalizovanu jednom
        if self.k > len(dataset):
            raise ValueError(f"k={self.k} is larger than the training set ({len(dataset)} rows).")
        ds = dataset.copy()
        ds.normalize()
        self.dataset = ds
        logger.info("KNN ready: k=%d, %d training rows, label=%r", self.k, len(ds), ds.get_label())

    def get_dataset(self) -> Dataset:
        return self.dataset

    def set_proximity_measure(self, proximity: Proximity) -> None:
        self.proximity = proximity

    def _default_order(self) -> str:
        return getattr(self.proximity, "order", ASCENDING)

    def first_knn(self, target: Sequence[Value], order: Optional[str] = None) -> List[Tuple[float, int]]:
        """
        k najblizih redova trening skupa za `target`.

        Vraca listu (skor, indeks reda) duzine k, najbolji prvi. Bez labele
        vraca praznu listu. `order`: "ascending" za razdaljine (default),
        "descending" za slicnosti.
        """
        order = order or self._default_order()
        if order not in ORDERS:
            raise ValueError(f"order must be one of {ORDERS}, got {order!r}.")
        if self.dataset.get_label() is None:
            logger.error("label unset, an empty neighbor list returned")
            return []

        query = list(target)
        # red u sirovom opsegu trening podataka -> prebaci na istu skalu;
        # sirov red van opsega (makar u jednoj koloni) ide dalje neskaliran
        if self.dataset.is_normalized(query):
            query = self.dataset.renormalize(query)

        scores = np.fromiter(
            (self.proximity(self.dataset, self.dataset.row(i), query) for i in range(len(self.dataset))),
            dtype=float,
            count=len(self.dataset),
        )
        idx = _select_k(scores, self.k, order)
        return [(float(scores[i]), int(i)) for i in idx]

    def predict_proba(self, sample: Sequence[Value]) -> Dict[Value, float]:
        neighbors = self.first_knn(sample)
        if not neighbors:
            raise LabelUnsetError()
        label_col = self.dataset.column(self.dataset.get_label())

        # softmax(-skor): manji skor -> veca tezina
        d = np.array([s for s, _ in neighbors], dtype=float)
        w = np.exp(-(d - d.min()))
        w = w / w.sum()

        weights: Dict[Value, float] = {}
        for wi, (_, i) in zip(w, neighbors):
            lab = label_col[i]
            weights[lab] = weights.get(lab, 0.0) + float(wi)
        return weights

    def predict(self, sample: Sequence[Value]) -> Value:
        weights = self.predict_proba(sample)
        # max() vraca prvi maksimum -> nereseno ide labeli najblizeg suseda
        return max(weights, key=weights.get)

    def predict_many(self, rows) -> List[Value]:
        return [self.predict(r) for r in rows]

    def evaluate(self, test_data: Dataset) -> ConfusionMatrix:
        """
        Predvidja svaki red test skupa i gradi konfuzionu matricu
        cm[stvarna][predvidjena] = broj. Mikro metrike se loguju i
        ostaju u self.last_report.
        """
        label_pos = self.dataset.label_index()
        confusion: ConfusionMatrix = {}
        for r in test_data.iterrows():
            actual = r[label_pos]
            predicted = self.predict(r)
            row = confusion.setdefault(actual, {})
            row[predicted] = row.get(predicted, 0) + 1

        self.last_report = classification_report(confusion)
        logger.info("evaluated %d rows\n%s", self.last_report.n_samples, format_report(self.last_report))
        return confusion

    def __repr__(self):
        return f"KNN(k={self.k}, proximity={self.proximity!r}, rows={len(self.dataset)})"
