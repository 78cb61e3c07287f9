from __future__ import annotations
import math
from abc import ABC, abstractmethod
from collections import Counter
from typing import Sequence

ASCENDING = "ascending"    # manji skor = blizi (razdaljina)
DESCENDING = "descending"  # veci skor = blizi (slicnost)
ORDERS = (ASCENDING, DESCENDING)


class ProximityMeasure(ABC):
    """
    Skor blizine dva reda: measure(dataset, a, b) -> float >= 0.

    dataset daje column_order i poziciju labele (label_index), da bi mera
    mogla da preskoci kolonu labele. `order` govori kako se skor sortira
    pri trazenju suseda.
    """

    order = ASCENDING

    @abstractmethod
    def __call__(self, dataset, a: Sequence, b: Sequence) -> float:
        pass

    def __repr__(self):
        return f"{type(self).__name__}()"


class EuclideanProximity(ProximityMeasure):
    """
    Euklidska razdaljina sa kaznom za kategorije:
      - broj/broj: (a - b)^2
      - tekst/tekst: 1 ako se razlikuju, 0 ako su isti
    Koren sume. Kolona labele se ne racuna.

    Ako redovi nemaju istu duzinu (upit bez labele), duzi red je `a`, a
    pozicije >= label_index u kracem redu citaju se iz a[i + 1].
    """

    def __call__(self, dataset, a, b) -> float:
        if len(a) < len(b):
            a, b = b, a
        label_pos = dataset.label_index()
        shifted = len(a) != len(b)

        total = 0.0
        for i in range(len(b)):
            if not shifted and i == label_pos:
                continue
            x = a[i + 1] if (shifted and i >= label_pos) else a[i]
            y = b[i]
            if isinstance(x, str) or isinstance(y, str):
                total += 0.0 if x == y else 1.0
            else:
                total += (float(x) - float(y)) ** 2
        return math.sqrt(total)


class JaccardProximity(ProximityMeasure):
    """
    1 - |A ∩ B| / |A ∪ B| nad multiskupom karaktera jednog tekstualnog polja
    (npr. ime). 0 = isti multiskupovi, 1 = nemaju zajednicki karakter.
    """

    def __init__(self, position: int = 0):
        self.position = int(position)

    def __call__(self, dataset, a, b) -> float:
        ca = Counter(str(a[self.position]))
        cb = Counter(str(b[self.position]))
        inter = sum((ca & cb).values())
        union = sum((ca | cb).values())
        if union == 0:
            return 0.0
        return 1.0 - inter / union

    def __repr__(self):
        return f"JaccardProximity(position={self.position})"


PROXIMITY_MEASURES = {
    "euclidean": EuclideanProximity,
    "jaccard": JaccardProximity,
}


def get_proximity(name: str, **kwargs) -> ProximityMeasure:
    try:
        cls = PROXIMITY_MEASURES[name]
    except KeyError:
        raise ValueError(f"Unknown proximity measure '{name}', expected one of {sorted(PROXIMITY_MEASURES)}.") from None
    return cls(**kwargs)
