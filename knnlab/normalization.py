from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from typing import List

import numpy as np

logger = logging.getLogger(__name__)


def param_key(column: str, bound: str) -> str:
    # kljucevi u normalization_params: "<kolona> min" / "<kolona> max"
    return f"{column} {bound}"


class Normalizer(ABC):
    """
    Strategija normalizacije za Dataset.

      - fit_transform(dataset): skalira numericke kolone u mestu i upisuje
        parametre u dataset.normalization_params
      - transform(dataset, row): primenjuje vec zapisane parametre na novi red
        (vraca novu listu, ulaz se ne menja)
    """

    @abstractmethod
    def fit_transform(self, dataset) -> None:
        pass

    @abstractmethod
    def transform(self, dataset, row) -> List:
        pass


class MinMaxNormalizer(Normalizer):
    """Min-max skaliranje svake numericke kolone na [0, 1]."""

    def fit_transform(self, dataset) -> None:
        if len(dataset) == 0:
            logger.warning("normalize called on an empty dataset, nothing recorded")
            return
        params = dataset.normalization_params
        # labela se nikad ne skalira, predikcija mora vratiti sirovu vrednost
        for name in dataset.get_numerics():
            if name == dataset.get_label():
                continue
            col = dataset.column(name)
            values = np.asarray(col, dtype=float)
            lo, hi = float(values.min()), float(values.max())
            params[param_key(name, "min")] = lo
            params[param_key(name, "max")] = hi
            span = hi - lo
            # konstantna kolona -> sve nule umesto deljenja nulom
            scaled = (values - lo) / span if span > 0 else np.zeros_like(values)
            col[:] = scaled.tolist()
            logger.debug("normalized %s: min=%s max=%s", name, lo, hi)

    def transform(self, dataset, row) -> List:
        out = list(row)
        params = dataset.normalization_params
        attrs = dataset.get_attributes()
        # pozicija i u redu se vezuje za i-tu kolonu u column_order, ne za ime
        for i, value in enumerate(out):
            if i >= len(attrs):
                break
            name = attrs[i]
            if name == dataset.get_label() or not dataset.is_numeric(name) or isinstance(value, str):
                continue
            lo = params.get(param_key(name, "min"))
            hi = params.get(param_key(name, "max"))
            if lo is None or hi is None:
                continue
            out[i] = (float(value) - lo) / (hi - lo) if hi > lo else 0.0
        return out
