from __future__ import annotations
import logging
import math
from enum import Enum
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

import numpy as np

from .exceptions import AttributeNotFoundError, LabelUnsetError, RowIndexError, SplitRatioError
from .normalization import MinMaxNormalizer, Normalizer, param_key

logger = logging.getLogger(__name__)

# Jedna celija tabele: float = broj, str = kategorija.
# Poredjenje razlicitih vrsta je uvek False, oba tipa mogu biti kljuc u dict-u.
Value = Union[float, str]


def format_value(value: Value) -> str:
    if isinstance(value, str):
        return value
    return repr(float(value))


class ColumnKind(Enum):
    NUMERIC = "numeric"
    CATEGORICAL = "categorical"

    @classmethod
    def of(cls, value: Value) -> "ColumnKind":
        if isinstance(value, (int, float, np.number)) and not isinstance(value, bool):
            return cls.NUMERIC
        return cls.CATEGORICAL


class Dataset:
    """
    Tabela organizovana po kolonama (atributima).

      - columns: ime kolone -> lista vrednosti, redosled kolona = redosled iz izvora
      - kinds: ime kolone -> ColumnKind, odredjuje se JEDNOM iz prvog reda
        (kasniji redovi se ne proveravaju)
      - label: kolona koju klasifikator predvidja (None dok se ne postavi)
      - normalization_params: "<kolona> min"/"<kolona> max" -> float,
        popunjava normalize(), koristi renormalize()

    Red ("data point") se ne cuva posebno, row(i) ga sklapa po column_order.
    """

    def __init__(
        self,
        columns: Optional[Dict[str, Sequence[Value]]] = None,
        kinds: Optional[Dict[str, ColumnKind]] = None,
        label: Optional[str] = None,
        normalizer: Optional[Normalizer] = None,
    ):
        self._columns: Dict[str, List[Value]] = {}
        for name, values in (columns or {}).items():
            self._columns[str(name)] = list(values)

        lengths = {len(v) for v in self._columns.values()}
        if len(lengths) > 1:
            raise ValueError(f"All columns must have the same length, got {sorted(lengths)}.")
        self._size = lengths.pop() if lengths else 0

        self.kinds: Dict[str, ColumnKind] = dict(kinds or {})
        unknown = [k for k in self.kinds if k not in self._columns]
        if unknown:
            raise AttributeNotFoundError(unknown[0])
        if self._size > 0:
            self._infer_kinds(self.row(0))

        self.normalizer = normalizer if normalizer is not None else MinMaxNormalizer()
        self.normalization_params: Dict[str, float] = {}
        self._normalized = False

        self.label: Optional[str] = None
        if label is not None:
            self.set_label(label)

    @classmethod
    def from_rows(cls, column_order: Sequence[str], rows: Iterable[Sequence[Value]],
                  label: Optional[str] = None, **kwargs) -> "Dataset":
        names = [str(c) for c in column_order]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate column names: {names}")
        ds = cls({name: [] for name in names}, **kwargs)
        for r in rows:
            ds.append_row(r)
        if label is not None:
            ds.set_label(label)
        return ds

    def _infer_kinds(self, row: Sequence[Value]) -> None:
        for name, value in zip(self._columns, row):
            if name not in self.kinds:
                self.kinds[name] = ColumnKind.of(value)

    # --- sema ---

    @property
    def column_order(self) -> List[str]:
        return list(self._columns)

    def get_attributes(self) -> List[str]:
        return list(self._columns)

    def has_attribute(self, name: str) -> bool:
        return name in self._columns

    def is_numeric(self, name: str) -> bool:
        return self.kinds.get(name) is ColumnKind.NUMERIC

    def get_numerics(self) -> List[str]:
        return [name for name in self._columns if self.is_numeric(name)]

    def set_label(self, name: str) -> bool:
        if not self.has_attribute(name):
            logger.warning("`%s` not found, current label not changed.", name)
            return False
        self.label = name
        return True

    def get_label(self) -> Optional[str]:
        return self.label

    def label_index(self) -> int:
        # jedino mesto gde se ime labele prevodi u poziciju
        if self.label is None:
            raise LabelUnsetError()
        return self.column_order.index(self.label)

    # --- pristup podacima ---

    @property
    def row_count(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def column(self, name: str) -> List[Value]:
        try:
            return self._columns[name]
        except KeyError:
            raise AttributeNotFoundError(name) from None

    def __getitem__(self, name: str) -> List[Value]:
        return self.column(name)

    def row(self, i: int) -> List[Value]:
        if not 0 <= i < self._size:
            raise RowIndexError(i, self._size)
        return [col[i] for col in self._columns.values()]

    def iterrows(self) -> Iterator[List[Value]]:
        for i in range(self._size):
            yield self.row(i)

    def label_counts(self) -> Dict[Value, int]:
        if self.label is None:
            raise LabelUnsetError()
        counts: Dict[Value, int] = {}
        for v in self.column(self.label):
            counts[v] = counts.get(v, 0) + 1
        return counts

    # --- izmene ---

    def append_row(self, values: Sequence[Value]) -> None:
        values = list(values)
        if len(values) != len(self._columns):
            raise ValueError(f"Expected {len(self._columns)} values, got {len(values)}.")
        if self._size == 0:
            self._infer_kinds(values)
        for col, v in zip(self._columns.values(), values):
            col.append(v)
        self._size += 1

    def remove_row(self, i: int) -> None:
        """
        Uklanja red i tako sto ga zameni sa poslednjim pa skrati kolone.
        Menja redosled redova (poslednji red prelazi na poziciju i).
        """
        if not 0 <= i < self._size:
            raise RowIndexError(i, self._size)
        for col in self._columns.values():
            col[i], col[-1] = col[-1], col[i]
            col.pop()
        self._size -= 1

    def _subset(self, indices: Sequence[int]) -> "Dataset":
        child = Dataset(
            {name: [col[i] for i in indices] for name, col in self._columns.items()},
            kinds=dict(self.kinds),
            normalizer=self.normalizer,
        )
        child.label = self.label
        return child

    def split(self, ratio: float = 0.75, seed: Optional[int] = None) -> Tuple["Dataset", "Dataset"]:
        if not 0.0 <= ratio <= 1.0:
            raise SplitRatioError(ratio)
        # puna permutacija indeksa, prvih floor(ratio*N) ide u train
        # bez seed-a koristi se globalni numpy generator (utils.set_seed)
        if seed is None:
            order = np.random.permutation(self._size)
        else:
            order = np.random.default_rng(seed).permutation(self._size)
        n_train = int(math.floor(ratio * self._size))
        train = self._subset(order[:n_train].tolist())
        test = self._subset(order[n_train:].tolist())
        return train, test

    def copy(self) -> "Dataset":
        other = self._subset(range(self._size))
        other.normalization_params = dict(self.normalization_params)
        other._normalized = self._normalized
        return other

    # --- normalizacija ---

    def set_normalizer(self, normalizer: Normalizer) -> None:
        self.normalizer = normalizer

    @property
    def is_fitted(self) -> bool:
        return self._normalized

    def normalize(self) -> None:
        if self._normalized:
            # ponovni poziv bi min/max racunao iz vec skaliranih podataka
            logger.warning("dataset already normalized, normalize() ignored")
            return
        self.normalizer.fit_transform(self)
        self._normalized = True

    def renormalize(self, row: Sequence[Value]) -> List[Value]:
        return self.normalizer.transform(self, row)

    def is_normalized(self, row: Sequence[Value]) -> bool:
        """
        False ako neka numericka vrednost u redu izlazi iz zapisanog
        [min, max] opsega svoje kolone (poredjenje po poziciji).
        Pre normalize() nema zapisanih granica pa je rezultat False.
        """
        if not self.normalization_params:
            return False
        for name, value in zip(self._columns, row):
            if not self.is_numeric(name) or isinstance(value, str):
                continue
            lo = self.normalization_params.get(param_key(name, "min"))
            hi = self.normalization_params.get(param_key(name, "max"))
            if lo is None or hi is None:
                continue
            if value < lo or value > hi:
                return False
        return True

    def __repr__(self) -> str:
        return (f"Dataset(rows={self._size}, columns={self.column_order}, "
                f"label={self.label!r})")
