from __future__ import annotations
import re
from typing import Optional

import pandas as pd

from .dataset import ColumnKind, Dataset, format_value

_NUMERIC = re.compile(r"^[-+]?(\d+\.?\d*|\.\d+)$")


def is_numeric(entry: str) -> bool:
    return bool(_NUMERIC.match(entry.strip()))


def read_csv(csv_path: str, label: Optional[str] = None) -> Dataset:
    # Sve citam kao tekst, vrstu kolone odredjuje PRVI red podataka
    df = pd.read_csv(csv_path, dtype=str, keep_default_na=False, encoding="utf-8")
    if df.empty:
        raise ValueError(f"CSV fajl nema redova sa podacima: {csv_path}")

    first = df.iloc[0]
    kinds = {
        str(c): ColumnKind.NUMERIC if is_numeric(first[c]) else ColumnKind.CATEGORICAL
        for c in df.columns
    }

    columns = {}
    for c in df.columns:
        name = str(c)
        if kinds[name] is ColumnKind.NUMERIC:
            converted = pd.to_numeric(df[c].str.strip(), errors="coerce")
            bad = converted.isna()
            if bad.any():
                row = int(bad.to_numpy().argmax())
                raise ValueError(
                    f"Kolona '{name}' je numericka, ali red {row + 1} ima vrednost {df[c].iloc[row]!r}"
                )
            columns[name] = converted.astype(float).tolist()
        else:
            columns[name] = df[c].tolist()

    ds = Dataset(columns, kinds=kinds)
    if label is not None and not ds.set_label(label):
        raise ValueError(f"CSV fajl nema kolonu za labelu: '{label}'")
    return ds


def to_frame(dataset: Dataset) -> pd.DataFrame:
    return pd.DataFrame({name: dataset.column(name) for name in dataset.get_attributes()})


def to_csv(dataset: Dataset, csv_path: str) -> None:
    rows = [[format_value(v) for v in r] for r in dataset.iterrows()]
    pd.DataFrame(rows, columns=dataset.get_attributes()).to_csv(csv_path, index=False, encoding="utf-8")
