from __future__ import annotations
import os
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict

from .data_loader import read_csv
from .dataset import format_value
from .metrics import classification_report, confusion_to_array
from .models.knn import KNN
from .proximity import get_proximity
from .utils import DEFAULT_K, DEFAULT_SEED, DEFAULT_SPLIT, label_balance, set_seed

logger = logging.getLogger(__name__)


@dataclass
class EvalResult:
    # Jednostavan paket rezultata da lako serijalizujem i dalje obradjujem
    k: int
    metric: str
    n_train: int
    n_test: int
    confusion: Dict[Any, Dict[Any, int]]
    metrics: Dict[str, float]
    percentages: Dict[str, int]


def _json_confusion(cm) -> Dict[str, Dict[str, int]]:
    # JSON kljucevi moraju biti stringovi
    return {format_value(a): {format_value(p): int(c) for p, c in row.items()} for a, row in cm.items()}


def _json_balance(balance) -> Dict[str, float]:
    return {format_value(k): float(v) for k, v in balance.items()}


def train_and_evaluate(csv_path: str,
                       label: str,
                       out_dir: str = "outputs",
                       k: int = DEFAULT_K,
                       ratio: float = DEFAULT_SPLIT,
                       seed: int = DEFAULT_SEED,
                       metric: str = "euclidean") -> EvalResult:
    # Glavni pipeline: ucitavanje → split → KNN → evaluacija → izvoz rezultata
    os.makedirs(out_dir, exist_ok=True)
    set_seed(seed)

    data = read_csv(csv_path, label=label)
    train, test = data.split(ratio, seed=seed)
    if len(train) == 0 or len(test) == 0:
        raise ValueError(f"Split {ratio} ostavlja prazan skup (train={len(train)}, test={len(test)}).")

    # Info o skupu za log/izvestaj
    with open(os.path.join(out_dir, "dataset_info.json"), "w", encoding="utf-8") as f:
        json.dump({
            "csv": csv_path,
            "label": label,
            "attributes": data.get_attributes(),
            "n_train": len(train),
            "n_test": len(test),
            "label_balance_train": _json_balance(label_balance(train)),
            "label_balance_test": _json_balance(label_balance(test)),
        }, f, indent=2)

    knn = KNN(train, k=min(k, len(train)), proximity=get_proximity(metric))
    cm = knn.evaluate(test)
    report = classification_report(cm)
    classes, arr = confusion_to_array(cm)

    with open(os.path.join(out_dir, "metrics.json"), "w", encoding="utf-8") as f:
        json.dump({
            "k": knn.k,
            "metric": metric,
            **report.to_dict(),
            "percentages": report.percentages(),
            "confusion_matrix": _json_confusion(cm),
            "classes": [format_value(c) for c in classes],
            "confusion_matrix_array": arr.tolist(),
        }, f, indent=2)

    # Izvoz i u summary CSV
    lines = ["k,metric,n_test,precision,recall,accuracy,f1"]
    lines.append(",".join([
        str(knn.k), metric, str(report.n_samples),
        f"{report.precision:.6f}", f"{report.recall:.6f}",
        f"{report.accuracy:.6f}", f"{report.f1:.6f}",
    ]))
    with open(os.path.join(out_dir, "summary.csv"), "w", encoding="utf-8") as f:
        f.write("\n".join(lines))

    logger.info("results written to %s", out_dir)
    return EvalResult(
        k=knn.k,
        metric=metric,
        n_train=len(train),
        n_test=len(test),
        confusion=cm,
        metrics=report.to_dict(),
        percentages=report.percentages(),
    )
