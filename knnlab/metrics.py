from __future__ import annotations
import math
from dataclasses import dataclass, asdict
from typing import Dict, List, Tuple

import numpy as np

from .dataset import Value

ConfusionMatrix = Dict[Value, Dict[Value, int]]


def confusion_labels(cm: ConfusionMatrix) -> List[Value]:
    # redosled labela: prvo stvarne (redovi) pa predvidjene koje nisu vec vidjene
    labels: List[Value] = []
    for actual, row in cm.items():
        if actual not in labels:
            labels.append(actual)
        for predicted in row:
            if predicted not in labels:
                labels.append(predicted)
    return labels


def confusion_to_array(cm: ConfusionMatrix) -> Tuple[List[Value], np.ndarray]:
    """Dict-of-dict matrica -> (labele, kvadratni niz [stvarna, predvidjena])."""
    labels = confusion_labels(cm)
    pos = {lab: i for i, lab in enumerate(labels)}
    arr = np.zeros((len(labels), len(labels)), dtype=np.int64)
    for actual, row in cm.items():
        for predicted, count in row.items():
            arr[pos[actual], pos[predicted]] += int(count)
    return labels, arr


def confusion_counts(cm: ConfusionMatrix) -> Tuple[int, int, int, int]:
    """
    Mikro TP/TN/FP/FN (one-vs-rest, sabrano po klasama).

      - TP = suma dijagonale
      - FP = FN = suma van dijagonale
      - TN = za svaku klasu c: celije van reda c i van kolone c
    """
    _, arr = confusion_to_array(cm)
    if arr.size == 0:
        return 0, 0, 0, 0
    total = int(arr.sum())
    diag = np.diag(arr)
    tp = int(diag.sum())
    off = total - tp
    tn = int((total - arr.sum(axis=1) - arr.sum(axis=0) + diag).sum())
    return tp, tn, off, off


def prec_recall_f1(tp: int, tn: int, fp: int, fn: int):
    precision = tp / (tp + fp) if (tp + fp) > 0 else 0.0   # TP / (TP + FP)
    recall = tp / (tp + fn) if (tp + fn) > 0 else 0.0       # TP / (TP + FN)
    f1 = (2*precision*recall)/(precision+recall) if (precision+recall) > 0 else 0.0
    acc = (tp + tn) / (tp + tn + fp + fn) if (tp+tn+fp+fn) > 0 else 0.0
    return precision, recall, f1, acc


def as_percent(x: float) -> int:
    # zaokruzivanje "pola navise", kao u izvestaju
    return int(math.floor(x * 100 + 0.5))


@dataclass
class EvaluationReport:
    tp: int
    tn: int
    fp: int
    fn: int
    precision: float
    recall: float
    f1: float
    accuracy: float
    n_samples: int

    def percentages(self) -> Dict[str, int]:
        return {
            "precision": as_percent(self.precision),
            "recall": as_percent(self.recall),
            "accuracy": as_percent(self.accuracy),
        }

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def classification_report(cm: ConfusionMatrix) -> EvaluationReport:
    tp, tn, fp, fn = confusion_counts(cm)
    p, r, f1, acc = prec_recall_f1(tp, tn, fp, fn)
    n = sum(sum(row.values()) for row in cm.values())
    return EvaluationReport(tp=tp, tn=tn, fp=fp, fn=fn,
                            precision=p, recall=r, f1=f1, accuracy=acc, n_samples=n)


def format_report(report: EvaluationReport) -> str:
    pct = report.percentages()
    return (
        f"Model Micro-Precision : {pct['precision']}%\n"
        f"Model Micro-Recall    : {pct['recall']}%\n"
        f"Model Micro-Accuracy  : {pct['accuracy']}%"
    )
