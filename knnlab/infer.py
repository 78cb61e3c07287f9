from __future__ import annotations
from typing import Any, Dict, List, Optional

from .data_loader import read_csv
from .dataset import Dataset, Value, format_value
from .models.knn import KNN
from .proximity import get_proximity
from .utils import DEFAULT_K

# vrednost na mestu labele u upitu, mera je ionako preskace
UNKNOWN_LABEL = "?"


def feature_names(dataset: Dataset) -> List[str]:
    return [a for a in dataset.get_attributes() if a != dataset.get_label()]


def build_query(dataset: Dataset, user_input: Dict[str, Any]) -> List[Value]:
    # validacija kljuceva
    missing = [k for k in feature_names(dataset) if k not in user_input]
    if missing:
        raise ValueError(f"Nedostaju polja: {missing}")

    row: List[Value] = []
    for name in dataset.get_attributes():
        if name == dataset.get_label():
            row.append(UNKNOWN_LABEL)
        elif dataset.is_numeric(name):
            row.append(float(user_input[name]))
        else:
            row.append(str(user_input[name]))
    return row


def predict_single(
    user_input: Dict[str, Any],
    csv_path: str,
    label: str,
    k: int = DEFAULT_K,
    metric: str = "euclidean",
    knn: Optional[KNN] = None,
) -> Dict[str, Any]:
    # model se uci na celom CSV-u (KNN samo pamti podatke)
    if knn is None:
        data = read_csv(csv_path, label=label)
        knn = KNN(data, k=min(k, len(data)), proximity=get_proximity(metric))

    query = build_query(knn.get_dataset(), user_input)
    weights = knn.predict_proba(query)
    predicted = max(weights, key=weights.get)
    neighbors = knn.first_knn(query)
    return {
        "label": predicted,
        "label_text": format_value(predicted),
        "weights": {format_value(k_): w for k_, w in weights.items()},
        "neighbors": neighbors,
        "k": knn.k,
        "metric": metric,
    }
