from __future__ import annotations
import logging
import os
import sys
from datetime import datetime
from typing import Dict

import numpy as np

from .dataset import Dataset, Value


def set_seed(seed: int = 42) -> None:
    # globalni seed zbog ponovljivosti (isti split, isti rezultati)
    np.random.seed(seed)


# Podrazumevana podesavanja
DEFAULT_K = 5
DEFAULT_SPLIT = 0.75
DEFAULT_SEED = 42
IRIS_LABEL = "species"

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] [%(name)s] %(message)s"


def setup_logging(level: int = logging.INFO, log_to_file: bool = False,
                  log_dir: str = "logs", log_filename_prefix: str = "knnlab") -> None:
    """
    Podesava root logger: konzola (stdout) i opciono fajl sa vremenskom oznakom.
    Poziva se jednom, na pocetku skripte.
    """
    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    root = logging.getLogger()
    root.setLevel(level)

    # bez duplih handlera ako se pozove vise puta
    if root.hasHandlers():
        root.handlers.clear()

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(formatter)
    root.addHandler(console)

    if log_to_file:
        os.makedirs(log_dir, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = os.path.join(log_dir, f"{log_filename_prefix}_{stamp}.log")
        fh = logging.FileHandler(path, encoding="utf-8")
        fh.setFormatter(formatter)
        root.addHandler(fh)
        logging.getLogger(__name__).info("Logging to file: %s", path)


def label_balance(dataset: Dataset) -> Dict[Value, float]:
    # procentualna zastupljenost svake labele u skupu
    counts = dataset.label_counts()
    total = len(dataset)
    if total == 0:
        return {}
    return {k: counts[k] / total for k in counts}
