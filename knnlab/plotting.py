import json
from pathlib import Path
import matplotlib.pyplot as plt
import numpy as np

from .dataset import format_value
from .exceptions import AttributeNotFoundError
from .metrics import confusion_to_array

# default izgled grafika
plt.rcParams.update({
    "figure.dpi": 110,
    "savefig.dpi": 150,
    "axes.grid": True,
    "grid.alpha": 0.25,
    "axes.titlesize": 12,
    "axes.labelsize": 10,
    "legend.fontsize": 9,
    "font.size": 9,
})


def _load_json(path: Path):
    # pomocna funkcija – cita JSON ili vraca None ako ne postoji
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        return None


def _numeric_column(dataset, name):
    if not dataset.has_attribute(name):
        raise AttributeNotFoundError(name)
    if not dataset.is_numeric(name):
        raise ValueError(f"`{name}` is not a numerical type.")
    return np.asarray(dataset.column(name), dtype=float)


def scatter_plot(dataset, x: str, y: str, target=None, title=None, out_path=None):
    """
    Tacke dve numericke kolone, obojene po vrednosti labele (ako je postavljena).
    target=(x, y) se crta kao veci marker - npr. upit koji klasifikujemo.
    """
    xs = _numeric_column(dataset, x)
    ys = _numeric_column(dataset, y)

    fig, ax = plt.subplots()
    label = dataset.get_label()
    if label is None:
        ax.scatter(xs, ys, s=18, label="points")
    else:
        labels = dataset.column(label)
        # svaka labela dobija svoju boju, redosled pojavljivanja
        for value in dict.fromkeys(labels):
            mask = np.array([v == value for v in labels])
            ax.scatter(xs[mask], ys[mask], s=18, label=format_value(value))

    if target is not None:
        ax.scatter([target[0]], [target[1]], s=120, marker="*", color="black", label="target")

    ax.set_title(title or f"{y} vs {x}")
    ax.set_xlabel(x)
    ax.set_ylabel(y)
    ax.legend(frameon=True)
    fig.tight_layout()
    if out_path:
        fig.savefig(out_path)
    plt.close(fig)
    return out_path


def _row_share(cm: np.ndarray) -> np.ndarray:
    # udeo svake celije u svom redu (stvarnoj klasi); prazan red ostaje nula
    totals = cm.sum(axis=1, keepdims=True)
    return np.divide(cm, totals, out=np.zeros_like(cm), where=totals > 0)


def plot_confusion_matrix(cm, classes=None, title="Confusion matrix", out_path=None):
    # cm moze biti dict-of-dict (iz KNN.evaluate) ili kvadratna lista/niz
    if isinstance(cm, dict):
        labels, cm = confusion_to_array(cm)
        if classes is None:
            classes = [format_value(v) for v in labels]
    cm = np.array(cm, dtype=float)
    if classes is None:
        classes = [str(i) for i in range(cm.shape[0])]

    share = _row_share(cm)

    # sa vise klasa kvadrat raste, ali ne preko ~9 inca
    side = min(3.0 + 0.6 * len(classes), 9.0)
    fig, ax = plt.subplots(figsize=(side, side))
    im = ax.imshow(share, cmap="Blues", vmin=0.0, vmax=1.0)
    fig.colorbar(im, ax=ax, fraction=0.046, pad=0.04, label="share of actual class")
    ax.set_title(title)
    ax.set_xticks(range(len(classes)), labels=classes, rotation=45, ha="right")
    ax.set_yticks(range(len(classes)), labels=classes)
    ax.set_xlabel("Predicted label")
    ax.set_ylabel("Actual label")
    ax.grid(False)

    # broj + procenat u svakoj celiji, beli tekst na tamnim poljima
    for (i, j), count in np.ndenumerate(cm):
        color = "white" if share[i, j] > 0.6 else "black"
        ax.text(j, i, f"{int(count)}\n{share[i, j]:.0%}", ha="center", va="center", color=color)

    fig.tight_layout()
    if out_path:
        fig.savefig(out_path)
    plt.close(fig)
    return out_path


def generate_all_plots(outputs_dir="outputs"):
    # heatmap konfuzione matrice na osnovu metrics.json iz evaluacije
    out_dir = Path(outputs_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    m = _load_json(out_dir / "metrics.json")
    if not m:
        return []
    cm = m.get("confusion_matrix_array")
    if not cm:
        return []
    out_png = out_dir / "confusion_matrix.png"
    plot_confusion_matrix(
        cm,
        classes=m.get("classes"),
        title=f"KNN (k={m.get('k', '?')}): test confusion matrix",
        out_path=out_png,
    )
    return [out_png]
