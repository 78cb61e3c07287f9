import os
import sys
import argparse
import logging

from knnlab.data_loader import read_csv
from knnlab.metrics import confusion_labels
from knnlab.plotting import generate_all_plots, scatter_plot
from knnlab.proximity import PROXIMITY_MEASURES
from knnlab.table import render_table, print_dataset
from knnlab.train_eval import train_and_evaluate
from knnlab.utils import DEFAULT_K, DEFAULT_SEED, DEFAULT_SPLIT, IRIS_LABEL, setup_logging

BASE_DIR = os.path.dirname(__file__)

logger = logging.getLogger("main")


def resolve_csv_path() -> str:
    data_csv = os.path.join(BASE_DIR, "data", "iris.csv")
    if os.path.isfile(data_csv):
        return data_csv

    # Fallback na sample ako ne postoji iris.csv
    sample_csv = os.path.join(BASE_DIR, "data", "iris_sample.csv")
    if os.path.isfile(sample_csv):
        print("⚠️  Nema data/iris.csv – koristim data/iris_sample.csv (python tools/download_data.py)")
        return sample_csv

    raise FileNotFoundError(
        "Nisam našao ni data/iris.csv ni data/iris_sample.csv. "
        "Pokreni tools/download_data.py pa pokušaj ponovo."
    )


def _print_box(title: str):
    line = "═" * (len(title) + 2)
    print(f"\n╔{line}╗")
    print(f"║ {title} ║")
    print(f"╚{line}╝")


def _print_confusion(cm):
    labels = confusion_labels(cm)
    headers = ["actual \\ predicted"] + [str(l) for l in labels]
    rows = [[str(a)] + [str(cm.get(a, {}).get(p, 0)) for p in labels] for a in labels]
    print(render_table(headers, rows))


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="KNN demo: split → evaluacija → grafici")
    parser.add_argument("--csv", default=None, help="CSV (default data/iris.csv)")
    parser.add_argument("--label", default=IRIS_LABEL)
    parser.add_argument("--k", type=int, default=DEFAULT_K)
    parser.add_argument("--ratio", type=float, default=DEFAULT_SPLIT, help="udeo train skupa")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED)
    parser.add_argument("--metric", choices=sorted(PROXIMITY_MEASURES), default="euclidean")
    parser.add_argument("--out", default=os.path.join(BASE_DIR, "outputs"))
    parser.add_argument("--show", type=int, default=0, help="odštampaj prvih N redova skupa")
    parser.add_argument("--scatter", nargs=2, metavar=("X", "Y"), default=None,
                        help="dve numeričke kolone za scatter plot")
    parser.add_argument("--log-file", action="store_true")
    args = parser.parse_args(argv)

    setup_logging(log_to_file=args.log_file, log_dir=os.path.join(args.out, "logs"))

    try:
        csv_path = args.csv or resolve_csv_path()

        if args.show or args.scatter:
            data = read_csv(csv_path, label=args.label)
            if args.show:
                _print_box("Dataset")
                print_dataset(data, limit=args.show)
            if args.scatter:
                os.makedirs(args.out, exist_ok=True)
                x, y = args.scatter
                path = scatter_plot(data, x, y, out_path=os.path.join(args.out, f"scatter_{x}_{y}.png"))
                logger.info("scatter plot: %s", path)

        res = train_and_evaluate(csv_path, args.label, out_dir=args.out, k=args.k,
                                 ratio=args.ratio, seed=args.seed, metric=args.metric)
        generate_all_plots(outputs_dir=args.out)

        _print_box(f"KNN k={res.k} ({res.metric}) | train: {res.n_train}  test: {res.n_test}")
        _print_confusion(res.confusion)
        pct = res.percentages
        print(f"\nModel Micro-Precision : {pct['precision']}%")
        print(f"Model Micro-Recall    : {pct['recall']}%")
        print(f"Model Micro-Accuracy  : {pct['accuracy']}%")
        print(f"\n📁 Rezultati su u '{args.out}' (metrics.json, summary.csv, confusion_matrix.png)")
        print("\n✅ Gotovo.")
        return 0
    except Exception as e:
        print(f"❌ Greška: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
