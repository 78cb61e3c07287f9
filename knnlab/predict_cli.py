import argparse, json, logging
from typing import Dict

from knnlab.data_loader import read_csv
from knnlab.infer import feature_names, predict_single
from knnlab.models.knn import KNN
from knnlab.proximity import PROXIMITY_MEASURES, get_proximity
from knnlab.utils import DEFAULT_K, IRIS_LABEL, setup_logging


def _prompt_yes_no(q: str) -> bool:
    while True:
        ans = input(q).strip().lower()
        if ans in ("da","d","yes","y"): return True
        if ans in ("ne","n","no"): return False
        print("Molim odgovori sa 'da' ili 'ne'.")


def _prompt_value(name: str, numeric: bool):
    hint = "broj" if numeric else "tekst"
    while True:
        raw = input(f"  • {name} ({hint}): ").strip()
        if not numeric:
            if raw:
                return raw
            print("  ↳ Unos ne sme biti prazan. Pokušaj ponovo.")
            continue
        try:
            return float(raw)
        except ValueError:
            print("  ↳ Unos mora biti broj (koristi tačku za decimalni zarez). Pokušaj ponovo.")


def _collect_interactive(dataset) -> Dict[str, object]:
    print("\nUnos podataka za jedan uzorak:")
    return {name: _prompt_value(name, dataset.is_numeric(name)) for name in feature_names(dataset)}


def main(argv=None):
    parser = argparse.ArgumentParser(description="KNN predikcija jednog uzorka – CLI")
    parser.add_argument("--csv", default="data/iris.csv", help="putanja do CSV-a")
    parser.add_argument("--label", default=IRIS_LABEL, help="kolona koju predvidjamo")
    parser.add_argument("--k", type=int, default=DEFAULT_K, help="broj suseda")
    parser.add_argument("--metric", choices=sorted(PROXIMITY_MEASURES), default="euclidean",
                        help="mera blizine (jaccard poredi karaktere prvog polja)")
    parser.add_argument("--json", type=str, default=None,
                        help="JSON sa poljima uzorka. Ako je zadat, preskače se interaktivni unos.")
    parser.add_argument("--verbose", action="store_true", help="DEBUG logovanje")
    args = parser.parse_args(argv)

    setup_logging(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        data = read_csv(args.csv, label=args.label)
        knn = KNN(data, k=min(args.k, len(data)), proximity=get_proximity(args.metric))

        if args.json:
            user_input = json.loads(args.json)
        else:
            print("\nDa li želiš da uneseš svoje podatke? (da/ne)")
            if not _prompt_yes_no("> "):
                example = {name: "..." for name in feature_names(data)}
                print("\nNisi izabrao interaktivni unos. Evo primer JSON formata za --json:")
                print(json.dumps(example, indent=2))
                return 0
            user_input = _collect_interactive(knn.get_dataset())

        res = predict_single(user_input, csv_path=args.csv, label=args.label,
                             metric=args.metric, knn=knn)
    except Exception as e:
        print(f"❌ Greška: {e}")
        return 1

    print("\n=== Rezultat ===")
    print(f" Mera:        {res['metric']} (k={res['k']})")
    print(f" Predikcija:  {res['label_text']}")
    for lab, w in sorted(res["weights"].items(), key=lambda kv: -kv[1]):
        print(f"   {lab:<20} {w:.3f}")
    print(" Susedi (skor, red): " + ", ".join(f"({s:.3f}, {i})" for s, i in res["neighbors"]))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
