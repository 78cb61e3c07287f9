import argparse
import io
import os
import sys
import urllib.request
from urllib.error import URLError

import pandas as pd

IRIS_URLS = [
    "https://raw.githubusercontent.com/mwaskom/seaborn-data/master/iris.csv",
    "https://archive.ics.uci.edu/ml/machine-learning-databases/iris/iris.data",
]
IRIS_COLUMNS = ["sepal_length", "sepal_width", "petal_length", "petal_width", "species"]
DEFAULT_DEST = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "data", "iris.csv")


def download(url: str, timeout: float = 30.0) -> str:
    req = urllib.request.Request(url, headers={"User-Agent": "knnlab-download"})
    with urllib.request.urlopen(req, timeout=timeout) as resp:
        payload = resp.read()
    # UCI fajlovi ponekad nisu cist utf-8
    return payload.decode("utf-8", errors="replace")


def parse_iris(text: str, columns=IRIS_COLUMNS) -> pd.DataFrame:
    """
    Seaborn verzija ima header, UCI nema i labele su "Iris-setosa".
    Vraca DataFrame sa `columns` i labelama bez prefiksa.
    """
    first = text.lstrip().splitlines()[0] if text.strip() else ""
    has_header = columns[-1] in first.split(",")
    df = pd.read_csv(io.StringIO(text), header=0 if has_header else None)
    if df.shape[1] != len(columns):
        raise ValueError(f"ocekivano {len(columns)} kolona, dobijeno {df.shape[1]}")
    df.columns = columns
    df = df.dropna()
    label = columns[-1]
    df[label] = df[label].astype(str).str.replace("Iris-", "", regex=False)
    return df


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Preuzimanje iris CSV-a u data/")
    parser.add_argument("--out", default=DEFAULT_DEST, help="gde se cuva CSV")
    parser.add_argument("--url", action="append", default=None,
                        help="izvor (moze vise puta); podrazumevano seaborn pa UCI")
    args = parser.parse_args(argv)

    os.makedirs(os.path.dirname(os.path.abspath(args.out)), exist_ok=True)
    errors = []
    for url in args.url or IRIS_URLS:
        print("Preuzimam:", url)
        try:
            df = parse_iris(download(url))
        except (URLError, OSError, ValueError) as e:
            errors.append(f"{url}: {e}")
            continue
        df.to_csv(args.out, index=False)
        print(f"Sacuvano: {args.out} ({len(df)} redova)")
        return 0

    print("Preuzimanje nije uspelo:\n  " + "\n  ".join(errors))
    return 1


if __name__ == "__main__":
    sys.exit(main())
