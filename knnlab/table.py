from typing import List, Optional

from .dataset import Dataset, format_value


def render_table(headers: List[str], rows: List[List[str]]) -> str:
    if not headers or not rows:
        return "Table is empty."

    widths = [len(h) for h in headers]
    for r in rows:
        for i, cell in enumerate(r[:len(headers)]):
            widths[i] = max(widths[i], len(cell))

    def line(ch="-"):
        return "+".join(ch * (w + 2) for w in widths)

    out = [
        " | ".join(h.ljust(widths[i]) for i, h in enumerate(headers)),
        line("="),
    ]
    for r in rows:
        out.append(" | ".join(str(r[i]).ljust(widths[i]) if i < len(r) else " " * widths[i]
                              for i in range(len(headers))))
    return "\n".join(out)


def render_dataset(dataset: Dataset, limit: Optional[int] = None) -> str:
    n = len(dataset) if limit is None else min(limit, len(dataset))
    rows = [[format_value(v) for v in dataset.row(i)] for i in range(n)]
    body = render_table(dataset.get_attributes(), rows)
    return f"{body}\n\nTotal printed records: {n}"


def print_dataset(dataset: Dataset, limit: Optional[int] = None) -> None:
    print(render_dataset(dataset, limit=limit))
