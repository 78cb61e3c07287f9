"""Greške koje jezgro (Dataset / KNN) prijavljuje pozivaocu."""


class KnnLabError(Exception):
    """Zajednička bazna klasa - pozivalac može da uhvati sve odjednom."""


class AttributeNotFoundError(KnnLabError, KeyError):
    def __init__(self, name):
        super().__init__(name)
        self.name = name

    def __str__(self):
        return f"attribute `{self.name}` not found"


class RowIndexError(KnnLabError, IndexError):
    def __init__(self, index, size):
        super().__init__(f"row index {index} out of range [0, {size})")
        self.index = index
        self.size = size


class SplitRatioError(KnnLabError, ValueError):
    def __init__(self, ratio):
        super().__init__(f"ratio must be in [0, 1], got {ratio}")
        self.ratio = ratio


class LabelUnsetError(KnnLabError):
    def __init__(self, msg="no label set yet, call set_label first"):
        super().__init__(msg)
