import math


def round_half_up(value: float) -> int:
    """Round x.5 upwards; the built-in ``round`` sends 12.5 to 12."""
    return int(math.floor(value + 0.5))


def percentage(part: int, total: int) -> int:
    """Whole-number percentage of ``part`` in ``total``, 0 for an empty total."""
    if not total:
        return 0
    return round_half_up(100 * part / total)
