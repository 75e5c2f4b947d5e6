from __future__ import annotations

SCALES = [
    (1024 ** 4, "TiB"),
    (1024 ** 3, "GiB"),
    (1024 ** 2, "MiB"),
    (1024, "kiB"),
]


def format_size(num: int, decimals: int = 2) -> str:
    """Bytes as binary-scaled units: 512 -> "512 B", 7240 -> "7.07 kiB"."""
    for scale, unit in SCALES:
        if num >= scale:
            return f"{num / scale:.{decimals}f} {unit}"
    return f"{num} B"
