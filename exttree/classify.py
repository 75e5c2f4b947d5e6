from __future__ import annotations

from .models import NO_EXTENSION, ExtensionKey


def classify(filename: str, fold_case: bool = False) -> ExtensionKey:
    # A dot at position 0 only marks a hidden file: ".gitignore" has no suffix,
    # ".config.yml" has "yml". "name." keeps the empty suffix "".
    idx = filename.rfind(".")
    if idx <= 0:
        return NO_EXTENSION
    ext = filename[idx + 1:]
    return ext.lower() if fold_case else ext
