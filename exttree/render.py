from __future__ import annotations
from typing import Callable, List, Optional, Tuple

from .models import DirNode, ExtensionStat, ScanConfig, SortMode, label
from .utils import format_size as default_format_size

TPIPE = "├── "
LPIPE = "└── "
VBAR = "│   "
BLANK = "    "
SEP = " ── "
SIZE_WIDTH = 10

SizeFormatter = Callable[[int], str]


def _order_key(mode: SortMode, name: str, count: int, size: int) -> Tuple:
    if mode is SortMode.ALPHABETICALLY:
        return (name,)
    if mode is SortMode.FILE_COUNT:
        return (-count, name)
    return (-size, name)


def sorted_stats(node: DirNode, mode: SortMode) -> List[ExtensionStat]:
    return sorted(node.stats.values(),
                  key=lambda s: _order_key(mode, label(s.key), s.file_count, s.total_bytes))


def sorted_children(node: DirNode, mode: SortMode) -> List[DirNode]:
    # Directories are ranked by their roll-up totals, descendants included.
    return sorted(node.children,
                  key=lambda c: _order_key(mode, c.name, c.total_files(), c.total_bytes()))


def format_stat_lines(stats: List[ExtensionStat], format_size: SizeFormatter) -> List[str]:
    """``<ext> ── <count> ── <size>`` with columns aligned within one directory."""
    if not stats:
        return []
    label_w = max(len(label(s.key)) for s in stats)
    count_w = max(len(str(s.file_count)) for s in stats)
    return [
        f"{label(s.key):<{label_w}}{SEP}{s.file_count:>{count_w}}{SEP}{format_size(s.total_bytes):>{SIZE_WIDTH}}"
        for s in stats
    ]


def _visible(node: DirNode, config: ScanConfig) -> bool:
    return config.show_empty or not node.is_empty


def _render_body(node: DirNode, prefix: str, config: ScanConfig,
                 format_size: SizeFormatter, out: List[str]):
    children = [c for c in sorted_children(node, config.sort_mode) if _visible(c, config)]
    stat_lines = format_stat_lines(sorted_stats(node, config.sort_mode), format_size)

    for i, text in enumerate(stat_lines):
        last = not children and i == len(stat_lines) - 1
        out.append(prefix + (LPIPE if last else TPIPE) + text)

    for i, child in enumerate(children):
        last = i == len(children) - 1
        out.append(prefix + (LPIPE if last else TPIPE) + child.name)
        _render_body(child, prefix + (BLANK if last else VBAR), config, format_size, out)


def render(root: DirNode, config: Optional[ScanConfig] = None,
           format_size: SizeFormatter = default_format_size) -> str:
    config = config or ScanConfig()
    out = [root.name]
    _render_body(root, "", config, format_size, out)
    return "\n".join(out) + "\n"
