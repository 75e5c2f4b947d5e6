from .classify import classify
from .errors import InvalidConfig, RootUnreadable, ScanError
from .models import (BEYOND_DEPTH, NO_EXTENSION, DirNode, ExtensionStat,
                     ScanConfig, SortMode, label)
from .render import render
from .scanner import aggregate
from .utils import format_size

__version__ = "0.1.0"
