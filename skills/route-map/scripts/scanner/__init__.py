from .context import ScanContext, ScanOptions
from .core import ECOSYSTEMS, ScanResult, scan_project
from .react import scan_react
from .vue import scan_vue

__all__ = [
    "ECOSYSTEMS",
    "ScanContext",
    "ScanOptions",
    "ScanResult",
    "scan_project",
    "scan_react",
    "scan_vue",
]
