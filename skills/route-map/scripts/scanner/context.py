from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple

from _fs import read_text

from .constants import (
    EXCLUDE_DIRS,
    ROUTER_DIR,
    ROUTES_FILE_NAMES,
    SOURCE_PREFIX,
    TREE_EXTENSIONS,
)
from .syntax import SourceFile


@dataclass
class ScanOptions:
    extensions: Tuple[str, ...] = TREE_EXTENSIONS
    exclude_dirs: Set[str] = field(default_factory=lambda: set(EXCLUDE_DIRS))
    exclude_globs: List[str] = field(default_factory=list)
    routes_file_names: Tuple[str, ...] = ROUTES_FILE_NAMES
    router_dir: str = ROUTER_DIR
    source_prefix: str = SOURCE_PREFIX

    @classmethod
    def from_config(cls, config: Dict[str, object]) -> "ScanOptions":
        options = cls()
        extensions = config.get("extensions")
        if isinstance(extensions, list) and extensions:
            options.extensions = tuple(str(ext) for ext in extensions)
        exclude_dirs = config.get("exclude_dirs")
        if isinstance(exclude_dirs, list):
            options.exclude_dirs.update(str(name) for name in exclude_dirs)
        exclude_globs = config.get("exclude_globs")
        if isinstance(exclude_globs, list):
            options.exclude_globs = [str(glob) for glob in exclude_globs]
        routes_files = config.get("routes_files")
        if isinstance(routes_files, list) and routes_files:
            options.routes_file_names = tuple(str(name) for name in routes_files)
        router_dir = config.get("router_dir")
        if isinstance(router_dir, str):
            options.router_dir = router_dir.strip("/")
        source_prefix = config.get("source_prefix")
        if isinstance(source_prefix, str):
            options.source_prefix = source_prefix.rstrip("/") + "/"
        return options


@dataclass
class ScanContext:
    """State owned by a single scan; dropped when the scan returns."""

    root: Path
    options: ScanOptions = field(default_factory=ScanOptions)
    warnings: List[str] = field(default_factory=list)
    _files: Dict[Path, Optional[SourceFile]] = field(default_factory=dict, repr=False)

    def display(self, path: Path) -> str:
        try:
            return path.relative_to(self.root).as_posix()
        except ValueError:
            return path.as_posix()

    def load(self, path: Path, *, context: Optional[str] = None) -> Optional[SourceFile]:
        path = path.resolve()
        if path in self._files:
            return self._files[path]
        try:
            source: Optional[SourceFile] = SourceFile(path=path, text=read_text(path))
        except (OSError, UnicodeDecodeError) as exc:
            where = f" ({context})" if context else ""
            self.warnings.append(f"Failed to read {self.display(path)}{where}: {exc}")
            source = None
        self._files[path] = source
        return source
