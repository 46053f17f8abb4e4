from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional

from .constants import (
    CANDIDATE_EXTENSIONS,
    DEFAULT_EXTENSION,
    RECOGNIZED_EXTENSIONS,
    SOURCE_PREFIX,
)
from .patterns import pattern
from .syntax import SourceFile

if TYPE_CHECKING:
    from .context import ScanContext


@dataclass
class ImportStatement:
    source: str
    offset: int
    default: Optional[str] = None
    # local name -> exported name
    named: Dict[str, str] = field(default_factory=dict)

    def binds(self, name: str) -> bool:
        return name == self.default or name in self.named

    def exported_name(self, local: str) -> Optional[str]:
        if local == self.default:
            return "default"
        return self.named.get(local)


def parse_specifiers(raw: str) -> Dict[str, str]:
    names: Dict[str, str] = {}
    for part in raw.split(","):
        part = part.strip()
        if part.startswith("type "):
            continue
        if not part:
            continue
        if " as " in part:
            imported, local = [item.strip() for item in part.split(" as ", 1)]
        else:
            imported = local = part
        if imported and local:
            names[local] = imported
    return names


def parse_imports(source: SourceFile) -> List[ImportStatement]:
    """Named and default import statements, in file order."""
    found: Dict[int, ImportStatement] = {}
    for match in pattern("import_named").finditer(source.text):
        if match.group("type"):
            continue
        found[match.start()] = ImportStatement(
            source=match.group("source"),
            offset=match.start(),
            named=parse_specifiers(match.group("names")),
        )
    for match in pattern("import_default").finditer(source.text):
        found[match.start()] = ImportStatement(
            source=match.group("source"),
            offset=match.start(),
            default=match.group("default"),
            named=parse_specifiers(match.group("names") or ""),
        )
    return [found[offset] for offset in sorted(found)]


def source_root_for(importer: Path, project_root: Optional[Path], source_prefix: str) -> Optional[Path]:
    marker = source_prefix.strip("/")
    parts = importer.parts[:-1]
    if marker in parts:
        return Path(*parts[: parts.index(marker)])
    if project_root is None:
        return None
    if project_root.name == marker:
        return project_root.parent
    return project_root


def _join(base: Path, specifier: str) -> Path:
    return Path(os.path.normpath((base / specifier).as_posix()))


def resolve_import_path(
    importer: Path,
    specifier: str,
    *,
    project_root: Optional[Path] = None,
    source_prefix: str = SOURCE_PREFIX,
) -> Optional[Path]:
    """Map an import specifier to a candidate file path without touching disk."""
    if specifier.startswith("."):
        target = _join(importer.parent, specifier)
    elif source_prefix and specifier.startswith(source_prefix):
        root = source_root_for(importer, project_root, source_prefix)
        if root is None:
            return None
        target = _join(root, specifier)
    else:
        return None
    if target.suffix not in RECOGNIZED_EXTENSIONS:
        target = Path(f"{target}{DEFAULT_EXTENSION}")
    return target


def import_candidates(
    importer: Path,
    specifier: str,
    *,
    project_root: Optional[Path] = None,
    source_prefix: str = SOURCE_PREFIX,
) -> List[Path]:
    primary = resolve_import_path(
        importer, specifier, project_root=project_root, source_prefix=source_prefix
    )
    if primary is None:
        return []
    candidates: List[Path] = [primary]
    if Path(specifier).suffix not in RECOGNIZED_EXTENSIONS:
        base = Path(str(primary)[: -len(DEFAULT_EXTENSION)])
        candidates.extend(Path(f"{base}{ext}") for ext in CANDIDATE_EXTENSIONS)
        candidates.extend(base / f"index{ext}" for ext in CANDIDATE_EXTENSIONS)
    elif primary.suffix == ".js":
        # TypeScript ESM imports name the emitted .js file.
        candidates.append(primary.with_suffix(".ts"))
        candidates.append(primary.with_suffix(".tsx"))
    seen = set()
    ordered: List[Path] = []
    for candidate in candidates:
        if candidate in seen:
            continue
        seen.add(candidate)
        ordered.append(candidate)
    return ordered


def load_import_target(ctx: "ScanContext", importer: Path, specifier: str) -> Optional[SourceFile]:
    for candidate in import_candidates(
        importer,
        specifier,
        project_root=ctx.root,
        source_prefix=ctx.options.source_prefix,
    ):
        if not candidate.is_file():
            continue
        return ctx.load(candidate, context=f"import '{specifier}' in {ctx.display(importer)}")
    return None
