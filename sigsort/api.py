"""
Main API interface for sigsort

Provides a single facade over loading, sorting, rendering and writing
declaration trees. The CLI is a thin layer over this class.
"""

import logging
import shutil
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from .ast import Node
from .config import OUTPUT_FORMATS, SigsortConfig
from .serialization import detect_format, dumps, load_file
from .sorter import CategoryCounter, sort_declarations
from .writer import write_declarations

logger = logging.getLogger(__name__)


@dataclass
class SortResult:
    """Outcome of sorting one document."""

    source: Optional[Path]
    original: List[Node]
    sorted: List[Node]
    statistics: Dict[str, Counter] = field(default_factory=dict)

    @property
    def changed(self) -> bool:
        return self.sorted != self.original

    def category_totals(self) -> Counter:
        """Category counts summed over every container."""
        totals = Counter()
        for counts in self.statistics.values():
            totals.update(counts)
        return totals

    def to_dict(self) -> Dict[str, object]:
        return {
            "source": str(self.source) if self.source else None,
            "changed": self.changed,
            "declarations": {
                name: {category.value: count for category, count in counts.items()}
                for name, counts in self.statistics.items()
            },
        }


class SigSort:
    """
    Main API class for sigsort.

    Wraps configuration so callers do not need to pass indent, recursion or
    backup settings around.
    """

    def __init__(self, config: Optional[SigsortConfig] = None):
        """
        Initialize with optional configuration.

        Args:
            config: Optional configuration object. If None, uses default configuration.
        """
        self.config = config or SigsortConfig.default()

    def load(self, path: Union[str, Path], fmt: str = "auto") -> List[Node]:
        """Read a serialized declaration tree."""
        path = Path(path)
        logger.info(f"Opening {path}...")
        return load_file(path, fmt)

    def sort(self, decls: Sequence[Node], source: Optional[Path] = None) -> SortResult:
        """Sort declarations and collect per-container category counts."""
        original = list(decls)
        sorted_decls = sort_declarations(original, recursive=self.config.sort_settings.recursive)

        counter = CategoryCounter()
        counter.visit_all(original)

        result = SortResult(
            source=source,
            original=original,
            sorted=sorted_decls,
            statistics=counter.counts,
        )
        logger.debug(
            "Sorted %d declarations (%s)", len(original), "changed" if result.changed else "unchanged"
        )
        return result

    def sort_file(self, path: Union[str, Path], fmt: str = "auto") -> SortResult:
        path = Path(path)
        return self.sort(self.load(path, fmt), source=path)

    def check_file(self, path: Union[str, Path], fmt: str = "auto") -> bool:
        """True when the file is already in canonical order."""
        result = self.sort_file(path, fmt)
        if result.changed:
            logger.info(f"{path} is not canonically ordered")
        return not result.changed

    def render(self, decls: Sequence[Node], fmt: Optional[str] = None) -> str:
        """Render declarations as stub text, JSON or YAML."""
        fmt = fmt or self.config.output_settings.format
        if fmt not in OUTPUT_FORMATS:
            raise ValueError(f"Unsupported output format '{fmt}' (expected one of: {OUTPUT_FORMATS})")
        if fmt == "rbs":
            return write_declarations(decls, indent=self.config.output_settings.indent)
        return dumps(decls, fmt)

    def write(
        self,
        result: SortResult,
        path: Union[str, Path],
        fmt: Optional[str] = None,
    ) -> Path:
        """
        Write the sorted declarations of ``result`` to ``path``.

        When ``fmt`` is None the format follows the path extension for JSON/YAML
        files and falls back to the configured output format otherwise. An
        existing file is copied to ``<path>.bak`` first if backups are enabled.
        """
        path = Path(path)
        if fmt is None:
            suffix = path.suffix.lower()
            fmt = detect_format(path) if suffix in (".json", ".yaml", ".yml") else None
        text = self.render(result.sorted, fmt)

        if path.exists() and self.config.output_settings.backup_enabled:
            backup_path = path.with_name(path.name + ".bak")
            shutil.copy2(path, backup_path)
            logger.info(f"Backup written to {backup_path}")

        logger.info(f"Writing {path}...")
        path.write_text(text, encoding="utf-8")
        return path

    def statistics(self, decls: Sequence[Node]) -> Dict[str, Counter]:
        """Category counts per container, keyed by qualified name."""
        counter = CategoryCounter()
        counter.visit_all(decls)
        return counter.counts

