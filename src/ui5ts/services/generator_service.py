"""Generator service for producing declaration files.

This module provides the GeneratorService for orchestrating api.json
retrieval, tree construction, override reconciliation and writing of the
resulting ``.d.ts`` files.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from ui5ts.core.config import GeneratorConfig
from ui5ts.core.models import UI5API
from ui5ts.generator.collator import DeclarationCollator
from ui5ts.generator.tree import ReconciledTree, build_tree
from ui5ts.services.fetcher import ApiFetcher

logger = logging.getLogger(__name__)

EXPORTS_FILE = "exports.d.ts"


@dataclass
class GenerationResult:
    """Result of a generation run for one version."""

    version: str
    libraries: list[str] = field(default_factory=list)
    symbols_count: int = 0
    classes_count: int = 0
    files_written: list[Path] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Check if generation was successful."""
        return len(self.errors) == 0


def prepare_tree(apis: Iterable[UI5API], config: GeneratorConfig) -> ReconciledTree:
    """Build and reconcile the declaration tree for a set of api.json documents."""
    return build_tree(apis, config).reconcile()


class GeneratorService:
    """Service for generating TypeScript declarations for UI5 versions."""

    def __init__(self, config: GeneratorConfig, fetcher: ApiFetcher) -> None:
        """Initialize generator service.

        Args:
            config: Generator configuration.
            fetcher: Source of api.json documents.
        """
        self._config = config
        self._fetcher = fetcher

    def generate(self, version: str) -> GenerationResult:
        """Generate declaration files for every configured namespace.

        All namespaces of the version go into a single tree so classes can
        be reconciled against bases from other libraries. One definitions
        file per library and one exports file are written under
        ``<path>/<version>/``.

        Args:
            version: UI5 version to generate.

        Returns:
            GenerationResult with statistics and any errors.
        """
        result = GenerationResult(version=version)

        apis: list[UI5API] = []
        for namespace in self._config.input.namespaces:
            try:
                apis.append(self._fetcher.get_api(namespace, version))
            except Exception as e:
                result.errors.append(f"Error fetching {namespace}: {e}")

        if result.errors:
            return result
        if not apis:
            result.errors.append("No namespaces configured")
            return result

        tree = prepare_tree(apis, self._config)
        collator = DeclarationCollator(tree)
        nodes = list(tree.iter_nodes())
        result.symbols_count = sum(1 for n in nodes if not n.synthetic)
        result.classes_count = len(tree.registry)
        result.libraries = tree.libraries()

        definitions_dir = Path(self._config.output.definitions_path) / version
        for library in result.libraries:
            path = definitions_dir / f"{library}.d.ts"
            self._write(path, collator.render_definitions(library), result)

        exports_path = Path(self._config.output.exports_path) / version / EXPORTS_FILE
        self._write(exports_path, collator.render_exports(), result)
        return result

    def _write(self, path: Path, content: str, result: GenerationResult) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            result.errors.append(f"Error writing {path}: {e}")
            return
        logger.info(f"Wrote '{path}'")
        result.files_written.append(path)
