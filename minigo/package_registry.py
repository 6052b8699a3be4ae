from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from minigo import config
from minigo.reader import ast
from minigo.types.function import Function

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class File:
    """Snapshot of one executed source file: its import aliases and functions."""
    filename: str
    package_name: str
    imports: Mapping[str, str]  # alias -> import path
    functions: Mapping[str, ast.FuncDecl]

    @classmethod
    def from_tree(cls, tree: ast.File) -> File:
        imports: dict[str, str] = {}
        for spec in tree.imports:
            path = spec.import_path
            if spec.name is None:
                alias = path.rsplit("/", 1)[-1]
            elif spec.name.name in ("_", "."):
                continue
            else:
                alias = spec.name.name
            imports[alias] = path
        functions = {decl.name.name: decl for decl in tree.decls}
        return cls(
            filename=tree.filename,
            package_name=tree.package.name,
            imports=MappingProxyType(imports),
            functions=MappingProxyType(functions),
        )


@dataclass
class Package:
    path: str
    functions: Dict[str, Function] = field(default_factory=dict)  # exported callables
    files: Dict[str, File] = field(default_factory=dict)  # filename -> File

    def export(self, *functions: Function) -> None:
        for fn in functions:
            self.functions[fn.name] = fn

    def add_file(self, file: File) -> None:
        self.files.setdefault(file.filename, file)


class PackageRegistry:
    def __init__(self, main_package: str | None = None):
        self._packages: Dict[str, Package] = {}
        self._files: Dict[str, File] = {}
        self.main_package = main_package or config.get_main_package()

    def get(self, path: str) -> Optional[Package]:
        return self._packages.get(path)

    def ensure(self, path: str) -> Package:
        pkg = self._packages.get(path)
        if pkg is None:
            pkg = Package(path=path)
            self._packages[path] = pkg
        return pkg

    def register(self, package: Package, *paths: str) -> Package:
        """Make `package` reachable under its own path and every extra path."""
        for path in (package.path, *paths):
            self._packages[path] = package
        return package

    def load_file(self, tree: ast.File) -> File:
        """Return the File for `tree`, building and registering it on first use."""
        file = self._files.get(tree.filename)
        if file is None:
            file = File.from_tree(tree)
            self._files[tree.filename] = file
            self.ensure(self.main_package).add_file(file)
            logger.debug("registered %s in package %r (%d imports)",
                         tree.filename, self.main_package, len(file.imports))
        return file

    def all(self) -> Dict[str, Package]:
        return self._packages
