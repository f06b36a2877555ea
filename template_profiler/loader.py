# template_profiler/loader.py - Template source lookup
"""
Maps logical template names to source files through a Jinja2 loader.

Any object with a ``resolve(name) -> str`` method that raises
TemplateNotFound for unknown names can be used as a loader.
"""

from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union
import logging

import jinja2


class TemplateNotFound(LookupError):
    """
    Raised when a template name cannot be located.
    """

    def __init__(self, name: str, message: Optional[str] = None):
        self.name = name
        super().__init__(message or f"Unable to find template {name!r}")


class TemplateLoader:
    """
    Resolves template names with Jinja2's filesystem loaders.

    Names may carry a namespace prefix (``@admin/layout.html``); names
    without one are looked up in the main paths. Search order and the
    rejection of names escaping the search directories come from
    jinja2.FileSystemLoader.
    """

    def __init__(self, paths: Union[str, Sequence[str], None] = None,
                 namespaces: Optional[Dict[str, Sequence[str]]] = None):
        """
        Initialize the loader.

        Args:
            paths: Search directories for names without a namespace
            namespaces: Mapping of namespace (without the leading '@') to
                its search directories
        """
        self.logger = logging.getLogger(__name__)

        if isinstance(paths, str):
            paths = [paths]

        self.paths: List[str] = [str(p) for p in paths or []]
        self.namespaces: Dict[str, List[str]] = {
            namespace: [str(p) for p in namespace_paths]
            for namespace, namespace_paths in (namespaces or {}).items()
        }

        self.environment = jinja2.Environment(loader=self._build_loader())

    def add_path(self, path: str, namespace: Optional[str] = None):
        """
        Append a search directory.

        Args:
            path: Directory to add
            namespace: Namespace name, or None for the main paths
        """
        if namespace is None:
            self.paths.append(str(path))
        else:
            self.namespaces.setdefault(namespace, []).append(str(path))

        self.environment.loader = self._build_loader()

    def get_namespaces(self) -> List[str]:
        return list(self.namespaces.keys())

    def exists(self, name: str) -> bool:
        try:
            self.resolve(name)
        except TemplateNotFound:
            return False
        return True

    def resolve(self, name: str) -> str:
        """
        Find the source file of a template.

        Args:
            name: Logical template name

        Returns:
            Absolute path of the template source

        Raises:
            TemplateNotFound: If the name is invalid or no search directory
                contains it
        """
        if not name or not name.strip('/'):
            raise TemplateNotFound(name, f"Invalid template name {name!r}")

        try:
            _, filename, _ = self.environment.loader.get_source(self.environment, name)
        except jinja2.TemplateNotFound as e:
            raise TemplateNotFound(name) from e

        if not filename:
            raise TemplateNotFound(name, f"Template {name!r} has no source file")

        resolved = str(Path(filename).resolve())
        self.logger.debug(f"Resolved template {name} to {resolved}")
        return resolved

    def _build_loader(self) -> jinja2.BaseLoader:
        main = jinja2.FileSystemLoader(self.paths)
        if not self.namespaces:
            return main

        prefixed = jinja2.PrefixLoader({
            f"@{namespace}": jinja2.FileSystemLoader(namespace_paths)
            for namespace, namespace_paths in self.namespaces.items()
        })
        return jinja2.ChoiceLoader([prefixed, main])
