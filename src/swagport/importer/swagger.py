"""The Swagger importer facade: load once, then map.

:class:`SwaggerImporter` ties the load phase and the mapping pass together
and carries the :class:`~swagport.models.ImportConfig` that tunes both.
Each :meth:`SwaggerImporter.import_project` call runs a fresh mapping pass
and returns a new project; nothing is shared between passes.

Example::

    importer = SwaggerImporter()
    importer.load_file("petstore.yaml")
    project = importer.import_project()

or, in one call::

    project = convert("petstore.yaml")
"""

from __future__ import annotations

from typing import Iterable, Optional

from swagport.exceptions import InvalidUsageError
from swagport.importer.mime import find_default_mime_type
from swagport.importer.project import assemble_project
from swagport.models import ImportConfig, Project
from swagport.parser.document import (
    LoadedDocument,
    aload_document,
    load_document,
    load_document_text,
)


class SwaggerImporter:
    """Imports Swagger 2.0 documents into canonical projects.

    Args:
        config: Load and mapping settings. Defaults to :class:`ImportConfig`.
    """

    def __init__(self, config: Optional[ImportConfig] = None) -> None:
        self.config = config or ImportConfig()
        self.document: Optional[LoadedDocument] = None

    def load_file(self, source: str) -> None:
        """Load a document from a file path, URL, or ``-`` for stdin.

        Raises:
            SpecParseError: If the document cannot be parsed or dereferenced.
            ConnectionError_: If a remote document cannot be reached.
        """
        self.document = load_document(
            source, expand=self.config.expand, timeout=self.config.timeout
        )

    async def aload_file(self, source: str) -> None:
        """Coroutine counterpart of :meth:`load_file`."""
        self.document = await aload_document(
            source, expand=self.config.expand, timeout=self.config.timeout
        )

    def load_data(self, text: str) -> None:
        """Load a document from JSON or YAML text."""
        self.document = load_document_text(text, expand=self.config.expand)

    def import_project(self) -> Project:
        """Map the loaded document onto a new project.

        Raises:
            InvalidUsageError: If no document has been loaded yet.
        """
        if self.document is None:
            raise InvalidUsageError(
                "No document loaded. Call load_file() or load_data() first."
            )
        return assemble_project(
            self.document, response_mime_type=self.config.response_mime_type
        )

    @staticmethod
    def find_default_mime_type(mime_types: Optional[Iterable[str]]) -> Optional[str]:
        """Return ``application/json`` if listed, else the first mime type."""
        return find_default_mime_type(mime_types)


def convert(source: str, config: Optional[ImportConfig] = None) -> Project:
    """Load *source* and return its project in one call."""
    importer = SwaggerImporter(config)
    importer.load_file(source)
    return importer.import_project()


def convert_text(text: str, config: Optional[ImportConfig] = None) -> Project:
    """Parse JSON or YAML *text* and return its project in one call."""
    importer = SwaggerImporter(config)
    importer.load_data(text)
    return importer.import_project()
