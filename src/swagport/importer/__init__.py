"""Swagger importer -- map a loaded document onto the canonical project.

Sub-modules, leaves first:

* :mod:`~swagport.importer.refs` -- trait reference classifier and the
  ``trait:`` key parser.
* :mod:`~swagport.importer.security` -- ``securityDefinitions`` and
  operation security requirements.
* :mod:`~swagport.importer.schemas` -- named ``definitions``.
* :mod:`~swagport.importer.params` -- query, path and header parameters.
* :mod:`~swagport.importer.body` -- ``body`` and ``formData`` parameters.
* :mod:`~swagport.importer.responses` -- per-status-code responses.
* :mod:`~swagport.importer.traits` -- document-level traits and the traits
  each endpoint references.
* :mod:`~swagport.importer.endpoints` -- one endpoint per path + method.
* :mod:`~swagport.importer.project` -- the project assembler.
* :mod:`~swagport.importer.swagger` -- the :class:`SwaggerImporter` facade.
"""

from swagport.importer.project import assemble_project
from swagport.importer.swagger import SwaggerImporter, convert, convert_text

__all__ = ["SwaggerImporter", "assemble_project", "convert", "convert_text"]
