"""Top-level package for the pdftable layout engine.

Provides subpackages:
- pdftable.core – immutable models and errors
- pdftable.layout – style normalisation, span claims, column widths, row pagination
- pdftable.output – border policy, row drawing and debug previews
- pdftable.document – document collaborator interface and the ReportLab backend
"""

from importlib.metadata import PackageNotFoundError, version as _dist_version

try:
    __version__ = _dist_version("pdftable")
except PackageNotFoundError:
    # Source checkout without an install
    __version__ = "0.0.0"

from .core.errors import InvalidColumnCountError, RowOrderError, TableError
from .core.models import CellStyle, ColumnStyle, RowStyle, Sides, SizedCell, TableSpec
from .document import DocumentCollaborator, PageConfig, ReportLabDocument
from .table import Table

__all__: list[str] = [
    "__version__",
    "Table",
    "TableSpec",
    "CellStyle",
    "ColumnStyle",
    "RowStyle",
    "Sides",
    "SizedCell",
    "DocumentCollaborator",
    "PageConfig",
    "ReportLabDocument",
    "TableError",
    "InvalidColumnCountError",
    "RowOrderError",
]
