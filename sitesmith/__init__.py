from .build import build_site
from .copier import copy_tree
from .document import Document, parse_document
from .errors import (
    ConfigError,
    FileIOError,
    MalformedDocumentError,
    PathError,
    RenderError,
    SiteBuildError,
)
from .layouts import load_layouts

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "Document",
    "FileIOError",
    "MalformedDocumentError",
    "PathError",
    "RenderError",
    "SiteBuildError",
    "build_site",
    "copy_tree",
    "load_layouts",
    "parse_document",
]
