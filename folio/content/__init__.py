"""Document parsing and rendering."""

from .models import Document, ParsedDocument
from .parsers import FrontMatterError, load_document, parse_document
from .rendering import build_context, render_document, render_document_file

__all__ = [
    "Document",
    "FrontMatterError",
    "ParsedDocument",
    "build_context",
    "load_document",
    "parse_document",
    "render_document",
    "render_document_file",
]
