from .models import ExtractedDocument
from .parse import UnsupportedDocumentError, extract_document_text, source_type_for

__all__ = ["ExtractedDocument", "UnsupportedDocumentError", "extract_document_text", "source_type_for"]
