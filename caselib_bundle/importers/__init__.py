from .pdf_importer import DocumentImported, ImportFailed, ImportResult, import_pdf

__all__ = ["DocumentImported", "ImportFailed", "ImportResult", "import_pdf"]
