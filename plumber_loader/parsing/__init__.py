"""PDF parsing utilities for document processing.

Turns PDF files into structured documents through text extraction,
optional image OCR, and chunking.

Responsibilities:
    - Page-level text extraction with pdfplumber
    - OCR of embedded images with pytesseract
    - Document info extraction (title, author, page counts)
    - Document chunking with overlap for context preservation
"""

from plumber_loader.parsing.pdf_parser import PdfPlumberBackend
from plumber_loader.parsing.splitter import RecursiveTextSplitter, TextSplitter

__all__ = ["RecursiveTextSplitter", "PdfPlumberBackend", "TextSplitter"]
