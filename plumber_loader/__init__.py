"""PDF Loader - turns PDF files into documents for retrieval pipelines.

Combines pdfplumber for text extraction, pytesseract for image OCR,
Pydantic for data validation, and FastAPI for the HTTP surface.

Components:
    - loader: Source resolution, extraction, metadata merging, output shaping
    - parsing: pdfplumber backend and text splitters
    - storage: File storage for storage-reference sources
    - api: HTTP endpoints
    - models: Request/response schemas
"""

__version__ = "0.1.0"
