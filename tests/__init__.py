"""Test package for the PDF loader.

Structure:
    - unit/: Component tests with fake storage, backend and splitter
    - integration/: HTTP endpoint tests, with fakes and with real pdfplumber

PDFs are generated in memory by tests/fakes.py.
Leverages pytest with pytest-check for soft assertions.
"""
