"""Integration tests for components working together as a system.

Coverage:
    - POST /documents/load with real HTTP requests through ASGI
    - Real pdfplumber extraction of generated PDFs from inline data and
      local file storage
"""
