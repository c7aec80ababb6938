"""Unit tests for individual components in isolation.

Coverage:
    - loader/: Source resolution, scratch files, extraction adapter,
      metadata merging, output formatting, pipeline wiring
    - parsing/: pdfplumber backend and text splitter
    - storage/: Local file storage
    - config: LoaderConfig validation

Uses fakes for storage and the extraction backend where the real ones are
not under test.
"""
