"""Multi-source PDF loading pipeline.

Responsibilities:
    - Resolving storage references and inline data URIs to bytes
    - Running the extraction backend over uniquely named scratch files
    - Merging additional metadata and omitting (nested) keys
    - Shaping the result as documents or concatenated text
"""

from plumber_loader.loader.service import (
    DocumentLoaderService,
    get_loader_service,
    reset_loader_service,
)

__all__ = ["DocumentLoaderService", "get_loader_service", "reset_loader_service"]
