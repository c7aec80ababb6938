"""Text splitters that turn documents into smaller documents.

The loader accepts any object with a ``split_documents`` method; the
recursive splitter here backs the HTTP chunking options.
"""

from typing import Protocol

from langchain_text_splitters import RecursiveCharacterTextSplitter

from plumber_loader.models.schemas import Document


class TextSplitter(Protocol):
    """Splits structured documents into smaller structured documents."""

    def split_documents(self, documents: list[Document]) -> list[Document]: ...


class RecursiveTextSplitter:
    """Character chunks with overlap, backed by langchain's recursive splitter.

    Chunk boundaries prefer paragraphs, then lines, then words. Each chunk
    keeps a copy of its parent metadata.
    """

    def __init__(self, chunk_size: int = 1000, chunk_overlap: int = 200) -> None:
        if chunk_size < 1:
            raise ValueError("chunk_size must be positive")
        if chunk_overlap < 0 or chunk_overlap >= chunk_size:
            raise ValueError("chunk_overlap must be in [0, chunk_size)")
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
        )

    def split_documents(self, documents: list[Document]) -> list[Document]:
        result: list[Document] = []
        for doc in documents:
            for chunk in self._splitter.split_text(doc.page_content):
                result.append(Document(page_content=chunk, metadata=dict(doc.metadata)))
        return result
