"""Output formatting for loader results."""

from plumber_loader.models.schemas import Document, OutputMode

_ESCAPES = {
    "\\n": "\n",
    "\\r": "\r",
    "\\t": "\t",
}


def normalize_escapes(text: str) -> str:
    """Turn literal escape sequences such as ``\\n`` into control characters."""
    for literal, char in _ESCAPES.items():
        text = text.replace(literal, char)
    return text


def format_output(docs: list[Document], output: OutputMode) -> list[Document] | str:
    """Render documents as a list or as one newline-joined string."""
    if output == OutputMode.DOCUMENT:
        return docs

    final_text = "".join(f"{doc.page_content}\n" for doc in docs)
    return normalize_escapes(final_text)
