"""Unit tests for metadata merging and key omission."""

import pytest
import pytest_check as check

from plumber_loader.errors import MalformedInputError
from plumber_loader.loader.metadata import (
    classify_metadata,
    delete_path,
    merge_metadata,
    parse_omit_keys,
    resolve_metadata,
)
from plumber_loader.models.schemas import Absent, Document, JsonText, RawMap


def _docs() -> list[Document]:
    return [
        Document(
            page_content=f"page {i}",
            metadata={"source": "/tmp/x.pdf", "page": i, "pdf": {"Title": "T", "Author": "A"}},
        )
        for i in range(3)
    ]


class TestMetadataField:
    """Tests for classifying and parsing the additional-metadata field."""

    def test_mapping_is_raw_map(self) -> None:
        assert classify_metadata({"a": 1}) == RawMap(value={"a": 1})

    def test_string_is_json_text(self) -> None:
        assert classify_metadata('{"a": 1}') == JsonText(text='{"a": 1}')

    def test_missing_or_blank_is_absent(self) -> None:
        check.equal(classify_metadata(None), Absent())
        check.equal(classify_metadata(""), Absent())

    def test_json_text_parsed(self) -> None:
        assert resolve_metadata(JsonText(text='{"a": {"b": 2}}')) == {"a": {"b": 2}}

    def test_absent_resolves_to_none(self) -> None:
        assert resolve_metadata(Absent()) is None

    def test_invalid_json_rejected(self) -> None:
        """Unparseable metadata text raises MalformedInputError."""
        with pytest.raises(MalformedInputError, match="Invalid JSON"):
            resolve_metadata(JsonText(text="{not json"))

    def test_non_object_json_rejected(self) -> None:
        with pytest.raises(MalformedInputError, match="JSON object"):
            resolve_metadata(JsonText(text="[1, 2]"))


class TestParseOmitKeys:
    """Tests for the comma-separated omission list."""

    def test_empty_inputs(self) -> None:
        check.equal(parse_omit_keys(None), frozenset())
        check.equal(parse_omit_keys(""), frozenset())

    def test_keys_trimmed(self) -> None:
        assert parse_omit_keys(" source , pdf.Title,,page ") == {"source", "pdf.Title", "page"}


class TestDeletePath:
    """Tests for nested-key deletion."""

    def test_top_level_key(self) -> None:
        data = {"a": 1, "b": 2}
        delete_path(data, "a")
        assert data == {"b": 2}

    def test_nested_key(self) -> None:
        data = {"a": {"b": 1, "c": 2}}
        delete_path(data, "a.b")
        assert data == {"a": {"c": 2}}

    def test_deeply_nested_key(self) -> None:
        data = {"a": {"b": {"c": 1, "d": 2}}}
        delete_path(data, "a.b.c")
        assert data == {"a": {"b": {"d": 2}}}

    def test_missing_path_ignored(self) -> None:
        data = {"a": 1}
        delete_path(data, "x.y")
        delete_path(data, "a.b")
        assert data == {"a": 1}

    def test_literal_dotted_key_preferred(self) -> None:
        data = {"a.b": 1, "a": {"b": 2}}
        delete_path(data, "a.b")
        assert data == {"a": {"b": 2}}


class TestMergeMetadata:
    """Tests for applying merge and omission rules to documents."""

    def test_omit_all_with_additional_metadata(self) -> None:
        """Sentinel replaces extraction metadata with the additional metadata."""
        result = merge_metadata(_docs(), {"a": 1}, "*")

        for doc in result:
            check.equal(doc.metadata, {"a": 1})

    def test_omit_all_copies_are_independent(self) -> None:
        """Each document receives its own copy of the additional metadata."""
        result = merge_metadata(_docs(), {"a": {"b": 1}}, "*")

        result[0].metadata["a"]["b"] = 99

        check.equal(result[1].metadata, {"a": {"b": 1}})

    def test_omit_all_without_additional_metadata(self) -> None:
        result = merge_metadata(_docs(), None, "*")

        assert all(doc.metadata == {} for doc in result)

    def test_untrimmed_sentinel_is_not_omit_all(self) -> None:
        """Only the exact raw value "*" triggers replacement."""
        result = merge_metadata(_docs(), {"a": 1}, " * ")

        check.equal(result[0].metadata["source"], "/tmp/x.pdf")
        check.equal(result[0].metadata["a"], 1)

    def test_omit_single_key(self) -> None:
        """Omitting source keeps all other extraction keys."""
        result = merge_metadata(_docs(), None, "source")

        for i, doc in enumerate(result):
            check.is_not_in("source", doc.metadata)
            check.equal(doc.metadata["page"], i)
            check.equal(doc.metadata["pdf"], {"Title": "T", "Author": "A"})

    def test_omit_nested_key(self) -> None:
        result = merge_metadata(_docs(), None, "pdf.Title")

        assert result[0].metadata["pdf"] == {"Author": "A"}

    def test_additional_overwrites_existing(self) -> None:
        result = merge_metadata(_docs(), {"source": "upload.pdf", "team": "x"}, None)

        check.equal(result[0].metadata["source"], "upload.pdf")
        check.equal(result[0].metadata["team"], "x")
        check.equal(result[0].metadata["page"], 0)

    def test_omission_applies_after_merge(self) -> None:
        """A key both supplied and omitted is removed."""
        result = merge_metadata(_docs(), {"team": "x", "page": 42}, "page")

        check.is_not_in("page", result[0].metadata)
        check.equal(result[0].metadata["team"], "x")

    def test_original_documents_untouched(self) -> None:
        docs = _docs()

        merge_metadata(docs, {"a": 1}, "pdf.Title")

        check.equal(docs[0].metadata["pdf"], {"Title": "T", "Author": "A"})
        check.is_not_in("a", docs[0].metadata)

    def test_content_and_order_preserved(self) -> None:
        result = merge_metadata(_docs(), {"a": 1}, "source")

        assert [doc.page_content for doc in result] == ["page 0", "page 1", "page 2"]
