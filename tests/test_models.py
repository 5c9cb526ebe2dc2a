"""Tests for swagkit.models -- document sets and validation results."""

from __future__ import annotations

from swagkit.models import (
    CurrentGeneration,
    DocumentResults,
    LegacyGeneration,
    ValidationIssue,
    ValidationResults,
)


def _issue(code: str, path: list | None = None) -> ValidationIssue:
    return ValidationIssue(code=code, message=code.lower(), path=path or [])


class TestDocumentSets:
    def test_current_generation(self) -> None:
        documents = CurrentGeneration(source="swagger.json", swagger_object={"swagger": "2.0"})
        assert documents.version == "2.0"
        assert documents.sources == ["swagger.json"]

    def test_legacy_generation_sources_align_with_documents(self) -> None:
        documents = LegacyGeneration(
            source="api-docs.json",
            resource_listing={"swaggerVersion": "1.2"},
            declaration_sources=["pet.json", "store.json"],
            api_declarations=[{}, {}],
        )
        assert documents.version == "1.2"
        assert documents.sources == ["api-docs.json", "pet.json", "store.json"]
        assert len(documents.sources) == 1 + len(documents.api_declarations)


class TestValidationIssue:
    def test_pointer_escapes_tokens(self) -> None:
        issue = _issue("X", ["paths", "/pets/{id}", "get", "parameters", 0, "a~b"])
        assert issue.pointer == "#/paths/~1pets~1{id}/get/parameters/0/a~0b"

    def test_root_pointer(self) -> None:
        assert _issue("X").pointer == "#/"


class TestSummarize:
    def test_labels_by_source_and_skips_clean_documents(self) -> None:
        results = ValidationResults(
            warnings=[_issue("UNUSED_RESOURCE")],
            api_declarations=[
                DocumentResults(),
                DocumentResults(errors=[_issue("UNRESOLVABLE_MODEL")]),
            ],
        )

        reports = results.summarize(["api-docs.json", "pet.json", "store.json"])

        assert [r.source for r in reports] == ["api-docs.json", "store.json"]
        assert [i.code for i in reports[1].errors] == ["UNRESOLVABLE_MODEL"]
        assert results.error_count == 1
        assert results.warning_count == 1

    def test_clean_results(self) -> None:
        results = ValidationResults(api_declarations=[DocumentResults()])
        assert results.has_issues is False
        assert results.summarize(["api-docs.json", "pet.json"]) == []
