"""
Unit tests for icon purpose reclassification.
"""

import pytest

from manifold_engine.core.types import Finding
from manifold_engine.validation.reclassifier import reclassify_findings


def purpose_finding(member, level="error"):
    return Finding(
        description="'any maskable' is not one of ['any', 'maskable', 'monochrome']",
        level=level,
        member=member,
        code="invalid-value",
    )


def manifest_with_purposes(*purposes):
    return {"icons": [{"src": f"icon_{i}.png", "purpose": p} for i, p in enumerate(purposes)]}


class TestReclassifyFindings:
    """Test dropping satisfied icon purpose errors."""

    @pytest.mark.parametrize("purpose", ["any maskable", "maskable", "monochrome any", "badge any"])
    def test_legal_purpose_list_is_dropped(self, purpose):
        content = manifest_with_purposes(purpose)

        assert reclassify_findings([purpose_finding("/icons/0/purpose")], content) == []

    def test_illegal_purpose_is_kept(self):
        content = manifest_with_purposes("badge")
        findings = [purpose_finding("/icons/0/purpose")]

        assert reclassify_findings(findings, content) == findings

    def test_index_selects_the_icon(self):
        content = manifest_with_purposes("any", "badge")
        findings = [purpose_finding("/icons/0/purpose"), purpose_finding("/icons/1/purpose")]

        assert reclassify_findings(findings, content) == [findings[1]]

    def test_out_of_range_index_is_kept(self):
        content = manifest_with_purposes("any")
        findings = [purpose_finding("/icons/5/purpose")]

        assert reclassify_findings(findings, content) == findings

    def test_nested_icon_paths_are_kept(self):
        content = {
            "icons": [{"src": "a.png", "purpose": "any"}],
            "shortcuts": [{"name": "s", "url": "/", "icons": [{"src": "b.png", "purpose": "any"}]}],
        }
        findings = [
            purpose_finding("/shortcuts/0/icons/0/purpose"),
            purpose_finding("/screenshots/0/purpose"),
        ]

        assert reclassify_findings(findings, content) == findings

    def test_only_errors_are_reclassified(self):
        content = manifest_with_purposes("any maskable")
        findings = [purpose_finding("/icons/0/purpose", level="warning")]

        assert reclassify_findings(findings, content) == findings

    def test_non_string_purpose_is_kept(self):
        content = {"icons": [{"src": "a.png", "purpose": ["any"]}]}
        findings = [purpose_finding("/icons/0/purpose")]

        assert reclassify_findings(findings, content) == findings

    def test_unrelated_findings_pass_through_in_order(self):
        content = manifest_with_purposes("any maskable")
        other = Finding(
            description="x", level="error", member="short_name", code="required-value"
        )
        findings = [other, purpose_finding("/icons/0/purpose"), other]

        assert reclassify_findings(findings, content) == [other, other]
