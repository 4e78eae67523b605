"""End-to-end tests for ctxavail.pipeline against a trimmed contexts.md."""
from __future__ import annotations

from pathlib import Path

import pytest

from ctxavail.errors import (
    MalformedRowError,
    SectionNotFoundError,
    UnsupportedDirectiveError,
)
from ctxavail.pipeline import build_context_index, generate

FIXTURE = Path(__file__).resolve().parent / "fixtures" / "contexts_sample.md"

_HEADER = b"### Context availability\n\n| Key | Context | Special |\n| --- | --- | --- |\n"


@pytest.fixture()
def sample() -> bytes:
    return FIXTURE.read_bytes()


class TestSampleDocument:
    def test_sorted_keys(self, sample: bytes) -> None:
        index = build_context_index(sample)
        assert index.sorted_keys == (
            "concurrency",
            "env",
            "jobs.<job_id>.concurrency",
            "jobs.<job_id>.container",
            "jobs.<job_id>.continue-on-error",
            "jobs.<job_id>.if",
            "jobs.<job_id>.name",
            "jobs.<job_id>.steps.if",
            "jobs.<job_id>.steps.with",
            "on.workflow_call.outputs.<output_id>.value",
            "run-name",
        )

    def test_rows_after_else_excluded(self, sample: bytes) -> None:
        index = build_context_index(sample)
        assert "jobs.<job_id>.outputs.<output_id>" not in index.records

    def test_records(self, sample: bytes) -> None:
        index = build_context_index(sample)
        assert index.lookup("jobs.<job_id>.continue-on-error") == (
            ("github", "inputs", "matrix", "needs", "strategy", "vars"),
            (),
        )
        assert index.lookup("run-name") == (("github", "inputs", "vars"), ())
        assert index.lookup("jobs.<job_id>.steps.with")[1] == ("hashfiles",)
        assert index.lookup("jobs.<job_id>.name") == (("github", "needs & more"), ())

    def test_reverse_index(self, sample: bytes) -> None:
        index = build_context_index(sample)
        assert dict(index.special_functions) == {
            "always": ("jobs.<job_id>.if", "jobs.<job_id>.steps.if"),
            "cancelled": ("jobs.<job_id>.if", "jobs.<job_id>.steps.if"),
            "failure": ("jobs.<job_id>.if", "jobs.<job_id>.steps.if"),
            "success": ("jobs.<job_id>.if", "jobs.<job_id>.steps.if"),
            "hashfiles": ("jobs.<job_id>.steps.if", "jobs.<job_id>.steps.with"),
        }

    def test_deterministic(self, sample: bytes) -> None:
        assert generate(sample) == generate(sample)
        assert generate(sample, output_format="json") == generate(sample, output_format="json")


class TestRowOrder:
    def test_reordering_rows(self) -> None:
        first = _HEADER + b"| `a` | `github` | `always` |\n| `b` | `github` | `always` |\n"
        second = _HEADER + b"| `b` | `github` | `always` |\n| `a` | `github` | `always` |\n"
        one = build_context_index(first)
        two = build_context_index(second)
        assert one.sorted_keys == two.sorted_keys == ("a", "b")
        assert one.special_functions["always"] == ("a", "b")
        assert two.special_functions["always"] == ("b", "a")


class TestFailures:
    def test_missing_section(self) -> None:
        with pytest.raises(SectionNotFoundError):
            generate(b"# Nothing here\n")

    def test_embedded_else(self) -> None:
        src = _HEADER + b"| `env` | {% if x %}a{% else %}b{% endif %} | |\n"
        with pytest.raises(UnsupportedDirectiveError):
            generate(src)

    def test_wrong_column_count(self) -> None:
        src = (
            b"### Context availability\n\n| Key | Context |\n| --- | --- |\n"
            b"| `env` | `github` |\n"
        )
        with pytest.raises(MalformedRowError):
            generate(src)
