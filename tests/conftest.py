"""Shared pytest fixtures for spectrace tests."""

import os
from pathlib import Path

import pytest


def spec_content(
    spec_type: str,
    spec_id: str,
    status: str = "draft",
    related: list[str] | None = None,
    newline: str = "\n",
) -> str:
    """Build a spec file with a metadata header."""
    lines = ["---", f"type: {spec_type}", f"id: {spec_id}", f"status: {status}"]
    if related:
        lines.append("related:")
        lines.extend(f"  - {ref}" for ref in related)
    lines += ["---", "", f"# {spec_id}", ""]
    return newline.join(lines)


@pytest.fixture
def specs_dir(tmp_path):
    """Specs root with empty requirements/, design/ and tasks/ directories."""
    root = tmp_path / "specs"
    for name in ("requirements", "design", "tasks"):
        (root / name).mkdir(parents=True)
    return root


@pytest.fixture
def write_spec(specs_dir):
    """Write a spec file into the matching subdirectory of ``specs_dir``.

    The subdirectory is chosen from the id prefix unless ``subdir`` is given.
    """
    subdirs = {"REQ": "requirements", "DESIGN": "design", "TASK": "tasks"}
    types = {"REQ": "requirement", "DESIGN": "design", "TASK": "task"}

    def _write(
        spec_id: str,
        status: str = "draft",
        related: list[str] | None = None,
        filename: str | None = None,
        subdir: str | None = None,
        content: str | None = None,
        newline: str = "\n",
    ) -> Path:
        prefix = spec_id.split("-", 1)[0]
        directory = specs_dir / (subdir or subdirs[prefix])
        path = directory / (filename or f"{spec_id}-test.md")
        if content is None:
            content = spec_content(types.get(prefix, "spec"), spec_id, status, related, newline)
        path.write_bytes(content.encode("utf-8"))
        return path

    return _write


@pytest.fixture
def complete_chain(write_spec):
    """REQ-001 <- DESIGN-001 <- TASK-001, all complete."""
    write_spec("REQ-001", status="complete")
    write_spec("DESIGN-001", status="complete", related=["REQ-001"])
    write_spec("TASK-001", status="complete", related=["DESIGN-001"])


@pytest.fixture(autouse=True)
def _clean_spectrace_env(monkeypatch):
    """Keep SPECTRACE_* variables from the outer environment out of tests."""
    for name in list(os.environ):
        if name.startswith("SPECTRACE_"):
            monkeypatch.delenv(name)
