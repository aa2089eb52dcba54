"""
Artifact loading utilities.

Scans the requirements, design and tasks subdirectories of a specs root
and assembles the ArtifactCollection used by the rule engine.
"""

from pathlib import Path
from typing import List, Optional

from spectrace.core.frontmatter import parse_header_file
from spectrace.core.models import Artifact, ArtifactCollection, ArtifactKind
from spectrace.core.rules import TraceabilityRulesConfig


def find_artifact_files(directory: Path, pattern: str) -> List[Path]:
    """List files in ``directory`` matching ``pattern``, sorted by name.

    A missing directory yields an empty list.
    """
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.glob(pattern) if p.is_file())


def load_artifacts_from_directory(
    directory: Path,
    pattern: str,
    kind: ArtifactKind,
) -> List[Artifact]:
    """Parse every matching file in ``directory`` as an artifact of ``kind``.

    Files without a header, with an unclosed header or with an empty id
    are skipped.

    Args:
        directory: Directory to scan (non-recursive)
        pattern: Glob pattern for file names (e.g., "REQ-*.md")
        kind: Kind assigned to every artifact found here

    Returns:
        Artifacts in file-name order
    """
    artifacts = []
    for file_path in find_artifact_files(directory, pattern):
        artifact = parse_header_file(file_path)
        if artifact is None or not artifact.id:
            continue
        artifact.kind = kind
        artifacts.append(artifact)
    return artifacts


def load_all_artifacts(
    specs_path: Path,
    config: Optional[TraceabilityRulesConfig] = None,
) -> ArtifactCollection:
    """Load requirements, designs and tasks from a specs root.

    Args:
        specs_path: Root directory containing the per-kind subdirectories
        config: Directory names and file patterns; defaults when omitted

    Returns:
        ArtifactCollection with typed tables and the combined table
    """
    config = config or TraceabilityRulesConfig()
    collection = ArtifactCollection()

    for kind in (ArtifactKind.REQUIREMENT, ArtifactKind.DESIGN, ArtifactKind.TASK):
        directory = specs_path / config.directories[kind]
        for artifact in load_artifacts_from_directory(directory, config.patterns[kind], kind):
            collection.add(artifact)

    return collection

