"""
spectrace.core.models - Core data models for specification artifacts.

Provides dataclasses for artifact records and the per-run collection
that the rule engine evaluates.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from pathlib import Path
from typing import Dict, List, Mapping, Optional


class ArtifactKind(Enum):
    """Kind of specification artifact, decided by the directory it lives in."""

    REQUIREMENT = "requirement"
    DESIGN = "design"
    TASK = "task"


@dataclass
class Artifact:
    """
    Represents one specification file's metadata header.

    Attributes:
        id: Artifact identifier (e.g., "REQ-001", "DESIGN-ABC")
        status: Free-text status (e.g., "draft", "complete")
        related: Related artifact IDs, in header order
        type: The header's own ``type`` value, kept verbatim
        kind: Kind assigned by the loader; None until loaded
        source_path: File the header was read from
    """

    id: str = ""
    status: str = ""
    related: List[str] = field(default_factory=list)
    type: str = ""
    kind: Optional[ArtifactKind] = None
    source_path: Optional[Path] = None

    def location(self) -> str:
        """Return the source path string, or "unknown"."""
        if self.source_path:
            return str(self.source_path)
        return "unknown"

    def to_dict(self) -> Dict[str, object]:
        return {
            "type": self.type,
            "id": self.id,
            "status": self.status,
            "related": list(self.related),
            "kind": self.kind.value if self.kind else None,
            "filePath": str(self.source_path) if self.source_path else "",
        }

    def __str__(self) -> str:
        return f"{self.id} ({self.status or 'no status'})"


@dataclass(frozen=True)
class DuplicateArtifact:
    """An id declared by more than one file; the later file wins."""

    id: str
    kept: Optional[Path]
    replaced: Optional[Path]


@dataclass
class ArtifactCollection:
    """
    All artifacts taking part in one validation run.

    ``requirements``, ``designs`` and ``tasks`` are keyed by id; ``all`` is
    their union. Insertion order is preserved and drives the order in
    which issues are reported.
    """

    requirements: Dict[str, Artifact] = field(default_factory=dict)
    designs: Dict[str, Artifact] = field(default_factory=dict)
    tasks: Dict[str, Artifact] = field(default_factory=dict)
    all: Dict[str, Artifact] = field(default_factory=dict)
    duplicates: List[DuplicateArtifact] = field(default_factory=list)

    @classmethod
    def from_tables(
        cls,
        requirements: Optional[Mapping[str, Artifact]] = None,
        designs: Optional[Mapping[str, Artifact]] = None,
        tasks: Optional[Mapping[str, Artifact]] = None,
    ) -> "ArtifactCollection":
        """Build a collection from already-parsed tables.

        Tables are copied and the combined table is derived from them.
        Records without a ``kind`` are copied with the kind of the table
        they were supplied in; the caller's records are never modified.
        """
        collection = cls(
            requirements=dict(requirements or {}),
            designs=dict(designs or {}),
            tasks=dict(tasks or {}),
        )
        for kind, table in collection.tables().items():
            for artifact_id, artifact in list(table.items()):
                if artifact.kind is None:
                    artifact = replace(artifact, kind=kind)
                    table[artifact_id] = artifact
                collection.all[artifact_id] = artifact
        return collection

    def tables(self) -> Dict[ArtifactKind, Dict[str, Artifact]]:
        return {
            ArtifactKind.REQUIREMENT: self.requirements,
            ArtifactKind.DESIGN: self.designs,
            ArtifactKind.TASK: self.tasks,
        }

    def add(self, artifact: Artifact) -> None:
        """Insert a loaded artifact into its typed table and the combined table.

        A repeated id overwrites the earlier record; the overwrite is
        recorded in ``duplicates``.
        """
        if artifact.kind is None:
            raise ValueError(f"Artifact {artifact.id!r} has no kind")
        previous = self.all.get(artifact.id)
        if previous is not None:
            self.duplicates.append(
                DuplicateArtifact(
                    id=artifact.id,
                    kept=artifact.source_path,
                    replaced=previous.source_path,
                )
            )
            if previous.kind is not None and previous.kind is not artifact.kind:
                self.tables()[previous.kind].pop(artifact.id, None)
        self.tables()[artifact.kind][artifact.id] = artifact
        self.all[artifact.id] = artifact

    def __len__(self) -> int:
        return len(self.all)
