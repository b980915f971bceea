"""Uploaded résumé file model."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ResumeFile:
    """An uploaded file held in memory."""

    filename: str
    content: bytes = b""

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def is_empty(self) -> bool:
        return not self.content

    @property
    def suffix(self) -> str:
        return Path(self.filename or "").suffix.lower()

    @classmethod
    def from_path(cls, file_path: str) -> "ResumeFile":
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Resume file not found: {file_path}")
        return cls(filename=path.name, content=path.read_bytes())
