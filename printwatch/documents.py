"""
Printable document listing for the documents directory.
"""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Iterable


@dataclass
class DocumentInfo:
    name: str
    size: int
    modified: datetime

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "size": self.size,
            "modified": self.modified.isoformat(),
        }


def list_documents(directory: str, patterns: Iterable[str] = ("*.pdf",)) -> list[DocumentInfo]:
    """
    List documents matching any of the glob patterns, sorted by name.

    Not recursive. A missing directory lists nothing.
    """
    base = Path(directory)
    if not base.is_dir():
        return []

    found: dict[str, Path] = {}
    for pattern in patterns:
        for path in base.glob(pattern):
            if path.is_file():
                found[path.name] = path

    documents = []
    for name in sorted(found):
        stat = found[name].stat()
        documents.append(DocumentInfo(
            name=name,
            size=stat.st_size,
            modified=datetime.fromtimestamp(stat.st_mtime),
        ))
    return documents
