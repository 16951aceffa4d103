from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator


class LexLoader(ABC):
    """Abstract base class for Lex loaders."""

    @abstractmethod
    def load_content(self, limit: int | None = None, **kwargs) -> Iterator[tuple[Path, object]]:
        """Yields the source files to process."""
        pass
