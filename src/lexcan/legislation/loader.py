import logging
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from lexcan.core.exceptions import CorpusNotFoundError
from lexcan.core.loader import LexLoader
from lexcan.legislation.models import Corpus
from lexcan.settings import CORPUS_DIRECTORIES, LAWS_XML_ROOT, XML_FILE_PATTERN

logger = logging.getLogger(__name__)


class LegislationLoader(LexLoader):
    """Locates the XML files of the four Justice Laws corpora."""

    def __init__(self, input_path: str | Path = LAWS_XML_ROOT):
        self.input_path = Path(input_path)

    def corpus_directory(self, corpus: Corpus) -> Path:
        # We rely on the folder structure being {lang}/{kind}/{id}.xml within the input path
        return self.input_path / CORPUS_DIRECTORIES[(corpus.language.value, corpus.kind)]

    def locate(self, corpora: Optional[List[Corpus]] = None) -> Dict[Corpus, List[Path]]:
        """Return the XML files of each corpus, in filesystem enumeration order.

        Raises:
            CorpusNotFoundError: if any requested corpus directory does not exist
        """
        if corpora is None:
            corpora = list(Corpus)

        files = {}

        for corpus in corpora:
            directory = self.corpus_directory(corpus)
            if not directory.is_dir():
                raise CorpusNotFoundError(
                    f"Corpus directory not found for {corpus.value}: {directory}",
                    directory=str(directory),
                )

            files[corpus] = [path for path in directory.glob(XML_FILE_PATTERN) if path.is_file()]

            logger.info(
                f"Found {len(files[corpus])} files for {corpus.value}",
                extra={"corpus": corpus.value, "directory": str(directory), "file_count": len(files[corpus])},
            )

        return files

    def load_content(
        self,
        limit: int | None = None,
        corpora: Optional[List[Corpus]] = None,
    ) -> Iterator[tuple[Path, Corpus]]:
        """Yield (path, corpus) pairs across the requested corpora, in corpus order."""

        count = 0
        for corpus, paths in self.locate(corpora).items():
            for path in paths:
                if limit is not None and count >= limit:
                    return
                count += 1
                yield path, corpus
