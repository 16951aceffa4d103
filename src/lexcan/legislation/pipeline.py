import logging
import uuid
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Iterator, List, Optional

from lexcan.core.pipeline_utils import PipelineMonitor
from lexcan.core.utils import set_logging_level, write_json_file
from lexcan.graph import build_reference_graph
from lexcan.legislation.loader import LegislationLoader
from lexcan.legislation.models import Corpus, Document, Language
from lexcan.legislation.parser import LegislationParser, LIMSFullTextRenderer
from lexcan.settings import LIMS_XSLT_PATH

logger = logging.getLogger(__name__)

# Set once per worker process by the pool initializer
_worker_parser: Optional[LegislationParser] = None


def build_parser(
    full_text: bool = False,
    xslt_path: str | Path = LIMS_XSLT_PATH,
    strip_links: bool = True,
) -> LegislationParser:
    """Create a parser, compiling the stylesheet only when full text is requested."""
    renderer = LIMSFullTextRenderer(xslt_path, strip_links=strip_links) if full_text else None
    return LegislationParser(renderer=renderer)


def _init_worker(full_text: bool, xslt_path: str, strip_links: bool, log_level: int) -> None:
    global _worker_parser
    set_logging_level(log_level)
    _worker_parser = build_parser(full_text, xslt_path, strip_links)


def _parse_in_worker(path: str, lang: str) -> Document:
    return _worker_parser.parse_file(path, Language(lang))


@PipelineMonitor(doc_type="legislation", track_progress=True)
def pipe_documents(
    paths: List[tuple[Path, Corpus]],
    full_text: bool = False,
    xslt_path: str | Path = LIMS_XSLT_PATH,
    strip_links: bool = True,
    workers: int = 1,
    skip_errors: bool = False,
) -> Iterator[Document]:
    """Parse each file into a Document, yielding them in input order.

    Args:
        paths: (path, corpus) pairs, as produced by LegislationLoader.load_content
        full_text: Whether to render each document's full text to markdown
        xslt_path: Stylesheet used for full text rendering
        strip_links: Whether to reduce markdown links in the full text to their text
        workers: Number of worker processes (1 = sequential, in process)
        skip_errors: Log and omit files that fail to parse instead of aborting the batch
    """
    # Built up front so a broken stylesheet fails the run before any work is scheduled
    parser = build_parser(full_text, xslt_path, strip_links)

    if workers <= 1:
        for path, corpus in paths:
            try:
                document = parser.parse_file(path, corpus.language)
            except Exception as e:
                if not skip_errors:
                    raise
                _log_failure(path, e)
                continue
            yield document
        return

    logger.info(f"Starting parallel processing with {workers} workers")

    results: List[Optional[Document]] = [None] * len(paths)

    executor = ProcessPoolExecutor(
        max_workers=workers,
        initializer=_init_worker,
        initargs=(full_text, str(xslt_path), strip_links, logging.getLogger("lexcan").getEffectiveLevel()),
    )
    try:
        futures = {}
        for index, (path, corpus) in enumerate(paths):
            future = executor.submit(_parse_in_worker, str(path), corpus.language.value)
            futures[future] = index

        for future in as_completed(futures):
            index = futures[future]
            try:
                results[index] = future.result()
            except Exception as e:
                if not skip_errors:
                    raise
                _log_failure(paths[index][0], e)
    except KeyboardInterrupt:
        logger.info("Keyboard interrupt received, shutting down workers...")
        executor.shutdown(wait=False, cancel_futures=True)
        raise
    except Exception:
        executor.shutdown(wait=False, cancel_futures=True)
        raise
    finally:
        executor.shutdown(wait=True)

    for document in results:
        if document is not None:
            yield document


def _log_failure(path: Path, error: Exception) -> None:
    logger.error(
        f"Failed to parse {path}: {error}",
        exc_info=error,
        extra={
            "doc_path": str(path),
            "processing_status": "failed",
            "error_type": type(error).__name__,
        },
    )


def run_pipeline(
    input_dir: str | Path,
    output_path: str | Path,
    corpora: Optional[List[Corpus]] = None,
    limit: Optional[int] = None,
    full_text: bool = False,
    xslt_path: str | Path = LIMS_XSLT_PATH,
    strip_links: bool = True,
    workers: int = 1,
    skip_errors: bool = False,
    graph_output_path: Optional[str | Path] = None,
) -> List[Document]:
    """Locate, parse and serialise a corpus. Returns the documents written."""
    if corpora is None:
        corpora = list(Corpus)

    run_id = str(uuid.uuid4())
    logger.info(
        f"Loading legislation from {input_dir}: run_id={run_id}",
        extra={"run_id": run_id, "corpora": [corpus.value for corpus in corpora], "full_text": full_text},
    )

    loader = LegislationLoader(input_dir)
    paths = list(loader.load_content(limit=limit, corpora=corpora))

    documents = list(
        pipe_documents(
            paths=paths,
            full_text=full_text,
            xslt_path=xslt_path,
            strip_links=strip_links,
            workers=workers,
            skip_errors=skip_errors,
        )
    )

    write_json_file(output_path, documents, exclude=None if full_text else {"full_text"})

    if graph_output_path:
        graph = build_reference_graph(documents)
        write_json_file(graph_output_path, graph)

    return documents
