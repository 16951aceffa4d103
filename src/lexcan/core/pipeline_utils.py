"""Pipeline utilities for cross-cutting concerns like monitoring and logging."""

import logging
import time
from functools import wraps
from typing import Any, Callable, Dict, Iterator, TypeVar

from lexcan.core.models import LexModel

T = TypeVar("T", bound=LexModel)


class PipelineMonitor:
    """Decorator for pipeline monitoring and structured logging."""

    def __init__(self, doc_type: str, track_progress: bool = True, progress_interval: int = 10):
        """Initialize the pipeline monitor.

        Args:
            doc_type: The type of document being processed (e.g., 'legislation')
            track_progress: Whether to log progress updates
            progress_interval: Seconds between progress updates
        """
        self.doc_type = doc_type
        self.track_progress = track_progress
        self.progress_interval = progress_interval

    def __call__(self, func: Callable[..., Iterator[T]]) -> Callable[..., Iterator[T]]:
        """Wrap the pipeline function with monitoring capabilities."""

        @wraps(func)
        def wrapper(*args, **kwargs) -> Iterator[T]:
            logger = logging.getLogger(func.__module__)
            start_time = time.time()
            doc_count = 0
            last_progress_time = start_time

            params_info = self._extract_params_info(args, kwargs)

            logger.info(
                f"Starting {self.doc_type} pipeline",
                extra={"doc_type": self.doc_type, "pipeline_status": "started", **params_info},
            )

            try:
                for doc in func(*args, **kwargs):
                    doc_count += 1

                    logger.debug(
                        f"Processed {self.doc_type} document: {doc.id}",
                        extra={
                            "doc_type": self.doc_type,
                            "processing_status": "success",
                            "doc_count": doc_count,
                            **self._extract_doc_metadata(doc),
                        },
                    )

                    if self.track_progress:
                        current_time = time.time()
                        if current_time - last_progress_time >= self.progress_interval:
                            elapsed = current_time - start_time
                            rate = doc_count / elapsed if elapsed > 0 else 0

                            logger.info(
                                f"Pipeline progress: {doc_count} documents processed",
                                extra={
                                    "doc_type": self.doc_type,
                                    "pipeline_status": "in_progress",
                                    "doc_count": doc_count,
                                    "elapsed_seconds": elapsed,
                                    "docs_per_second": rate,
                                },
                            )
                            last_progress_time = current_time

                    yield doc

            except Exception as e:
                logger.error(
                    f"Pipeline failure in {self.doc_type}: {str(e)}",
                    exc_info=True,
                    extra={
                        "doc_type": self.doc_type,
                        "pipeline_status": "failed",
                        "error_type": type(e).__name__,
                    },
                )
                raise

            finally:
                elapsed = time.time() - start_time
                rate = doc_count / elapsed if elapsed > 0 else 0

                logger.info(
                    f"Completed {self.doc_type} pipeline: {doc_count} documents in {elapsed:.2f}s",
                    extra={
                        "doc_type": self.doc_type,
                        "pipeline_status": "completed",
                        "total_docs": doc_count,
                        "elapsed_seconds": elapsed,
                        "docs_per_second": rate,
                        **params_info,
                    },
                )

        return wrapper

    def _extract_params_info(self, args: tuple, kwargs: dict) -> Dict[str, Any]:
        """Extract relevant parameters for logging."""
        info = {}

        if "paths" in kwargs:
            info["file_count"] = len(kwargs["paths"])
        elif len(args) > 0 and isinstance(args[0], list):
            info["file_count"] = len(args[0])

        for key in ("full_text", "workers"):
            if key in kwargs:
                info[key] = kwargs[key]

        return info

    def _extract_doc_metadata(self, doc: T) -> Dict[str, Any]:
        """Extract metadata from a document for logging."""
        metadata = {}

        if hasattr(doc, "id"):
            metadata["doc_id"] = doc.id

        if hasattr(doc, "lang"):
            metadata["doc_lang"] = doc.lang

        if getattr(doc, "short_title", None):
            metadata["doc_title"] = doc.short_title[:100]

        return metadata
