#!/usr/bin/env python
import argparse
import logging
import os

from dotenv import load_dotenv

load_dotenv()

from lexcan.core.utils import set_logging_level
from lexcan.legislation.models import Corpus
from lexcan.legislation.pipeline import run_pipeline
from lexcan.settings import (
    GRAPH_OUTPUT_PATH,
    LAWS_XML_ROOT,
    LIMS_XSLT_PATH,
    OUTPUT_PATH,
    PARALLEL_WORKERS,
)

# Environment settings
ENVIRONMENT = os.getenv("ENVIRONMENT", "localhost")

# Initialize logger
logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract Canadian federal Acts and regulations from LIMS XML into JSON"
    )

    parser.add_argument(
        "-i",
        "--input-dir",
        type=str,
        default=LAWS_XML_ROOT,
        help="Root of the laws-lois-xml checkout (contains eng/ and fra/)",
    )

    parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=OUTPUT_PATH,
        help="Path of the JSON file to write",
    )

    parser.add_argument(
        "-c",
        "--corpora",
        type=str,
        nargs="+",
        choices=[corpus.value for corpus in Corpus],
        default=None,
        help="Corpora to include (default: all four)",
    )

    parser.add_argument(
        "-l",
        "--limit",
        type=int,
        default=None,
        help="Limit number of files to process (default: no limit)",
    )

    parser.add_argument(
        "--full-text",
        action="store_true",
        help="Render each document's full text to markdown through the XSLT stylesheet",
    )

    parser.add_argument(
        "--xslt",
        type=str,
        default=LIMS_XSLT_PATH,
        help="[Full text] Path of the LIMS to HTML stylesheet",
    )

    parser.add_argument(
        "--keep-links",
        action="store_true",
        help="[Full text] Keep markdown links instead of reducing them to their text",
    )

    parser.add_argument(
        "--parallel-workers",
        type=int,
        default=PARALLEL_WORKERS,
        help="Number of parallel worker processes (default: 1 = sequential)",
    )

    parser.add_argument(
        "--skip-errors",
        action="store_true",
        help="Log and skip documents that fail to parse instead of aborting the run",
    )

    parser.add_argument(
        "--graph-output",
        type=str,
        default=GRAPH_OUTPUT_PATH,
        help="Also write the document reference graph (nodes/links) to this path",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    return parser


def main(argv: list[str] | None = None):
    """
    Command line interface to run the extraction pipeline over a local corpus
    """
    args = build_arg_parser().parse_args(argv)

    set_logging_level(
        getattr(logging, args.log_level),
        service_name="pipeline",
        environment=ENVIRONMENT,
    )

    corpora = list(Corpus) if args.corpora is None else [Corpus(c) for c in args.corpora]

    # Run the pipeline with error handling
    try:
        logger.info(f"Starting pipeline for corpora: {[corpus.value for corpus in corpora]}")
        documents = run_pipeline(
            input_dir=args.input_dir,
            output_path=args.output,
            corpora=corpora,
            limit=args.limit,
            full_text=args.full_text,
            xslt_path=args.xslt,
            strip_links=not args.keep_links,
            workers=args.parallel_workers,
            skip_errors=args.skip_errors,
            graph_output_path=args.graph_output,
        )
        logger.info(f"Pipeline completed successfully: {len(documents)} documents")
    except Exception as e:
        logger.error(f"Pipeline failed: {str(e)}", exc_info=True)
        raise  # Re-raise the exception to maintain the original exit code


if __name__ == "__main__":
    main()
