import json
import logging
from pathlib import Path
from typing import Iterable, Optional

from bs4 import BeautifulSoup
from pydantic import BaseModel

logger = logging.getLogger(__name__)


def set_logging_level(
    level: int,
    service_name: Optional[str] = None,
    environment: Optional[str] = None,
) -> None:
    """Set logging level for all lexcan loggers.

    Args:
        level: The logging level to set
        service_name: Name of the service (e.g., "pipeline")
        environment: Environment name (e.g., "localhost", "dev", "prod")
    """
    # Set the log level for all lexcan loggers
    loggers = [logging.getLogger(name) for name in logging.root.manager.loggerDict]
    for logger in loggers:
        if "lexcan" in logger.name or "__main__" == logger.name:
            logger.setLevel(level)

    # Loggers created after this call inherit from the package logger
    logging.getLogger("lexcan").setLevel(level)

    # Configure basic logging format
    logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    if service_name or environment:
        logging.getLogger(__name__).debug(
            f"Logging configured for {service_name or 'lexcan'}",
            extra={"service_name": service_name, "environment": environment},
        )


def read_xml_bytes(filepath: str | Path) -> bytes:
    """Read the raw bytes of an XML file, leaving encoding detection to the parser."""
    with open(filepath, "rb") as f:
        return f.read()


def load_xml_file_to_soup(filepath: str | Path) -> BeautifulSoup:
    """Load an XML file and return a BeautifulSoup object."""
    return BeautifulSoup(read_xml_bytes(filepath), "xml")


def write_json_file(
    filepath: str | Path,
    records: BaseModel | Iterable[BaseModel],
    exclude: Optional[set[str]] = None,
) -> int:
    """Serialise a model, or a sequence of models as a JSON array, to a UTF-8 file.

    Args:
        filepath: Destination file, parent directories are created as needed
        records: A single model, or the models to write in order
        exclude: Top level fields to leave out of every record

    Returns:
        The number of records written
    """
    if isinstance(records, BaseModel):
        payload = records.model_dump(mode="json", exclude=exclude)
        count = 1
    else:
        payload = [record.model_dump(mode="json", exclude=exclude) for record in records]
        count = len(payload)

    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False)

    logger.info(f"Wrote {count} records to {path}", extra={"output_path": str(path)})
    return count
