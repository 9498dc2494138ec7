"""Read VEP annotation documents from JSON and JSON-lines files."""

import gzip
import json
from pathlib import Path
from typing import IO, Iterator

import structlog
from pydantic import ValidationError

from annotation_index.models import AnnotationDocument

logger = structlog.get_logger()

JSON_LINES_SUFFIXES = {".jsonl", ".ndjson"}


def _open_text(path: Path) -> IO[str]:
    if path.suffix == ".gz":
        return gzip.open(path, "rt", encoding="utf-8")
    return open(path, "r", encoding="utf-8")


def _base_suffix(path: Path) -> str:
    """Suffix ignoring a trailing .gz (annotations.jsonl.gz -> .jsonl)."""
    if path.suffix == ".gz":
        return Path(path.stem).suffix
    return path.suffix


def read_annotation_documents(path: Path | str) -> Iterator[AnnotationDocument]:
    """
    Stream annotation documents from a file.

    Supported layouts:
    - .jsonl / .ndjson: one JSON object per line (blank lines skipped)
    - .json: a single object or an array of objects
    Any of these may be gzip-compressed with an extra .gz suffix.

    Args:
        path: Path to the annotation file

    Yields:
        Validated AnnotationDocument instances

    Raises:
        FileNotFoundError: If path doesn't exist
        pydantic.ValidationError: If a record doesn't match AnnotationDocument
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Annotation file not found: {path}")

    logger.info("read_annotation_documents_start", path=str(path))
    count = 0

    with _open_text(path) as handle:
        if _base_suffix(path) in JSON_LINES_SUFFIXES:
            for line_number, line in enumerate(handle, start=1):
                if not line.strip():
                    continue
                try:
                    document = AnnotationDocument.model_validate_json(line)
                except ValidationError:
                    logger.error("invalid_annotation_record", path=str(path), line=line_number)
                    raise
                count += 1
                yield document
        else:
            payload = json.load(handle)
            records = payload if isinstance(payload, list) else [payload]
            for index, record in enumerate(records):
                try:
                    document = AnnotationDocument.model_validate(record)
                except ValidationError:
                    logger.error("invalid_annotation_record", path=str(path), index=index)
                    raise
                count += 1
                yield document

    logger.info("read_annotation_documents_complete", path=str(path), document_count=count)
