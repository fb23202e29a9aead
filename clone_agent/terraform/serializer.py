"""Renders and writes the Terraform JSON document."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Union

from .types import Document

logger = logging.getLogger(__name__)


def serialize(document: Document) -> str:
    """Render a document as Terraform JSON (two-space indent, key order kept)."""
    return json.dumps(document, indent=2, ensure_ascii=False)


def write_text_atomic(path: Union[str, Path], text: str) -> Path:
    """
    Write ``text`` to ``path`` via a sibling temporary file and a rename, so
    readers see either the old file or the complete new one.
    """
    path = Path(path)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
    logger.debug(f"Wrote {len(text)} characters to {path}")
    return path
