"""
Loads the company dataset from disk in one synchronous read.
"""

from __future__ import annotations

import logging
import os

from records import parse

logger = logging.getLogger(__name__)


class DatasetUnavailableError(RuntimeError):
    """The dataset file is missing or cannot be read."""


class Data:
    def __init__(self, path, delimiter=","):
        self.path = path
        self.delimiter = delimiter

    def read_text(self):
        if not os.path.isfile(self.path):
            raise DatasetUnavailableError(f"Dataset not found at {self.path}")
        try:
            with open(self.path, "r", encoding="utf-8-sig") as fp:
                return fp.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise DatasetUnavailableError(f"Could not read dataset at {self.path}: {exc}") from exc

    def read(self):
        records = parse(self.read_text(), delimiter=self.delimiter)
        logger.info("Loaded %d companies from %s", len(records), self.path)
        return records
