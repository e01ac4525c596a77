"""Syntax-tree based detection of AVA test files.

A file is an AVA test file when it parses and imports from the ``ava``
package. String matching is not enough: ``from 'ava'`` inside a comment or
a string literal must not count.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..exceptions import ParseError
from ..syntax import parse_source
from ..syntax import query as q
from ..transformers.import_transformer import is_ava_import

_logger = logging.getLogger(__name__)


class AvaFileDetector:
    """Identify AVA test files by parsing them."""

    def is_ava_source(self, source_code: str, source_file: str = "<string>") -> bool:
        """Return True when ``source_code`` imports from ``ava``.

        Raises:
            ParseError: If the source cannot be parsed.
        """
        tree = parse_source(source_code, source_file=source_file)
        return q.find_first(tree.root, "import_statement", is_ava_import) is not None

    def is_ava_file(self, file_path: str | Path) -> bool:
        """Check a file on disk.

        Unreadable or unparseable files are reported as not being AVA
        files.
        """
        path = Path(file_path)
        try:
            source_code = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            _logger.debug(f"Skipping unreadable file {path}: {e}")
            return False
        try:
            return self.is_ava_source(source_code, str(path))
        except ParseError as e:
            _logger.debug(f"Skipping unparseable file {path}: {e.message}")
            return False
