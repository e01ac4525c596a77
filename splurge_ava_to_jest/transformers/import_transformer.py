"""Remove imports of the AVA package.

Jest exposes ``test``, ``expect`` and the lifecycle hooks as globals, so
every ``import ... from 'ava'`` (including type-only and side-effect
imports) is dropped.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import logging

from ..syntax import Node, SourceTree
from ..syntax import query as q
from .report import TransformReport
from .rules import AVA_MODULE

PASS_NAME = "remove_imports"

_logger = logging.getLogger(__name__)


def is_ava_import(node: Node) -> bool:
    return node.type == "import_statement" and q.string_value(node.child_by_field("source")) == AVA_MODULE


def remove_ava_imports(tree: SourceTree, report: TransformReport) -> None:
    """Delete every import declaration whose source module is ``ava``.

    Absence of such an import is a no-op.
    """
    imports = q.find(tree.root, "import_statement", is_ava_import)
    for node in imports:
        q.remove(node)
    if imports:
        _logger.debug(f"Removed {len(imports)} '{AVA_MODULE}' import(s) from {tree.source_file}")
    report.record(PASS_NAME, len(imports))
