"""Transformation passes converting AVA test code to Jest.

Each module holds one structural pass operating on the concrete syntax
tree; :mod:`.ava_transformer` composes them.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from .ava_transformer import TRANSFORMATION_PASSES, AvaToJestTransformer, TransformationPass
from .report import Diagnostic, Severity, TransformReport

__all__ = [
    "AvaToJestTransformer",
    "Diagnostic",
    "Severity",
    "TransformationPass",
    "TransformReport",
    "TRANSFORMATION_PASSES",
]
