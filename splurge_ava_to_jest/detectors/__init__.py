"""Detection of AVA test files.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from .ava_detector import AvaFileDetector

__all__ = ["AvaFileDetector"]
