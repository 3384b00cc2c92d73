"""
Predefined character classes.

This package provides static range tables of common character classes and
the cached distributions built from them.
"""

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from .configuration import (
    class_partition,
    digit,
    letter,
    letter_or_digit,
    lower,
    named_class,
    reset_named_classes,
    upper,
    whitespace,
    word_char,
)

__all__ = [
    "class_partition",
    "digit",
    "letter",
    "letter_or_digit",
    "lower",
    "named_class",
    "reset_named_classes",
    "upper",
    "whitespace",
    "word_char",
]
