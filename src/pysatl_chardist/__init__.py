"""
PySATL Char Distributions
=========================

Probability distributions over the code points of a character alphabet,
stored compactly as weighted interval partitions, with mixture and product
algebra, exact log-probabilities, sampling and predefined character classes.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from importlib.metadata import version

from .classes import *
from .classes import __all__ as _classes_all
from .distributions import *
from .distributions import __all__ as _distr_all
from .errors import *
from .errors import __all__ as _errors_all
from .types import *
from .types import __all__ as _types_all

__version__ = version("pysatl-chardist")
__all__ = [
    "__version__",
    *_classes_all,
    *_distr_all,
    *_errors_all,
    *_types_all,
]

del _classes_all
del _distr_all
del _errors_all
del _types_all
