"""Pure calculation kernels behind the calculator collection.

The ``calckit`` package gathers the numerically interesting parts of the
calculator widgets into small, dependency-light modules:

* ``calculators`` – the kernels themselves (dice combinatorics, correlation
  matrices, Merton probability of default, amortisation, savings, weighted
  risk scores, fat-mass index and a seeded compatibility score).
* ``thresholds`` – ordered threshold tables used to turn a number into a label.
* ``tables`` – loader for the JSON file holding every threshold table.
* ``units`` – explicit caller-side unit conversions.
* ``errors`` – exception types raised by the kernels.

Each kernel is a plain function taking already-normalised inputs and returning
an immutable result record.  See individual docstrings for units.
"""

import logging

from . import errors, thresholds, tables, units, calculators  # noqa: F401

__version__ = "0.3.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ["errors", "thresholds", "tables", "units", "calculators", "__version__"]
