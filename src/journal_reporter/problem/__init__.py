"""
problem — Problem-data store, problem directory loader and report formatter.
"""

from .data import ProblemData, load_problem_data, prepare_for_journal
from .formatter import DEFAULT_TEMPLATE, ProblemFormatter

__all__ = [
    "ProblemData",
    "load_problem_data",
    "prepare_for_journal",
    "DEFAULT_TEMPLATE",
    "ProblemFormatter",
]
