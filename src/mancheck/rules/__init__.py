"""Manual page rule implementations."""

from .base import ManPageRule
from .descriptions import DescriptionRule, table_description
from .names import NameRule
from .synopsis import SynopsisRule

__all__ = [
    "ManPageRule",
    "NameRule",
    "DescriptionRule",
    "SynopsisRule",
    "table_description",
]
