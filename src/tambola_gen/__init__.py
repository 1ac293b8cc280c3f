"""Tambola (housie) ticket generator."""

from .card import Card
from .core import BatchBuilder, BuildParams, CardGenerator, ColumnRowRandomizer, generate_batch, generate_one_card
from .errors import GenerationError, GenerationExhausted, GenerationRetryLimitExceeded, InvalidCardConstraint
from .partition import NumericBucket, column_buckets, column_of
from .version import __version__

__all__ = [
    "BatchBuilder",
    "BuildParams",
    "Card",
    "CardGenerator",
    "ColumnRowRandomizer",
    "GenerationError",
    "GenerationExhausted",
    "GenerationRetryLimitExceeded",
    "InvalidCardConstraint",
    "NumericBucket",
    "__version__",
    "column_buckets",
    "column_of",
    "generate_batch",
    "generate_one_card",
]
