"""Core module for ticket generation."""

from .builder import BatchBuilder, BuildParams, BuildResult, generate_batch, generate_batches
from .generator import CardGenerator, generate_one_card
from .randomizer import ColumnRowRandomizer, randomize_column_rows

__all__ = [
    "BatchBuilder",
    "BuildParams",
    "BuildResult",
    "CardGenerator",
    "ColumnRowRandomizer",
    "generate_batch",
    "generate_batches",
    "generate_one_card",
    "randomize_column_rows",
]
