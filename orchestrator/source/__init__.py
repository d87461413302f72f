"""
Module 04 - Source Assembler

Flattens multi-file contract sources into one submission unit.
"""

from orchestrator.source.assembler import (
    SourceAssembler,
    assemble_source,
    sanitize_preamble,
    with_preamble,
)

__all__ = [
    "SourceAssembler",
    "assemble_source",
    "sanitize_preamble",
    "with_preamble",
]
