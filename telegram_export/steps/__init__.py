"""
Telegram Export Pipeline Steps

This directory contains the numbered pipeline steps:

1. Indexing - Finds the messages*.html fragment files of an export
2. Partitioning - Splits the fragments into one contiguous range per worker
3. Extraction - Parses the ranges in parallel and merges them into one room
4. Output - Writes the room as JSON, JSONL or standardized text

The files are numbered for easy identification of the processing order.
"""

from .a_indexing import index_export_directory
from .b_partitioning import clamp_worker_count, partition_files
from .c_extraction import ParallelExtractor
from .d_output import OUTPUT_FORMATS, save_room, sort_messages

__all__ = [
    "index_export_directory",
    "clamp_worker_count",
    "partition_files",
    "ParallelExtractor",
    "OUTPUT_FORMATS",
    "save_room",
    "sort_messages",
]
