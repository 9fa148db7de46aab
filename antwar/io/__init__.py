"""I/O layer: map parsing, report rendering, Parquet schemas and output paths."""

from antwar.io.map_parser import load_map, parse_map, parse_map_text
from antwar.io.report import format_colony, format_destruction, format_map, format_summary

__all__ = [
    "format_colony",
    "format_destruction",
    "format_map",
    "format_summary",
    "load_map",
    "parse_map",
    "parse_map_text",
]
