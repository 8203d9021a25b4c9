"""
Parsing of raw health records into record objects.
"""

from .record_parser import ParseResult, load_records, parse_record, parse_records

__all__ = ["ParseResult", "load_records", "parse_record", "parse_records"]
