"""Dialect and schema inference heuristics"""
from .types import Type, classify, infer_column_type, infer_types, columns_from_rows
from .tokenize import Field, Record, split_records, split_naive, split_lines
from .preamble import count_preamble_rows
from .dialect import DialectGuess, DelimiterScore, infer_dialect, rank_delimiters, detect_quote
from .header import detect_header
