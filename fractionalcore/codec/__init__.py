# Codec package for Fractional Core
"""
Text <-> expression grid conversion.

encode() substitutes verified expressions for 1-bits; decode()
verifies every expression cell before reading it back as a 1-bit.
"""

from .decoder import DecodeReport, bits_to_text, decode, decode_with_report
from .encoder import BITS_PER_CHAR, EncodingOptions, encode, text_to_bits
from .grid import DEFAULT_GRID_WIDTH, Grid

__all__ = [
    "BITS_PER_CHAR",
    "DEFAULT_GRID_WIDTH",
    "DecodeReport",
    "EncodingOptions",
    "Grid",
    "bits_to_text",
    "decode",
    "decode_with_report",
    "encode",
    "text_to_bits",
]
