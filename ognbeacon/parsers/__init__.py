"""Decoders for OGN APRS beacon lines."""

from .aircraft import decode
from .classifier import classify, decode_receiver
from .fields import FIELD_DECODERS, FieldDecoder, decode_field
from .identity import IdentityByte, decode_identity_byte
from .position import HeadPosition, decode_head

__all__ = [
    "FIELD_DECODERS",
    "FieldDecoder",
    "HeadPosition",
    "IdentityByte",
    "classify",
    "decode",
    "decode_field",
    "decode_head",
    "decode_identity_byte",
    "decode_receiver",
]
