"""Encoding/decoding between PETSCII and Unicode."""

from forbidden_bands.codec.decoder import Decoder, decode, normalize
from forbidden_bands.codec.encoder import Encoder, encode, encode_bytes

__all__ = ["Decoder", "decode", "normalize", "Encoder", "encode", "encode_bytes"]
