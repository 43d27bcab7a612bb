"""Deflate stream codec for stored objects."""

import zlib

from .errors import CorruptObject


def compress(data: bytes) -> bytes:
    """Compress bytes into a zlib (deflate) stream."""
    return zlib.compress(data)


def decompress(data: bytes, identifier: str = '<stream>') -> bytes:
    """
    Decompress a zlib stream.
    
    Args:
        data: Compressed bytes
        identifier: Name used in failure messages (usually the hash)
        
    Returns:
        bytes: Original data
        
    Raises:
        CorruptObject: If data is not a complete, valid stream
    """
    decompressor = zlib.decompressobj()
    try:
        result = decompressor.decompress(data)
        result += decompressor.flush()
    except zlib.error as e:
        raise CorruptObject(identifier, f"invalid compressed stream ({e})")
    
    if not decompressor.eof:
        raise CorruptObject(identifier, "truncated compressed stream")
    
    return result
