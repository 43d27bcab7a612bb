"""Hash and object framing utilities for Kit."""

import hashlib
import re
from typing import Tuple

from .errors import CorruptObject

HASH_HEX_LENGTH = 40
HASH_RAW_LENGTH = 20

_HEX_HASH = re.compile(r'[0-9a-f]{40}')


def hash_object(data: bytes) -> str:
    """
    Compute SHA-1 hash of data.
    
    Args:
        data: Bytes to hash
        
    Returns:
        40-character lowercase hex string
    """
    return hashlib.sha1(data).hexdigest()


def hash_file(filepath: str) -> str:
    """
    Compute the blob identity of a file without storing it.
    
    Args:
        filepath: Path to file
        
    Returns:
        40-character hex string
    """
    with open(filepath, 'rb') as f:
        return hash_blob(f.read())


def hash_blob(content: bytes) -> str:
    """Hash content as it would be stored as a blob object."""
    return hash_object(frame('blob', content))


def is_valid_hash(value: str) -> bool:
    """Check that value is exactly 40 lowercase hex characters."""
    return bool(_HEX_HASH.fullmatch(value))


def frame(obj_type: str, content: bytes) -> bytes:
    """
    Wrap content in an object frame.
    
    Format: <type> <decimal length>\\0<content>
    
    Args:
        obj_type: Object type name (blob, tree, commit)
        content: Raw object content
        
    Returns:
        bytes: Framed object
    """
    return f"{obj_type} {len(content)}\0".encode() + content


def unframe(data: bytes, identifier: str = '<frame>') -> Tuple[str, bytes]:
    """
    Split a framed object into type and content.
    
    Args:
        data: Framed object bytes
        identifier: Name used in failure messages (usually the hash)
        
    Returns:
        Tuple of (type, content)
        
    Raises:
        CorruptObject: If the header is malformed or the length mismatches
    """
    null_idx = data.find(b'\0')
    if null_idx == -1:
        raise CorruptObject(identifier, "missing header terminator")
    
    try:
        header = data[:null_idx].decode('ascii')
        obj_type, size_str = header.split(' ')
        size = int(size_str)
    except ValueError:
        raise CorruptObject(identifier, f"invalid header {data[:null_idx]!r}")
    
    content = data[null_idx + 1:]
    if len(content) != size:
        raise CorruptObject(
            identifier, f"size mismatch: header says {size}, found {len(content)}"
        )
    
    return obj_type, content
