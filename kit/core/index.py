"""Index (staging area) implementation."""

import hashlib
import logging
import struct
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Dict, Optional, Union

from kit.utils.fs import atomic_write, iter_working_files

from .hash import HASH_RAW_LENGTH, is_valid_hash
from .objects import FILE_MODE, Blob

logger = logging.getLogger(__name__)

SIGNATURE = b'DIRC'
VERSION = 2

# ctime, ctime_ns, mtime, mtime_ns, dev, ino, mode, uid, gid, size, sha1, flags
ENTRY_FORMAT = '>IIIIIIIIII20sH'
ENTRY_FIXED_SIZE = struct.calcsize(ENTRY_FORMAT)
HEADER_FORMAT = '>4sII'
HEADER_SIZE = struct.calcsize(HEADER_FORMAT)
NAME_MASK = 0xFFF


class IndexFormatError(ValueError):
    """Raised internally when an index file cannot be decoded."""


@dataclass
class IndexEntry:
    """
    Represents a single entry in the index.

    Only path, mode and hash are meaningful; the stat fields are carried
    for layout compatibility and are zero unless a caller tracks them.
    """
    path: str
    mode: str
    sha1: str
    ctime: int = 0
    ctime_ns: int = 0
    mtime: int = 0
    mtime_ns: int = 0
    dev: int = 0
    ino: int = 0
    uid: int = 0
    gid: int = 0
    size: int = 0

    @property
    def flags(self) -> int:
        """Low 12 bits hold the path length plus its NUL terminator."""
        return min(len(self.path.encode()) + 1, NAME_MASK)

    def __repr__(self) -> str:
        return f"IndexEntry({self.mode} {self.sha1[:7]} {self.path})"


def encode_index(entries: Dict[str, IndexEntry]) -> bytes:
    """
    Encode entries in the binary index format.

    Format:
    - Header: 'DIRC' + version (4 bytes) + entry count (4 bytes)
    - Entries: sorted by path, each with 62 bytes of metadata, the
      NUL-terminated path, and zero padding to a multiple of 8 bytes
    - Checksum: SHA-1 of everything before it

    Args:
        entries: Mapping of path to entry

    Returns:
        bytes: Encoded index
    """
    content = bytearray(struct.pack(HEADER_FORMAT, SIGNATURE, VERSION, len(entries)))

    for path in sorted(entries):
        entry = entries[path]
        path_bytes = entry.path.encode()

        content.extend(struct.pack(
            ENTRY_FORMAT,
            entry.ctime,
            entry.ctime_ns,
            entry.mtime,
            entry.mtime_ns,
            entry.dev,
            entry.ino,
            int(entry.mode, 8),
            entry.uid,
            entry.gid,
            entry.size,
            bytes.fromhex(entry.sha1),
            entry.flags
        ))
        content.extend(path_bytes + b'\0')

        entry_len = ENTRY_FIXED_SIZE + len(path_bytes) + 1
        content.extend(b'\0' * ((8 - entry_len % 8) % 8))

    content.extend(hashlib.sha1(content).digest())
    return bytes(content)


def decode_binary_index(data: bytes) -> Dict[str, IndexEntry]:
    """
    Decode the binary index format.

    Raises:
        IndexFormatError: If the checksum, header or any entry is invalid
    """
    if len(data) < HEADER_SIZE + HASH_RAW_LENGTH:
        raise IndexFormatError("index file too short")

    body, checksum = data[:-HASH_RAW_LENGTH], data[-HASH_RAW_LENGTH:]
    if hashlib.sha1(body).digest() != checksum:
        raise IndexFormatError("index checksum mismatch")

    _, _, entry_count = struct.unpack(HEADER_FORMAT, body[:HEADER_SIZE])

    entries: Dict[str, IndexEntry] = {}
    offset = HEADER_SIZE

    try:
        for _ in range(entry_count):
            fields = struct.unpack(ENTRY_FORMAT, body[offset:offset + ENTRY_FIXED_SIZE])
            offset += ENTRY_FIXED_SIZE

            name_len = fields[11] & NAME_MASK
            if name_len < NAME_MASK:
                path_end = offset + name_len - 1
                if name_len == 0 or body[path_end:path_end + 1] != b'\0':
                    raise IndexFormatError(f"bad path length at offset {offset}")
            else:
                path_end = body.index(b'\0', offset)

            path = body[offset:path_end].decode()
            entry_len = ENTRY_FIXED_SIZE + (path_end - offset) + 1
            offset = path_end + 1 + (8 - entry_len % 8) % 8

            entries[path] = IndexEntry(
                path=path,
                mode=format(fields[6], 'o'),
                sha1=fields[10].hex(),
                ctime=fields[0],
                ctime_ns=fields[1],
                mtime=fields[2],
                mtime_ns=fields[3],
                dev=fields[4],
                ino=fields[5],
                uid=fields[7],
                gid=fields[8],
                size=fields[9],
            )
    except (struct.error, UnicodeDecodeError, ValueError) as e:
        raise IndexFormatError(str(e))

    if offset > len(body):
        raise IndexFormatError("entries overrun checksum")

    return entries


def decode_text_index(data: bytes) -> Dict[str, IndexEntry]:
    """
    Decode the legacy line-oriented format: "<mode> <hash> <path>" per line.

    Lines that do not split into three fields are skipped.

    Raises:
        IndexFormatError: If the file is not text or a hash is malformed
    """
    try:
        text = data.decode()
    except UnicodeDecodeError as e:
        raise IndexFormatError(str(e))

    entries: Dict[str, IndexEntry] = {}
    for line in text.splitlines():
        if not line.strip():
            continue
        parts = line.split(' ', 2)
        if len(parts) != 3:
            continue
        mode, sha1, path = parts
        if not is_valid_hash(sha1):
            raise IndexFormatError(f"invalid hash in legacy index: {sha1!r}")
        entries[path] = IndexEntry(path=path, mode=mode, sha1=sha1)

    return entries


def _drop_conflicts(entries: Dict[str, IndexEntry], path: str) -> None:
    """Remove entries that would make path both a file and a directory."""
    for parent in PurePosixPath(path).parents:
        entries.pop(parent.as_posix(), None)

    prefix = path + '/'
    for other in [p for p in entries if p.startswith(prefix)]:
        del entries[other]


class Index:
    """
    Kit index (staging area).

    Maps repository-relative paths to the mode and blob hash staged for
    the next commit. Every mutation is a read-modify-write of the index
    file, so no state is carried between calls beyond what is on disk.
    """

    def __init__(self, index_file: Union[str, Path]):
        """
        Initialize index handle.

        Args:
            index_file: Path to the index file
        """
        self.index_file = Path(index_file)
        self.entries: Dict[str, IndexEntry] = {}

    def read(self) -> Dict[str, IndexEntry]:
        """
        Load the index from disk.

        Files starting with the binary signature are decoded as binary;
        anything else is tried as the legacy text format. A missing or
        undecodable file yields an empty index.

        Returns:
            Ordered mapping of path to entry
        """
        self.entries = {}

        try:
            data = self.index_file.read_bytes()
        except FileNotFoundError:
            return self.entries
        except OSError as e:
            logger.warning("Cannot read index %s (%s); treating it as empty", self.index_file, e)
            return self.entries

        try:
            if data[:4] == SIGNATURE:
                self.entries = decode_binary_index(data)
            else:
                self.entries = decode_text_index(data)
        except IndexFormatError as e:
            logger.warning("Ignoring unreadable index %s: %s", self.index_file, e)
            self.entries = {}

        return self.entries

    def write(self, entries: Optional[Dict[str, IndexEntry]] = None) -> None:
        """
        Persist entries in the binary format.

        Args:
            entries: Mapping to write; defaults to the in-memory entries
        """
        if entries is not None:
            self.entries = dict(entries)
        atomic_write(self.index_file, encode_index(self.entries))
        logger.debug("Wrote index with %d entries", len(self.entries))

    def update(self, path: str, sha1: str, mode: str = FILE_MODE) -> None:
        """
        Insert or overwrite the entry for a path.

        A staged file at one of its parent directories, or staged files
        below it, are dropped.

        Args:
            path: Repository-relative posix path
            sha1: Blob hash
            mode: Entry mode
        """
        self.read()
        _drop_conflicts(self.entries, path)
        self.entries[path] = IndexEntry(path=path, mode=mode, sha1=sha1)
        self.write()

    def remove(self, path: str) -> None:
        """Delete the entry for a path; no-op if it is not staged."""
        self.read()
        if path in self.entries:
            del self.entries[path]
            self.write()

    def clear(self) -> None:
        """Write an index with zero entries."""
        self.write({})

    def add_file(self, repo, filepath: Union[str, Path]) -> str:
        """
        Store a working-tree file as a blob and stage it.

        Args:
            repo: Repository instance
            filepath: Path to file (absolute or relative to the work tree)

        Returns:
            str: Blob hash of the staged content

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the path is not a regular file inside the work tree
        """
        file_path = Path(filepath)
        if not file_path.is_absolute():
            file_path = repo.work_tree / file_path

        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        if not file_path.is_file():
            raise ValueError(f"Not a file: {filepath}")

        rel_path = file_path.resolve().relative_to(repo.work_tree).as_posix()
        sha1 = repo.write_object(Blob.from_file(str(file_path)))
        self.update(rel_path, sha1)

        return sha1

    def add_path(self, repo, path: Union[str, Path]) -> Dict[str, str]:
        """
        Stage a file, or every file below a directory.

        The metadata directory is never staged.

        Args:
            repo: Repository instance
            path: File or directory (absolute or relative to the work tree)

        Returns:
            Mapping of staged relative path to blob hash
        """
        target = Path(path)
        if not target.is_absolute():
            target = repo.work_tree / target

        if target.is_file():
            sha1 = self.add_file(repo, target)
            return {target.resolve().relative_to(repo.work_tree).as_posix(): sha1}

        if not target.is_dir():
            raise FileNotFoundError(f"File not found: {path}")

        self.read()
        staged = {}
        base = target.resolve().relative_to(repo.work_tree)
        for rel_path, file_path in iter_working_files(target, repo.kit_dir.name):
            full_rel = (base / rel_path).as_posix()
            sha1 = repo.write_object(Blob.from_file(str(file_path)))
            _drop_conflicts(self.entries, full_rel)
            self.entries[full_rel] = IndexEntry(path=full_rel, mode=FILE_MODE, sha1=sha1)
            staged[full_rel] = sha1
        self.write()

        return staged

    def get_entry(self, path: str) -> Optional[IndexEntry]:
        """Get the on-disk entry for a path."""
        return self.read().get(path)

    def hashes(self) -> Dict[str, str]:
        """Current on-disk mapping of path to blob hash."""
        return {path: entry.sha1 for path, entry in self.read().items()}

    def __len__(self) -> int:
        return len(self.read())

    def __repr__(self) -> str:
        return f"Index(entries={len(self.entries)})"
