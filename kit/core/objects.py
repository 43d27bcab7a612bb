"""Typed objects stored by Kit: blobs, trees and commits."""

import time
from abc import ABC, abstractmethod
from typing import List, Optional

from .errors import CorruptObject
from .hash import HASH_RAW_LENGTH, frame, hash_object

FILE_MODE = '100644'
DIR_MODE = '40000'


class KitObject(ABC):
    """Base class for all Kit objects."""

    def __init__(self):
        self._hash: Optional[str] = None

    @abstractmethod
    def serialize(self) -> bytes:
        """
        Serialize object content to bytes (without the frame header).

        Returns:
            bytes: Serialized object data
        """
        pass

    @abstractmethod
    def deserialize(self, data: bytes) -> None:
        """
        Deserialize object content from bytes.

        Args:
            data: Serialized object data
        """
        pass

    @property
    def type(self) -> str:
        """
        Return object type name.

        Returns:
            str: Object type (blob, tree, commit)
        """
        return self.__class__.__name__.lower()

    def compute_hash(self) -> str:
        """
        Compute and cache object hash.

        Objects are hashed with a header containing the type and size.
        Format: <type> <size>\\0<content>

        Returns:
            str: 40-character SHA-1 hash
        """
        if self._hash is None:
            self._hash = hash_object(frame(self.type, self.serialize()))
        return self._hash

    @property
    def hash(self) -> str:
        """40-character SHA-1 hash of the framed object."""
        return self.compute_hash()


class Blob(KitObject):
    """
    Represents file content.

    A blob stores the raw content of a file without any metadata
    like filename or permissions.
    """

    def __init__(self, data: Optional[bytes] = None):
        super().__init__()
        self.data = data or b''

    def serialize(self) -> bytes:
        return self.data

    def deserialize(self, data: bytes) -> None:
        self.data = data
        self._hash = None

    @classmethod
    def from_file(cls, filepath: str) -> 'Blob':
        """
        Create blob from file.

        Args:
            filepath: Path to file

        Returns:
            Blob: New blob containing file content
        """
        with open(filepath, 'rb') as f:
            return cls(f.read())

    def __repr__(self) -> str:
        return f"Blob(hash={self.hash[:7]}, size={len(self.data)})"


class TreeEntry:
    """
    Represents a single entry in a tree.

    Each entry contains:
    - mode: '100644' for a file, '40000' for a subdirectory
    - type: Object type ('blob' or 'tree'), derived from the mode
    - hash: SHA-1 hash of the child object
    - name: Filename or directory name
    """

    def __init__(self, mode: str, obj_hash: str, name: str):
        self.mode = mode
        self.type = 'tree' if mode == DIR_MODE else 'blob'
        self.hash = obj_hash
        self.name = name

    def __repr__(self) -> str:
        return f"TreeEntry({self.mode} {self.type} {self.hash[:7]} {self.name})"

    def __lt__(self, other: 'TreeEntry') -> bool:
        """Sort entries by name for consistent ordering."""
        return self.name < other.name

    def __eq__(self, other) -> bool:
        if not isinstance(other, TreeEntry):
            return NotImplemented
        return (self.mode, self.hash, self.name) == (other.mode, other.hash, other.name)


class Tree(KitObject):
    """
    Represents a directory snapshot.

    A tree contains entries pointing to blobs (files) and other trees
    (subdirectories). Entries are kept sorted by name, so identical
    directory contents always serialize, and therefore hash, identically.
    """

    def __init__(self):
        super().__init__()
        self.entries: List[TreeEntry] = []

    def add_entry(self, mode: str, obj_hash: str, name: str) -> None:
        """
        Add entry to tree.

        Args:
            mode: Entry mode ('100644' or '40000')
            obj_hash: Child object hash
            name: Entry name
        """
        self.entries.append(TreeEntry(mode, obj_hash, name))
        self.entries.sort()
        self._hash = None

    def serialize(self) -> bytes:
        """
        Serialize tree entries.

        Format per entry: <mode> <name>\\0<20-byte raw hash>

        Returns:
            bytes: Serialized tree data
        """
        parts = []
        for entry in sorted(self.entries):
            parts.append(f"{entry.mode} {entry.name}".encode() + b'\0' + bytes.fromhex(entry.hash))
        return b''.join(parts)

    def deserialize(self, data: bytes) -> None:
        """
        Deserialize tree entries.

        Args:
            data: Serialized tree data

        Raises:
            CorruptObject: If an entry is truncated or malformed
        """
        entries = []
        pos = 0

        while pos < len(data):
            space_pos = data.find(b' ', pos)
            if space_pos == -1:
                raise CorruptObject('<tree>', f"truncated entry mode at offset {pos}")

            null_pos = data.find(b'\0', space_pos)
            if null_pos == -1:
                raise CorruptObject('<tree>', f"truncated entry name at offset {space_pos}")

            hash_bytes = data[null_pos + 1:null_pos + 1 + HASH_RAW_LENGTH]
            if len(hash_bytes) != HASH_RAW_LENGTH:
                raise CorruptObject('<tree>', f"truncated entry hash at offset {null_pos + 1}")

            try:
                mode = data[pos:space_pos].decode('ascii')
                name = data[space_pos + 1:null_pos].decode()
            except UnicodeDecodeError:
                raise CorruptObject('<tree>', f"undecodable entry at offset {pos}")

            entries.append(TreeEntry(mode, hash_bytes.hex(), name))
            pos = null_pos + 1 + HASH_RAW_LENGTH

        self.entries = sorted(entries)
        self._hash = None

    def __repr__(self) -> str:
        return f"Tree(entries={len(self.entries)})"


class Commit(KitObject):
    """
    Represents a commit with metadata.

    A commit captures:
    - Snapshot of project (tree hash)
    - Parent commit(s) for history, first parent being the mainline
    - Author and committer identity with timestamp
    - Commit message
    """

    def __init__(self):
        super().__init__()
        self.tree: str = ''
        self.parents: List[str] = []
        self.author: str = ''
        self.author_time: int = 0
        self.author_timezone: str = '+0000'
        self.committer: str = ''
        self.committer_time: int = 0
        self.committer_timezone: str = '+0000'
        self.message: str = ''

    def serialize(self) -> bytes:
        """
        Serialize commit.

        Format:
        tree <tree-hash>
        parent <parent-hash>  (zero or more)
        author Name <email> <timestamp> <timezone>
        committer Name <email> <timestamp> <timezone>

        <commit message>

        Returns:
            bytes: Serialized commit data
        """
        lines = [f'tree {self.tree}']

        for parent in self.parents:
            lines.append(f'parent {parent}')

        lines.append(f'author {self.author} {self.author_time} {self.author_timezone}')
        lines.append(f'committer {self.committer} {self.committer_time} {self.committer_timezone}')
        lines.append('')
        lines.append(self.message)

        return ('\n'.join(lines) + '\n').encode()

    def deserialize(self, data: bytes) -> None:
        """
        Deserialize commit.

        Args:
            data: Serialized commit data

        Raises:
            CorruptObject: If a header line cannot be parsed
        """
        try:
            content = data.decode()
        except UnicodeDecodeError:
            raise CorruptObject('<commit>', "commit is not valid UTF-8")

        if content.endswith('\n'):
            content = content[:-1]
        lines = content.split('\n')

        self.parents = []
        message_start = len(lines)
        try:
            for i, line in enumerate(lines):
                if not line:
                    message_start = i + 1
                    break

                if line.startswith('tree '):
                    self.tree = line[5:]

                elif line.startswith('parent '):
                    self.parents.append(line[7:])

                elif line.startswith('author '):
                    self.author, author_time, self.author_timezone = line[7:].rsplit(' ', 2)
                    self.author_time = int(author_time)

                elif line.startswith('committer '):
                    self.committer, committer_time, self.committer_timezone = line[10:].rsplit(' ', 2)
                    self.committer_time = int(committer_time)
        except ValueError:
            raise CorruptObject('<commit>', f"malformed header line {line!r}")

        self.message = '\n'.join(lines[message_start:])
        self._hash = None

    @classmethod
    def create(
        cls,
        tree_hash: str,
        parent_hashes: List[str],
        author: str,
        message: str,
        timestamp: Optional[int] = None,
        timezone: str = '+0000'
    ) -> 'Commit':
        """
        Create a new commit. The committer is the author.

        Args:
            tree_hash: Hash of tree object
            parent_hashes: Ordered parent commit hashes
            author: Author name and email (e.g., "Name <email>")
            message: Commit message
            timestamp: Unix timestamp (defaults to current time)
            timezone: Timezone offset

        Returns:
            Commit: New commit object
        """
        commit = cls()
        commit.tree = tree_hash
        commit.parents = list(parent_hashes)
        commit.author = author
        commit.committer = author
        commit.message = message

        if timestamp is None:
            timestamp = int(time.time())

        commit.author_time = timestamp
        commit.committer_time = timestamp
        commit.author_timezone = timezone
        commit.committer_timezone = timezone

        return commit

    def __repr__(self) -> str:
        parent_info = f", parents={len(self.parents)}" if self.parents else ""
        msg_preview = self.message.split('\n')[0][:50]
        return f"Commit(hash={self.hash[:7]}{parent_info}, msg='{msg_preview}')"


OBJECT_TYPES = {
    'blob': Blob,
    'tree': Tree,
    'commit': Commit,
}
