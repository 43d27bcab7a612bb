"""Repository management and object storage for Kit."""

import logging
from pathlib import Path
from typing import Optional, Tuple

from kit.utils.fs import atomic_write

from .compression import compress, decompress
from .errors import CorruptObject, ObjectNotFound, UnexpectedObjectType
from .hash import frame, hash_object, is_valid_hash, unframe
from .objects import OBJECT_TYPES, KitObject

logger = logging.getLogger(__name__)

KIT_DIR = '.kit'
DEFAULT_BRANCH = 'main'


class Repository:
    """
    Represents a Kit repository.

    A repository manages the .kit directory structure and owns the
    content-addressable object store: every object lives in
    objects/<2 hex>/<38 hex>, holding the compressed frame
    "<type> <len>\\0<content>".
    """

    def __init__(self, path: str = '.'):
        """
        Initialize repository handle. Nothing is created on disk until init().

        Args:
            path: Path to repository root (defaults to current directory)
        """
        self.work_tree = Path(path).resolve()
        self.kit_dir = self.work_tree / KIT_DIR
        self.objects_dir = self.kit_dir / 'objects'
        self.refs_dir = self.kit_dir / 'refs'
        self.heads_dir = self.refs_dir / 'heads'
        self.tags_dir = self.refs_dir / 'tags'
        self.head_file = self.kit_dir / 'HEAD'
        self.index_file = self.kit_dir / 'index'
        self.config_file = self.kit_dir / 'config'

        # Lazily constructed to avoid circular imports
        self._ref_manager = None
        self._index = None
        self._config = None

    @property
    def refs(self):
        """Get RefManager instance."""
        if self._ref_manager is None:
            from .refs import RefManager
            self._ref_manager = RefManager(self)
        return self._ref_manager

    @property
    def index(self):
        """Get the Index bound to this repository's index file."""
        if self._index is None:
            from .index import Index
            self._index = Index(self.index_file)
        return self._index

    @property
    def config(self):
        """Get Config for this repository."""
        if self._config is None:
            from .config import Config
            self._config = Config(self.config_file)
        return self._config

    def init(self) -> 'Repository':
        """
        Initialize a new repository.

        Creates the .kit directory structure:
        .kit/
        ├── objects/       # Object database
        ├── refs/
        │   ├── heads/     # Branch references
        │   └── tags/      # Tag references
        ├── HEAD           # Current branch/commit
        └── config         # Repository configuration

        Returns:
            Repository: self for method chaining

        Raises:
            FileExistsError: If repository already exists
        """
        if self.kit_dir.exists():
            raise FileExistsError(f"Repository already exists at {self.kit_dir}")

        self.kit_dir.mkdir(parents=True)
        self.objects_dir.mkdir()
        self.heads_dir.mkdir(parents=True)
        self.tags_dir.mkdir()

        self.head_file.write_text(f'ref: refs/heads/{DEFAULT_BRANCH}\n')
        self.config_file.write_text(
            '[core]\n'
            '\trepositoryformatversion = 0\n'
            '\tfilemode = true\n'
            '\tbare = false\n'
        )

        logger.debug("Initialized repository at %s", self.kit_dir)
        return self

    @classmethod
    def find_repository(cls, path: str = '.') -> Optional['Repository']:
        """
        Find repository by searching up the directory tree.

        Args:
            path: Starting path for search

        Returns:
            Repository if found, None otherwise
        """
        current = Path(path).resolve()

        while True:
            if (current / KIT_DIR).is_dir():
                return cls(str(current))

            if current == current.parent:
                return None

            current = current.parent

    def object_path(self, obj_hash: str) -> Path:
        """
        Get filesystem path for an object.

        Objects are stored in subdirectories named by the first 2 characters
        of the hash, with the remaining 38 characters as the filename.

        Args:
            obj_hash: 40-character SHA-1 hash

        Returns:
            Path: Full path to object file
        """
        return self.objects_dir / obj_hash[:2] / obj_hash[2:]

    def store(self, obj_type: str, content: bytes) -> str:
        """
        Store raw content as an object of the given type.

        Re-storing identical content is a no-op.

        Args:
            obj_type: Object type name
            content: Raw object content

        Returns:
            str: SHA-1 hash of the framed object
        """
        framed = frame(obj_type, content)
        obj_hash = hash_object(framed)
        path = self.object_path(obj_hash)

        if path.exists():
            logger.debug("Object %s already stored", obj_hash[:7])
            return obj_hash

        atomic_write(path, compress(framed))
        logger.debug("Stored %s %s (%d bytes)", obj_type, obj_hash[:7], len(content))

        return obj_hash

    def load(self, obj_hash: str) -> Tuple[str, bytes]:
        """
        Load an object's type and raw content.

        Args:
            obj_hash: 40-character SHA-1 hash

        Returns:
            Tuple of (type, content)

        Raises:
            ObjectNotFound: If no object file exists for the hash
            CorruptObject: If the file cannot be decompressed or its frame is malformed
        """
        if not is_valid_hash(obj_hash):
            raise ObjectNotFound(obj_hash)

        path = self.object_path(obj_hash)
        try:
            compressed = path.read_bytes()
        except FileNotFoundError:
            raise ObjectNotFound(obj_hash)
        except OSError as e:
            raise CorruptObject(obj_hash, f"unreadable object file ({e})")

        return unframe(decompress(compressed, obj_hash), obj_hash)

    def write_object(self, obj: KitObject) -> str:
        """
        Write a typed object to the store.

        Args:
            obj: Blob, Tree or Commit

        Returns:
            str: SHA-1 hash of the object
        """
        return self.store(obj.type, obj.serialize())

    def read_object(self, obj_hash: str, expected: Optional[str] = None) -> KitObject:
        """
        Read and decode an object.

        Args:
            obj_hash: 40-character SHA-1 hash
            expected: Required object type, if any

        Returns:
            KitObject: Deserialized object (Blob, Tree, or Commit)

        Raises:
            ObjectNotFound: If the object does not exist
            CorruptObject: If the object cannot be decoded
            UnexpectedObjectType: If expected is given and does not match
        """
        obj_type, content = self.load(obj_hash)

        obj_class = OBJECT_TYPES.get(obj_type)
        if obj_class is None:
            raise CorruptObject(obj_hash, f"unknown object type {obj_type!r}")

        if expected is not None and obj_type != expected:
            raise UnexpectedObjectType(obj_hash, expected, obj_type)

        obj = obj_class()
        try:
            obj.deserialize(content)
        except CorruptObject as e:
            raise CorruptObject(obj_hash, e.reason)
        return obj

    def object_exists(self, obj_hash: str) -> bool:
        """
        Check if object exists in repository.

        Args:
            obj_hash: Candidate hash

        Returns:
            bool: True if the hash is well-formed and an object file exists
        """
        return is_valid_hash(obj_hash) and self.object_path(obj_hash).exists()

    def __repr__(self) -> str:
        return f"Repository(path={self.work_tree})"
