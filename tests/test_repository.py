"""Repository initialization and object store tests."""

import zlib

import pytest
from kit.core.errors import CorruptObject, ObjectNotFound, UnexpectedObjectType
from kit.core.hash import frame, hash_blob
from kit.core.objects import Blob, Commit, Tree
from kit.core.repository import Repository


def test_repository_init(repo):
    """Test repository initialization creates structure."""
    assert repo.kit_dir.is_dir()
    assert repo.objects_dir.is_dir()
    assert repo.heads_dir.is_dir()
    assert repo.tags_dir.is_dir()
    assert repo.config_file.exists()


def test_repository_head_content(repo):
    """Test HEAD points to main branch."""
    assert repo.head_file.read_text() == 'ref: refs/heads/main\n'


def test_repository_config_content(repo):
    """Test config file carries the core section."""
    assert repo.config.get('core', 'repositoryformatversion') == '0'
    assert repo.config.get('core', 'bare') == 'false'


def test_repository_init_twice_fails(repo):
    with pytest.raises(FileExistsError):
        Repository(str(repo.work_tree)).init()


def test_find_repository_from_subdirectory(repo):
    nested = repo.work_tree / 'a' / 'b'
    nested.mkdir(parents=True)

    found = Repository.find_repository(str(nested))
    assert found is not None
    assert found.work_tree == repo.work_tree


def test_find_repository_outside(tmp_path):
    assert Repository.find_repository(str(tmp_path)) is None


def test_object_path_split(repo):
    obj_hash = '3b18e512dba79e4c8300dd08aeb37f8e728b8dad'
    path = repo.object_path(obj_hash)
    assert path.parent.name == '3b'
    assert path.name == '18e512dba79e4c8300dd08aeb37f8e728b8dad'


@pytest.mark.parametrize('content', [b'', b'hello world\n', b'\x00\xff' * 512])
def test_store_load_round_trip(repo, content):
    obj_hash = repo.store('blob', content)
    assert repo.load(obj_hash) == ('blob', content)


def test_store_is_idempotent(repo):
    first = repo.store('blob', b'same')
    mtime = repo.object_path(first).stat().st_mtime_ns
    second = repo.store('blob', b'same')

    assert first == second
    assert repo.object_path(first).stat().st_mtime_ns == mtime


def test_interrupted_store_leaves_no_object(repo, monkeypatch):
    def fail_replace(src, dst):
        raise OSError("disk full")
    obj_hash = hash_blob(b'interrupted')

    with monkeypatch.context() as m:
        m.setattr('kit.utils.fs.os.replace', fail_replace)
        with pytest.raises(OSError):
            repo.store('blob', b'interrupted')

    assert not repo.object_exists(obj_hash)
    assert list(repo.object_path(obj_hash).parent.iterdir()) == []

    assert repo.store('blob', b'interrupted') == obj_hash
    assert repo.load(obj_hash) == ('blob', b'interrupted')


def test_stored_file_is_compressed_frame(repo):
    obj_hash = repo.store('blob', b'hello world\n')
    assert obj_hash == '3b18e512dba79e4c8300dd08aeb37f8e728b8dad'
    raw = zlib.decompress(repo.object_path(obj_hash).read_bytes())
    assert raw == b'blob 12\x00hello world\n'


def test_load_missing_object(repo):
    with pytest.raises(ObjectNotFound) as exc_info:
        repo.load('f' * 40)
    assert exc_info.value.identifier == 'f' * 40


def test_load_invalid_hash_is_not_found(repo):
    with pytest.raises(ObjectNotFound):
        repo.load('not-a-hash')


def test_load_corrupt_compression(repo):
    obj_hash = repo.store('blob', b'data')
    repo.object_path(obj_hash).write_bytes(b'garbage')

    with pytest.raises(CorruptObject) as exc_info:
        repo.load(obj_hash)
    assert exc_info.value.identifier == obj_hash


def test_load_length_mismatch(repo):
    obj_hash = repo.store('blob', b'data')
    repo.object_path(obj_hash).write_bytes(zlib.compress(b'blob 10\x00data'))

    with pytest.raises(CorruptObject):
        repo.load(obj_hash)


def test_write_and_read_typed_objects(repo, sample_tree, sample_commit):
    blob_hash = repo.write_object(Blob(b'x'))
    tree_hash = repo.write_object(sample_tree)
    commit_hash = repo.write_object(sample_commit)

    assert isinstance(repo.read_object(blob_hash), Blob)
    assert isinstance(repo.read_object(tree_hash, expected='tree'), Tree)
    commit = repo.read_object(commit_hash, expected='commit')
    assert isinstance(commit, Commit)
    assert commit.message == 'Test commit'


def test_read_object_wrong_type(repo):
    blob_hash = repo.write_object(Blob(b'x'))

    with pytest.raises(UnexpectedObjectType) as exc_info:
        repo.read_object(blob_hash, expected='commit')
    assert exc_info.value.actual == 'blob'


def test_read_object_unknown_type(repo):
    obj_hash = repo.store('widget', b'x')
    with pytest.raises(CorruptObject):
        repo.read_object(obj_hash)


def test_read_object_corrupt_tree_names_hash(repo):
    obj_hash = repo.store('tree', b'100644 truncated')

    with pytest.raises(CorruptObject) as exc_info:
        repo.read_object(obj_hash)
    assert exc_info.value.identifier == obj_hash


def test_object_exists(repo):
    obj_hash = repo.write_object(Blob(b'exists'))

    assert repo.object_exists(obj_hash)
    assert not repo.object_exists('0' * 40)
    assert not repo.object_exists(obj_hash.upper())


def test_object_hash_matches_frame(repo):
    blob = Blob(b'content')
    assert repo.write_object(blob) == blob.hash
    assert repo.load(blob.hash)[1] == frame('blob', b'content')[len('blob 7\x00'):]
