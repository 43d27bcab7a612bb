"""Filesystem helpers shared by the index, refs and working-tree code."""

import os
import tempfile
from pathlib import Path
from typing import Iterator, Tuple, Union


def atomic_write(path: Union[str, Path], data: bytes) -> None:
    """
    Replace a file's content as a whole.

    Data is written to a temporary sibling file which is then renamed
    over the target, so readers see either the old or the new content.

    Args:
        path: Target file
        data: Complete new content
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(dir=str(path.parent), prefix=f'.{path.name}.')
    try:
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
        os.replace(tmp_name, str(path))
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def iter_working_files(root: Union[str, Path], exclude: str) -> Iterator[Tuple[str, Path]]:
    """
    Walk a working tree recursively.

    Args:
        root: Working tree root
        exclude: Name of the metadata directory to skip at every level

    Yields:
        (relative posix path, absolute path) for every regular file,
        in sorted order
    """
    root = Path(root)
    stack = [root]

    files = []
    while stack:
        directory = stack.pop()
        for item in directory.iterdir():
            if item.name == exclude:
                continue
            if item.is_dir():
                stack.append(item)
            elif item.is_file():
                files.append((item.relative_to(root).as_posix(), item))

    yield from sorted(files)
