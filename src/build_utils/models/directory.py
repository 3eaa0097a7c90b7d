"""Directory tree describing a project's canonical layout."""

from __future__ import annotations

import logging
import os
import weakref
from collections.abc import Iterator, Mapping
from types import MappingProxyType

from build_utils.errors import InvalidShapeError, UnknownChildError

logger = logging.getLogger(__name__)

type DirectoryShape = Mapping[str, DirectoryShape | None]


class Directory:
    """Named directory node that composes paths from its ancestors.

    Children are owned by their parent. The parent link is a weak reference,
    so a node never keeps its ancestors alive; the full path is composed once
    when the node is created and does not depend on the parent afterwards.
    """

    __slots__ = ("__weakref__", "_children", "_name", "_parent", "_path")

    def __init__(self, name: str, parent: Directory | None = None) -> None:
        self._name = name
        self._parent = weakref.ref(parent) if parent is not None else None
        self._path = os.path.join(parent.path, name) if parent is not None else name
        self._children: dict[str, Directory] = {}

    def __repr__(self) -> str:
        return f"Directory(path={self._path!r}, children={list(self._children)!r})"

    def __iter__(self) -> Iterator[Directory]:
        return iter(list(self._children.values()))

    @property
    def name(self) -> str:
        return self._name

    @property
    def parent(self) -> Directory | None:
        if self._parent is None:
            return None
        return self._parent()

    @property
    def children(self) -> Mapping[str, Directory]:
        return MappingProxyType(self._children)

    @property
    def path(self) -> str:
        """Path relative to the tree root, joined with the platform separator."""
        return self._path

    @property
    def absolute_path(self) -> str:
        return os.path.abspath(self._path)

    @property
    def glob_path(self) -> str:
        """Glob matching everything below this directory."""
        return os.path.join(self._path, "**", "*")

    def get_child(self, name: str) -> Directory:
        child = self._children.get(name) if isinstance(name, str) else None
        if child is None:
            msg = f"Directory {self._path!r} has no child named {name!r}"
            raise UnknownChildError(msg, name=name)
        return child

    def get_file_path(self, file_name: str) -> str:
        """Return the path of a file that lives directly in this directory."""
        return os.path.join(self._path, file_name)

    def get_all_files_glob(self, extension: str) -> str:
        """Return a recursive glob for every ``*.extension`` file below this directory."""
        return os.path.join(self._path, "**", f"*.{extension}")

    def _add_child(self, name: str) -> Directory:
        child = Directory(name, self)
        self._children[name] = child
        return child


def create_tree(root_path: str, shape: DirectoryShape) -> Directory:
    """Build a directory tree from a nested shape.

    Keys of ``shape`` are path segments; a ``None`` value marks a leaf
    directory and a mapping value describes that directory's children.
    """
    if not isinstance(root_path, str) or not root_path:
        msg = f"Invalid root path: {root_path!r}"
        raise InvalidShapeError(msg)
    root = Directory(root_path)
    _populate(root, shape)
    logger.debug("Created directory tree at %s with %d top-level entries", root_path, len(root.children))
    return root


def _populate(directory: Directory, shape: object) -> None:
    if not isinstance(shape, Mapping):
        msg = (
            f"Invalid directory shape under {directory.path!r}: "
            f"expected a mapping, got {type(shape).__name__}"
        )
        raise InvalidShapeError(msg)
    for name, child_shape in shape.items():
        _validate_segment(directory, name)
        child = directory._add_child(name)
        if child_shape is not None:
            _populate(child, child_shape)


def _validate_segment(directory: Directory, name: object) -> None:
    separators = {os.sep, os.altsep} - {None}
    if not isinstance(name, str) or not name or any(sep in name for sep in separators):
        msg = f"Invalid directory name under {directory.path!r}: {name!r}"
        raise InvalidShapeError(msg)
