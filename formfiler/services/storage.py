"""Supabase Storage folders and files"""
from pydantic import BaseModel
from typing import Any, Callable, List
import posixpath
import logging

logger = logging.getLogger(__name__)

# Supabase Storage has no real folders; the dashboard keeps empty ones alive with this object
FOLDER_PLACEHOLDER = ".emptyFolderPlaceholder"
LIST_PAGE_SIZE = 1000


class StorageError(Exception):
    """A storage operation failed"""


class ContainerRef(BaseModel):
    """A folder in the bucket; id is its full path prefix"""
    id: str
    name: str

    model_config = {"frozen": True}


def _call(description: str, func: Callable[[], Any]) -> Any:
    try:
        return func()
    except StorageError:
        raise
    except Exception as e:
        raise StorageError(f"{description} failed: {e}") from e


class FileHandle:
    """An uploaded object, addressed by its path in the bucket"""

    def __init__(self, bucket, path: str):
        self._bucket = bucket
        self.id = path

    @property
    def name(self) -> str:
        return posixpath.basename(self.id)

    def _move(self, new_path: str) -> None:
        if new_path == self.id:
            return
        _call(f"Move {self.id!r} -> {new_path!r}", lambda: self._bucket.move(self.id, new_path))
        self.id = new_path

    def rename(self, new_name: str) -> None:
        """Rename in place, keeping the current folder"""
        self._move(posixpath.join(posixpath.dirname(self.id), new_name))

    def move_to(self, container: ContainerRef) -> None:
        """Move into a folder, keeping the current name"""
        self._move(posixpath.join(container.id, self.name))


class SupabaseStorage:
    """
    Folder/file operations on one Supabase Storage bucket

    Args:
        client: Supabase client (service role)
        bucket: Bucket name
    """

    def __init__(self, client, bucket: str):
        self.client = client
        self.bucket_name = bucket

    @property
    def bucket(self):
        return self.client.storage.from_(self.bucket_name)

    def _list(self, path: str) -> List[dict]:
        entries: List[dict] = []
        offset = 0
        while True:
            page = _call(
                f"List {path!r}",
                lambda: self.bucket.list(path, {"limit": LIST_PAGE_SIZE, "offset": offset})
            ) or []
            entries.extend(page)
            if len(page) < LIST_PAGE_SIZE:
                return entries
            offset += LIST_PAGE_SIZE

    def create_container(self, parent_id: str, name: str) -> ContainerRef:
        """Create a folder under parent_id; "/" in the name would nest, so it becomes "-" """
        safe_name = name.replace("/", "-")
        path = posixpath.join(parent_id, safe_name) if parent_id else safe_name
        _call(
            f"Create folder {path!r}",
            lambda: self.bucket.upload(
                posixpath.join(path, FOLDER_PLACEHOLDER),
                b"",
                {"content-type": "text/plain", "upsert": "true"}
            )
        )
        return ContainerRef(id=path, name=safe_name)

    def get_file_by_id(self, file_id: str) -> FileHandle:
        """Look up an uploaded file by its object path"""
        parent, name = posixpath.split(file_id)
        found = _call(
            f"Look up {file_id!r}",
            lambda: self.bucket.list(parent, {"limit": 100, "search": name})
        ) or []
        if not any(entry.get("name") == name and entry.get("id") for entry in found):
            raise StorageError(f"File not found: {file_id}")
        return FileHandle(self.bucket, file_id)

    def list_containers(self, parent_id: str) -> List[ContainerRef]:
        """Immediate sub-folders of parent_id (folders are listed with a null id)"""
        return [
            ContainerRef(id=posixpath.join(parent_id, entry["name"]) if parent_id else entry["name"], name=entry["name"])
            for entry in self._list(parent_id)
            if entry.get("id") is None
        ]

    def _object_paths(self, prefix: str) -> List[str]:
        paths = []
        for entry in self._list(prefix):
            path = posixpath.join(prefix, entry["name"])
            if entry.get("id") is None:
                paths.extend(self._object_paths(path))
            else:
                paths.append(path)
        return paths

    def move_container(self, container: ContainerRef, new_parent_id: str) -> ContainerRef:
        """Move a folder and everything under it beneath new_parent_id"""
        target = posixpath.join(new_parent_id, container.name)
        for path in self._object_paths(container.id):
            relative = posixpath.relpath(path, container.id)
            new_path = posixpath.join(target, relative)
            _call(f"Move {path!r} -> {new_path!r}", lambda: self.bucket.move(path, new_path))
        logger.info(f"Moved folder {container.id!r} to {target!r}")
        return ContainerRef(id=target, name=container.name)
