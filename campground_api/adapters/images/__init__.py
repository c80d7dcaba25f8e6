from .cloudinary_store import CloudinaryImageStore
from .filesystem import FileSystemImageStore

__all__ = ["CloudinaryImageStore", "FileSystemImageStore"]
