"""
Category Catalog
================
Maps category names to category files under the storage root:
- Storage root bootstrap (directory creation)
- Category name <-> file name mapping
- Enumeration of existing category files

File naming:
  <percent-encoded category><FILE_EXTENSION>, e.g. "Tools" -> "Tools.csv",
  "Nuts/Bolts" -> "Nuts%2FBolts.csv". The encoding is reversible, so the
  category list is recovered from the directory listing alone.
"""

from pathlib import Path
from typing import List
from urllib.parse import quote, unquote

from storage.errors import StorageIOError


DEFAULT_DATA_DIR = "invdb_data"
FILE_EXTENSION = ".csv"


def category_to_filename(category: str) -> str:
    if not category:
        raise ValueError("Category name must not be empty.")
    return quote(category, safe=" ") + FILE_EXTENSION


def filename_to_category(filename: str) -> str:
    if not filename.endswith(FILE_EXTENSION):
        raise ValueError(f"Not a category file: {filename}")
    return unquote(filename[:-len(FILE_EXTENSION)])


class CategoryCatalog:
    """
    Owns the storage root and the category -> path mapping.
    Only the record store writes to the files this catalog names.
    """

    def __init__(self, data_dir: str):
        self.data_dir = Path(data_dir)

    def bootstrap(self) -> None:
        """Create the storage root if it does not exist yet."""
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageIOError(self.data_dir, e) from e

    def path_for(self, category: str) -> Path:
        return self.data_dir / category_to_filename(category)

    def exists(self, category: str) -> bool:
        return self.path_for(category).is_file()

    def list_categories(self) -> List[str]:
        """Category names with a file on disk, sorted by file name."""
        if not self.data_dir.exists():
            return []
        try:
            names = sorted(
                p.name for p in self.data_dir.iterdir()
                if p.is_file() and p.name.endswith(FILE_EXTENSION)
            )
        except OSError as e:
            raise StorageIOError(self.data_dir, e) from e
        return [filename_to_category(n) for n in names]
