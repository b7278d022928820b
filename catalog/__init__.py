# InvDB Catalog Package
# =====================
# Storage root bootstrap and category file bookkeeping.

from catalog.categories import (
    CategoryCatalog, DEFAULT_DATA_DIR, FILE_EXTENSION,
    category_to_filename, filename_to_category,
)
