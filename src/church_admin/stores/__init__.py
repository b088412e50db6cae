from .filter_store import FilterField, FilterSnapshot, FilterStore, SortDirection
from .table_store import TableStore

__all__ = ["FilterField", "FilterSnapshot", "FilterStore", "SortDirection", "TableStore"]
