from lazysort.core import (VERSION, SMALL_SORT_THRESHOLD, LazySort, Strategy, HeapState,
                           QuickState, SortState, StateKind, insertion_sort, lazy_sort,
                           partition)

__version__ = VERSION
__all__ = ["LazySort", "lazy_sort", "Strategy", "SMALL_SORT_THRESHOLD",
           "partition", "insertion_sort", "SortState", "StateKind", "QuickState", "HeapState"]
