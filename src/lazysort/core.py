from __future__ import annotations
import sys, heapq, itertools, operator, warnings
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional, Tuple
import numpy as np

VERSION = "0.5.0"
if sys.version_info < (3, 9):
    raise RuntimeError("lazysort requires Python ≥ 3.9")

SMALL_SORT_THRESHOLD = 32
THRESHOLD_WARN_LIMIT = 4096
_END = object()

Precedes = Callable[[Any, Any], bool]

# ────────────────────── orderings ─────────────────────────
# precedes(a, b) is True when a must be produced strictly before b
_asc     = operator.lt
_desc    = lambda a, b: b < a
_key_asc = lambda a, b: a[0] < b[0]
_key_desc = lambda a, b: b[0] < a[0]

def ordering(*, keyed: bool = False, reverse: bool = False) -> Precedes:
    if keyed:
        return _key_desc if reverse else _key_asc
    return _desc if reverse else _asc

# ────────────────────── partition engine ──────────────────
def partition(buf: List[Any], precedes: Precedes) -> int:
    """Single-pass partition around the pivot held in ``buf[-1]``.

    Every element of ``buf[:-1]`` that sorts strictly after the pivot is moved
    in front of every element that does not. The pivot itself is left in place.
    Returns the index of the first element of the trailing region.
    """
    if not buf:
        raise ValueError("partition needs at least one element (the pivot)")
    pivot, split = buf[-1], 0
    for i in range(len(buf) - 1):
        el = buf[i]
        if precedes(pivot, el):
            buf[i], buf[split] = buf[split], el
            split += 1
    return split

# ────────────────────── small-input fallback ──────────────
def insertion_sort(buf: List[Any], precedes: Precedes) -> None:
    """Sort ``buf`` in place so that ``buf.pop()`` yields elements in order.

    Stable: equal elements are popped in the order they had in ``buf``.
    """
    buf.reverse()
    for i in range(1, len(buf)):
        x, j = buf[i], i - 1
        while j >= 0 and precedes(buf[j], x):
            buf[j + 1] = buf[j]
            j -= 1
        buf[j + 1] = x

# ────────────────────── recursive quicksort core ──────────
class StateKind(Enum):  BASE = "base"; RECURSIVE = "recursive"

class SortState:
    """One pool of the quicksort core.

    A BASE state holds its items pre-sorted for popping from the end. A
    RECURSIVE state holds an unsorted pool that is partitioned on demand.
    """
    __slots__ = ("kind", "items")

    def __init__(self, kind: StateKind, items: List[Any]):
        self.kind, self.items = kind, items

    @classmethod
    def build(cls, pool: List[Any], precedes: Precedes,
              threshold: int = SMALL_SORT_THRESHOLD) -> SortState:
        if len(pool) <= threshold:
            insertion_sort(pool, precedes)
            return cls(StateKind.BASE, pool)
        return cls(StateKind.RECURSIVE, pool)

    def split(self, precedes: Precedes,
              threshold: int = SMALL_SORT_THRESHOLD) -> Optional[SortState]:
        """Partition the pool once and split off everything not after the pivot.

        The pivot ends up as the last item and must only be produced once the
        returned child is drained. ``None`` means nothing sorts at or before
        the pivot, so the pivot is the next item.
        """
        g, n = self.items, len(self.items)
        if self.kind is not StateKind.RECURSIVE or n < 2:
            raise ValueError(f"cannot split a {self.kind.value} state of {n} items")
        mid = n // 2
        g[mid], g[-1] = g[-1], g[mid]
        at = partition(g, precedes)
        g[-1], g[at] = g[at], g[-1]
        if at + 1 >= n:
            return None
        pool = g[at + 1:]
        del g[at + 1:]
        return SortState.build(pool, precedes, threshold)

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self):
        return f"<SortState {self.kind.value} items={len(self.items)}>"


class QuickState:
    # chain[i + 1] is the less-child of chain[i]; only chain[-1] is ever split
    __slots__ = ("chain", "precedes", "threshold")

    def __init__(self, items: List[Any], precedes: Precedes,
                 threshold: int = SMALL_SORT_THRESHOLD):
        self.precedes, self.threshold = precedes, threshold
        self.chain = [SortState.build(items, precedes, threshold)]

    @property
    def depth(self) -> int:
        return len(self.chain)

    def produce(self):
        chain = self.chain
        while chain:
            node = chain[-1]
            items = node.items
            if node.kind is StateKind.RECURSIVE and len(items) > 1:
                child = node.split(self.precedes, self.threshold)
                if child is None:
                    return items.pop()
                chain.append(child)
                continue
            if items:
                return items.pop()
            chain.pop()
            if chain:
                # deferred pivot of the parent
                return chain[-1].items.pop()
        return _END

    def size_hint(self) -> Tuple[int, int]:
        r = sum(len(node.items) for node in self.chain)
        return r, r

# ────────────────────── heap alternative ──────────────────
class _Keyed:
    __slots__ = ("key", "value")

    def __init__(self, key, value):
        self.key, self.value = key, value

    def __lt__(self, other):
        return self.key < other.key

class _Reversed(_Keyed):
    __slots__ = ()

    def __lt__(self, other):
        return other.key < self.key

class HeapState:
    """Binary heap over all elements; each production step is one pop."""
    __slots__ = ("heap", "wrapped")

    def __init__(self, items: List[Any], key: Optional[Callable] = None, reverse=False):
        if reverse:
            items = [_Reversed(x if key is None else key(x), x) for x in items]
        elif key is not None:
            items = [_Keyed(key(x), x) for x in items]
        heapq.heapify(items)
        self.heap, self.wrapped = items, bool(reverse or key is not None)

    def produce(self):
        if not self.heap:
            return _END
        top = heapq.heappop(self.heap)
        return top.value if self.wrapped else top

    def size_hint(self) -> Tuple[int, int]:
        return len(self.heap), len(self.heap)

# ────────────────────── public iterator ───────────────────
class Strategy(Enum):  QUICK = "quick"; HEAP = "heap"

def _materialize(src) -> List[Any]:
    if isinstance(src, np.ndarray) and src.ndim == 1:
        if src.dtype.kind == "f" and np.isnan(src).any():
            warnings.warn("NaN has no total order; NaN positions in the output are unspecified",
                          stacklevel=3)
        return src.tolist()
    if not isinstance(src, Iterable):
        raise TypeError(f"lazy sort expected an iterable, got {src!r}")
    return list(src)

class LazySort:
    """Iterator yielding the elements of ``iterable`` in sorted order, on demand.

    The input is collected eagerly; ordering work is deferred until elements
    are requested. ``key`` and ``reverse`` behave as in :func:`sorted`, and
    both strategies produce the same order (ascending unless ``reverse``).
    """
    __slots__ = ("_state", "_strategy", "_unwrap")

    def __init__(self, iterable: Iterable[Any], *, strategy=Strategy.QUICK,
                 key: Optional[Callable] = None, reverse=False,
                 threshold: int = SMALL_SORT_THRESHOLD):
        try:
            strategy = Strategy(strategy)
        except ValueError:
            raise ValueError(f"unknown strategy {strategy!r} "
                             f"(expected one of {[s.value for s in Strategy]})") from None
        if key is not None and not callable(key):
            raise TypeError(f"key must be callable, got {key!r}")
        threshold = int(threshold)
        if threshold < 1:
            raise ValueError("threshold must be ≥ 1")
        if threshold > THRESHOLD_WARN_LIMIT:
            warnings.warn(f"threshold {threshold} is large; insertion sort is quadratic below it",
                          stacklevel=2)

        items = _materialize(iterable)
        self._strategy, self._unwrap = strategy, None
        if strategy is Strategy.HEAP:
            self._state = HeapState(items, key, bool(reverse))
            return
        if key is not None:
            items = [(key(x), x) for x in items]
            self._unwrap = operator.itemgetter(1)
        self._state = QuickState(items, ordering(keyed=key is not None, reverse=bool(reverse)),
                                 threshold)

    @property
    def strategy(self) -> Strategy:
        return self._strategy

    def __iter__(self):
        return self

    def __next__(self):
        value = self._state.produce()
        if value is _END:
            raise StopIteration
        return value if self._unwrap is None else self._unwrap(value)

    def size_hint(self) -> Tuple[int, int]:
        """Exact ``(lower, upper)`` bounds on the number of remaining elements."""
        return self._state.size_hint()

    def __length_hint__(self) -> int:
        return self._state.size_hint()[0]

    def take(self, k: int) -> List[Any]:
        if k < 0:
            raise ValueError("k must be ≥ 0")
        return list(itertools.islice(self, k))

    def __repr__(self):
        return f"<LazySort {self._strategy.value} remaining={self.size_hint()[0]}>"


def lazy_sort(iterable: Iterable[Any], **options) -> LazySort:
    return LazySort(iterable, **options)
