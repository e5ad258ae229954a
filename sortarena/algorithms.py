import math
from enum import Enum

# ============================================================
# ===================== SORTING ALGORITHMS ===================
# ============================================================
#
# Every procedure has the signature  proc(seq, ops)  and is a generator of
# Steps. All reads that matter to the visualization and every mutation go
# through `ops` (see ops.py); nothing here knows about drawing, timing or
# cancellation.


def bubble_sort(seq, ops):
    n = len(seq)
    for i in range(n):
        for j in range(n - i - 1):
            if (yield from ops.compare(seq, j, j + 1)):
                yield from ops.swap(seq, j, j + 1)


def selection_sort(seq, ops):
    n = len(seq)
    for i in range(n):
        lo = i
        for j in range(i + 1, n):
            yield from ops.probe(j, lo)
            if seq[j] < seq[lo]: lo = j
        if lo != i:
            yield from ops.swap(seq, i, lo)


def insertion_sort(seq, ops):
    for i in range(1, len(seq)):
        key = seq[i]; ops.touch()
        j = i - 1
        while j >= 0:
            yield from ops.probe(j, i)
            if seq[j] > key:
                yield from ops.write(seq, j + 1, seq[j]); j -= 1
            else:
                break
        # key never moved: nothing to write
        if j + 1 != i:
            yield from ops.write(seq, j + 1, key)


def quick_sort(seq, ops):
    def partition(lo, hi):
        pivot = seq[hi]; i = lo - 1
        for j in range(lo, hi):
            yield from ops.probe(j, hi)
            if seq[j] < pivot:
                i += 1; yield from ops.swap(seq, i, j)
        yield from ops.swap(seq, i + 1, hi)
        return i + 1

    def _q(lo, hi):
        if lo < hi:
            p = yield from partition(lo, hi)
            yield from _q(lo, p - 1)
            yield from _q(p + 1, hi)

    yield from _q(0, len(seq) - 1)


def merge_sort(seq, ops):
    def merge(lo, mid, hi):
        left, right = seq[lo:mid + 1], seq[mid + 1:hi + 1]
        i = j = 0; k = lo
        while i < len(left) and j < len(right):
            yield from ops.probe(k)
            # <= keeps equal keys in their original order
            if left[i] <= right[j]: v = left[i]; i += 1
            else:                   v = right[j]; j += 1
            yield from ops.write(seq, k, v); k += 1
        for v in left[i:] + right[j:]:
            yield from ops.write(seq, k, v); k += 1

    def _ms(lo, hi):
        if lo < hi:
            mid = lo + (hi - lo) // 2
            yield from _ms(lo, mid)
            yield from _ms(mid + 1, hi)
            yield from merge(lo, mid, hi)

    yield from _ms(0, len(seq) - 1)


def heap_sort(seq, ops):
    def heapify(n, i):
        largest, l, r = i, 2 * i + 1, 2 * i + 2
        if l < n:
            yield from ops.probe(l, largest)
            if seq[l] > seq[largest]: largest = l
        if r < n:
            yield from ops.probe(r, largest)
            if seq[r] > seq[largest]: largest = r
        if largest != i:
            yield from ops.swap(seq, i, largest)
            yield from heapify(n, largest)

    n = len(seq)
    for i in range(n // 2 - 1, -1, -1):
        yield from heapify(n, i)
    for i in range(n - 1, 0, -1):
        yield from ops.swap(seq, 0, i)
        yield from heapify(i, 0)


def shell_sort(seq, ops):
    n = len(seq); gap = n // 2
    while gap > 0:
        for i in range(gap, n):
            temp = seq[i]; ops.touch()
            j = i
            while j >= gap:
                yield from ops.probe(j, j - gap)
                if seq[j - gap] > temp:
                    yield from ops.write(seq, j, seq[j - gap]); j -= gap
                else:
                    break
            yield from ops.write(seq, j, temp)
        gap //= 2


def comb_sort(seq, ops):
    n, gap, shrink = len(seq), len(seq), 1.3
    swapped = True
    while gap > 1 or swapped:
        gap = max(1, int(gap / shrink))
        swapped = False
        for i in range(n - gap):
            if (yield from ops.compare(seq, i, i + gap)):
                yield from ops.swap(seq, i, i + gap); swapped = True


def cocktail_sort(seq, ops):
    start, end = 0, len(seq)
    swapped = True
    while swapped:
        swapped = False
        for i in range(start, end - 1):
            if (yield from ops.compare(seq, i, i + 1)):
                yield from ops.swap(seq, i, i + 1); swapped = True
        if not swapped:
            break
        swapped = False
        end -= 1
        for i in range(end - 1, start - 1, -1):
            if (yield from ops.compare(seq, i, i + 1)):
                yield from ops.swap(seq, i, i + 1); swapped = True
        start += 1


def bogo_sort(seq, ops):
    def in_order():
        for i in range(1, len(seq)):
            if (yield from ops.compare(seq, i - 1, i)):
                return False
        return True

    while not (yield from in_order()):
        # Fisher-Yates
        for i in range(len(seq) - 1, 0, -1):
            yield from ops.swap(seq, i, ops.rng.randint(0, i))


def _counting_pass(seq, ops, exp, base=10):
    n = len(seq); count = [0] * base; out = [0] * n
    for i in range(n):
        v = yield from ops.read(seq, i)
        count[(v // exp) % base] += 1
    for d in range(1, base):
        count[d] += count[d - 1]
    for i in range(n - 1, -1, -1):
        ops.touch()
        d = (seq[i] // exp) % base
        out[count[d] - 1] = seq[i]; count[d] -= 1
    for i in range(n):
        yield from ops.write(seq, i, out[i])


def radix_sort(seq, ops):
    """LSD radix sort, base 10. Non-negative integers only."""
    if len(seq) < 2:
        return
    for v in seq:
        if v < 0 or int(v) != v:
            raise ValueError(f"radix sort needs non-negative integers, got {v!r}")
    peak, exp = max(seq), 1
    while peak // exp > 0:
        yield from _counting_pass(seq, ops, exp)
        exp *= 10


def bucket_sort(seq, ops):
    n = len(seq)
    if n < 2:
        return
    lo, hi = min(seq), max(seq)
    count = math.isqrt(n)
    buckets = [[] for _ in range(count)]
    for i in range(n):
        v = yield from ops.read(seq, i)
        buckets[int((v - lo) * count // (hi - lo + 1))].append(v)

    k = 0
    for b in buckets:
        # plain insertion sort, not shown
        for x in range(1, len(b)):
            key = b[x]; y = x - 1
            while y >= 0 and b[y] > key:
                b[y + 1] = b[y]; y -= 1
            b[y + 1] = key
        for v in b:
            yield from ops.write(seq, k, v); k += 1


# ============================================================
# ======================== REGISTRY ==========================
# ============================================================

class Algorithm(Enum):
    BUBBLE    = "bubble"
    SELECTION = "selection"
    INSERTION = "insertion"
    QUICK     = "quick"
    MERGE     = "merge"
    HEAP      = "heap"
    SHELL     = "shell"
    COMB      = "comb"
    COCKTAIL  = "cocktail"
    RADIX     = "radix"
    BUCKET    = "bucket"
    BOGO      = "bogo"

    @property
    def title(self) -> str:
        return _TITLES[self]

    def steps(self, seq, ops):
        """Start this algorithm over `seq`; returns the Step generator."""
        return _PROCEDURES[self](seq, ops)


_PROCEDURES = {
    Algorithm.BUBBLE:    bubble_sort,
    Algorithm.SELECTION: selection_sort,
    Algorithm.INSERTION: insertion_sort,
    Algorithm.QUICK:     quick_sort,
    Algorithm.MERGE:     merge_sort,
    Algorithm.HEAP:      heap_sort,
    Algorithm.SHELL:     shell_sort,
    Algorithm.COMB:      comb_sort,
    Algorithm.COCKTAIL:  cocktail_sort,
    Algorithm.RADIX:     radix_sort,
    Algorithm.BUCKET:    bucket_sort,
    Algorithm.BOGO:      bogo_sort,
}

_TITLES = {
    Algorithm.BUBBLE:    "Bubble Sort",
    Algorithm.SELECTION: "Selection Sort",
    Algorithm.INSERTION: "Insertion Sort",
    Algorithm.QUICK:     "Quick Sort",
    Algorithm.MERGE:     "Merge Sort",
    Algorithm.HEAP:      "Heap Sort",
    Algorithm.SHELL:     "Shell Sort",
    Algorithm.COMB:      "Comb Sort",
    Algorithm.COCKTAIL:  "Cocktail Shaker",
    Algorithm.RADIX:     "LSD Radix Sort",
    Algorithm.BUCKET:    "Bucket Sort",
    Algorithm.BOGO:      "Bogo Sort",
}
