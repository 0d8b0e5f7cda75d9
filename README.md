# embedkit

A small pure-Python library with two independent parts:

- **QR code encoding** (`embedkit.qrframe`, `embedkit.qrencode`): byte-mode
  QR symbols, versions 1–40, at all four error-correction levels.
- **Generic containers and algorithms** (`embedkit.arrays`, `embedkit.lists`,
  `embedkit.dlists`): in-place quicksort and heapsort, binary search, a
  fixed-capacity ring queue and array heap, unordered and sorted singly
  linked lists, a doubly linked list and a hashed container.

It needs nothing outside the standard library.

## QR codes

```python
from embedkit.qrframe import EccLevel, ecc_spec, smallest_version
from embedkit.qrencode import encode

code = encode(b"http://www.example.com", EccLevel.L)
code.version, code.level, code.mask, code.width
packed = code.to_bytes()   # rows of modules, 8 per byte, most significant bit first
code.frame.get(0, 0)       # True: the corner of a finder pattern is dark
```

`encode` takes `bytes` or `str` (encoded as UTF-8) and a level given as an
`EccLevel`, its number 1–4, or one of the letters `"L"`, `"M"`, `"Q"`, `"H"`.
It picks the smallest version that holds the data, tries all eight masks and
keeps the one with the lowest penalty score. The returned `QrCode` holds the
`spec`, the chosen `mask`, the final `frame` and the `unmasked` fill.

`smallest_version(level, size)` returns the `EccSpec` of the first version
whose `capacity()` exceeds `size`, falling back to version 40.
`ecc_spec(level, version)` returns the block layout of a chosen version.
An `EccSpec` exposes `blocks1`, `blocks2`, `data_width`, `ecc_width`,
`width`, `data_codewords`, `ecc_codewords` and `total_codewords`.

`Frame` is a square bit matrix with `get`, `set`, `toggle`, `copy` and
`to_bytes`; coordinates outside the frame raise `IndexError`.
`build_template(version)` lays out the finder, alignment, timing and version
patterns and returns a `FrameTemplate` whose `is_reserved(x, y)` tells which
modules are not available for data.

The single encoding stages are public as well: `rs_generator`,
`rs_remainder`, `encode_codewords`, `fill_frame`, `apply_mask`, `badness`
and `add_format`. Data longer than the symbol holds is cut short by
`encode_codewords`.

## Sorting, searching, queues and heaps

```python
from embedkit.arrays import (
    ArrayHeap, RingQueue, binary_search, heap_sort, numeric_compare, quick_sort,
)

values = [14, 66, 12, 41, 86]
quick_sort(values, numeric_compare)      # sorts in place: [12, 14, 41, 66, 86]
binary_search(values, 41)                # (True, 2)
binary_search(values, 50)                # (False, 3), where 50 would go

queue = RingQueue(101)    # holds at most 100 items
queue.add(5)
queue.first()             # 5
queue.delete()

heap = ArrayHeap(101)
for v in (3, 9, 1):
    heap.add(v)
heap.first()              # 9, the greatest item
```

Comparators are three-way functions returning a negative number, zero or a
positive number; `numeric_compare` is the default everywhere. Adding to a
full queue or heap, or reading from an empty one, raises `IndexError`.

## Lists and hashed containers

```python
from embedkit.lists import LinkedList, SortedList
from embedkit.dlists import DoublyLinkedList, HashedContainer

items = LinkedList([3, 1, 2])     # new elements go to the front: [2, 1, 3]
items.sort()                      # merge sort: [1, 2, 3]

ordered = SortedList([5, 2, 8])   # [2, 5, 8]
ordered.add_if_not_member(5)      # False, already present

dl = DoublyLinkedList([4, 2, 7])
dl.sort()
dl.first(), dl.last()             # (2, 7)

table = HashedContainer(range(100), size=20)
table.find_member(42)             # 42
table.delete_if_member(42)        # 42, now removed
len(table)                        # 99
```

All list types and `HashedContainer` support `add`, `add_if_not_member`,
`find_member`, `delete_if_member`, iteration and `len`. `LinkedList` also
has `delete`, `concat`, `reverse` and `iter_equal`; `SortedList` has
`iter_equal`; `DoublyLinkedList` has `add_before`, `add_after`, `first`,
`last`, `reverse` and a `current` handle.

## What it does not do

- There is no command-line tool; everything is used from Python.
- QR symbols are produced as packed bit matrices only. Rendering them as an
  image, and reading QR codes back, is left to the caller.
- There is no balanced search tree and no statistics routine in the package.