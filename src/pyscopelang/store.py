"""
ScopeLang Storage
Heap and stack regions backing every variable and pair cell

Both regions are integer-indexed arenas. The heap only grows; the stack
follows a strict LIFO discipline driven by let-scopes. Addresses select
the region through their kind tag (see Memory).
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator

from pyscopelang.types import Address, HeapAddr, StackAddr, Value, heap_addr, stack_addr
from pyscopelang.errors import ScopeLangError, exhaustive

logger = logging.getLogger(__name__)


#==============================================================================
# Store (shared cell storage)
#==============================================================================

class Store:
    """
    Integer-indexed cell storage.

    Cells are populated lazily by set(); reading a cell that was never
    written is a fault, never a default value.
    """

    region = "store"

    def __init__(self) -> None:
        self._contents: Dict[int, Value] = {}

    def get(self, index: int) -> Value:
        """
        Read the value stored at an index.

        Raises:
            ScopeLangError: If the cell was never written
        """
        try:
            return self._contents[index]
        except KeyError:
            raise ScopeLangError.undefined_contents(self.region, index) from None

    def set(self, index: int, value: Value) -> None:
        """Write (or overwrite) the value at an index"""
        self._contents[index] = value

    def __contains__(self, index: int) -> bool:
        return index in self._contents

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._contents))

    def __len__(self) -> int:
        return len(self._contents)

    def __str__(self) -> str:
        cells = ", ".join(f"{i}: {self._contents[i]}" for i in self)
        return f"{{{cells}}}"


#==============================================================================
# Heap
#==============================================================================

class HeapStore(Store):
    """Monotonically growing region; there is no mechanism for deallocation"""

    region = "heap"

    def __init__(self) -> None:
        super().__init__()
        self._next_free_index = 0

    @property
    def next_free_index(self) -> int:
        return self._next_free_index

    def allocate(self, n: int) -> HeapAddr:
        """
        Reserve n contiguous fresh cells.

        Args:
            n: Number of cells to reserve

        Returns:
            Address of the first reserved cell
        """
        index = self._next_free_index
        self._next_free_index += n
        logger.debug("heap allocate %d cell(s) at %d", n, index)
        return heap_addr(index)

    def __str__(self) -> str:
        return f"[next={self._next_free_index}] {super().__str__()}"


#==============================================================================
# Stack
#==============================================================================

class StackStore(Store):
    """LIFO region; one cell per active let-binding"""

    region = "stack"

    def __init__(self) -> None:
        super().__init__()
        self._stack_pointer = 0

    @property
    def stack_pointer(self) -> int:
        return self._stack_pointer

    def push(self) -> StackAddr:
        """Reserve the next cell and return its address"""
        index = self._stack_pointer
        self._stack_pointer += 1
        logger.debug("stack push %d", index)
        return stack_addr(index)

    def pop(self) -> None:
        """
        Release the most recently pushed cell.

        The released cell keeps its contents but is unreachable until the
        next push reuses its index.

        Raises:
            ScopeLangError: If the stack is empty
        """
        if self._stack_pointer == 0:
            raise ScopeLangError.empty_stack()
        self._stack_pointer -= 1
        logger.debug("stack pop %d", self._stack_pointer)

    def is_empty(self) -> bool:
        return self._stack_pointer == 0

    def __str__(self) -> str:
        return f"[sp={self._stack_pointer}] {super().__str__()}"


#==============================================================================
# Memory (address dispatch)
#==============================================================================

class Memory:
    """
    The two storage regions of one program run.

    Every read and write indexed by an Address is routed to the heap or
    the stack according to the address kind.
    """

    def __init__(self) -> None:
        self.heap = HeapStore()
        self.stack = StackStore()

    def _region(self, addr: Address) -> Store:
        if addr.kind == "heap":
            return self.heap
        elif addr.kind == "stack":
            return self.stack
        else:
            exhaustive(addr)

    def get(self, addr: Address) -> Value:
        """Read the cell at an address"""
        return self._region(addr).get(addr.index)

    def set(self, addr: Address, value: Value) -> None:
        """Write the cell at an address"""
        self._region(addr).set(addr.index, value)
