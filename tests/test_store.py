"""Tests for addresses, the heap and stack stores, and address dispatch."""

import pytest

from pyscopelang import (
    ErrorCodes,
    HeapStore,
    Memory,
    ScopeLangError,
    StackStore,
    Store,
    heap_addr,
    num_val,
    stack_addr,
)


class TestAddress:
    """Tests for address arithmetic and identity."""

    def test_offset_keeps_region(self):
        assert heap_addr(4) + 1 == heap_addr(5)
        assert stack_addr(2) + 3 == stack_addr(5)

    def test_regions_never_compare_equal(self):
        assert heap_addr(0) != stack_addr(0)

    def test_str(self):
        assert str(heap_addr(3)) == "heap[3]"
        assert str(stack_addr(0)) == "stack[0]"


class TestStore:
    """Tests for plain cell storage."""

    def test_set_then_get(self):
        store = Store()
        store.set(3, num_val(42))
        assert store.get(3) == num_val(42)

    def test_set_overwrites(self):
        store = Store()
        store.set(0, num_val(1))
        store.set(0, num_val(2))
        assert store.get(0) == num_val(2)
        assert len(store) == 1

    def test_unwritten_cell_is_an_error(self):
        store = HeapStore()
        with pytest.raises(ScopeLangError) as exc_info:
            store.get(7)
        assert exc_info.value.code == ErrorCodes.UNDEFINED_CONTENTS
        assert "heap[7]" in exc_info.value.message


class TestHeapStore:
    """Tests for the monotonic heap allocator."""

    def test_allocate_returns_first_of_block(self):
        heap = HeapStore()
        assert heap.allocate(2) == heap_addr(0)
        assert heap.allocate(2) == heap_addr(2)
        assert heap.allocate(1) == heap_addr(4)
        assert heap.next_free_index == 5

    def test_allocate_does_not_write_cells(self):
        heap = HeapStore()
        heap.allocate(2)
        assert 0 not in heap
        assert 1 not in heap

    def test_str_shows_next_free_index(self):
        heap = HeapStore()
        addr = heap.allocate(2)
        heap.set(addr.index, num_val(1))
        heap.set(addr.index + 1, num_val(2))
        assert str(heap) == "[next=2] {0: 1, 1: 2}"


class TestStackStore:
    """Tests for the LIFO stack allocator."""

    def test_push_pop(self):
        stack = StackStore()
        assert stack.is_empty()
        assert stack.push() == stack_addr(0)
        assert stack.push() == stack_addr(1)
        assert stack.stack_pointer == 2
        stack.pop()
        stack.pop()
        assert stack.is_empty()

    def test_pop_empty_is_an_error(self):
        stack = StackStore()
        with pytest.raises(ScopeLangError) as exc_info:
            stack.pop()
        assert exc_info.value.code == ErrorCodes.EMPTY_STACK

    def test_popped_index_is_reused(self):
        stack = StackStore()
        first = stack.push()
        stack.set(first.index, num_val(5))
        stack.pop()
        second = stack.push()
        assert second == first
        # contents are not cleared on pop
        assert stack.get(second.index) == num_val(5)

    def test_str_shows_stack_pointer(self):
        stack = StackStore()
        addr = stack.push()
        stack.set(addr.index, num_val(9))
        assert str(stack) == "[sp=1] {0: 9}"


class TestMemory:
    """Tests for routing addresses to their region."""

    def test_dispatch_by_region(self):
        memory = Memory()
        memory.set(heap_addr(0), num_val(1))
        memory.set(stack_addr(0), num_val(2))
        assert memory.get(heap_addr(0)) == num_val(1)
        assert memory.get(stack_addr(0)) == num_val(2)
        assert memory.heap.get(0) == num_val(1)
        assert memory.stack.get(0) == num_val(2)

    def test_no_cross_region_aliasing(self):
        memory = Memory()
        memory.set(heap_addr(0), num_val(1))
        with pytest.raises(ScopeLangError) as exc_info:
            memory.get(stack_addr(0))
        assert exc_info.value.code == ErrorCodes.UNDEFINED_CONTENTS
