# Copyright 2023 Andrew Holliday
# 
# This file is part of the Transit Routing project.
#
# Transit Routing is free software: you can redistribute it and/or modify it
# under the terms of the GNU General Public License as published by the Free 
# Software Foundation, either version 3 of the License, or (at your option) any 
# later version.
# 
# Transit Routing is distributed in the hope that it will be useful, but 
# WITHOUT ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or 
# FITNESS FOR A PARTICULAR PURPOSE. See the GNU General Public License for more 
# details.
#
# You should have received a copy of the GNU General Public License along with 
# Transit Routing. If not, see <https://www.gnu.org/licenses/>.

"""Small container primitives used throughout the routing and scheduling code.

Stack and Queue are singly-linked; MinHeap and PlatformQueue are array-backed.
Reading from an empty Stack, Queue or MinHeap raises EmptyContainer instead of
handing back a default value, so callers should check empty() first.
"""

import copy


class EmptyContainer(IndexError):
    pass


class _Node:
    __slots__ = ('value', 'next')

    def __init__(self, value, next=None):
        self.value = value
        self.next = next


class Stack:
    """LIFO stack over linked nodes.  All operations are O(1)."""
    def __init__(self):
        self._top = None
        self._count = 0

    def push(self, value):
        self._top = _Node(value, self._top)
        self._count += 1

    def pop(self):
        """Removes the most recently pushed value and returns it.  Does nothing
        (and returns None) if the stack is empty."""
        if self._top is None:
            return None
        node = self._top
        self._top = node.next
        self._count -= 1
        return node.value

    def top(self):
        if self._top is None:
            raise EmptyContainer("top() called on an empty stack")
        return self._top.value

    def empty(self):
        return self._top is None

    def __len__(self):
        return self._count


class Queue:
    """FIFO queue over linked nodes.  All operations are O(1)."""
    def __init__(self):
        self._front = None
        self._rear = None
        self._count = 0

    def push(self, value):
        node = _Node(value)
        if self._rear is None:
            self._front = node
        else:
            self._rear.next = node
        self._rear = node
        self._count += 1

    def pop(self):
        """Removes the oldest value and returns it, or returns None if the
        queue is empty."""
        if self._front is None:
            return None
        node = self._front
        self._front = node.next
        if self._front is None:
            self._rear = None
        self._count -= 1
        return node.value

    def front(self):
        if self._front is None:
            raise EmptyContainer("front() called on an empty queue")
        return self._front.value

    def empty(self):
        return self._front is None

    def __len__(self):
        return self._count

    def __iter__(self):
        node = self._front
        while node is not None:
            yield node.value
            node = node.next


class MinHeap:
    """A binary min-heap ordered by key(item).

    For every non-root index ii, key(items[parent(ii)]) <= key(items[ii]).
    push and pop are O(log n), top is O(1).
    """
    def __init__(self, key=None):
        if key is None:
            key = _identity
        self._key = key
        self._items = []

    def push(self, item):
        self._items.append(item)
        self._sift_up(len(self._items) - 1)

    def pop(self):
        """Removes the smallest item and returns it, or returns None if the 
        heap is empty."""
        if not self._items:
            return None
        root = self._items[0]
        last = self._items.pop()
        if self._items:
            self._items[0] = last
            self._sift_down(0)
        return root

    def top(self):
        if not self._items:
            raise EmptyContainer("top() called on an empty heap")
        return self._items[0]

    def empty(self):
        return len(self._items) == 0

    def __len__(self):
        return len(self._items)

    def copy(self):
        """Returns an independent heap holding the same items, so that it can
        be drained without touching this one."""
        other = MinHeap(self._key)
        other._items = copy.copy(self._items)
        return other

    def to_list(self):
        # the items in array order, not sorted order
        return list(self._items)

    def _sift_up(self, index):
        items = self._items
        while index > 0:
            parent = (index - 1) // 2
            if self._key(items[index]) < self._key(items[parent]):
                items[index], items[parent] = items[parent], items[index]
                index = parent
            else:
                break

    def _sift_down(self, index):
        items = self._items
        size = len(items)
        while True:
            left = 2 * index + 1
            right = left + 1
            smallest = index
            if left < size and \
               self._key(items[left]) < self._key(items[smallest]):
                smallest = left
            if right < size and \
               self._key(items[right]) < self._key(items[smallest]):
                smallest = right
            if smallest == index:
                break
            items[index], items[smallest] = items[smallest], items[index]
            index = smallest


def _identity(item):
    return item


class PlatformQueue:
    """Fixed-capacity circular buffer of train ids waiting for a platform.

    enqueue() refuses new trains once the buffer is full rather than growing.
    """
    def __init__(self, capacity=5):
        if capacity < 1:
            raise ValueError("platform queue capacity must be positive")
        self._buffer = [None] * capacity
        self._front = 0
        self._size = 0

    @property
    def capacity(self):
        return len(self._buffer)

    def is_full(self):
        return self._size == self.capacity

    def is_empty(self):
        return self._size == 0

    def __len__(self):
        return self._size

    def enqueue(self, train_id):
        """Returns False if the buffer is full and the train must wait."""
        if self.is_full():
            return False
        rear = (self._front + self._size) % self.capacity
        self._buffer[rear] = train_id
        self._size += 1
        return True

    def dequeue(self):
        """Returns the train id at the front, or None if the buffer is 
        empty."""
        if self.is_empty():
            return None
        train_id = self._buffer[self._front]
        self._buffer[self._front] = None
        self._front = (self._front + 1) % self.capacity
        self._size -= 1
        return train_id
