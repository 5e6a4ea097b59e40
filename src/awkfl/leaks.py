## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import weakref
from collections import deque

from .types import AwkArray


class ArrayRegistry:
    """Tracks arrays created during startup so they can all be torn down at exit.

    Only exists when array tracking is enabled; entries are weak references and
    never keep an array alive. Registering the same array twice is not checked.
    """

    def __init__(self):
        self._arrays: deque[weakref.ref] = deque()

    def register(self, array: AwkArray) -> AwkArray:
        self._arrays.appendleft(weakref.ref(array))
        return array

    def release_all(self) -> int:
        released = 0
        while self._arrays:
            if (array := self._arrays.popleft()()) is not None:
                array.clear()
                released += 1
        return released

    def __len__(self):
        return len(self._arrays)
