"""
union_find.py — Disjoint Set
=============================
Union by rank + path compression over the integers 0..n-1.
Kruskal generation uses union() as its cycle test: False means the two
cells are already connected, so carving that wall would close a loop.
"""

from typing import List


class DisjointSet:

    def __init__(self, n: int):
        self.parent:    List[int] = list(range(n))
        self.rank:      List[int] = [0] * n
        self.set_count: int       = n

    def find(self, x: int) -> int:
        root = x
        while self.parent[root] != root:
            root = self.parent[root]
        # compress
        while self.parent[x] != root:
            self.parent[x], x = root, self.parent[x]
        return root

    def union(self, a: int, b: int) -> bool:
        a = self.find(a)
        b = self.find(b)
        if a == b:
            return False
        if self.rank[a] < self.rank[b]:
            a, b = b, a
        self.parent[b] = a
        if self.rank[a] == self.rank[b]:
            self.rank[a] += 1
        self.set_count -= 1
        return True

    def connected(self, a: int, b: int) -> bool:
        return self.find(a) == self.find(b)

    def __len__(self) -> int:
        return len(self.parent)
