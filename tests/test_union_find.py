from maze import DisjointSet


def test_union_reports_cycles():
    ds = DisjointSet(5)
    assert ds.union(0, 1)
    assert ds.union(1, 2)
    assert not ds.union(0, 2), "joining two members of one set must report a cycle"
    assert ds.connected(0, 2)
    assert not ds.connected(0, 3)
    assert ds.set_count == 3


def test_path_compression_points_at_root():
    ds = DisjointSet(6)
    for a, b in [(0, 1), (2, 3), (1, 3), (4, 5), (5, 3)]:
        ds.union(a, b)
    root = ds.find(4)
    assert all(ds.find(i) == root for i in range(6))
    assert all(ds.parent[i] == root for i in range(6))
    assert ds.set_count == 1
