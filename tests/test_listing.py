import unittest as ut

from rgwfs.exc import PathNotFoundError
from rgwfs.paths import StorePath
from tests.helpers import build_filesystem, put


def _names(statuses):
    return sorted(str(x.path) for x in statuses)


class TestListStatus(ut.TestCase):

    def setUp(self):
        self.fs, self.client = build_filesystem()

    def test_children_exclude_directory_itself(self):
        put(self.client, "d/A", b"a")
        put(self.client, "d/B", b"bb")
        self.assertEqual(_names(self.fs.list_status("ceph://bucket/d")), ["ceph://bucket/d/A", "ceph://bucket/d/B"])

    def test_marker_is_not_a_child(self):
        put(self.client, "d/", b"")
        put(self.client, "d/A", b"a")
        self.assertEqual(_names(self.fs.list_status("ceph://bucket/d")), ["ceph://bucket/d/A"])

    def test_empty_directory(self):
        put(self.client, "d/", b"")
        self.assertEqual(self.fs.list_status("ceph://bucket/d"), [])

    def test_immediate_children_only(self):
        put(self.client, "d/file", b"1")
        put(self.client, "d/sub/deep/file", b"2")
        put(self.client, "d/sub/other", b"3")
        statuses = {str(x.path): x for x in self.fs.list_status("ceph://bucket/d")}
        self.assertEqual(sorted(statuses), ["ceph://bucket/d/file", "ceph://bucket/d/sub"])
        self.assertTrue(statuses["ceph://bucket/d/sub"].is_directory)
        self.assertFalse(statuses["ceph://bucket/d/file"].is_directory)
        self.assertEqual(statuses["ceph://bucket/d/file"].length, 1)

    def test_root_listing(self):
        put(self.client, "top.txt", b"x")
        put(self.client, "dir/inner", b"y")
        self.assertEqual(_names(self.fs.list_status("ceph://bucket/")), ["ceph://bucket/dir", "ceph://bucket/top.txt"])

    def test_files_classified_without_extra_calls(self):
        for i in range(10):
            put(self.client, f"d/f{i}", b"data")
        self.client.calls.clear()
        statuses = self.fs.list_status("ceph://bucket/d")
        self.assertEqual(len(statuses), 10)
        self.assertEqual(self.client.calls['head_object'], 0)

    def test_name_that_is_file_and_directory(self):
        put(self.client, "d/x", b"file")
        put(self.client, "d/x/y", b"child")
        statuses = self.fs.list_status("ceph://bucket/d")
        self.assertEqual(len(statuses), 1)
        self.assertTrue(statuses[0].is_directory)

    def test_paginated(self):
        fs, client = build_filesystem(page_size=3)
        for i in range(8):
            put(client, f"d/f{i}", b"x")
        for i in range(3):
            put(client, f"d/s{i}/inner", b"x")
        statuses = fs.list_status("ceph://bucket/d")
        self.assertEqual(len(statuses), 11)
        self.assertEqual(len(set(x.path for x in statuses)), 11)

    def test_file_lists_itself(self):
        put(self.client, "d/A", b"a")
        statuses = self.fs.list_status("ceph://bucket/d/A")
        self.assertEqual(len(statuses), 1)
        self.assertEqual(statuses[0].path, StorePath.parse("ceph://bucket/d/A"))
        self.assertFalse(statuses[0].is_directory)

    def test_missing(self):
        with self.assertRaises(PathNotFoundError):
            self.fs.list_status("ceph://bucket/nope")

    def test_sibling_prefix_not_included(self):
        put(self.client, "d/A", b"a")
        put(self.client, "dx/B", b"b")
        self.assertEqual(_names(self.fs.list_status("ceph://bucket/d")), ["ceph://bucket/d/A"])
