import datetime
import unittest as ut

from rgwfs.exc import PathNotFoundError
from rgwfs.paths import StorePath
from rgwfs.status import get_file_status, is_directory
from rgwfs.client.memory import MemoryObjectClient
from tests.helpers import build_filesystem, put, TickingClock


class TestFileStatus(ut.TestCase):

    def setUp(self):
        self.fs, self.client = build_filesystem()
        self.ctx = self.fs.context

    def test_root_does_not_call_backend(self):
        self.client.calls.clear()
        status = get_file_status(self.ctx, "ceph://bucket/")
        self.assertTrue(status.is_directory)
        self.assertEqual(status.modification_time, 0)
        self.assertEqual(status.length, 0)
        self.assertEqual(sum(self.client.calls.values()), 0)

    def test_absent_path(self):
        with self.assertRaises(PathNotFoundError):
            get_file_status(self.ctx, "ceph://bucket/nothing/here")

    def test_missing_bucket(self):
        fs, _ = build_filesystem(MemoryObjectClient())
        with self.assertRaises(PathNotFoundError):
            fs.get_file_status("ceph://bucket/a")

    def test_file(self):
        put(self.client, "data/file.csv", b"hello world")
        status = get_file_status(self.ctx, "ceph://bucket/data/file.csv")
        self.assertFalse(status.is_directory)
        self.assertTrue(status.is_file)
        self.assertEqual(status.length, 11)
        self.assertEqual(status.owner, "tester")
        self.assertEqual(status.block_size, self.ctx.block_size)
        self.assertEqual(status.path, StorePath.parse("ceph://bucket/data/file.csv"))
        self.assertEqual(
            status.modified_datetime(),
            self.client.head_object("bucket", "data/file.csv").last_modified
        )

    def test_file_length_and_time_are_separate_calls(self):
        put(self.client, "f", b"abc")
        self.client.calls.clear()
        get_file_status(self.ctx, "ceph://bucket/f")
        self.assertEqual(self.client.calls['head_object'], 2)

    def test_directory_from_marker(self):
        put(self.client, "empty/", b"")
        status = get_file_status(self.ctx, "ceph://bucket/empty")
        self.assertTrue(status.is_directory)
        self.assertEqual(status.length, 0)

    def test_directory_from_descendant(self):
        put(self.client, "a/b/c/d.txt", b"12345")
        for path in ("ceph://bucket/a", "ceph://bucket/a/b", "ceph://bucket/a/b/c"):
            self.assertTrue(get_file_status(self.ctx, path).is_directory, path)
        self.assertFalse(get_file_status(self.ctx, "ceph://bucket/a/b/c/d.txt").is_directory)

    def test_directory_time_from_first_entry(self):
        clock = TickingClock(datetime.datetime(2024, 5, 1, tzinfo=datetime.timezone.utc))
        fs, client = build_filesystem(MemoryObjectClient(containers=["bucket"], clock=clock))
        put(client, "d/a", b"1")
        put(client, "d/b", b"2")
        first = client.head_object("bucket", "d/a").last_modified
        status = fs.get_file_status("ceph://bucket/d")
        self.assertEqual(status.modified_datetime(), first)

    def test_sibling_sharing_prefix_does_not_exist(self):
        put(self.client, "a/bc", b"x")
        with self.assertRaises(PathNotFoundError):
            get_file_status(self.ctx, "ceph://bucket/a/b")

    def test_relative_path_is_qualified(self):
        put(self.client, "rel.txt", b"x")
        self.assertEqual(get_file_status(self.ctx, "rel.txt").path, StorePath.parse("ceph://bucket/rel.txt"))

    def test_status_is_not_cached(self):
        put(self.client, "f", b"abc")
        self.assertEqual(get_file_status(self.ctx, "ceph://bucket/f").length, 3)
        put(self.client, "f", b"abcdef")
        self.assertEqual(get_file_status(self.ctx, "ceph://bucket/f").length, 6)

    def test_is_directory(self):
        put(self.client, "a/b", b"x")
        self.assertTrue(is_directory(self.ctx, "ceph://bucket/"))
        self.assertTrue(is_directory(self.ctx, "ceph://bucket/a"))
        self.assertFalse(is_directory(self.ctx, "ceph://bucket/a/b"))
        self.assertFalse(is_directory(self.ctx, "ceph://bucket/zzz"))
