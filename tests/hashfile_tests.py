import hashlib
import os
import shutil
import tempfile
import unittest
from unittest import mock

from hashalgo import FileOpenError, FileReadError, HashFileError
from hashfile import MAX_FILE_BUFFER, hash_file
from md4 import MD4
from sha1 import SHA1


class TestHashFile(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.path = os.path.join(self.tmpdir, "test.txt")
        self.content = bytes(i % 251 for i in range(3 * MAX_FILE_BUFFER + 123))
        with open(self.path, "wb") as f:
            f.write(self.content)

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def test_hash_file(self):
        sha = SHA1()
        self.assertTrue(hash_file(sha, self.path))
        self.assertEqual(sha.finalize().hex(), hashlib.sha1(self.content).hexdigest())

    def test_reads_in_fixed_chunks(self):
        sha = SHA1()
        with mock.patch.object(sha, 'absorb', wraps=sha.absorb) as absorb:
            hash_file(sha, self.path)
        sizes = [c.args[1] for c in absorb.call_args_list]
        self.assertEqual(sizes, [MAX_FILE_BUFFER] * 3 + [123])

    def test_does_not_finalize(self):
        sha = SHA1()
        hash_file(sha, self.path)
        sha.absorb(b"trailer")
        self.assertEqual(sha.finalize().hex(),
                         hashlib.sha1(self.content + b"trailer").hexdigest())

    def test_empty_file(self):
        empty = os.path.join(self.tmpdir, "empty")
        open(empty, "wb").close()
        md4 = MD4()
        hash_file(md4, empty)
        self.assertEqual(md4.finalize().hex(), "31d6cfe0d16ae931b73c59d7e0c089c0")

    def test_custom_chunk_size(self):
        sha = SHA1()
        hash_file(sha, self.path, chunk_size=61)
        self.assertEqual(sha.finalize().hex(), hashlib.sha1(self.content).hexdigest())
        with self.assertRaises(ValueError):
            hash_file(SHA1(), self.path, chunk_size=0)

    def test_missing_file(self):
        with self.assertRaises(FileOpenError) as cm:
            hash_file(SHA1(), os.path.join(self.tmpdir, "missing.txt"))
        self.assertIsInstance(cm.exception.__cause__, FileNotFoundError)
        self.assertIsInstance(cm.exception, HashFileError)

    def test_read_error_closes_file(self):
        handle = mock.MagicMock()
        handle.__enter__.return_value = handle
        handle.__exit__.return_value = False
        handle.read.side_effect = [b"abc", OSError("disk on fire")]
        sha = SHA1()
        with mock.patch("builtins.open", return_value=handle):
            with self.assertRaises(FileReadError):
                hash_file(sha, self.path)
        handle.__exit__.assert_called_once()
        self.assertEqual(sha.count, [24, 0])

    def test_read_error_does_not_touch_other_engines(self):
        other = SHA1()
        other.absorb(b"abc")
        handle = mock.MagicMock()
        handle.__enter__.return_value = handle
        handle.__exit__.return_value = False
        handle.read.side_effect = OSError("gone")
        with mock.patch("builtins.open", return_value=handle):
            with self.assertRaises(FileReadError):
                hash_file(SHA1(), self.path)
        self.assertEqual(other.finalize().hex(), hashlib.sha1(b"abc").hexdigest())


if __name__ == "__main__":
    unittest.main(verbosity=1)
