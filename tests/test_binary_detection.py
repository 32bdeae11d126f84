"""Tests for binary file classification."""

import shutil
import tempfile
from pathlib import Path

from stencil.variables import is_binary_content, is_binary_file
from stencil.variables.binary import SNIFF_SIZE


class TestBinaryDetection:
    """Zero-byte heuristic over the first 512 bytes."""

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()
        self.base = Path(self.temp_dir)

    def teardown_method(self):
        shutil.rmtree(self.temp_dir)

    def write(self, name: str, data: bytes) -> Path:
        path = self.base / name
        path.write_bytes(data)
        return path

    def test_zero_byte_is_binary(self):
        path = self.write("image.png", b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR")
        assert is_binary_file(path) is True

    def test_same_length_without_zero_is_text(self):
        data = b"a" * SNIFF_SIZE
        with_zero = data[:-1] + b"\x00"
        assert is_binary_file(self.write("text.txt", data)) is False
        assert is_binary_file(self.write("blob.bin", with_zero)) is True

    def test_zero_byte_after_window_is_text(self):
        path = self.write("late.bin", b"a" * SNIFF_SIZE + b"\x00")
        assert is_binary_file(path) is False

    def test_empty_file_is_text(self):
        assert is_binary_file(self.write("empty", b"")) is False

    def test_missing_file_is_not_binary(self):
        assert is_binary_file(self.base / "does-not-exist") is False

    def test_directory_is_not_binary(self):
        assert is_binary_file(self.base) is False

    def test_accepts_string_paths(self):
        path = self.write("blob", b"\x00\x01")
        assert is_binary_file(str(path)) is True

    def test_content_check(self):
        assert is_binary_content(b"abc\x00def") is True
        assert is_binary_content(b"plain text {{name}}") is False
        assert is_binary_content(b"x" * SNIFF_SIZE + b"\x00") is False
