"""Unit tests for FileSystemGateway."""

from pathlib import Path

from objc_style_linter.infrastructure.gateways.filesystem_gateway import FileSystemGateway


class TestFileSystemGateway:
    """Test source discovery and byte-faithful reads and writes."""

    def setup_method(self) -> None:
        self.gateway = FileSystemGateway()

    def test_glob_source_files(self, tmp_path: Path) -> None:
        """Directories are searched recursively for Objective-C sources only."""
        (tmp_path / "Sub").mkdir()
        for name in ("B.m", "A.h", "Sub/C.mm", "README.md", "Sub/D.swift"):
            (tmp_path / name).write_text("")
        found = self.gateway.glob_source_files(str(tmp_path))
        assert found == sorted(str(tmp_path / name) for name in ("A.h", "B.m", "Sub/C.mm"))

    def test_glob_single_file(self, tmp_path: Path) -> None:
        """A file path is returned as is when it is a source file."""
        source = tmp_path / "A.m"
        source.write_text("")
        other = tmp_path / "notes.txt"
        other.write_text("")
        assert self.gateway.glob_source_files(str(source)) == [str(source)]
        assert self.gateway.glob_source_files(str(other)) == []

    def test_crlf_round_trip(self, tmp_path: Path) -> None:
        """Line endings are neither translated on read nor on write."""
        path = tmp_path / "A.m"
        path.write_bytes(b"int a;\r\nint b;\r\n")
        text = self.gateway.read_text(str(path))
        assert text == "int a;\r\nint b;\r\n"
        self.gateway.write_text(str(path), text.replace("a", "c"))
        assert path.read_bytes() == b"int c;\r\nint b;\r\n"

    def test_copy_and_exists(self, tmp_path: Path) -> None:
        """copy_file duplicates content; exists reflects the tree."""
        path = tmp_path / "A.m"
        path.write_text("x")
        self.gateway.copy_file(str(path), str(path) + ".bak")
        assert (tmp_path / "A.m.bak").read_text() == "x"
        assert self.gateway.exists(str(path))
        assert not self.gateway.exists(str(tmp_path / "missing.m"))
