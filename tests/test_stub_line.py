import io

import pytest

from pkgstub._src.lineno import last_lineno
from pkgstub._src.models.platform import Platform
from pkgstub._src.models.version import Version
from pkgstub._src.stub_line import REQUIRE_PATH_LIST, StubLine, read_stub_line


HEADER = "# -*- encoding: utf-8 -*-"


def _read(text: str, default_package: bool = False):
    return read_stub_line(io.StringIO(text), default_package=default_package)


class TestStubLine:

    def test_full_line(self) -> None:
        stub = StubLine("# stub: foo 1.2.3 ruby lib")
        assert stub.name == "foo"
        assert stub.version == Version("1.2.3")
        assert stub.platform is Platform.RUBY
        assert list(stub.require_paths) == ["lib"]
        assert stub.full_name == "foo-1.2.3"
        assert stub.files == ()
        assert stub.extensions == ()

    def test_lib_shares_require_path_list(self) -> None:
        stub = StubLine("# stub: foo 1.2.3 ruby lib")
        assert stub.require_paths is REQUIRE_PATH_LIST["lib"]

    def test_missing_version_defaults_to_zero(self) -> None:
        stub = StubLine("# stub: foo arm64-darwin lib\0ext")
        assert stub.version == Version("0")
        assert str(stub.platform) == "arm64-darwin"
        assert list(stub.require_paths) == ["lib", "ext"]
        assert stub.full_name == "foo-0-arm64-darwin"

    def test_platform_in_full_name(self) -> None:
        stub = StubLine("# stub: nokogiri 1.16.0 x86_64-linux lib")
        assert stub.full_name == "nokogiri-1.16.0-x86_64-linux"

    def test_uncommon_require_paths_kept_in_order(self) -> None:
        stub = StubLine("# stub: foo 1.0 ruby src\0lib\0test")
        assert list(stub.require_paths) == ["src", "lib", "test"]

    def test_name_only(self) -> None:
        stub = StubLine("# stub: foo")
        assert stub.name == "foo"
        assert stub.version == Version("0")
        assert stub.platform is Platform.RUBY
        assert list(stub.require_paths) == []


class TestReadStubLine:

    def test_no_stub_prefix(self) -> None:
        assert _read(f"{HEADER}\nname: foo\n") is None

    @pytest.mark.parametrize("text", ["", f"{HEADER}\n", f"{HEADER}"])
    def test_truncated_before_stub(self, text: str) -> None:
        assert _read(text) is None

    def test_stub_without_trailing_lines(self) -> None:
        stub = _read(f"{HEADER}\n# stub: foo 1.2.3 ruby lib")
        assert stub.name == "foo"
        assert stub.extensions == ()

    def test_extensions_line(self) -> None:
        stub = _read(
            f"{HEADER}\n# stub: foo 1.2.3 ruby lib\n"
            "# extensions-stub: ext/foo/build.py\0ext/bar/build.py\n"
        )
        assert list(stub.extensions) == ["ext/foo/build.py", "ext/bar/build.py"]

    def test_files_ignored_for_regular_package(self) -> None:
        stub = _read(f"{HEADER}\n# stub: foo 1.2.3 ruby lib\n# files-stub: lib/foo.py\n")
        assert stub.files == ()

    def test_files_on_third_line_for_default_package(self) -> None:
        stub = _read(
            f"{HEADER}\n# stub: foo 1.2.3 ruby lib\n# files-stub: lib/foo.py\0lib/foo/bar.py\n",
            default_package=True,
        )
        assert list(stub.files) == ["lib/foo.py", "lib/foo/bar.py"]
        assert stub.extensions == ()

    def test_files_after_extensions_for_default_package(self) -> None:
        stub = _read(
            f"{HEADER}\n# stub: foo 1.2.3 ruby lib\n"
            "# extensions-stub: ext/build.py\n"
            "# files-stub: lib/foo.py\n",
            default_package=True,
        )
        assert list(stub.extensions) == ["ext/build.py"]
        assert list(stub.files) == ["lib/foo.py"]

    def test_default_package_truncated_after_extensions(self) -> None:
        stub = _read(
            f"{HEADER}\n# stub: foo 1.2.3 ruby lib\n# extensions-stub: ext/build.py\n",
            default_package=True,
        )
        assert stub is not None
        assert list(stub.extensions) == ["ext/build.py"]
        assert stub.files == ()

    def test_strips_one_line_ending(self) -> None:
        stub = _read(
            f"{HEADER}\r\n# stub: foo 1.2.3 ruby lib\r\n# extensions-stub: ext/build.py\r\r\n"
        )
        assert list(stub.require_paths) == ["lib"]
        assert list(stub.extensions) == ["ext/build.py\r"]

    def test_reads_at_most_four_lines(self) -> None:
        file = io.StringIO(
            f"{HEADER}\n# stub: foo 1.2.3 ruby lib\nname: foo\nversion: 1.2.3\nfiles: []\n"
        )
        read_stub_line(file, default_package=True)
        assert file.readline() == "files: []\n"

    def test_counts_lines_read(self) -> None:
        before = last_lineno() or 0
        _read(f"{HEADER}\n# stub: foo 1.2.3 ruby lib\n")
        assert last_lineno() == before + 2
