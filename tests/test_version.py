import pytest

from pkgstub._src.models.platform import Platform
from pkgstub._src.models.version import Version


class TestVersion:

    @pytest.mark.parametrize("raw", ["1", "1.2.3", "1.0.a", "2.0.0-rc1", " 1.2 ", ""])
    def test_correct(self, raw: str) -> None:
        assert Version.is_correct(raw)

    @pytest.mark.parametrize("raw", ["arm64-darwin", "ruby", "x86_64-linux", "1..2", None])
    def test_not_correct(self, raw) -> None:
        assert not Version.is_correct(raw)

    def test_malformed_raises(self) -> None:
        with pytest.raises(ValueError):
            Version("arm64-darwin")

    def test_empty_is_zero(self) -> None:
        assert str(Version("")) == "0"
        assert Version("") == Version("0")

    def test_trailing_zeros_are_equal(self) -> None:
        assert Version("1.0") == Version("1")
        assert hash(Version("1.0.0")) == hash(Version("1"))

    def test_ordering(self) -> None:
        ordered = ["1.0.a", "1.0.b1", "1.0", "1.0.1", "1.10", "2"]
        shuffled = [Version(v) for v in reversed(ordered)]
        assert [str(v) for v in sorted(shuffled)] == ordered

    def test_dash_is_prerelease(self) -> None:
        version = Version("2.0.0-rc1")
        assert str(version) == "2.0.0.pre.rc1"
        assert version.is_prerelease
        assert version < Version("2.0.0")


class TestPlatform:

    @pytest.mark.parametrize("raw", [None, "", "ruby"])
    def test_ruby(self, raw) -> None:
        platform = Platform.parse(raw)
        assert platform is Platform.RUBY
        assert platform.is_ruby
        assert str(platform) == "ruby"

    def test_cpu_and_os(self) -> None:
        platform = Platform.parse("arm64-darwin")
        assert platform.cpu == "arm64"
        assert platform.os == "darwin"
        assert platform.version is None
        assert str(platform) == "arm64-darwin"
        assert not platform.is_ruby

    def test_os_version_is_split(self) -> None:
        platform = Platform.parse("x86_64-darwin21")
        assert platform.os == "darwin"
        assert platform.version == "21"
        assert str(platform) == "x86_64-darwin-21"

    def test_x86_is_normalized(self) -> None:
        assert Platform.parse("i686-linux").cpu == "x86"

    def test_os_only(self) -> None:
        platform = Platform.parse("java")
        assert platform.cpu is None
        assert str(platform) == "java"
