import pytest

from jar_hasher.core.hashcode import FileType, HashCode, HashCodeAndFileType


class TestHashCodeParsing:

    def test_round_trips_canonical_hex(self):
        text = "00ff10a5c3d4e5f60718293a4b5c6d7e"
        code = HashCode.from_string(text)
        assert str(code) == text
        assert code.bits() == 128
        assert code.as_bytes() == bytes.fromhex(text)

    @pytest.mark.parametrize("text", ["", "a", "abc", "zz", "0g", "DEADBEEF", "de ad"])
    def test_rejects_invalid_text(self, text):
        with pytest.raises(ValueError):
            HashCode.from_string(text)

    def test_empty_bytes_rejected(self):
        with pytest.raises(ValueError):
            HashCode(b"")


class TestHashCodeValue:

    def test_equality_and_hash_follow_bytes(self):
        a = HashCode.from_string("abcd")
        b = HashCode.from_bytes(b"\xab\xcd")
        assert a == b
        assert hash(a) == hash(b)
        assert a != HashCode.from_string("abce")
        assert {a: 1}[b] == 1

    def test_not_equal_to_plain_string(self):
        assert HashCode.from_string("abcd") != "abcd"


def test_of_file_tags_regular_file():
    code = HashCode.from_string("0102")
    tagged = HashCodeAndFileType.of_file(code)
    assert tagged.hash_code == code
    assert tagged.file_type is FileType.FILE
    assert tagged == HashCodeAndFileType(HashCode.from_string("0102"), FileType.FILE)
    assert tagged != HashCodeAndFileType.of_archive(code)
    assert HashCodeAndFileType.of_directory(code).file_type is FileType.DIRECTORY
