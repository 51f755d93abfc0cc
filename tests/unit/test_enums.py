"""Tests for enumeration storables."""

from enum import Enum, IntEnum, IntFlag

import pytest

from storebacked.conversion import STRING, EnumOf
from storebacked.core.errors import TypeMismatch, UnsupportedStorableType


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class Level(IntEnum):
    LOW = 1
    HIGH = 2


class Plain(Enum):
    ONE = "one"
    TWO = "two"


class Mixed(Enum):
    A = 1
    B = "b"


class Pairs(Enum):
    A = (1, 2)


class Perm(IntFlag):
    READ = 4
    WRITE = 2
    EXECUTE = 1

class TestEnumOf:
    """Tests for EnumOf."""

    def test_stores_raw_value(self):
        """Test an enum is stored as its raw value."""
        assert EnumOf(Theme).encode(Theme.DARK) == "dark"
        assert EnumOf(Level).encode(Level.HIGH) == 2
        assert EnumOf(Plain).encode(Plain.TWO) == "two"

    @pytest.mark.parametrize("member", [Theme.LIGHT, Level.LOW, Plain.ONE])
    def test_round_trip(self, member):
        """Test decode returns the same member."""
        storable = EnumOf(type(member))
        assert storable.decode(storable.encode(member)) is member

    def test_unknown_raw_value(self):
        """Test a removed case fails cleanly with TypeMismatch."""
        with pytest.raises(TypeMismatch) as exc_info:
            EnumOf(Theme).decode("sepia")
        assert exc_info.value.found == "sepia"

    def test_wrong_raw_type(self):
        """Test a raw value of the wrong primitive kind fails."""
        with pytest.raises(TypeMismatch):
            EnumOf(Theme).decode(1)

    def test_encode_rejects_raw_value(self):
        """Test encoding needs a member, not its raw value."""
        with pytest.raises(TypeMismatch):
            EnumOf(Plain).encode("one")

    def test_explicit_raw_storable(self):
        """Test a raw storable can be given explicitly."""
        storable = EnumOf(Plain, raw=STRING)
        assert storable.base is STRING

    def test_mixed_raw_types(self):
        """Test enums with mixed raw value types are not storable."""
        with pytest.raises(UnsupportedStorableType):
            EnumOf(Mixed)

    def test_non_primitive_raw_values(self):
        """Test enums with tuple raw values are not storable."""
        with pytest.raises(UnsupportedStorableType):
            EnumOf(Pairs)

    def test_flag_combination_round_trip(self):
        """Test a combination of declared flag bits round-trips."""
        storable = EnumOf(Perm)
        combined = Perm.READ | Perm.WRITE
        assert storable.encode(combined) == 6
        assert storable.decode(6) == combined

    def test_flag_unknown_bits(self):
        """Test flag bits outside the declared members fail cleanly."""
        with pytest.raises(TypeMismatch) as exc_info:
            EnumOf(Perm).decode(64)
        assert exc_info.value.found == 64
