"""Tests for StoreBacked attributes with postponed annotations."""

from __future__ import annotations

import pytest
from pydantic import BaseModel

from storebacked.binding import StoreBacked, binding_of
from storebacked.conversion import OptionalOf
from storebacked.core.errors import UnsupportedStorableType


class Profile:
    account: Account | None = StoreBacked("account")
    nickname: str = StoreBacked("nickname", default="anon")

    def __init__(self, store):
        self.store = store


class Account(BaseModel):
    email: str


class TestLaterDeclaredTypes:
    """Tests for annotations naming types declared after the class."""

    def test_class_creation_succeeds(self):
        """Test the class exists even though Account came later."""
        assert isinstance(Profile.account, StoreBacked)
        assert Profile.account.key == "account"

    def test_resolved_on_first_access(self, memory_store):
        """Test the annotation resolves once the instance is used."""
        profile = Profile(memory_store)
        assert profile.account is None
        assert profile.nickname == "anon"
        assert isinstance(Profile.account.storable, OptionalOf)

    def test_round_trip(self, memory_store):
        """Test values persist through the late-resolved storable."""
        Profile(memory_store).account = Account(email="ada@example.com")
        assert Profile(memory_store).account == Account(email="ada@example.com")


class TestLocalTypes:
    """Tests for annotations naming function-local types."""

    def test_unresolvable_annotation(self, memory_store):
        """Test an annotation that never resolves fails on first access."""
        class Local(BaseModel):
            email: str

        class Holder:
            account: Local | None = StoreBacked("account")

            def __init__(self, store):
                self.store = store

        holder = Holder(memory_store)
        with pytest.raises(UnsupportedStorableType, match="pass storable= explicitly"):
            binding_of(holder, "account")

    def test_explicit_storable(self, memory_store):
        """Test passing the type explicitly sidesteps annotation lookup."""
        class Local(BaseModel):
            email: str

        class Holder:
            account: Local | None = StoreBacked("account", storable=Local | None)

            def __init__(self, store):
                self.store = store

        Holder(memory_store).account = Local(email="ada@example.com")
        assert Holder(memory_store).account == Local(email="ada@example.com")
