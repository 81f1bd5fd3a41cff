"""
Unit tests for the in-memory user and passport stores.
"""

import pytest
from local_passport.adapters import MemoryUserStore, MemoryPassportStore
from local_passport.domain.passport import Passport, Protocol
from local_passport.errors import ValidationError


class TestMemoryUserStore:
    """Test in-memory user storage."""

    def setup_method(self):
        self.store = MemoryUserStore()

    def test_create_and_get(self):
        user = self.store.create({"email": "alice@example.com", "username": "alice"})

        assert user.user_id.startswith("usr_")
        assert self.store.get(user.user_id) is user

    def test_find_one_by_email_case_insensitive(self):
        user = self.store.create({"email": "Alice@Example.com"})

        assert self.store.find_one(email="alice@example.com") is user
        assert self.store.find_one(email="ALICE@EXAMPLE.COM") is user
        assert self.store.find_one(email="bob@example.com") is None

    def test_find_one_by_equivalent_email_spelling(self):
        user = self.store.create({"email": "alice@xn--bcher-kva.de"})

        assert self.store.find_one(email="alice@xn--bcher-kva.de") is user
        assert self.store.find_one(email="alice@bücher.de") is user

        with pytest.raises(ValidationError):
            self.store.create({"email": "Alice@Bücher.de"})

    def test_find_one_by_username(self):
        user = self.store.create({"email": "alice@example.com", "username": "Alice"})

        assert self.store.find_one(username="alice") is user
        assert self.store.find_one(username="bob") is None

    def test_find_one_combined_criteria(self):
        alice = self.store.create({"email": "alice@example.com", "username": "alice"})
        self.store.create({"email": "bob@example.com", "username": "bob"})

        assert self.store.find_one(email="alice@example.com", username="alice") is alice
        assert self.store.find_one(email="alice@example.com", username="bob") is None
        assert self.store.find_one(user_id=alice.user_id, email="alice@example.com") is alice
        assert self.store.find_one() is None

    def test_duplicate_email_rejected(self):
        self.store.create({"email": "alice@example.com"})

        with pytest.raises(ValidationError) as excinfo:
            self.store.create({"email": "ALICE@example.com"})

        assert excinfo.value.code == "E_VALIDATION"
        assert excinfo.value.invalid_attributes == {"email": ["unique"]}

    def test_duplicate_username_rejected(self):
        self.store.create({"email": "alice@example.com", "username": "alice"})

        with pytest.raises(ValidationError) as excinfo:
            self.store.create({"email": "other@example.com", "username": "alice"})

        assert "email" not in excinfo.value.invalid_attributes
        assert "username" in excinfo.value.invalid_attributes

    def test_malformed_email_rejected(self):
        with pytest.raises(ValidationError) as excinfo:
            self.store.create({"email": "not-an-email"})

        assert excinfo.value.invalid_attributes == {"email": ["email"]}

    def test_email_as_username_rejected(self):
        with pytest.raises(ValidationError) as excinfo:
            self.store.create({"email": "alice@example.com", "username": "alice@example.org"})

        assert excinfo.value.invalid_attributes == {"username": ["email"]}

    def test_unknown_attribute_rejected(self):
        with pytest.raises(ValidationError) as excinfo:
            self.store.create({"email": "alice@example.com", "role": "admin"})

        assert "role" in excinfo.value.invalid_attributes

    def test_update_reindexes(self):
        user = self.store.create({"email": "alice@example.com", "username": "alice"})

        user.username = "alicia"
        self.store.update(user)

        assert self.store.find_one(username="alicia") is user
        assert self.store.find_one(username="alice") is None

        # Old username is free again
        self.store.create({"email": "other@example.com", "username": "alice"})

    def test_update_conflict(self):
        self.store.create({"email": "alice@example.com", "username": "alice"})
        bob = self.store.create({"email": "bob@example.com", "username": "bob"})

        bob.username = "alice"
        with pytest.raises(ValidationError):
            self.store.update(bob)

    def test_update_missing_user(self):
        user = self.store.create({"email": "alice@example.com"})
        self.store.destroy(user.user_id)

        with pytest.raises(KeyError):
            self.store.update(user)

    def test_destroy_frees_email(self):
        user = self.store.create({"email": "alice@example.com"})

        assert self.store.destroy(user.user_id) is True
        assert self.store.destroy(user.user_id) is False
        assert self.store.find_one(email="alice@example.com") is None

        # Address can be registered again
        self.store.create({"email": "alice@example.com"})


class TestMemoryPassportStore:
    """Test in-memory passport storage."""

    def setup_method(self):
        self.store = MemoryPassportStore()

    def test_create_and_find(self):
        passport = Passport.create_local(user_id="usr_1", password="correct horse")
        self.store.create(passport)

        assert self.store.find_one(Protocol.LOCAL, "usr_1") is passport
        assert self.store.find_one(Protocol.LOCAL, "usr_2") is None
        assert self.store.find_one(Protocol.OAUTH2, "usr_1") is None

    def test_one_local_passport_per_user(self):
        self.store.create(Passport.create_local(user_id="usr_1", password="correct horse"))

        with pytest.raises(ValidationError) as excinfo:
            self.store.create(Passport.create_local(user_id="usr_1", password="battery staple"))

        assert "protocol" in excinfo.value.invalid_attributes

    def test_multiple_providers_allowed(self):
        github = Passport.create_external("usr_1", Protocol.OAUTH2, "github", "1")
        google = Passport.create_external("usr_1", Protocol.OAUTH2, "google", "2")
        self.store.create(github)
        self.store.create(google)

        assert len(self.store.list_by_user("usr_1")) == 2

    def test_destroy(self):
        passport = self.store.create(Passport.create_local(user_id="usr_1", password="correct horse"))

        assert self.store.destroy(passport.passport_id) is True
        assert self.store.destroy(passport.passport_id) is False
        assert self.store.list_by_user("usr_1") == []
