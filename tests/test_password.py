"""
Tests for the bcrypt password hasher.
"""

from auth.password import PasswordHasher


class TestPasswordHasher:
    def setup_method(self):
        self.hasher = PasswordHasher(rounds=4)

    def test_hash_verifies(self):
        hashed = self.hasher.hash("secret1")
        assert hashed != "secret1"
        assert self.hasher.verify("secret1", hashed)
        assert not self.hasher.verify("secret2", hashed)

    def test_salt_differs_per_call(self):
        assert self.hasher.hash("secret1") != self.hasher.hash("secret1")

    def test_work_factor_is_encoded_in_hash(self):
        assert self.hasher.hash("secret1").startswith("$2b$04$")

    def test_malformed_hash_does_not_verify(self):
        assert not self.hasher.verify("secret1", "not-a-bcrypt-hash")
        assert not self.hasher.verify("secret1", "")

    def test_long_password_round_trips(self):
        password = "ü" * 50  # 100 bytes in UTF-8, past bcrypt's 72-byte limit
        assert self.hasher.verify(password, self.hasher.hash(password))
