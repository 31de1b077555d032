# This project was developed with assistance from AI tools.
"""Pure auth helpers: hashing, temporary passwords, data scope."""

import pytest
from visadesk_db.enums import UserRole

from visadesk.core.auth import (
    MAX_PASSWORD_BYTES,
    build_data_scope,
    check_password_strength,
    generate_temporary_password,
    hash_password,
    verify_password,
)
from visadesk.core.errors import ValidationError


class TestPasswords:
    def test_hash_then_verify(self):
        hashed = hash_password("correct-horse")
        assert hashed != "correct-horse"
        assert verify_password("correct-horse", hashed)
        assert not verify_password("wrong-horse", hashed)

    def test_hashes_are_salted(self):
        assert hash_password("same-pass") != hash_password("same-pass")

    def test_malformed_hash_never_matches(self):
        assert verify_password("anything", "not-a-bcrypt-hash") is False

    def test_strength_rules(self):
        check_password_strength("sixsix")
        with pytest.raises(ValidationError):
            check_password_strength("short")
        with pytest.raises(ValidationError):
            check_password_strength("é" * MAX_PASSWORD_BYTES)

    def test_temporary_passwords_are_random(self):
        passwords = {generate_temporary_password() for _ in range(20)}
        assert len(passwords) == 20
        # 16 random bytes, base64-encoded.
        assert all(len(p) == 24 for p in passwords)


class TestDataScope:
    def test_admin_owns_itself(self):
        scope = build_data_scope(UserRole.ADMIN, 7, admin_id=99)
        assert scope.admin_id == 7
        assert scope.agent_id is None
        assert scope.client_id is None

    def test_agent(self):
        scope = build_data_scope(UserRole.AGENT, 8, admin_id=1, agent_id=3)
        assert (scope.admin_id, scope.agent_id, scope.client_id) == (1, 3, None)

    def test_client(self):
        scope = build_data_scope(UserRole.CLIENT, 9, admin_id=1, agent_id=3, client_id=4)
        assert (scope.admin_id, scope.agent_id, scope.client_id) == (1, 3, 4)

    def test_unassigned_client(self):
        scope = build_data_scope(UserRole.CLIENT, 9, admin_id=1, client_id=4)
        assert scope.agent_id is None
