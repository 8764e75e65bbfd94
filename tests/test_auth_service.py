"""Auth service, password hashing and token tests."""

from unittest.mock import patch

import pytest

from evently.exceptions import ConflictError, UnauthorizedError
from evently.models.user import User
from evently.services.auth import AuthService, PasswordHasher, TokenIssuer

SECRET = "unit-test-secret"


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def tokens():
    return TokenIssuer(SECRET, expiration_minutes=5)


@pytest.fixture
def service(db, hasher, tokens):
    return AuthService(db, hasher, tokens)


def test_password_hash_is_salted_and_verifies(hasher):
    """Test hashing is one-way, salted and verifiable."""
    first = hasher.hash("secret123")
    second = hasher.hash("secret123")

    assert first != "secret123"
    assert first != second
    assert hasher.verify("secret123", first)
    assert not hasher.verify("wrong", first)


def test_token_round_trip(tokens):
    """Test issued tokens carry sub and email."""
    payload = tokens.decode(tokens.issue(7, "ada@example.com"))

    assert payload["sub"] == "7"
    assert payload["email"] == "ada@example.com"
    assert "exp" in payload


def test_token_signed_with_other_secret_is_rejected(tokens):
    """Test that a token from another key does not decode."""
    forged = TokenIssuer("another-secret").issue(7, "ada@example.com")
    assert tokens.decode(forged) is None


def test_expired_token_is_rejected():
    """Test that expired tokens do not decode."""
    expired = TokenIssuer(SECRET, expiration_minutes=-1)
    assert expired.decode(expired.issue(7, "ada@example.com")) is None


def test_register_stores_hash_not_password(service, db, hasher):
    """Test registration hashes the password."""
    result = service.register("Ada", "ada@example.com", "secret123")

    assert result == {"message": "User registered successfully"}
    user = db.query(User).filter(User.email == "ada@example.com").one()
    assert user.name == "Ada"
    assert user.password_hash != "secret123"
    assert hasher.verify("secret123", user.password_hash)


def test_register_duplicate_leaves_existing_user(service, db):
    """Test a duplicate email raises and the original record is untouched."""
    service.register("Ada", "ada@example.com", "secret123")

    with pytest.raises(ConflictError) as exc_info:
        service.register("Impostor", "ada@example.com", "other-password")
    assert exc_info.value.message == "User already exists"

    users = db.query(User).filter(User.email == "ada@example.com").all()
    assert len(users) == 1
    assert users[0].name == "Ada"
    assert service.validate_user("ada@example.com", "secret123") is not None


def test_register_race_maps_unique_violation_to_conflict(service, db):
    """Test the unique index catches a registration that passed the lookup."""
    service.register("Ada", "ada@example.com", "secret123")

    with patch.object(AuthService, "get_user_by_email", return_value=None):
        with pytest.raises(ConflictError):
            service.register("Ada", "ada@example.com", "secret123")

    assert db.query(User).count() == 1


def test_validate_user_strips_hash(service):
    """Test the sanitized user has no password hash."""
    service.register("Ada", "ada@example.com", "secret123")

    user = service.validate_user("ada@example.com", "secret123")

    assert user.email == "ada@example.com"
    assert user.name == "Ada"
    assert not hasattr(user, "password_hash")


def test_validate_user_mismatch(service):
    """Test unknown email and wrong password both return None."""
    service.register("Ada", "ada@example.com", "secret123")

    assert service.validate_user("ada@example.com", "wrong") is None
    assert service.validate_user("nobody@example.com", "secret123") is None


def test_login_issues_token(service, tokens, db):
    """Test a successful login returns a token for the user."""
    service.register("Ada", "ada@example.com", "secret123")

    result = service.login("ada@example.com", "secret123")

    assert result["message"] == "Login successful"
    user = db.query(User).filter(User.email == "ada@example.com").one()
    assert tokens.decode(result["access_token"])["sub"] == str(user.id)


def test_login_failures_share_one_message(service):
    """Test wrong password and unknown email raise the same error."""
    service.register("Ada", "ada@example.com", "secret123")

    with pytest.raises(UnauthorizedError) as wrong_password:
        service.login("ada@example.com", "wrong")
    with pytest.raises(UnauthorizedError) as unknown_email:
        service.login("nobody@example.com", "secret123")

    assert wrong_password.value.message == unknown_email.value.message == "Invalid credentials"


def test_get_current_user(service, tokens, db):
    """Test resolving a token back to its user."""
    service.register("Ada", "ada@example.com", "secret123")
    user = db.query(User).filter(User.email == "ada@example.com").one()

    assert service.get_current_user(tokens.issue(user.id, user.email)).id == user.id


def test_get_current_user_unknown_subject(service, tokens):
    """Test a valid token for a deleted user is rejected."""
    with pytest.raises(UnauthorizedError) as exc_info:
        service.get_current_user(tokens.issue(12345, "ghost@example.com"))
    assert exc_info.value.message == "User not found"
