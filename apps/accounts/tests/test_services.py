"""
Service layer unit tests for accounts app.
"""

import pytest

from apps.accounts.services import get_user_by_email, UserNotFoundError


@pytest.mark.django_db
class TestUserLookup:
    """Tests for user_lookup.py service functions."""

    def test_get_user_by_email(self, user):
        """Finds the user by exact email."""
        assert get_user_by_email(email='testuser@example.com') == user

    def test_get_user_by_email_case_insensitive(self, user):
        """Lookup normalises case and surrounding whitespace."""
        assert get_user_by_email(email='  TestUser@Example.com ') == user

    def test_get_user_by_email_unknown(self, db):
        """Unknown email raises UserNotFoundError."""
        with pytest.raises(UserNotFoundError):
            get_user_by_email(email='nobody@example.com')

    def test_get_user_by_email_inactive(self, user_inactive):
        """Inactive users cannot be found."""
        with pytest.raises(UserNotFoundError):
            get_user_by_email(email=user_inactive.email)

    def test_get_user_by_email_blank(self, db):
        """Blank email raises UserNotFoundError."""
        with pytest.raises(UserNotFoundError):
            get_user_by_email(email='')
