"""
Unit tests for user lifecycle state machine
"""

import pytest
import uuid

from pbx_console.core.exceptions import InvalidStateError
from pbx_console.models.user import User, UserStatus


def _user(status) -> User:
    return User(
        id=uuid.uuid4(),
        company_id=uuid.uuid4(),
        name="Test User",
        extension="100",
        status=status,
    )


class TestUserStateMachine:
    """Test user status transitions"""

    def test_initial_state(self):
        """Test user starts active"""
        user = User(company_id=uuid.uuid4(), name="New")

        assert user.status == UserStatus.ACTIVE
        assert user.is_in_use() is True

    def test_missing_status_counts_as_active(self):
        assert UserStatus.normalize(None) == UserStatus.ACTIVE
        assert UserStatus.normalize("") == UserStatus.ACTIVE
        assert UserStatus.normalize("pending") == UserStatus.PENDING

    def test_unknown_status_rejected(self):
        with pytest.raises(ValueError):
            UserStatus.normalize("archived")

    def test_approve_pending(self):
        user = _user(UserStatus.PENDING)

        user.approve()

        assert user.status == UserStatus.ACTIVE
        assert user.updated_at is not None

    @pytest.mark.parametrize("status", [UserStatus.ACTIVE, UserStatus.DELETED])
    def test_cannot_approve(self, status):
        user = _user(status)

        assert user.can_approve() is False
        with pytest.raises(InvalidStateError, match=f"Cannot approve user in status: {status.value}"):
            user.approve()

    def test_only_pending_can_be_rejected(self):
        assert _user(UserStatus.PENDING).can_reject() is True
        assert _user(UserStatus.ACTIVE).can_reject() is False
        assert _user(UserStatus.DELETED).can_reject() is False

    @pytest.mark.parametrize("status", [UserStatus.ACTIVE, UserStatus.PENDING])
    def test_soft_delete(self, status):
        user = _user(status)

        user.soft_delete()

        assert user.status == UserStatus.DELETED
        assert user.is_in_use() is False

    def test_cannot_soft_delete_deleted(self):
        user = _user(UserStatus.DELETED)

        with pytest.raises(InvalidStateError):
            user.soft_delete()

    def test_restore(self):
        user = _user(UserStatus.DELETED)

        user.restore()

        assert user.status == UserStatus.ACTIVE
        assert user.extension == "100"

    @pytest.mark.parametrize("status", [UserStatus.ACTIVE, UserStatus.PENDING])
    def test_cannot_restore_live_user(self, status):
        user = _user(status)

        assert user.can_restore() is False
        with pytest.raises(InvalidStateError):
            user.restore()

    def test_apply_edit_overwrites_profile(self):
        user = _user(UserStatus.ACTIVE)
        user.email = "old@example.com"

        user.apply_edit(
            name="Renamed",
            extension="101",
            email=None,
            outbound_caller_id="+1000",
            did=None,
            status=UserStatus.PENDING,
        )

        assert user.name == "Renamed"
        assert user.extension == "101"
        assert user.email is None
        assert user.outbound_caller_id == "+1000"
        assert user.status == UserStatus.PENDING
