import pytest

from app.application.access_control import (
    require_admin,
    verify_partner_ownership,
    verify_user_ownership,
)
from app.domain.entities.user import User, UserRole
from app.domain.errors import ForbiddenError, UnauthorizedError

OWNER = User(id="u-owner", role=UserRole.PLATFORM_OWNER)
ADMIN_A = User(id="u-a", role=UserRole.PARTNER_ADMIN, partner_id="partner-a")
ADMIN_WITHOUT_PARTNER = User(id="u-x", role=UserRole.PARTNER_ADMIN)
CUSTOMER = User(id="u-c", role=UserRole.CUSTOMER)


def test_owner_accesses_any_partner():
    assert verify_partner_ownership(OWNER, "partner-b") is OWNER


def test_partner_admin_accesses_own_partner():
    assert verify_partner_ownership(ADMIN_A, "partner-a") is ADMIN_A


@pytest.mark.parametrize("target", ["partner-b", "does-not-exist"])
def test_partner_admin_forbidden_for_other_partner(target):
    with pytest.raises(ForbiddenError) as exc:
        verify_partner_ownership(ADMIN_A, target)
    assert exc.value.message == "Forbidden: Not authorized for this partner"


def test_partner_admin_without_partner_is_forbidden():
    with pytest.raises(ForbiddenError):
        verify_partner_ownership(ADMIN_WITHOUT_PARTNER, "partner-a")


def test_customer_is_forbidden_for_partner_data():
    with pytest.raises(ForbiddenError) as exc:
        verify_partner_ownership(CUSTOMER, "partner-a")
    assert exc.value.message == "Forbidden: Insufficient permissions"


def test_anonymous_is_unauthorized():
    with pytest.raises(UnauthorizedError):
        verify_partner_ownership(None, "partner-a")


def test_user_ownership():
    assert verify_user_ownership(CUSTOMER, "u-c") is CUSTOMER
    assert verify_user_ownership(OWNER, "u-c") is OWNER
    with pytest.raises(ForbiddenError):
        verify_user_ownership(CUSTOMER, "u-other")


def test_require_admin():
    assert require_admin(OWNER) is OWNER
    with pytest.raises(ForbiddenError):
        require_admin(ADMIN_A)
