"""Unit tests for chatgate.services.permissions: role table and prompt classification."""

import unittest
from datetime import UTC, datetime, timedelta

from chatgate.schemas.auth import SessionClaims
from chatgate.services.permissions import (
    MANAGE_USERS,
    QUERY_ALL_DATA,
    QUERY_BASIC_DATA,
    ROLE_GRANTS,
    VIEW_SENSITIVE,
    has_permission,
    permissions_for,
    required_permission_for_prompt,
)

ALL_PERMISSIONS = (QUERY_ALL_DATA, QUERY_BASIC_DATA, VIEW_SENSITIVE, MANAGE_USERS)


def _claims(role: str) -> SessionClaims:
    now = datetime.now(UTC)
    return SessionClaims(id=1, username="x", role=role, issued_at=now, expires_at=now + timedelta(hours=1))


class TestRoleTable(unittest.TestCase):
    """Declared grants per role, and the effective sets they inherit into."""

    def test_declared_grants(self) -> None:
        self.assertEqual(ROLE_GRANTS["admin"], {QUERY_ALL_DATA, VIEW_SENSITIVE, MANAGE_USERS})
        self.assertEqual(ROLE_GRANTS["manager"], {QUERY_ALL_DATA, VIEW_SENSITIVE})
        self.assertEqual(ROLE_GRANTS["user"], {QUERY_BASIC_DATA})

    def test_effective_sets(self) -> None:
        self.assertEqual(permissions_for("user"), {QUERY_BASIC_DATA})
        self.assertEqual(permissions_for("manager"), {QUERY_ALL_DATA, VIEW_SENSITIVE, QUERY_BASIC_DATA})
        self.assertEqual(set(permissions_for("admin")), set(ALL_PERMISSIONS))

    def test_unknown_role_has_nothing(self) -> None:
        self.assertEqual(permissions_for("guest"), frozenset())
        for permission in ALL_PERMISSIONS:
            self.assertFalse(has_permission(_claims("guest"), permission))


class TestHasPermission(unittest.TestCase):
    """has_permission is monotonic with admin > manager > user."""

    def test_membership(self) -> None:
        self.assertTrue(has_permission(_claims("manager"), VIEW_SENSITIVE))
        self.assertFalse(has_permission(_claims("manager"), MANAGE_USERS))
        self.assertFalse(has_permission(_claims("user"), VIEW_SENSITIVE))
        self.assertTrue(has_permission(_claims("admin"), MANAGE_USERS))

    def test_monotonic_hierarchy(self) -> None:
        for lower, higher in (("user", "manager"), ("manager", "admin")):
            for permission in ALL_PERMISSIONS:
                if has_permission(_claims(lower), permission):
                    self.assertTrue(
                        has_permission(_claims(higher), permission),
                        f"{higher} lacks {permission} held by {lower}",
                    )


class TestPromptClassifier(unittest.TestCase):
    """required_permission_for_prompt is a literal, case-sensitive substring check."""

    def test_sensitive(self) -> None:
        self.assertEqual(required_permission_for_prompt("show me sensitive records"), VIEW_SENSITIVE)
        self.assertEqual(required_permission_for_prompt("insensitive remark"), VIEW_SENSITIVE)

    def test_basic(self) -> None:
        self.assertEqual(required_permission_for_prompt("show me basic records"), QUERY_BASIC_DATA)

    def test_case_sensitive(self) -> None:
        self.assertEqual(required_permission_for_prompt("SENSITIVE data"), QUERY_BASIC_DATA)
