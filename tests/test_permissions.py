import pytest

from clinicpos.core.permissions import (
    PERMISSION_MODULES,
    can_add,
    can_delete,
    can_edit,
    can_view,
    default_permissions,
    has_permission,
    merge_permissions,
    method_to_action,
    resolve_module,
    should_skip_permission_check,
)


@pytest.mark.unit
class TestMergePermissions:
    """Stored role permission maps normalized onto current modules and actions."""

    def test_defaults_deny_everything(self) -> None:
        """Test that every module starts with all actions off."""
        perms = default_permissions()
        assert set(perms) == {key for key, _ in PERMISSION_MODULES}
        assert not any(any(actions.values()) for actions in perms.values())

    def test_non_dict_input(self) -> None:
        """Test that garbage input yields the defaults."""
        assert merge_permissions(None) == default_permissions()
        assert merge_permissions(["read:patients"]) == default_permissions()

    def test_legacy_module_key_and_actions(self) -> None:
        """Test that 'billing' with read/write maps onto make_payment."""
        perms = merge_permissions({"billing": {"read": True, "write": True}})
        assert perms["make_payment"] == {"view": True, "add": True, "edit": True, "delete": False}

    def test_current_key_wins_over_legacy_key(self) -> None:
        """Test that a current module key is preferred to its legacy alias."""
        perms = merge_permissions({
            "bank_transactions": {"view": True},
            "bank": {"read": True, "delete": True},
        })
        assert perms["bank_transactions"]["view"] is True
        assert perms["bank_transactions"]["delete"] is False

    def test_only_true_booleans_grant(self) -> None:
        """Test that truthy non-boolean values do not grant access."""
        perms = merge_permissions({"patients": {"view": "yes", "add": 1, "edit": True}})
        assert perms["patients"] == {"view": False, "add": False, "edit": True, "delete": False}


@pytest.mark.unit
class TestHasPermission:
    """Permission checks for roles."""

    def test_admin_bypasses_checks(self) -> None:
        """Test that the admin role is allowed regardless of its map."""
        assert has_permission({}, "settings", "delete", role_name="Admin")
        assert can_delete(None, "salary", role_name="admin")

    def test_regular_role(self) -> None:
        """Test action helpers against a merged map."""
        perms = merge_permissions({"patients": {"read": True, "write": True}})
        assert can_view(perms, "patients")
        assert can_add(perms, "patients")
        assert can_edit(perms, "patients")
        assert not can_delete(perms, "patients")
        assert not can_view(perms, "unknown_module")
        assert not can_view(None, "patients")


@pytest.mark.unit
class TestRouteMapping:
    """Request path and method mapped to module and action."""

    @pytest.mark.parametrize("path,module", [
        ("/api/bills", "make_payment"),
        ("/api/bills/bulk-delete", "make_payment"),
        ("/api/packages/3", "services"),
        ("/api/medicines/lookup", "medicines"),
        ("/api/salary-loans/1", "salary"),
        ("/api/payslips/4", "salary"),
        ("/api/activity-logs", "settings"),
        ("/api/roles", "user_role"),
        ("/api/unknown", None),
    ])
    def test_resolve_module(self, path: str, module: str) -> None:
        """Test the first matching prefix decides the module."""
        assert resolve_module(path) == module

    def test_method_to_action(self) -> None:
        """Test HTTP verbs mapped onto permission actions."""
        assert method_to_action("GET") == "view"
        assert method_to_action("post") == "add"
        assert method_to_action("PUT") == "edit"
        assert method_to_action("PATCH") == "edit"
        assert method_to_action("DELETE") == "delete"

    def test_skipped_prefixes(self) -> None:
        """Test that auth, public and health paths are not checked."""
        assert should_skip_permission_check("/api/auth/login")
        assert should_skip_permission_check("/api/public/settings")
        assert should_skip_permission_check("/api/health")
        assert not should_skip_permission_check("/api/patients")
