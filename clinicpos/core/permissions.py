"""
Role permission model shared by the role editor and API enforcement.

A role stores a map of ``module -> action -> bool``. Older rows used
``read``/``write``/``delete`` actions and a few different module keys;
``merge_permissions`` upgrades those on read.
"""

from typing import Any, Dict, List, Optional, Tuple

PERMISSION_ACTIONS: Tuple[str, ...] = ("view", "add", "edit", "delete")

PERMISSION_MODULES: List[Tuple[str, str]] = [
    ("dashboard", "Dashboard"),
    ("make_payment", "Make Payment (POS)"),
    ("opd", "OPD Management"),
    ("appointments", "Appointments"),
    ("services", "Services"),
    ("lab_tests", "Lab Tests"),
    ("medicines", "Medicines"),
    ("doctors", "Doctor Management"),
    ("patients", "Patient Registration"),
    ("expenses", "Expenses"),
    ("bank_transactions", "Bank Transactions"),
    ("investments", "Investments"),
    ("salary", "Salary"),
    ("user_role", "User & Role"),
    ("authentication", "Authentication"),
    ("integrations", "Integrations"),
    ("reports", "Reports"),
    ("settings", "Settings"),
]

PermissionMap = Dict[str, Dict[str, bool]]

LEGACY_ACTION_MAP: Dict[str, Tuple[str, ...]] = {
    "view": ("view", "read"),
    "add": ("add", "write"),
    "edit": ("edit", "write"),
    "delete": ("delete",),
}

LEGACY_MODULE_KEYS: Dict[str, str] = {
    "make_payment": "billing",
    "bank_transactions": "bank",
    "user_role": "staff",
}

ADMIN_ROLE_NAME = "admin"


def default_permissions() -> PermissionMap:
    return {key: {action: False for action in PERMISSION_ACTIONS} for key, _ in PERMISSION_MODULES}


def merge_permissions(saved: Any) -> PermissionMap:
    """Normalize a stored permission map onto the current modules and actions"""
    perms = default_permissions()
    if not isinstance(saved, dict):
        return perms

    for key, _ in PERMISSION_MODULES:
        module_perms = saved.get(key)
        if module_perms is None:
            module_perms = saved.get(LEGACY_MODULE_KEYS.get(key, ""))
        if not isinstance(module_perms, dict):
            continue
        for action in PERMISSION_ACTIONS:
            names = LEGACY_ACTION_MAP.get(action, (action,))
            perms[key][action] = any(module_perms.get(name) is True for name in names)

    return perms


def is_admin_role(role_name: Optional[str]) -> bool:
    return bool(role_name) and role_name.lower() == ADMIN_ROLE_NAME


def has_permission(
    permissions: Optional[PermissionMap],
    module: str,
    action: str,
    role_name: Optional[str] = None
) -> bool:
    """Admin role bypasses all checks"""
    if is_admin_role(role_name):
        return True
    if not permissions or module not in permissions:
        return False
    return bool(permissions[module].get(action))


def can_view(permissions: Optional[PermissionMap], module: str, role_name: Optional[str] = None) -> bool:
    return has_permission(permissions, module, "view", role_name)


def can_add(permissions: Optional[PermissionMap], module: str, role_name: Optional[str] = None) -> bool:
    return has_permission(permissions, module, "add", role_name)


def can_edit(permissions: Optional[PermissionMap], module: str, role_name: Optional[str] = None) -> bool:
    return has_permission(permissions, module, "edit", role_name)


def can_delete(permissions: Optional[PermissionMap], module: str, role_name: Optional[str] = None) -> bool:
    return has_permission(permissions, module, "delete", role_name)


# Order matters: first matching prefix wins
ROUTE_TO_MODULE: List[Tuple[str, str]] = [
    ("/api/dashboard", "dashboard"),
    ("/api/bills", "make_payment"),
    ("/api/opd-visits", "opd"),
    ("/api/appointments", "appointments"),
    ("/api/services", "services"),
    ("/api/packages", "services"),
    ("/api/injections", "services"),
    ("/api/lab-tests", "lab_tests"),
    ("/api/medicines", "medicines"),
    ("/api/doctors", "doctors"),
    ("/api/patients", "patients"),
    ("/api/expenses", "expenses"),
    ("/api/bank-transactions", "bank_transactions"),
    ("/api/investments", "investments"),
    ("/api/investors", "investments"),
    ("/api/contributions", "investments"),
    ("/api/salaries", "salary"),
    ("/api/salary-profiles", "salary"),
    ("/api/salary-loans", "salary"),
    ("/api/loan-installments", "salary"),
    ("/api/payroll-runs", "salary"),
    ("/api/payslips", "salary"),
    ("/api/users", "user_role"),
    ("/api/roles", "user_role"),
    ("/api/integrations", "integrations"),
    ("/api/reports", "reports"),
    ("/api/settings", "settings"),
    ("/api/activity-logs", "settings"),
]

SKIP_PREFIXES: Tuple[str, ...] = ("/api/auth", "/api/public", "/api/health")

METHOD_TO_ACTION: Dict[str, str] = {
    "GET": "view",
    "POST": "add",
    "PUT": "edit",
    "PATCH": "edit",
    "DELETE": "delete",
}


def method_to_action(method: str) -> str:
    return METHOD_TO_ACTION.get(method.upper(), "view")


def resolve_module(path: str) -> Optional[str]:
    for prefix, module in ROUTE_TO_MODULE:
        if path.startswith(prefix):
            return module
    return None


def should_skip_permission_check(path: str) -> bool:
    return any(path.startswith(prefix) for prefix in SKIP_PREFIXES)
