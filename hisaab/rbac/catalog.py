"""
Hisaab RBAC — Role & Permission Catalog
=======================================
Static tables: role ordering, permission → roles grants, sidebar
navigation gating and per-domain role suggestions.

Roles (lowest → highest):
viewer < waiter < chef < salesperson < cashier < accountant <
warehouse_manager < manager < admin < owner
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional


# ══════════════════════════════════════════════════════════════
# ROLE HIERARCHY (higher rank = higher privilege)
# ══════════════════════════════════════════════════════════════

ROLE_VIEWER = "viewer"
ROLE_WAITER = "waiter"
ROLE_CHEF = "chef"
ROLE_SALESPERSON = "salesperson"
ROLE_CASHIER = "cashier"
ROLE_ACCOUNTANT = "accountant"
ROLE_WAREHOUSE_MANAGER = "warehouse_manager"
ROLE_MANAGER = "manager"
ROLE_ADMIN = "admin"
ROLE_OWNER = "owner"

ROLE_HIERARCHY: Mapping[str, int] = MappingProxyType({
    ROLE_VIEWER: 0,
    ROLE_WAITER: 1,
    ROLE_CHEF: 2,
    ROLE_SALESPERSON: 3,
    ROLE_CASHIER: 4,
    ROLE_ACCOUNTANT: 5,
    ROLE_WAREHOUSE_MANAGER: 6,
    ROLE_MANAGER: 7,
    ROLE_ADMIN: 8,
    ROLE_OWNER: 9,
})

ALL_ROLES = tuple(ROLE_HIERARCHY)

# Missing role resolves here.
LEAST_PRIVILEGED_ROLE = ROLE_VIEWER


# ══════════════════════════════════════════════════════════════
# PERMISSION DEFINITIONS (permission key → roles granted)
# ══════════════════════════════════════════════════════════════

_ADMINS = ("admin", "owner")
_MANAGERS = ("manager", "admin", "owner")

_PERMISSION_GRANTS: dict[str, tuple[str, ...]] = {
    # ── Dashboard ─────────────────────────────────────────────
    "dashboard.view": ("viewer", "waiter", "salesperson", "cashier", "accountant", *_MANAGERS),
    "dashboard.full_kpis": _MANAGERS,
    "dashboard.financial_kpis": ("accountant", *_MANAGERS),

    # ── Inventory ─────────────────────────────────────────────
    "inventory.view": ("viewer", "salesperson", "cashier", "accountant", *_MANAGERS),
    "inventory.create": _MANAGERS,
    "inventory.edit": _MANAGERS,
    "inventory.delete": _ADMINS,
    "inventory.adjust_stock": _MANAGERS,
    "inventory.transfer": _MANAGERS,

    # ── POS ───────────────────────────────────────────────────
    "pos.access": ("cashier", "salesperson", *_MANAGERS),
    "pos.open_session": ("cashier", *_MANAGERS),
    "pos.close_session": ("cashier", *_MANAGERS),
    "pos.process_sale": ("cashier", "salesperson", *_MANAGERS),
    "pos.apply_discount": _MANAGERS,
    "pos.void_transaction": _MANAGERS,
    "pos.process_refund": _MANAGERS,

    # ── Sales & invoicing ─────────────────────────────────────
    "sales.view": ("salesperson", "cashier", "accountant", *_MANAGERS),
    "sales.create_invoice": ("salesperson", "cashier", *_MANAGERS),
    "sales.edit_invoice": _MANAGERS,
    "sales.delete_invoice": _ADMINS,
    "sales.create_quotation": ("salesperson", *_MANAGERS),
    "sales.create_order": ("salesperson", *_MANAGERS),
    "sales.create_challan": ("salesperson", *_MANAGERS),

    # ── Customers ─────────────────────────────────────────────
    "customers.view": ("salesperson", "cashier", "accountant", *_MANAGERS),
    "customers.create": ("salesperson", *_MANAGERS),
    "customers.edit": ("salesperson", *_MANAGERS),
    "customers.delete": _ADMINS,
    "customers.view_ledger": ("accountant", *_MANAGERS),

    # ── Vendors ───────────────────────────────────────────────
    "vendors.view": ("accountant", *_MANAGERS),
    "vendors.create": ("accountant", *_MANAGERS),
    "vendors.edit": ("accountant", *_MANAGERS),
    "vendors.delete": _ADMINS,

    # ── Purchases ─────────────────────────────────────────────
    "purchases.view": ("accountant", *_MANAGERS),
    "purchases.create": ("accountant", *_MANAGERS),
    "purchases.approve": _MANAGERS,
    "purchases.delete": _ADMINS,

    # ── Finance ───────────────────────────────────────────────
    "finance.view_gl": ("accountant", *_MANAGERS),
    "finance.manage_accounts": ("accountant", *_ADMINS),
    "finance.create_journal": ("accountant", *_ADMINS),
    "finance.close_period": ("accountant", *_ADMINS),
    "finance.view_reports": ("accountant", *_MANAGERS),
    "finance.manage_expenses": ("accountant", *_MANAGERS),
    "finance.credit_notes": ("accountant", *_ADMINS),
    "finance.exchange_rates": ("accountant", *_ADMINS),

    # ── Payments ──────────────────────────────────────────────
    "payments.view": ("accountant", *_MANAGERS),
    "payments.create": ("accountant", "cashier", *_MANAGERS),
    "payments.allocate": ("accountant", *_ADMINS),

    # ── Tax compliance ────────────────────────────────────────
    "tax.view": ("accountant", *_ADMINS),
    "tax.configure": _ADMINS,
    "tax.file_returns": ("accountant", *_ADMINS),

    # ── HR & payroll ──────────────────────────────────────────
    "hr.view_employees": _MANAGERS,
    "hr.manage_employees": _ADMINS,
    "hr.run_payroll": _ADMINS,
    "hr.view_payslips": _MANAGERS,

    # ── Restaurant ────────────────────────────────────────────
    "restaurant.view_tables": ("waiter", "chef", "cashier", *_MANAGERS),
    "restaurant.manage_tables": _MANAGERS,
    "restaurant.create_order": ("waiter", "chef", "cashier", *_MANAGERS),
    "restaurant.view_kds": ("waiter", "chef", *_MANAGERS),
    "restaurant.manage_menu": _MANAGERS,
    "restaurant.manage_reservations": ("waiter", *_MANAGERS),

    # ── Warehouses ────────────────────────────────────────────
    # Viewing/managing the warehouse list stays with managers and admins;
    # warehouse managers only move goods.
    "warehouses.view": _MANAGERS,
    "warehouses.manage": _ADMINS,
    "warehouses.receive_goods": ("warehouse_manager", *_MANAGERS),
    "warehouses.dispatch": ("warehouse_manager", *_MANAGERS),

    # ── CRM & marketing ───────────────────────────────────────
    "crm.view_segments": _MANAGERS,
    "crm.manage_segments": _ADMINS,
    "crm.view_campaigns": _MANAGERS,
    "crm.manage_campaigns": _ADMINS,
    "crm.manage_loyalty": _MANAGERS,
    "crm.manage_promotions": _MANAGERS,

    # ── Workflows & approvals ─────────────────────────────────
    "approvals.request": ("salesperson", "cashier", "accountant", *_MANAGERS),
    "approvals.approve": _MANAGERS,
    "approvals.reject": _MANAGERS,
    "workflows.view": _MANAGERS,
    "workflows.manage": _ADMINS,

    # ── Manufacturing ─────────────────────────────────────────
    "manufacturing.view": _MANAGERS,
    "manufacturing.create": _MANAGERS,
    "manufacturing.manage_bom": _MANAGERS,

    # ── Analytics & reports ───────────────────────────────────
    "analytics.basic": _MANAGERS,
    "analytics.advanced": _ADMINS,
    "analytics.ai": _ADMINS,

    # ── Audit ─────────────────────────────────────────────────
    "audit.view_logs": _ADMINS,

    # ── Settings & administration ─────────────────────────────
    "settings.view": _ADMINS,
    "settings.edit": _ADMINS,
    "settings.manage_users": _ADMINS,
    "settings.manage_roles": ("owner",),
    "settings.billing": ("owner",),
}

PERMISSION_DEFINITIONS: Mapping[str, frozenset[str]] = MappingProxyType({
    permission: frozenset(roles) for permission, roles in _PERMISSION_GRANTS.items()
})

VALID_PERMISSIONS = frozenset(PERMISSION_DEFINITIONS)


# ══════════════════════════════════════════════════════════════
# SIDEBAR NAVIGATION GATING (nav key → permission + plan feature)
# ══════════════════════════════════════════════════════════════

NAV_PERMISSION_MAP: Mapping[str, tuple[str, Optional[str]]] = MappingProxyType({
    # Essentials
    "dashboard": ("dashboard.view", None),
    "inventory": ("inventory.view", None),
    "invoices": ("sales.view", "invoicing"),
    "customers": ("customers.view", None),
    "vendors": ("vendors.view", None),
    "purchases": ("purchases.view", "purchases"),

    # Storefront
    "pos": ("pos.access", "pos"),
    "refunds": ("pos.process_refund", "pos"),
    "restaurant": ("restaurant.view_tables", "pos"),
    "loyalty": ("crm.manage_loyalty", "promotions_crm"),
    "quotations": ("sales.create_quotation", "quotations"),
    "sales": ("sales.view", None),

    # Finance
    "accounting": ("finance.view_gl", "basic_accounting"),
    "payments": ("payments.view", None),
    "finance": ("finance.view_reports", "basic_reports"),
    "gst": ("tax.view", None),

    # Operations
    "warehouses": ("warehouses.view", "multi_warehouse"),
    "manufacturing": ("manufacturing.view", "manufacturing"),
    "payroll": ("hr.view_employees", None),
    "approvals": ("approvals.request", None),

    # Intelligence
    "reports": ("analytics.basic", "basic_reports"),
    "campaigns": ("crm.view_campaigns", "promotions_crm"),
    "audit": ("audit.view_logs", None),

    # Admin
    "settings": ("settings.view", None),
})


# ══════════════════════════════════════════════════════════════
# DEFAULT ROLES PER BUSINESS DOMAIN
# ══════════════════════════════════════════════════════════════

DEFAULT_DOMAIN = "default"

DOMAIN_DEFAULT_ROLES: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "restaurant-cafe": ("owner", "admin", "manager", "cashier", "waiter"),
    "retail-shop": ("owner", "admin", "manager", "cashier", "salesperson"),
    "wholesale-distribution": ("owner", "admin", "manager", "accountant", "salesperson"),
    "pharmacy": ("owner", "admin", "manager", "cashier", "salesperson"),
    "auto-parts": ("owner", "admin", "manager", "cashier", "salesperson"),
    "textile-wholesale": ("owner", "admin", "manager", "accountant", "salesperson"),
    DEFAULT_DOMAIN: ("owner", "admin", "manager", "cashier", "salesperson", "viewer"),
})
