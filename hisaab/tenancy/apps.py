"""
Hisaab Tenancy — App Configuration
==================================
Businesses, memberships and per-business tax settings.
"""

from django.apps import AppConfig


class HisaabTenancyConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "hisaab.tenancy"
    label = "hisaab_tenancy"
    verbose_name = "Hisaab Tenancy"
