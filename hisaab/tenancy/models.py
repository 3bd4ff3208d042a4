"""
Hisaab Tenancy — Relational Business State
==========================================
Businesses with their subscription plan, user memberships with a role,
and one tax configuration row per business.
"""

from __future__ import annotations

import uuid

from django.db import models


class PlanTierChoice(models.TextChoices):
    BASIC = "basic", "Basic"
    STANDARD = "standard", "Standard"
    PREMIUM = "premium", "Premium"
    ENTERPRISE = "enterprise", "Enterprise"


class MembershipStatus(models.TextChoices):
    ACTIVE = "active", "Active"
    INACTIVE = "inactive", "Inactive"


class FilerStatus(models.TextChoices):
    FILER = "Filer", "Filer"
    NON_FILER = "Non-Filer", "Non-Filer"


class Business(models.Model):
    business_id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    domain = models.CharField(max_length=64, default="default")
    plan_tier = models.CharField(
        max_length=20,
        choices=PlanTierChoice.choices,
        default=PlanTierChoice.BASIC,
    )
    plan_expires_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "hisaab_businesses"
        ordering = ["business_id"]

    def __str__(self) -> str:
        return f"{self.business_id} ({self.name})"


class BusinessUser(models.Model):
    business = models.ForeignKey(
        Business,
        on_delete=models.CASCADE,
        related_name="members",
        db_column="business_id",
    )
    user_id = models.CharField(max_length=255)
    role = models.CharField(max_length=32, default="viewer")
    status = models.CharField(
        max_length=16,
        choices=MembershipStatus.choices,
        default=MembershipStatus.ACTIVE,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "hisaab_business_users"
        ordering = ["business_id", "user_id"]
        constraints = [
            models.UniqueConstraint(
                fields=["business", "user_id"],
                name="uq_business_user",
            ),
        ]
        indexes = [
            models.Index(fields=["user_id", "status"], name="idx_bizuser_user_status"),
        ]

    def __str__(self) -> str:
        return f"{self.user_id}@{self.business_id} ({self.role})"


class TaxConfiguration(models.Model):
    business = models.OneToOneField(
        Business,
        on_delete=models.CASCADE,
        related_name="tax_configuration",
        db_column="business_id",
    )
    ntn_number = models.CharField(max_length=32, null=True, blank=True)
    srn_number = models.CharField(max_length=32, null=True, blank=True)
    filer_status = models.CharField(
        max_length=16,
        choices=FilerStatus.choices,
        default=FilerStatus.NON_FILER,
    )
    sales_tax_rate = models.DecimalField(max_digits=5, decimal_places=2, default=17)
    provincial_tax_rate = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)
    withholding_tax_applicable = models.BooleanField(default=False)
    withholding_tax_rate = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)
    withholding_tax_category = models.CharField(max_length=64, null=True, blank=True)
    gst_number = models.CharField(max_length=32, null=True, blank=True)
    gst_rate = models.DecimalField(max_digits=5, decimal_places=2, null=True, blank=True)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "hisaab_tax_configurations"
        ordering = ["business_id"]

    def __str__(self) -> str:
        return f"tax config for {self.business_id}"
