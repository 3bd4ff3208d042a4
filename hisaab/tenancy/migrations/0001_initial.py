import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Business",
            fields=[
                (
                    "business_id",
                    models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False),
                ),
                ("name", models.CharField(max_length=255)),
                ("domain", models.CharField(default="default", max_length=64)),
                (
                    "plan_tier",
                    models.CharField(
                        choices=[
                            ("basic", "Basic"),
                            ("standard", "Standard"),
                            ("premium", "Premium"),
                            ("enterprise", "Enterprise"),
                        ],
                        default="basic",
                        max_length=20,
                    ),
                ),
                ("plan_expires_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "hisaab_businesses",
                "ordering": ["business_id"],
            },
        ),
        migrations.CreateModel(
            name="BusinessUser",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("user_id", models.CharField(max_length=255)),
                ("role", models.CharField(default="viewer", max_length=32)),
                (
                    "status",
                    models.CharField(
                        choices=[("active", "Active"), ("inactive", "Inactive")],
                        default="active",
                        max_length=16,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "business",
                    models.ForeignKey(
                        db_column="business_id",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="members",
                        to="hisaab_tenancy.business",
                    ),
                ),
            ],
            options={
                "db_table": "hisaab_business_users",
                "ordering": ["business_id", "user_id"],
            },
        ),
        migrations.CreateModel(
            name="TaxConfiguration",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("ntn_number", models.CharField(blank=True, max_length=32, null=True)),
                ("srn_number", models.CharField(blank=True, max_length=32, null=True)),
                (
                    "filer_status",
                    models.CharField(
                        choices=[("Filer", "Filer"), ("Non-Filer", "Non-Filer")],
                        default="Non-Filer",
                        max_length=16,
                    ),
                ),
                ("sales_tax_rate", models.DecimalField(decimal_places=2, default=17, max_digits=5)),
                ("provincial_tax_rate", models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True)),
                ("withholding_tax_applicable", models.BooleanField(default=False)),
                ("withholding_tax_rate", models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True)),
                ("withholding_tax_category", models.CharField(blank=True, max_length=64, null=True)),
                ("gst_number", models.CharField(blank=True, max_length=32, null=True)),
                ("gst_rate", models.DecimalField(blank=True, decimal_places=2, max_digits=5, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "business",
                    models.OneToOneField(
                        db_column="business_id",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="tax_configuration",
                        to="hisaab_tenancy.business",
                    ),
                ),
            ],
            options={
                "db_table": "hisaab_tax_configurations",
                "ordering": ["business_id"],
            },
        ),
        migrations.AddConstraint(
            model_name="businessuser",
            constraint=models.UniqueConstraint(fields=("business", "user_id"), name="uq_business_user"),
        ),
        migrations.AddIndex(
            model_name="businessuser",
            index=models.Index(fields=["user_id", "status"], name="idx_bizuser_user_status"),
        ),
    ]
