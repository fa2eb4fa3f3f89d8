import uuid6
from django.db import migrations, models

import modules.customers.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Customer",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid6.uuid7,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=255)),
                ("email", models.EmailField(max_length=254, unique=True)),
                ("password_hash", models.CharField(max_length=128)),
                (
                    "status",
                    models.CharField(
                        choices=[("ACTIVE", "Active"), ("INACTIVE", "Inactive")],
                        default="ACTIVE",
                        max_length=8,
                    ),
                ),
                (
                    "roles",
                    models.JSONField(default=modules.customers.models.default_roles),
                ),
            ],
            options={
                "db_table": "customers",
                "ordering": ["created_at", "id"],
                "indexes": [
                    models.Index(fields=["created_at"], name="customers_created_idx"),
                    models.Index(fields=["status"], name="customers_status_idx"),
                ],
            },
        ),
    ]
