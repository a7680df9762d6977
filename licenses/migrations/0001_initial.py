import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="License",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4, editable=False, primary_key=True, serialize=False
                    ),
                ),
                ("license_key", models.CharField(db_index=True, max_length=100, unique=True)),
                ("email", models.CharField(help_text="Owner label, not unique", max_length=255)),
                ("expiry_date", models.DateTimeField()),
                ("is_active", models.BooleanField(default=True)),
                (
                    "device_id",
                    models.CharField(
                        blank=True,
                        help_text="Device bound on first successful validation",
                        max_length=255,
                        null=True,
                    ),
                ),
                ("last_seen", models.DateTimeField(blank=True, null=True)),
                ("mobile", models.CharField(blank=True, max_length=32, null=True)),
                ("telegram_id", models.CharField(blank=True, max_length=64, null=True)),
                ("amount", models.CharField(blank=True, max_length=32, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "licenses",
                "ordering": ["created_at"],
                "indexes": [
                    models.Index(fields=["email"], name="licenses_email_idx"),
                    models.Index(
                        fields=["is_active", "expiry_date"], name="licenses_active_expiry_idx"
                    ),
                ],
            },
        ),
    ]
