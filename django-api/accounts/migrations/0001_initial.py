import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Profile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("full_name", models.CharField(blank=True, max_length=255)),
                ("phone", models.CharField(blank=True, max_length=32)),
                ("country", models.CharField(blank=True, max_length=100)),
                ("currency", models.CharField(default="NGN", max_length=3)),
                ("bio", models.TextField(blank=True)),
                ("avatar_url", models.CharField(blank=True, max_length=500)),
                ("bank_name", models.CharField(blank=True, max_length=255)),
                ("bank_code", models.CharField(blank=True, max_length=32)),
                ("account_number", models.CharField(blank=True, max_length=32)),
                ("account_name", models.CharField(blank=True, max_length=255)),
                ("recipient_code", models.CharField(blank=True, max_length=64)),
                ("notify_ticket_sales", models.BooleanField(default=True)),
                ("notify_withdrawals", models.BooleanField(default=True)),
                ("notify_marketing", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="profile",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
        ),
    ]
