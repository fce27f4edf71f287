import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Dream",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("title", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True)),
                ("author", models.CharField(blank=True, max_length=255)),
                ("country", models.CharField(blank=True, max_length=128)),
                (
                    "language",
                    models.CharField(blank=True, max_length=64, null=True),
                ),
                ("likes", models.PositiveIntegerField(default=0)),
                ("views", models.PositiveIntegerField(default=0)),
                ("paid", models.BooleanField(default=False)),
                (
                    "stripe_session_id",
                    models.CharField(
                        help_text="Stripe Checkout session that paid for this dream",
                        max_length=255,
                        unique=True,
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        default=django.utils.timezone.now,
                        help_text="Time the payment confirmation arrived",
                    ),
                ),
            ],
            options={
                "verbose_name": "Dream",
                "verbose_name_plural": "Dreams",
                "db_table": "dreams",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["-created_at"], name="dreams_created_idx"),
                    models.Index(
                        fields=["paid", "-created_at"], name="dreams_paid_idx"
                    ),
                ],
            },
        ),
    ]
