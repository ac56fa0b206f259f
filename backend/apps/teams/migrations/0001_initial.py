import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("organizations", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Team",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("name", models.CharField(max_length=100)),
                ("lead_identity", models.CharField(db_index=True, max_length=255)),
                ("github_organization", models.CharField(blank=True, max_length=255)),
                (
                    "jira_api_url",
                    models.URLField(
                        blank=True,
                        help_text="Jira base URL, e.g. 'https://acme.atlassian.net'",
                        max_length=500,
                    ),
                ),
                (
                    "channel_ref",
                    models.CharField(blank=True, help_text="Chat channel the team was created from", max_length=255),
                ),
                ("is_active", models.BooleanField(default=True)),
                (
                    "organization",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="%(class)ss",
                        to="organizations.organization",
                    ),
                ),
            ],
            options={
                "ordering": ["name"],
                "constraints": [
                    models.UniqueConstraint(fields=("organization", "name"), name="unique_team_name_per_organization"),
                ],
            },
        ),
    ]
