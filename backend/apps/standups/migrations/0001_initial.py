import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("accounts", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Standup",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("standup_date", models.DateField(db_index=True)),
                ("yesterday_work", models.TextField(blank=True)),
                ("today_plan", models.TextField(blank=True)),
                ("blockers", models.TextField(blank=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("in_progress", "In progress"),
                            ("completed", "Completed"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="in_progress",
                        max_length=20,
                    ),
                ),
                ("ai_summary", models.TextField(blank=True)),
                ("github_commits", models.JSONField(blank=True, default=list)),
                ("jira_issues", models.JSONField(blank=True, default=list)),
                ("submitted_at", models.DateTimeField(blank=True, null=True)),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="standups",
                        to="accounts.user",
                    ),
                ),
            ],
            options={
                "ordering": ["-standup_date", "-created_at"],
                "constraints": [
                    models.UniqueConstraint(fields=("user", "standup_date"), name="unique_standup_per_user_per_day"),
                ],
            },
        ),
    ]
