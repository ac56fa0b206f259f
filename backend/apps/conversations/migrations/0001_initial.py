import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="ConversationSession",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("identity", models.CharField(max_length=255, unique=True)),
                (
                    "state",
                    models.CharField(
                        choices=[
                            ("idle", "Idle"),
                            ("registering_org", "Registering organization"),
                            ("creating_team", "Creating team"),
                            ("adding_user", "Adding user"),
                            ("standup_yesterday", "Standup: yesterday"),
                            ("standup_today", "Standup: today"),
                            ("standup_blockers", "Standup: blockers"),
                            ("updating_github", "Updating GitHub credentials"),
                            ("updating_jira", "Updating Jira credentials"),
                        ],
                        default="idle",
                        max_length=32,
                    ),
                ),
                ("step", models.PositiveIntegerField(default=0)),
                ("data", models.JSONField(blank=True, default=dict)),
                ("last_activity", models.DateTimeField(db_index=True, default=django.utils.timezone.now)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["-last_activity"],
            },
        ),
    ]
