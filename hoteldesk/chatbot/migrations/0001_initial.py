import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("customers", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="ChatbotMessage",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("situation", models.CharField(max_length=50, primary_key=True, serialize=False)),
                ("description", models.CharField(blank=True, max_length=200)),
                ("message", models.TextField()),
            ],
            options={
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="ChatbotMessageHistory",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("history_id", models.AutoField(primary_key=True, serialize=False)),
                ("message", models.TextField()),
                (
                    "chatbot_message",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="histories",
                        to="chatbot.chatbotmessage",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at", "-history_id"],
            },
        ),
        migrations.CreateModel(
            name="ChatHistory",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("chat_history_id", models.AutoField(primary_key=True, serialize=False)),
                ("messages", models.JSONField(default=list)),
                (
                    "customer",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="chat_history",
                        to="customers.customer",
                    ),
                ),
            ],
            options={
                "ordering": ["-updated_at"],
            },
        ),
    ]
