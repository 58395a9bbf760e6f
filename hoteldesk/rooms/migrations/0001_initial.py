import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Room",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("room_id", models.AutoField(primary_key=True, serialize=False)),
                ("room_type", models.CharField(max_length=100)),
                ("room_image_url", models.TextField(blank=True)),
                ("prices", models.JSONField(default=dict)),
                ("inventory", models.IntegerField(default=1)),
                ("discount_rate", models.PositiveSmallIntegerField(blank=True, null=True)),
                ("sort_order", models.IntegerField(blank=True, null=True)),
                ("day_use_check_in", models.CharField(default="10:00", max_length=5)),
                ("day_use_check_out", models.CharField(default="22:00", max_length=5)),
                ("stay_check_in", models.CharField(default="15:00", max_length=5)),
                ("stay_check_out", models.CharField(default="11:00", max_length=5)),
            ],
            options={
                "ordering": ["sort_order", "room_id"],
            },
        ),
        migrations.CreateModel(
            name="RoomInventoryAdjustment",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("adjustment_id", models.AutoField(primary_key=True, serialize=False)),
                ("date", models.DateField()),
                ("delta", models.IntegerField()),
                (
                    "room",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="adjustments",
                        to="rooms.room",
                    ),
                ),
            ],
            options={
                "unique_together": {("room", "date")},
            },
        ),
    ]
