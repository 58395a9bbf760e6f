import django.db.models.deletion
from django.db import migrations, models


def create_default_type(apps, schema_editor):
    ReservationType = apps.get_model("reservations", "ReservationType")
    ReservationType.objects.get_or_create(
        type_id="default", defaults={"name": "기본", "color": "#3b82f6"}
    )


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        ("customers", "0001_initial"),
        ("rooms", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="ReservationType",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("type_id", models.CharField(max_length=50, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=50)),
                ("color", models.CharField(default="#3b82f6", max_length=20)),
            ],
            options={
                "abstract": False,
            },
        ),
        migrations.CreateModel(
            name="Reservation",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("reservation_id", models.AutoField(primary_key=True, serialize=False)),
                (
                    "source",
                    models.CharField(
                        choices=[("kakao", "카카오톡"), ("manual", "관리자 수기")],
                        max_length=10,
                    ),
                ),
                ("check_in", models.DateTimeField()),
                ("check_out", models.DateTimeField()),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "확인 대기"),
                            ("confirmed", "확정"),
                            ("rejected", "거절"),
                            ("cancelled_by_guest", "고객 취소"),
                            ("cancelled_by_admin", "관리자 취소"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("total_price", models.PositiveIntegerField(default=0)),
                ("admin_memo", models.TextField(blank=True)),
                ("guest_cancellation_confirmed", models.BooleanField(default=False)),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="reservations",
                        to="customers.customer",
                    ),
                ),
                (
                    "reservation_type",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="reservations",
                        to="reservations.reservationtype",
                    ),
                ),
                (
                    "room",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="reservations",
                        to="rooms.room",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="PendingReservation",
            fields=[
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("user_id", models.CharField(max_length=100, primary_key=True, serialize=False)),
                ("check_in", models.DateTimeField()),
                ("check_out", models.DateTimeField()),
                ("total_price", models.PositiveIntegerField(default=0)),
                (
                    "room",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, to="rooms.room"
                    ),
                ),
            ],
            options={
                "abstract": False,
            },
        ),
        migrations.RunPython(create_default_type, migrations.RunPython.noop),
    ]
