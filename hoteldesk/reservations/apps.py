from django.apps import AppConfig


class ReservationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "reservations"

    def ready(self):
        import reservations.signals  # signals.py 내 시그널 핸들러 자동 등록
