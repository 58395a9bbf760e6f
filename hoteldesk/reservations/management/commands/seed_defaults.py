from django.core.management.base import BaseCommand

from chatbot.messages import seed_default_messages
from reservations.models import DEFAULT_RESERVATION_TYPE_ID, ReservationType


class Command(BaseCommand):
    help = "챗봇 기본 멘트와 기본 예약 유형 생성"

    def add_arguments(self, parser):
        parser.add_argument(
            "--overwrite", action="store_true", help="기존 멘트를 기본 문구로 덮어쓰기"
        )

    def handle(self, *args, **options):
        created = seed_default_messages(overwrite=options["overwrite"])
        if options["overwrite"]:
            self.stdout.write(self.style.SUCCESS("✅ 챗봇 멘트를 기본 문구로 덮어썼습니다."))
        else:
            self.stdout.write(self.style.SUCCESS(f"✅ 챗봇 멘트 {created}개 생성"))

        _, is_new = ReservationType.objects.get_or_create(
            type_id=DEFAULT_RESERVATION_TYPE_ID, defaults={"name": "기본", "color": "#3b82f6"}
        )
        if is_new:
            self.stdout.write(self.style.SUCCESS("✅ 기본 예약 유형 생성"))

        # 실행 시 python manage.py seed_defaults
