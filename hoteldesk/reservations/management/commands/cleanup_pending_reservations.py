from django.conf import settings
from django.core.management.base import BaseCommand

from reservations.store import get_store

from logger import get_logger

logger = get_logger("hoteldesk.reservations")


class Command(BaseCommand):
    help = "만료된 임시 예약(전화번호 입력 대기) 삭제 - cron 으로 주기 실행"

    def handle(self, *args, **options):
        deleted = get_store().cleanup_expired_pending_reservations()
        logger.info(f"만료 임시 예약 정리: {deleted}건")
        self.stdout.write(
            self.style.SUCCESS(
                f"✅ {settings.PENDING_RESERVATION_TTL_MINUTES}분 지난 임시 예약 {deleted}건 삭제"
            )
        )

        # 실행 시 python manage.py cleanup_pending_reservations
