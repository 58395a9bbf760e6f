from django.core.management.base import BaseCommand

from chatbot.models import ChatbotMessageHistory, ChatHistory
from customers.models import Customer
from reservations.models import PendingReservation, Reservation
from rooms.models import Room, RoomInventoryAdjustment


class Command(BaseCommand):
    help = "모든 운영 데이터 삭제 (챗봇 멘트/예약 유형 제외, 주의: 되돌릴 수 없음!)"

    def add_arguments(self, parser):
        parser.add_argument("--yes", action="store_true", help="확인 없이 삭제")

    def handle(self, *args, **options):
        if not options["yes"]:
            confirm = input("⚠ 모든 데이터가 삭제됩니다. 계속하시겠습니까? (YES 입력) : ")
            if confirm != "YES":
                self.stdout.write(self.style.ERROR("취소됨"))
                return

        PendingReservation.objects.all().delete()
        Reservation.objects.all().delete()
        RoomInventoryAdjustment.objects.all().delete()
        Room.objects.all().delete()
        ChatHistory.objects.all().delete()
        ChatbotMessageHistory.objects.all().delete()
        Customer.objects.all().delete()

        self.stdout.write(self.style.SUCCESS("✅ 챗봇 멘트 제외 모든 데이터 삭제 완료"))

        # 실행 시 python manage.py clear_all_data
