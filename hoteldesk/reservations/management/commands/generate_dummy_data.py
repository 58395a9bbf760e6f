import random
from datetime import timedelta

from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.utils import timezone
from faker import Faker

from chatbot.messages import seed_default_messages
from customers.models import Customer
from reservations.models import DEFAULT_RESERVATION_TYPE_ID, Reservation, ReservationType
from rooms.calendar import occupied_dates, to_instant
from rooms.data.dummy_room_templates import room_templates
from rooms.inventory import effective_inventory, sold_count
from rooms.models import Room
from rooms.pricing import quote_total_price


class Command(BaseCommand):
    help = "데모용 더미데이터 생성 (객실, 고객, 예약) - 알림은 발송되지 않음"

    def add_arguments(self, parser):
        parser.add_argument("--dev", action="store_true", help="개발 DB에 생성")
        parser.add_argument(
            "--prod", action="store_true", help="운영 DB에 생성 (확인 필요)"
        )
        parser.add_argument(
            "--skip-delete", action="store_true", help="기존 데이터 삭제 없이 추가"
        )
        parser.add_argument("--customers", type=int, default=10)
        parser.add_argument("--reservations", type=int, default=30)
        parser.add_argument("--days", type=int, default=14, help="오늘부터 며칠 범위에 예약 생성")
        parser.add_argument("--seed", type=int, default=None, help="난수 시드 (재현용)")

    def handle(self, *args, **options):
        if not options["dev"] and not options["prod"]:
            raise CommandError("--dev 또는 --prod 옵션 중 하나를 지정하세요.")

        if options["prod"]:
            self.stdout.write(self.style.WARNING("⚠ 운영 DB에서 실행됩니다."))
            confirm = input("정말 실행하시겠습니까? (YES 입력) : ")
            if confirm != "YES":
                self.stdout.write(self.style.ERROR("취소됨"))
                return

        faker = Faker("ko_KR")
        if options["seed"] is not None:
            Faker.seed(options["seed"])
            random.seed(options["seed"])

        with transaction.atomic():
            if not options["skip_delete"]:
                self.stdout.write("기존 데이터 전부 삭제 중...")
                Reservation.objects.all().delete()
                Room.objects.all().delete()
                Customer.objects.all().delete()
                self.stdout.write("기존 데이터 삭제 완료")

            seed_default_messages()
            reservation_type, _ = ReservationType.objects.get_or_create(
                type_id=DEFAULT_RESERVATION_TYPE_ID, defaults={"name": "기본"}
            )

            # --- Rooms 생성 ---
            start_order = Room.objects.count()
            rooms = [
                Room.objects.create(
                    room_type=template["room_type"],
                    room_image_url=template["image_url"],
                    inventory=template["inventory"],
                    prices=template["prices"],
                    discount_rate=template.get("discount_rate"),
                    sort_order=start_order + index + 1,
                )
                for index, template in enumerate(room_templates)
            ]
            self.stdout.write(self.style.NOTICE(f"Rooms 생성 완료: {len(rooms)}개"))

            # --- Customers 생성 ---
            customers = []
            for index in range(options["customers"]):
                phone = "010-{:04d}-{:04d}".format(
                    random.randint(0, 9999), random.randint(0, 9999)
                )
                customers.append(
                    Customer(
                        customer_name=faker.name(),
                        phone=phone,
                        # 절반은 카카오 사용자
                        user_id=faker.unique.uuid4() if index % 2 == 0 else None,
                        memo="",
                    )
                )
            Customer.objects.bulk_create(customers)
            customers = list(Customer.objects.all())
            self.stdout.write(self.style.NOTICE(f"Customers 생성 완료: {len(customers)}명"))

            # --- Reservations 생성 (재고 초과 없이) ---
            today = timezone.localdate()
            created = []
            attempts = 0
            while len(created) < options["reservations"] and attempts < options["reservations"] * 5:
                attempts += 1
                room = random.choice(rooms)
                customer = random.choice(customers)
                check_in = today + timedelta(days=random.randint(0, options["days"]))
                check_out = check_in + timedelta(days=random.choice([0, 1, 1, 2]))

                full = any(
                    sold_count(created, room.room_id, day)
                    >= effective_inventory(room, day, [])
                    for day in occupied_dates(check_in, check_out)
                )
                if full:
                    continue

                created.append(
                    Reservation(
                        room=room,
                        customer=customer,
                        source="kakao" if customer.user_id else "manual",
                        reservation_type=reservation_type,
                        check_in=to_instant(check_in),
                        check_out=to_instant(check_out),
                        status=random.choice(["pending", "confirmed", "confirmed"]),
                        total_price=quote_total_price(room, check_in, check_out),
                    )
                )

            # bulk_create 는 시그널을 보내지 않으므로 알림 없음
            Reservation.objects.bulk_create(created)

        self.stdout.write(
            self.style.SUCCESS(f"✅ 더미데이터 생성 완료: 예약 {len(created)}건")
        )

        # 실행 시 python manage.py generate_dummy_data --dev
