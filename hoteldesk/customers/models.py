from django.db import models

from customers.utils import digits_only


class CustomerManager(models.Manager):
    def get_by_phone(self, phone):
        # 저장된 번호 형식이 제각각이라 숫자만 비교
        normalized = digits_only(phone)
        if not normalized:
            return None
        for customer in self.exclude(phone=""):
            if digits_only(customer.phone) == normalized:
                return customer
        return None

    def get_by_user_id(self, user_id):
        if not user_id:
            return None
        return self.filter(user_id=user_id).first()

    def get_or_create_for_manual(self, name, phone):
        name = (name or "").strip()
        phone = (phone or "").strip()
        if phone:
            existing = self.get_by_phone(phone)
            if existing:
                # 이름이 바뀌었으면 최신 이름으로 갱신
                if name and existing.customer_name != name:
                    existing.customer_name = name
                    existing.save(update_fields=["customer_name", "updated_at"])
                return existing
        return self.create(customer_name=name or "관리자 수기 예약", phone=phone)

    def get_or_create_by_user_id(self, user_id, name=None, phone=None, memo=None):
        customer = self.get_by_user_id(user_id)
        if customer is None:
            return self.create(
                customer_name=(name or "").strip() or user_id[:8],
                phone=(phone or "").strip(),
                user_id=user_id,
                memo=memo or "",
            )

        update_fields = []
        if name is not None and name.strip():
            customer.customer_name = name.strip()
            update_fields.append("customer_name")
        if phone is not None:
            customer.phone = phone.strip()
            update_fields.append("phone")
        if memo is not None:
            customer.memo = memo
            update_fields.append("memo")
        if update_fields:
            customer.save(update_fields=update_fields + ["updated_at"])
        return customer


class BaseModel(models.Model):
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class Customer(BaseModel):
    customer_id = models.AutoField(primary_key=True)
    customer_name = models.CharField(max_length=100)
    phone = models.CharField(max_length=20, blank=True)
    user_id = models.CharField(max_length=100, unique=True, null=True, blank=True)  # 카카오 botUserKey
    memo = models.TextField(blank=True)

    objects = CustomerManager()

    def __str__(self):
        return f"{self.customer_name} ({self.phone})"
