from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver

from reservations.models import Reservation
from reservations.notifications import notify_reservation_requested, notify_status_change

NOTIFY_STATUSES = ("confirmed", "rejected", "cancelled_by_admin", "cancelled_by_guest")


@receiver(pre_save, sender=Reservation)
def remember_previous_status(sender, instance, **kwargs):
    # 저장 전 상태를 기억해 두고 post_save 에서 전이 여부 판단
    instance._previous_status = None
    if instance.pk:
        instance._previous_status = (
            Reservation.objects.filter(pk=instance.pk)
            .values_list("status", flat=True)
            .first()
        )


@receiver(post_save, sender=Reservation)
def reservation_saved_handler(sender, instance, created, **kwargs):
    if created:
        if instance.source == "kakao" and instance.status == "pending":
            notify_reservation_requested(instance)
        return

    previous = getattr(instance, "_previous_status", None)
    if previous == instance.status:
        return
    if instance.status in NOTIFY_STATUSES:
        notify_status_change(instance, instance.status)
