from django.db.models.signals import pre_save
from django.dispatch import receiver
from django.utils import timezone

from .models import PayrollRecord


@receiver(pre_save, sender=PayrollRecord)
def stamp_payment_date(sender, instance: PayrollRecord, **kwargs):
    """
    Keep ``payment_date`` in step with the workflow status: stamped with today
    when a record becomes ``Paid`` without a date, cleared otherwise.
    """
    if instance.status == PayrollRecord.STATUS_PAID:
        if instance.payment_date is None:
            instance.payment_date = timezone.localdate()
    elif instance.payment_date is not None:
        instance.payment_date = None
