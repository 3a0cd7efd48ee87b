from django.db.models.signals import pre_save
from django.dispatch import receiver

from .models import User, normalize_email_address


@receiver(pre_save, sender=User, dispatch_uid="accounts_normalize_email")
def normalize_email(sender, instance: User, **kwargs):
    instance.email = normalize_email_address(instance.email)


@receiver(pre_save, sender=User, dispatch_uid="accounts_superuser_role")
def ensure_superuser_role(sender, instance: User, **kwargs):
    # Promoted to superuser in dj-admin without touching the role field.
    # Runs before the check constraint sees the row.
    if instance.is_superuser and instance.role != User.Roles.ADMIN:
        instance.role = User.Roles.ADMIN
