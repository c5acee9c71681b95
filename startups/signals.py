from __future__ import annotations

from django.conf import settings
from django.db.models.signals import post_save
from django.dispatch import receiver

from .models import AuthorAccount


@receiver(post_save, sender=settings.AUTH_USER_MODEL)
def ensure_author_account(sender, instance, created, **kwargs):
    if created:
        AuthorAccount.objects.get_or_create(user=instance)
