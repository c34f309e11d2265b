"""
Model hooks on the normal account update path.

These run on ``User.save()`` only.  Queryset ``update()`` calls, as used
by :meth:`core.services.accounts.AccountStore.set_hash_directly`, never
reach them.
"""
from __future__ import annotations

import logging

from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver
from django.utils import timezone
from rest_framework.authtoken.models import Token

from core.models import User
from core.services.audit import log_action

logger = logging.getLogger(__name__)


@receiver(pre_save, sender=User)
def stamp_password_change(sender, instance: User, raw=False, using=None, update_fields=None, **kwargs):
    # check_password() re-saves with update_fields={"password"} when the hash
    # parameters change; same secret, so not a password change
    if raw or instance.pk is None or (update_fields is not None and set(update_fields) == {"password"}):
        instance._password_changed = False
        return
    old_hash = sender.objects.using(using).filter(pk=instance.pk).values_list('password', flat=True).first()
    changed = old_hash is not None and old_hash != instance.password
    instance._password_changed = changed
    if changed:
        instance.password_changed_at = timezone.now()


@receiver(post_save, sender=User)
def revoke_sessions_on_password_change(sender, instance: User, created=False, raw=False, using=None, **kwargs):
    if raw or created or not getattr(instance, '_password_changed', False):
        return
    instance._password_changed = False
    # force re-login everywhere
    Token.objects.using(using).filter(user=instance).delete()
    log_action(user=instance, action='password_change', object_type='user', object_id=instance.pk)
    logger.info('password changed for %s; tokens revoked', instance.email)
