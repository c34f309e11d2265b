"""
Database models for the hospital backend.

Accounts are keyed by e-mail address, which is the identifier staff use
to sign in and the one administrative tools look accounts up by.  The
``password`` column inherited from Django holds the encoded salted hash
and is never written in plain text.
"""
from __future__ import annotations

from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    """Hospital staff account.

    ``role`` mirrors the roles used by the front-end.  ``email`` is
    unique and acts as the login identifier; ``username`` is kept for
    Django admin compatibility.
    """
    ROLE_ADMIN = 'admin'
    ROLE_INVENTORY_MANAGER = 'inventory_manager'
    ROLE_CHOICES = [
        ('admin', 'Admin'),
        ('doctor', 'Doctor'),
        ('nurse', 'Nurse'),
        ('head_nurse', 'Head Nurse'),
        ('receptionist', 'Receptionist'),
        ('pharmacist', 'Pharmacist'),
        ('lab_tech', 'Lab Technician'),
        ('billing', 'Billing'),
        ('inventory_manager', 'Inventory Manager'),
    ]
    email = models.EmailField(unique=True)
    role = models.CharField(max_length=32, choices=ROLE_CHOICES, default='nurse', db_index=True)
    department = models.CharField(max_length=128, blank=True)
    # Stamped by the normal change-password path only
    password_changed_at = models.DateTimeField(null=True, blank=True)

    def __str__(self) -> str:
        return f"{self.email} ({self.role})"


class AuditEvent(models.Model):
    """Append-only record of security and master-data actions."""
    user = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True)
    action = models.CharField(max_length=64)
    object_type = models.CharField(max_length=64, blank=True, null=True)
    object_id = models.CharField(max_length=64, blank=True, null=True)
    detail = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=['action', 'created_at'], name='core_audite_action_2c1f0b_idx'),
            models.Index(fields=['object_type', 'object_id', 'created_at'], name='core_audite_object__8e4d7a_idx'),
        ]

    def __str__(self):
        return f"{self.action}:{self.object_type}/{self.object_id}@{self.created_at:%F %T}"
