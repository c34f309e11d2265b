from typing import Optional, Any, Dict
from django.contrib.auth import get_user_model
from core.models import AuditEvent

User = get_user_model()

def log_action(*, user: Optional[User], action: str, object_type: Optional[str]=None, object_id=None, detail: Optional[Dict[str, Any]]=None, using: Optional[str]=None) -> AuditEvent:
    return AuditEvent.objects.db_manager(using).create(
        user=user if isinstance(user, User) and getattr(user, 'pk', None) else None,
        action=action,
        object_type=object_type,
        object_id=str(object_id) if object_id is not None else None,
        detail=detail or {},
    )

def events_for(object_type: str, object_id, *, limit: int = 100):
    return (AuditEvent.objects.filter(object_type=object_type, object_id=str(object_id))
            .select_related('user').order_by('-created_at', '-id')[:limit])

def format_event(ev: AuditEvent) -> dict:
    return {
        'id': ev.id,
        'action': ev.action,
        'user': ev.user.email if ev.user else None,
        'detail': ev.detail,
        'createdAt': ev.created_at.isoformat(),
    }
