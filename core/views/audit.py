"""
Audit trail endpoint.

Administrators can page through ``AuditEvent`` rows, newest first,
optionally narrowed by action or by the object they concern.
"""
from __future__ import annotations

from rest_framework import serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from core.models import AuditEvent
from core.pagination import ListQuerySerializer, paginate
from core.permissions import IsAdminRole
from core.services.audit import format_event


class AuditQuerySerializer(ListQuerySerializer):
    action = serializers.CharField(required=False, allow_blank=True, default='')
    objectType = serializers.CharField(required=False, allow_blank=True, default='')
    objectId = serializers.CharField(required=False, allow_blank=True, default='')


@api_view(['GET'])
@permission_classes([IsAuthenticated, IsAdminRole])
def audit_events(request):
    q = AuditQuerySerializer(data=request.query_params)
    q.is_valid(raise_exception=True)
    vd = q.validated_data
    qs = AuditEvent.objects.select_related('user').order_by('-created_at', '-id')
    if vd['action']:
        qs = qs.filter(action=vd['action'])
    if vd['objectType']:
        qs = qs.filter(object_type=vd['objectType'])
    if vd['objectId']:
        qs = qs.filter(object_id=vd['objectId'])
    if vd['search']:
        qs = qs.filter(user__email__icontains=vd['search'])
    rows, meta = paginate(qs, page=vd['page'], limit=vd['limit'])
    return Response({'success': True, 'data': [format_event(ev) for ev in rows], 'pagination': meta})
