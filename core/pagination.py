"""
Page/limit pagination shared by list endpoints.

The frontend sends ``page`` (1-based) and ``limit`` and expects
``{"data": [...], "pagination": {"total", "page", "limit", "pages"}}``.
"""
from __future__ import annotations

import math

from rest_framework import serializers

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


class ListQuerySerializer(serializers.Serializer):
    page = serializers.IntegerField(required=False, min_value=1, default=1)
    limit = serializers.IntegerField(required=False, min_value=1, max_value=MAX_LIMIT, default=DEFAULT_LIMIT)
    search = serializers.CharField(required=False, allow_blank=True, default='')
    isActive = serializers.ChoiceField(required=False, choices=['true', 'false', '1', '0', 'all', ''], default='')

    def validate_isActive(self, v):
        if v in ('true', '1'):
            return True
        if v in ('false', '0'):
            return False
        return None


def paginate(qs, *, page: int, limit: int):
    """Slice ``qs`` and return ``(rows, pagination_meta)``."""
    total = qs.count()
    start = (page - 1) * limit
    rows = list(qs[start:start + limit])
    meta = {
        'total': total,
        'page': page,
        'limit': limit,
        'pages': math.ceil(total / limit) if total else 0,
    }
    return rows, meta
