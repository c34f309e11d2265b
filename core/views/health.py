from django.db import connections, DatabaseError
from django.http import JsonResponse


def healthz(request):
    """Liveness probe: answers 503 when the database cannot be queried."""
    conn = connections['default']
    try:
        with conn.cursor() as c:
            c.execute('SELECT 1')
            row = c.fetchone()
    except DatabaseError as e:
        return JsonResponse({'success': False, 'db': False, 'error': str(e)}, status=503)
    return JsonResponse({'success': True, 'db': bool(row and row[0] == 1), 'vendor': conn.vendor})
