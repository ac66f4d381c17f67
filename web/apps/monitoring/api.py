from django.db import DatabaseError, connection
from django.http import JsonResponse


def health_view(_request):
    """Report liveness plus the state of the orders database."""
    db_ok = False
    try:
        with connection.cursor() as cur:
            cur.execute("SELECT 1;")
        db_ok = True
    except DatabaseError:
        db_ok = False

    code = 200 if db_ok else 503
    return JsonResponse(
        {"ok": db_ok, "components": {"db": {"ok": db_ok}}},
        status=code,
    )
