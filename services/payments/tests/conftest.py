"""Test configuration for the payments service.

Points ``DATABASE_URL`` at a throwaway sqlite file before ``repo`` creates
its engine on import.
"""
import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="payments-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_DB_DIR, 'payments.db')}")
os.environ.setdefault("PAYMENTS_MAX_APPROVED_AMOUNT", "10000.00")
