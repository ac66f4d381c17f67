"""Logging filters for enriching log records with request context.

Adding ``RequestIdFilter`` to a handler enables per-request correlation in
logs without modifying individual log statements.
"""

from logging import Filter, LogRecord

from .middleware import REQUEST_ID_CTX


class RequestIdFilter(Filter):
    """Attach a ``request_id`` attribute to log records.

    The value is retrieved from the ``REQUEST_ID_CTX`` ContextVar set by
    ``RequestIdMiddleware``. Outside a request the ContextVar default ("-")
    is used so formatters can reliably reference ``%(request_id)s``.
    """

    def filter(self, record: LogRecord) -> bool:
        record.request_id = REQUEST_ID_CTX.get()
        return True
