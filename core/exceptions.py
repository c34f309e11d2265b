from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.response import Response


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is None:
        return Response(
            {'success': False, 'message': str(exc), 'error': {'code': 'server_error', 'message': str(exc)}},
            status=500,
        )
    # normalize response
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = resp.data
    code = getattr(exc, 'default_code', None) or 'api_error'
    message = detail if isinstance(detail, str) else _first_message(detail)
    return Response(
        {'success': False, 'message': message, 'error': {'code': code, 'message': detail}},
        status=resp.status_code,
    )


def _first_message(detail) -> str:
    """Flatten DRF's nested error structures down to one readable line."""
    if isinstance(detail, dict):
        for field, value in detail.items():
            inner = _first_message(value)
            return inner if field == 'non_field_errors' else f'{field}: {inner}'
        return ''
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ''
    return str(detail)


# ---------------------------------------------------------------------------
# Credential reset errors
# ---------------------------------------------------------------------------

class CredentialResetError(Exception):
    """A fatal failure while resetting stored credentials.

    Carries the identifier being processed and the store operation that
    failed so the operator can diagnose the run without reading code.
    """

    def __init__(self, message: str, *, identifier: str | None = None, operation: str | None = None,
                 cause: BaseException | None = None):
        super().__init__(message)
        self.identifier = identifier
        self.operation = operation
        self.cause = cause
        # outcomes gathered before the failure, set by reset_credentials
        self.report = None

    def __str__(self) -> str:
        parts = [super().__str__()]
        if self.identifier:
            parts.append(f'identifier={self.identifier}')
        if self.operation:
            parts.append(f'operation={self.operation}')
        if self.cause is not None:
            parts.append(f'cause={type(self.cause).__name__}: {self.cause}')
        return ' | '.join(parts)


class StoreConnectivityError(CredentialResetError):
    """The account store could not be reached or dropped the connection."""


class HashingError(CredentialResetError):
    """Deriving the salted hash failed; nothing was written."""


class PersistenceConflictError(CredentialResetError):
    """The hash was computed but the write did not land."""
