"""
Account store.

Two mutation entry points exist on purpose:

``update_with_validation``
    The normal path.  Runs model validation and ``save()``, so the
    ``pre_save``/``post_save`` hooks in :mod:`core.signals` fire (token
    revocation, ``password_changed_at``, audit).

``set_hash_directly``
    The administrative path used by ``manage.py reset_passwords``.  It
    issues a single ``UPDATE`` through the queryset, so no ``save()``,
    no signals and no validators run.  Callers must hand it an already
    encoded hash; a plain secret is refused.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from django.contrib.auth import get_user_model
from django.db import DEFAULT_DB_ALIAS, DatabaseError, InterfaceError, OperationalError, connections

from core.exceptions import PersistenceConflictError, StoreConnectivityError
from core.hashers import is_encoded_hash

logger = logging.getLogger(__name__)

User = get_user_model()


@contextmanager
def translate_db_errors(operation: str, identifier: Optional[str] = None) -> Iterator[None]:
    try:
        yield
    except (OperationalError, InterfaceError) as e:
        raise StoreConnectivityError('account store unreachable', identifier=identifier,
                                     operation=operation, cause=e) from e
    except DatabaseError as e:
        raise PersistenceConflictError('account store rejected the operation', identifier=identifier,
                                       operation=operation, cause=e) from e


class AccountStore:
    """User records keyed by e-mail on one database alias.

    Use as a context manager: the connection is opened on entry and
    closed exactly once on exit, whatever happened in between.
    """

    def __init__(self, using: str = DEFAULT_DB_ALIAS):
        self.using = using
        self._open = False

    # -- connection scope ---------------------------------------------------
    @property
    def connection(self):
        return connections[self.using]

    def open(self) -> 'AccountStore':
        with translate_db_errors('connect'):
            self.connection.ensure_connection()
        self._open = True
        logger.info('account store connected (alias=%s, vendor=%s)', self.using, self.connection.vendor)
        return self

    def close(self) -> None:
        if not self._open:
            return
        self._open = False
        self.connection.close()
        logger.info('account store connection closed (alias=%s)', self.using)

    def __enter__(self) -> 'AccountStore':
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -- reads --------------------------------------------------------------
    def find_by_identifier(self, identifier: str):
        """Return the account whose e-mail matches ``identifier`` or ``None``."""
        identifier = (identifier or '').strip()
        if not identifier:
            return None
        with translate_db_errors('find', identifier):
            return User.objects.using(self.using).filter(email__iexact=identifier).first()

    # -- writes -------------------------------------------------------------
    def update_with_validation(self, account_id: int, fields: Dict[str, Any]):
        """Normal update path: validators and save hooks run.

        A ``password`` entry is treated as plain text and hashed with the
        default hasher via ``set_password``.
        """
        fields = dict(fields)
        with translate_db_errors('update', str(account_id)):
            user = User.objects.using(self.using).get(pk=account_id)
            raw_password = fields.pop('password', None)
            for name, value in fields.items():
                setattr(user, name, value)
            if raw_password is not None:
                user.set_password(raw_password)
            user.full_clean(exclude=['password'])
            user.save(using=self.using)
        return user

    def set_hash_directly(self, account_id: int, encoded: str, *, identifier: Optional[str] = None) -> None:
        """Administrative path: overwrite the stored hash, bypassing save hooks.

        Nothing besides the ``password`` column changes.  Zero affected
        rows means the account disappeared after it was looked up.
        """
        if not is_encoded_hash(encoded):
            raise ValueError('set_hash_directly expects an encoded password hash, not a plain secret')
        identifier = identifier or str(account_id)
        logger.warning('direct hash write for %s: bypassing model save hooks and validators', identifier)
        with translate_db_errors('set_hash', identifier):
            updated = User.objects.using(self.using).filter(pk=account_id).update(password=encoded)
        if updated != 1:
            raise PersistenceConflictError(f'expected to update 1 account, updated {updated}',
                                           identifier=identifier, operation='set_hash')
