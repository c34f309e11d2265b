"""
Administrative credential reset.

Walks an ordered table of ``(email, new password)`` pairs and, for each
account that exists, stores a freshly salted bcrypt hash of the new
password through :meth:`AccountStore.set_hash_directly`.  Accounts that
do not exist are skipped.  Any store or hashing failure stops the run
at the pair that failed; pairs already processed stay reset.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple

from django.contrib.auth.hashers import make_password
from django.db import transaction

from core.exceptions import CredentialResetError, HashingError
from core.hashers import BCryptSHA256PasswordHasher, is_encoded_hash
from core.services.accounts import AccountStore, translate_db_errors
from core.services.audit import log_action

logger = logging.getLogger(__name__)

OUTCOME_RESET = 'reset'
OUTCOME_SKIPPED = 'skipped'
OUTCOME_WOULD_RESET = 'would reset'

# Demo accounts seeded for training environments
DEMO_CREDENTIALS: Tuple[Tuple[str, str, str], ...] = (
    ('admin@hospital-his.com', 'Admin@123', 'Admin'),
    ('dr.sharma@hospital-his.com', 'Doctor@123', 'Doctor'),
    ('priya@hospital-his.com', 'Nurse@123', 'Nurse'),
    ('amit@hospital-his.com', 'Reception@123', 'Receptionist'),
    ('ravi@hospital-his.com', 'Pharma@123', 'Pharmacist'),
    ('suresh@hospital-his.com', 'LabTech@123', 'Lab Technician'),
    ('neha@hospital-his.com', 'Billing@123', 'Billing'),
    ('head.nurse@hospital-his.com', 'HeadNurse@123', 'Head Nurse'),
)


@dataclass(frozen=True)
class CredentialPair:
    identifier: str
    secret: str
    label: str = ''


@dataclass
class ResetOutcome:
    identifier: str
    status: str
    secret: str
    role: str = ''

    @property
    def was_reset(self) -> bool:
        return self.status == OUTCOME_RESET


@dataclass
class ResetReport:
    outcomes: List[ResetOutcome] = field(default_factory=list)

    @property
    def reset_count(self) -> int:
        return sum(1 for o in self.outcomes if o.was_reset)

    @property
    def skipped_count(self) -> int:
        return sum(1 for o in self.outcomes if o.status == OUTCOME_SKIPPED)


def demo_pairs() -> List[CredentialPair]:
    return [CredentialPair(email, secret, label) for email, secret, label in DEMO_CREDENTIALS]


def load_pairs(path) -> List[CredentialPair]:
    """Read the pair table from a JSON file.

    Expected shape: ``[{"email": "...", "password": "...", "role": "..."}]``
    where ``role`` is an optional display label.  File order is kept.
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding='utf-8'))
    except OSError as e:
        raise ValueError(f'cannot read credential file {path}: {e}') from e
    except json.JSONDecodeError as e:
        raise ValueError(f'credential file {path} is not valid JSON: {e}') from e
    if not isinstance(raw, list):
        raise ValueError(f'credential file {path} must contain a JSON list')

    pairs: List[CredentialPair] = []
    seen = set()
    for idx, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise ValueError(f'entry #{idx} must be an object')
        email = str(entry.get('email') or '').strip()
        secret = entry.get('password')
        if not email or not isinstance(secret, str) or not secret:
            raise ValueError(f'entry #{idx} needs a non-empty "email" and "password"')
        if email.lower() in seen:
            raise ValueError(f'entry #{idx}: duplicate email {email}')
        seen.add(email.lower())
        pairs.append(CredentialPair(email, secret, str(entry.get('role') or '')))
    return pairs


def hash_secret(secret: str, *, rounds: int, identifier: Optional[str] = None) -> str:
    """Salted bcrypt hash of ``secret``; raises :class:`HashingError` on any failure."""
    try:
        encoded = make_password(secret, hasher=BCryptSHA256PasswordHasher(rounds=rounds))
    except Exception as e:
        raise HashingError('could not derive password hash', identifier=identifier,
                           operation='hash', cause=e) from e
    if not is_encoded_hash(encoded):
        raise HashingError('hasher returned an unusable value', identifier=identifier, operation='hash')
    return encoded


def reset_credentials(
    pairs: Iterable[CredentialPair],
    store: AccountStore,
    *,
    rounds: int,
    dry_run: bool = False,
    progress: Optional[Callable[[ResetOutcome], None]] = None,
) -> ResetReport:
    """Reset every listed account, strictly in order.

    ``store`` must already be open.  Returns the outcomes of all pairs;
    on a fatal error the exception propagates and the outcomes gathered
    so far are attached to it as ``report``.
    """
    report = ResetReport()
    for pair in pairs:
        try:
            outcome = _reset_one(pair, store, rounds=rounds, dry_run=dry_run)
        except CredentialResetError as e:
            e.report = report
            logger.error('credential reset aborted: %s', e)
            raise
        report.outcomes.append(outcome)
        if progress is not None:
            progress(outcome)
    return report


def _reset_one(pair: CredentialPair, store: AccountStore, *, rounds: int, dry_run: bool) -> ResetOutcome:
    account = store.find_by_identifier(pair.identifier)
    if account is None:
        logger.info('skip %s: account not found', pair.identifier)
        return ResetOutcome(pair.identifier, OUTCOME_SKIPPED, pair.secret, pair.label)

    role = pair.label or account.get_role_display()
    if dry_run:
        return ResetOutcome(pair.identifier, OUTCOME_WOULD_RESET, pair.secret, role)

    encoded = hash_secret(pair.secret, rounds=rounds, identifier=pair.identifier)
    # Administrative bypass of the normal change-password path.
    # Hash and audit row land together or not at all.
    with translate_db_errors('set_hash', pair.identifier), transaction.atomic(using=store.using):
        store.set_hash_directly(account.pk, encoded, identifier=pair.identifier)
        _audit_direct_reset(account, rounds, using=store.using)
    logger.info('reset %s', pair.identifier)
    return ResetOutcome(pair.identifier, OUTCOME_RESET, pair.secret, role)


def _audit_direct_reset(account, rounds: int, *, using: str) -> None:
    with translate_db_errors('audit', account.email):
        log_action(user=None, action='credential_reset_direct', object_type='user', object_id=account.pk,
                   detail={'email': account.email, 'rounds': rounds, 'bypassedHooks': True}, using=using)
