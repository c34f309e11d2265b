# core/management/commands/reset_passwords.py
"""
Reset demo/staff passwords to known values.

    python manage.py reset_passwords [--file creds.json] [--rounds 10]
                                     [--show-secrets] [--dry-run]

The new hashes are written straight onto the user rows, bypassing the
model's save hooks (see ``AccountStore.set_hash_directly``).  Exit
status is 0 when every pair was processed, skipped accounts included,
and 1 on any store, hashing or configuration failure.
"""
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.db import DEFAULT_DB_ALIAS

from core.exceptions import CredentialResetError
from core.hashers import BCRYPT_MAX_ROUNDS, BCRYPT_MIN_ROUNDS
from core.services.accounts import AccountStore
from core.services.credentials import (
    OUTCOME_SKIPPED,
    demo_pairs,
    load_pairs,
    reset_credentials,
)

RULE = '═' * 64


class Command(BaseCommand):
    help = "Reset stored password hashes for a fixed list of accounts (bypasses model save hooks)."

    def add_arguments(self, parser):
        parser.add_argument('--file', dest='file', default=None,
                            help='JSON list of {"email", "password", "role"} objects. '
                                 'Defaults to CREDENTIAL_RESET_FILE, then the built-in demo table.')
        parser.add_argument('--rounds', type=int, default=None,
                            help='bcrypt cost factor (default: CREDENTIAL_RESET_ROUNDS).')
        parser.add_argument('--show-secrets', action='store_true', default=False,
                            help='Demo mode: print the new plain-text passwords in the summary.')
        parser.add_argument('--dry-run', action='store_true', default=False,
                            help='Look accounts up and report, without writing anything.')
        parser.add_argument('--database', default=DEFAULT_DB_ALIAS,
                            help='Database alias holding the user table.')

    def handle(self, *args, **opts):
        rounds = opts['rounds'] if opts['rounds'] is not None else settings.CREDENTIAL_RESET_ROUNDS
        if not BCRYPT_MIN_ROUNDS <= rounds <= BCRYPT_MAX_ROUNDS:
            raise CommandError(f'--rounds must be between {BCRYPT_MIN_ROUNDS} and {BCRYPT_MAX_ROUNDS}')
        show_secrets = opts['show_secrets'] or settings.CREDENTIAL_RESET_SHOW_SECRETS
        pairs = self.resolve_pairs(opts['file'])

        self.banner()
        store = AccountStore(using=opts['database'])
        connected = False
        try:
            self.stdout.write('Connecting to database...')
            with store:
                connected = True
                self.stdout.write(self.style.SUCCESS(f'   ✓ Connected ({store.connection.vendor})'))
                self.stdout.write('')
                if opts['dry_run']:
                    self.stdout.write(self.style.NOTICE('Dry run: no password will be changed.'))
                self.stdout.write('Resetting passwords...')
                self.stdout.write(self.style.WARNING(
                    '   ! hashes are written directly, bypassing model save hooks and validators'))
                report = reset_credentials(pairs, store, rounds=rounds, dry_run=opts['dry_run'],
                                           progress=self.progress)
        except CredentialResetError as e:
            self.stderr.write(self.style.ERROR(f'✗ Error: {e}'))
            done = e.report.outcomes if e.report else []
            if done:
                self.stderr.write(f'   {len(done)} of {len(pairs)} pair(s) were processed before the failure.')
            raise CommandError('password reset aborted; re-run once the cause is fixed') from e
        finally:
            if connected:
                self.stdout.write('Database connection closed.')

        self.summary(report, show_secrets=show_secrets)

    # ------------------------------------------------------------------
    def resolve_pairs(self, path):
        path = path or settings.CREDENTIAL_RESET_FILE
        if not path:
            return demo_pairs()
        try:
            pairs = load_pairs(path)
        except ValueError as e:
            raise CommandError(str(e)) from e
        if not pairs:
            raise CommandError(f'credential file {path} is empty')
        return pairs

    def banner(self):
        self.stdout.write('')
        self.stdout.write(RULE)
        self.stdout.write('  PASSWORD RESET')
        self.stdout.write(RULE)
        self.stdout.write('')

    def progress(self, outcome):
        if outcome.was_reset:
            self.stdout.write(self.style.SUCCESS(f'   ✓ reset      {outcome.identifier}'))
        elif outcome.status == OUTCOME_SKIPPED:
            self.stdout.write(self.style.WARNING(f'   ⏭ not found  {outcome.identifier}'))
        else:
            self.stdout.write(f'   · {outcome.status}  {outcome.identifier}')

    def summary(self, report, *, show_secrets: bool):
        self.stdout.write('')
        self.stdout.write(RULE)
        self.stdout.write(self.style.SUCCESS(
            f'Done: {report.reset_count} reset, {report.skipped_count} skipped (not found).'))
        self.stdout.write(RULE)
        self.stdout.write('')

        headers = ['Role', 'Email', 'Outcome']
        if show_secrets:
            headers.append('Password')
        rows = []
        for o in report.outcomes:
            row = [o.role or '-', o.identifier, o.status]
            if show_secrets:
                row.append(o.secret if o.status != OUTCOME_SKIPPED else '-')
            rows.append(row)

        widths = [max(len(h), *(len(r[i]) for r in rows)) if rows else len(h) for i, h in enumerate(headers)]
        line = '+' + '+'.join('-' * (w + 2) for w in widths) + '+'
        self.stdout.write(line)
        self.stdout.write('| ' + ' | '.join(h.ljust(w) for h, w in zip(headers, widths)) + ' |')
        self.stdout.write(line)
        for r in rows:
            self.stdout.write('| ' + ' | '.join(c.ljust(w) for c, w in zip(r, widths)) + ' |')
        self.stdout.write(line)
        if show_secrets:
            self.stdout.write(self.style.WARNING('Plain-text passwords shown (demo mode). Do not share this output.'))
        self.stdout.write('')
