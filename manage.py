#!/usr/bin/env python
"""
Command line entry point for the HIS backend.

Besides Django's own commands this exposes ``reset_passwords``, which
restores the demo/staging staff accounts to known passwords::

    python manage.py reset_passwords --rounds 10
"""
import os
import sys


def main() -> None:
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'hospital.settings')
    try:
        from django.core.management import execute_from_command_line  # type: ignore
    except ImportError as exc:
        raise ImportError(
            "Couldn't import Django. Are you sure it's installed and "
            "available on your PYTHONPATH environment variable? Did you "
            "forget to activate a virtual environment?"
        ) from exc
    execute_from_command_line(sys.argv)


if __name__ == '__main__':
    main()
