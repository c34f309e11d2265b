"""Core application for the HIS backend.

Staff accounts and authentication, the audit trail, and the account
store used by the administrative ``reset_passwords`` command.
"""
