"""Attendance tracker client package.

Organized by feature modules (users, cache, attendance, permissions) on top of a
thin async HTTP layer; services consume repository Protocols, not the transport.
"""
