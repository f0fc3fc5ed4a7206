"""Membership package.

Pluggable "current user" layer for Flask apps, organized by feature modules
(users, roles, menus, logs) with a provider facade over the session and the
remember-me cookie.
"""
