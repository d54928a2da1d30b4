"""Congregation attendance package.

This package is organized by feature modules (members, worship, attendance,
analysis, messaging, imports) with a thin Flask controller layer and
service/repository layers underneath.
"""
