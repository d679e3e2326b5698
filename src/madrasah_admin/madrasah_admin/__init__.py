"""Madrasah Admin package.

Organized by feature modules (invoices, attendance, leads, ...) with a thin
Flask controller layer over service/repository layers.
"""
