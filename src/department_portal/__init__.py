"""Department Portal package.

This package is organized by feature modules (users, classes, marks, reports, ...)
with a thin Flask JSON controller layer over service/repository layers.
"""
