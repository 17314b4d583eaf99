"""School Portal package.

This package is organized by feature modules (users, classes, attendance,
reports, news) with a thin Flask controller layer on top of service and
repository layers.
"""
