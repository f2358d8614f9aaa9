"""ChronoSync package.

Employee time tracking organized by feature modules (users, attendance,
reports, ...) with a thin Flask controller layer on top of service and
repository layers. All state is kept in a machine-local key-value store.
"""
