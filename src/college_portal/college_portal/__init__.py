"""College Portal package.

Feature modules (attendance, schedules, dashboard) each keep a pure core,
repository protocols with MySQL implementations, services and a thin Flask
controller layer.
"""
