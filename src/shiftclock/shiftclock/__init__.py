"""shiftclock package.

Clock-in/clock-out tracking for shift workers. The ``geo`` and ``ledger``
modules are the pure computational core; the feature modules (attendance,
organizations, users) wrap them with a thin Flask controller layer and
service/repository layers.
"""
