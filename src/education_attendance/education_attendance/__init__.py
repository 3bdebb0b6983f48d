"""Education attendance package.

Attendance ledger and range reporting for education cohorts, organized by
feature modules (cohorts, roster, attendance, reports) with a thin Flask
controller layer over service/repository layers.
"""
