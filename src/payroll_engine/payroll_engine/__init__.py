"""Payroll Engine package.

This package is organized by feature modules (employees, attendance, leave,
payroll, payments, ...) with thin collaborator adapters and SOLID
service/repository layers.
"""
