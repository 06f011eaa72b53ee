"""Attendance compliance engine.

This package is organized by feature modules (locations, face, shifts,
attendance, timesheet, reports, ...) with a thin Flask controller layer and
service/repository layers underneath.
"""
