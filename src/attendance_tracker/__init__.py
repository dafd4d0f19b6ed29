"""Attendance Tracker package.

Organized by feature modules (users, attendance, analysis) with a thin Flask
controller layer over service/repository layers.
"""
