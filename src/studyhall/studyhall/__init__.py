"""StudyHall package.

Library seat booking, shift attendance and admission management, organized by
feature modules (shifts, bookings, attendance, ...) with a thin Flask
controller layer over service/repository layers.
"""
