"""Pointage (bus rotations & employee time clock) package.

Feature modules (rotations, employees, reports, ...) each expose a thin Flask
controller over service/repository layers.
"""
