"""Fire Drill Check-In Board package.

Organized by feature modules (roster, status, changes, drill, ...) with a thin
Flask controller layer over service/repository layers.
"""
