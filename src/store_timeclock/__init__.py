"""Store timeclock package.

Rules engine for retail shift attendance (clock windows, geofencing,
deviations, monthly reports), organized by feature modules with thin Flask
controllers on top of service/repository layers.
"""
