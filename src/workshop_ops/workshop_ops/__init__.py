"""Workshop operations package.

This package is organized by feature modules (breaks, attendance, work_records,
reconciliation) with a thin Flask controller layer and service/repository layers.
The reconciliation engine turns raw attendance and work-session rows for one
worker-day into net worked minutes and flags reporting discrepancies.
"""
