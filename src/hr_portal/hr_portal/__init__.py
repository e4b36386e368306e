"""HR Portal package.

This package is organized by feature modules (attendance, leave, salary, ...)
with a thin Flask controller layer over service/repository layers. External
systems (token verifier, BPM, FTP, SMTP) sit behind small adapters in
``auth`` and ``integrations``.
"""
