# 📄 File: care_scheduler/api/middleware/__init__.py
# 🧭 Purpose (Layman Explanation):
# The checkpoints every web request passes through.
# 🧪 Purpose (Technical Summary):
# Exports the HTTP middleware of the care scheduler API.
# 🔗 Dependencies:
# error_handling.py, logging.py
# 🔄 Connected Modules / Calls From:
# care_scheduler.main

from .error_handling import ErrorHandlingMiddleware, error_body
from .logging import RequestLoggingMiddleware

__all__ = ["ErrorHandlingMiddleware", "RequestLoggingMiddleware", "error_body"]
