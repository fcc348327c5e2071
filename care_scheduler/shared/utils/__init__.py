# 📄 File: care_scheduler/shared/utils/__init__.py

# 🧭 Purpose (Layman Explanation):
# A small toolbox of helpers other parts of the scheduler share, mainly the
# structured logging setup.

# 🧪 Purpose (Technical Summary):
# Initializes the utilities package; structured logging lives in
# care_scheduler.shared.utils.logging.

# 🔗 Dependencies:
# - python-json-logger: JSON log formatting

# 🔄 Connected Modules / Calls From:
# Used by: All application modules for logging

"""
Shared Utilities Package

- Structured logging with JSON formatting
- Request/correlation context for log lines
"""

__version__ = "1.0.0"
