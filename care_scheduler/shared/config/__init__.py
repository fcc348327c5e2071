# 📄 File: care_scheduler/shared/config/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Gives the rest of the app one place to import its settings from.
#
# 🧪 Purpose (Technical Summary):
# Re-exports the pydantic-settings Settings model and its cached accessor.
#
# 🔗 Dependencies:
# - care_scheduler.shared.config.settings
#
# 🔄 Connected Modules / Calls From:
# - All modules requiring configuration

from care_scheduler.shared.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
