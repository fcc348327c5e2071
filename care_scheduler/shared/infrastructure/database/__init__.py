# 📄 File: care_scheduler/shared/infrastructure/database/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# One place to import the database plumbing from.
#
# 🧪 Purpose (Technical Summary):
# Re-exports the declarative Base, the connection manager and the session
# manager used by repository implementations.
#
# 🔗 Dependencies:
# - care_scheduler.shared.infrastructure.database.connection, session
#
# 🔄 Connected Modules / Calls From:
# - care_management.infrastructure.database, main.py, Alembic env.py

from care_scheduler.shared.infrastructure.database.connection import (
    Base,
    DatabaseConnectionManager,
)
from care_scheduler.shared.infrastructure.database.session import (
    DatabaseSessionManager,
    close_database,
    get_db_session,
    initialize_database,
    session_manager,
)

__all__ = [
    "Base",
    "DatabaseConnectionManager",
    "DatabaseSessionManager",
    "close_database",
    "get_db_session",
    "initialize_database",
    "session_manager",
]
