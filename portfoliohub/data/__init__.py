"""
Data layer for PortfolioHub.

Provides database connections, data models, and repository classes
for the data matching reads.

Submodules:
- database: MongoDB connection management
- models: Pydantic data models and profile snapshots
- repositories: Database operations and queries
"""

from .database import DatabaseManager, get_database_manager

__all__ = [
    "DatabaseManager",
    "get_database_manager",
]
