"""
Base service layer for parameterized SQL against the record store
"""

import logging
from typing import Dict, Any, List, Optional
from dataclasses import dataclass

import asyncpg

from record_store.database.connection import get_db_pool

logger = logging.getLogger(__name__)

# Failures that count as a store fault: driver errors, lost connections, missing pool
STORE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, RuntimeError)

STORE_FAULT = "STORE_FAULT"

@dataclass
class ServiceResult:
    """Result from service operation"""
    success: bool
    data: Optional[List[Dict[str, Any]]] = None
    count: int = 0
    error: Optional[str] = None
    error_type: Optional[str] = None


def rows_affected(status: str) -> int:
    """Row count from a command status tag such as 'UPDATE 1' or 'DELETE 0'"""
    try:
        return int(status.rsplit(" ", 1)[-1])
    except (AttributeError, ValueError):
        return 0


class BaseService:
    """Runs single statements on a pooled connection"""

    def __init__(self, table_name: str):
        self.table_name = table_name
        logger.info(f"BaseService initialized for table: {table_name}")

    def _get_pool(self):
        db_pool = get_db_pool()
        if not db_pool:
            raise RuntimeError("Database pool not initialized")
        return db_pool

    async def _fetch(self, query: str, *params) -> List[Dict[str, Any]]:
        async with self._get_pool().acquire() as conn:
            logger.info(f"Executing query: {query}")
            logger.info(f"Parameters: {params}")
            rows = await conn.fetch(query, *params)
            return [dict(row) for row in rows]

    async def _fetchrow(self, query: str, *params) -> Optional[Dict[str, Any]]:
        async with self._get_pool().acquire() as conn:
            logger.info(f"Executing query: {query}")
            logger.info(f"Parameters: {params}")
            row = await conn.fetchrow(query, *params)
            return dict(row) if row is not None else None

    async def _execute(self, query: str, *params) -> int:
        """Run a write statement and return the number of rows it touched"""
        async with self._get_pool().acquire() as conn:
            logger.info(f"Executing statement: {query}")
            logger.info(f"Parameters: {params}")
            status = await conn.execute(query, *params)
            return rows_affected(status)

    def _store_fault(self, operation: str, error: Exception) -> ServiceResult:
        logger.error(f"{operation} failed on {self.table_name}: {error}", exc_info=True)
        return ServiceResult(
            success=False,
            error=str(error) or type(error).__name__,
            error_type=STORE_FAULT
        )
