"""
BaseLine Academy - Local Store Schema
This module defines the SQLite schema that stands in for browser storage
"""

import logging
import sqlite3
from typing import Dict, Any
from datetime import datetime

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Database manager for the academy's local store"""

    def __init__(self, db_path: str = "baseline_academy.db"):
        self.db_path = db_path
        self.version = 1  # Database schema version for future migrations

    def get_connection(self):
        """Get database connection with proper settings"""
        conn = sqlite3.connect(self.db_path)
        conn.execute("PRAGMA journal_mode = WAL")
        return conn

    def initialize_database(self):
        """Initialize database with complete schema"""
        conn = self.get_connection()
        cursor = conn.cursor()

        try:
            self._create_local_storage_table(cursor)
            self._create_audit_log_table(cursor)
            self._create_schema_version_table(cursor)

            cursor.execute(
                "INSERT OR REPLACE INTO schema_version (version, applied_at) VALUES (?, ?)",
                (self.version, datetime.now().isoformat())
            )
            conn.commit()
        finally:
            conn.close()
        logger.info("Local store schema initialized at %s", self.db_path)

    def _create_local_storage_table(self, cursor):
        """Create key/value table (announcement, legacy registrations, player stat blobs)"""
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS local_storage (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

    def _create_audit_log_table(self, cursor):
        """Create audit log for tracking coach actions"""
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS audit_log (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                entity TEXT NOT NULL,
                record_id TEXT,
                action TEXT NOT NULL,
                details TEXT,
                changed_by TEXT,
                changed_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

    def _create_schema_version_table(self, cursor):
        """Create schema version table for migrations"""
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS schema_version (
                version INTEGER PRIMARY KEY,
                applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                description TEXT
            )
        """)

    def get_schema_version(self) -> int:
        """Get current database schema version"""
        conn = self.get_connection()
        cursor = conn.cursor()

        try:
            cursor.execute("SELECT MAX(version) FROM schema_version")
            result = cursor.fetchone()
            return result[0] if result[0] else 0
        except sqlite3.OperationalError:
            return 0
        finally:
            conn.close()

    def record_action(self, entity: str, record_id: Any, action: str,
                      details: str = "", changed_by: str = "coach_dashboard"):
        """Append an entry to the audit log"""
        conn = self.get_connection()
        try:
            conn.execute("""
                INSERT INTO audit_log (entity, record_id, action, details, changed_by, changed_at)
                VALUES (?, ?, ?, ?, ?, ?)
            """, (entity, str(record_id), action, details, changed_by, datetime.now().isoformat()))
            conn.commit()
        finally:
            conn.close()

    def get_audit_log(self, limit: int = 50):
        """Most recent audit entries, newest first"""
        conn = self.get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("""
                SELECT entity, record_id, action, details, changed_by, changed_at
                FROM audit_log
                ORDER BY id DESC
                LIMIT ?
            """, (limit,))
            columns = [desc[0] for desc in cursor.description]
            return [dict(zip(columns, row)) for row in cursor.fetchall()]
        finally:
            conn.close()

    def validate_data_integrity(self) -> Dict[str, Any]:
        """Validate database integrity and return report"""
        conn = self.get_connection()

        integrity_report = {
            "valid": True,
            "issues": [],
            "stats": {}
        }

        try:
            cursor = conn.cursor()
            cursor.execute("PRAGMA integrity_check")
            result = cursor.fetchone()[0]
            if result != "ok":
                integrity_report["valid"] = False
                integrity_report["issues"].append(f"Integrity check: {result}")

            stats_queries = {
                "Stored Keys": "SELECT COUNT(*) FROM local_storage",
                "Audit Entries": "SELECT COUNT(*) FROM audit_log",
            }

            for stat_name, query in stats_queries.items():
                cursor.execute(query)
                integrity_report["stats"][stat_name] = cursor.fetchone()[0]

        except sqlite3.Error as e:
            integrity_report["valid"] = False
            integrity_report["issues"].append(f"Database error: {str(e)}")
        finally:
            conn.close()

        return integrity_report
