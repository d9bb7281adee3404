"""
Base Repository Class
Provides common database operations for all repositories
"""

from abc import ABC
from typing import List, Optional, Dict, Any
import logging
from mysql.connector import Error

from db.database import db_manager
from db.change_feed import change_feed
from utils.exceptions import DatabaseException, ValidationException

logger = logging.getLogger(__name__)

class BaseRepository(ABC):
    """Base repository with common CRUD operations"""

    def __init__(self, table_name: str, primary_key: str = 'id', auto_increment: bool = True,
                 db=None, feed=None):
        self.table_name = table_name
        self.primary_key = primary_key
        self.auto_increment = auto_increment
        self.db = db or db_manager
        self.feed = feed or change_feed

    def create(self, data: Dict[str, Any]) -> Any:
        """Create a new record and return its primary key"""
        try:
            # Remove None values and skip primary key ONLY if it's auto-incremented
            clean_data = {
                k: v for k, v in data.items()
                if v is not None and (not self.auto_increment or k != self.primary_key)
            }

            if not clean_data:
                raise ValidationException("No data provided for creation")

            columns = ', '.join(clean_data.keys())
            placeholders = ', '.join(['%s'] * len(clean_data))
            values = tuple(clean_data.values())

            query = f"INSERT INTO {self.table_name} ({columns}) VALUES ({placeholders})"

            result = self.db.execute_query(query, values)
            record_id = result if self.auto_increment else clean_data.get(self.primary_key)
            logger.info(f"Created record in {self.table_name} with ID: {record_id}")
            self.feed.publish(self.table_name, 'INSERT', record_id)
            return record_id

        except Error as e:
            logger.error(f"Error creating record in {self.table_name}: {e}")
            raise DatabaseException(f"Failed to create record: {str(e)}")

    def find_by_id(self, record_id: Any) -> Optional[Dict[str, Any]]:
        """Find record by primary key"""
        try:
            query = f"SELECT * FROM {self.table_name} WHERE {self.primary_key} = %s"
            return self.db.execute_query(query, (record_id,), fetch_one=True)

        except Error as e:
            logger.error(f"Error finding record by ID in {self.table_name}: {e}")
            raise DatabaseException(f"Failed to find record: {str(e)}")

    def find_all(self, order_by: str = None, descending: bool = False) -> List[Dict[str, Any]]:
        """Find all records, optionally ordered by one column"""
        return self.find_by_fields({}, order_by=order_by, descending=descending)

    def find_by_field(self, field_name: str, field_value: Any, order_by: str = None,
                      descending: bool = False) -> List[Dict[str, Any]]:
        """Find records by specific field"""
        return self.find_by_fields({field_name: field_value}, order_by=order_by, descending=descending)

    def find_by_fields(self, criteria: Dict[str, Any], order_by: str = None,
                       descending: bool = False) -> List[Dict[str, Any]]:
        """Find records matching every field in criteria (exact match)"""
        try:
            query = f"SELECT * FROM {self.table_name}"
            params = tuple(criteria.values())

            if criteria:
                query += " WHERE " + ' AND '.join(f"{k} = %s" for k in criteria.keys())
            if order_by:
                query += f" ORDER BY {order_by} {'DESC' if descending else 'ASC'}"

            result = self.db.execute_query(query, params, fetch_all=True)
            return result or []

        except Error as e:
            logger.error(f"Error finding records in {self.table_name}: {e}")
            raise DatabaseException(f"Failed to find records: {str(e)}")

    def update(self, record_id: Any, data: Dict[str, Any]) -> bool:
        """Update record by primary key"""
        try:
            # Remove None values and primary key
            clean_data = {k: v for k, v in data.items() if v is not None and k != self.primary_key}

            if not clean_data:
                return False

            set_clause = ', '.join([f"{k} = %s" for k in clean_data.keys()])
            values = tuple(clean_data.values()) + (record_id,)

            query = f"UPDATE {self.table_name} SET {set_clause} WHERE {self.primary_key} = %s"

            self.db.execute_query(query, values)
            logger.info(f"Updated record in {self.table_name} with ID: {record_id}")
            self.feed.publish(self.table_name, 'UPDATE', record_id)
            return True

        except Error as e:
            logger.error(f"Error updating record in {self.table_name}: {e}")
            raise DatabaseException(f"Failed to update record: {str(e)}")

    def delete(self, record_id: Any) -> bool:
        """Delete record by primary key"""
        try:
            query = f"DELETE FROM {self.table_name} WHERE {self.primary_key} = %s"
            self.db.execute_query(query, (record_id,))
            logger.info(f"Deleted record from {self.table_name} with ID: {record_id}")
            self.feed.publish(self.table_name, 'DELETE', record_id)
            return True

        except Error as e:
            logger.error(f"Error deleting record from {self.table_name}: {e}")
            raise DatabaseException(f"Failed to delete record: {str(e)}")

    def exists(self, record_id: Any) -> bool:
        """Check if record exists"""
        return self.find_by_id(record_id) is not None

    def subscribe(self, callback):
        """Listen for changes to this repository's table"""
        return self.feed.subscribe(self.table_name, callback)
