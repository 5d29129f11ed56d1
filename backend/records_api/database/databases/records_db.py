"""
Records database configuration.
Stores death records and the accounts allowed to manage them.
"""

DB_NAME = "records_db"


class Collections:
    """Collection names in records_db."""
    RECORDS = "records"
    USERS = "users"
