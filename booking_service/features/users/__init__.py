"""Users: read, list and soft delete. Account creation belongs to auth."""
