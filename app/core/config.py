import os

# Database Configuration
# Uses default credentials for local Docker Compose setup
DB_URL = os.getenv("DATABASE_URL", "postgres://user:password@db:5432/food_inventory_db")
GENERATE_SCHEMAS = os.getenv("GENERATE_SCHEMAS", "true").lower() in ("1", "true", "yes")

# Application Metadata
PROJECT_NAME = "Perishable Inventory Ledger"
VERSION = "1.0.0"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Reservation Engine Configuration
RESERVATION_LOCK_TIMEOUT = float(os.getenv("RESERVATION_LOCK_TIMEOUT", 5)) # Max seconds to wait for an item's lock
