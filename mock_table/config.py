import os
from dotenv import load_dotenv

load_dotenv()

# ---- Seed data ----
# Optional JSON file loaded into the table registry when the app starts.
# A list seeds a single table named MOCK_TABLE_DEFAULT_NAME; an object seeds
# one table per key.
SEED_FILE = os.getenv("MOCK_TABLE_SEED_FILE", "")
DEFAULT_TABLE_NAME = os.getenv("MOCK_TABLE_DEFAULT_NAME", "default")

# Field used to reject duplicate inserts in seeded tables.
# Set to an empty string to disable the check.
PRIMARY_KEY = os.getenv("MOCK_TABLE_PRIMARY_KEY", "id")

# ---- Logging ----
LOG_LEVEL = os.getenv("MOCK_TABLE_LOG_LEVEL", "INFO")
