from typing import Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from config import MONGO_URI

# ----------------------
# MongoDB Connection
# ----------------------
mongo_client: Optional[MongoClient] = MongoClient(MONGO_URI) if MONGO_URI else None
db = mongo_client["unravel_whatsapp_db"] if mongo_client is not None else None

# ----------------------
# Collections
# ----------------------
conversation_collection: Optional[Collection] = db["conversations"] if db is not None else None


# ----------------------
# Create Indexes
# ----------------------
def create_indexes(collection: Collection):
    """Create database indexes for conversation lookups"""

    # One transcript document per WhatsApp user
    collection.create_index("user_id", unique=True)
    collection.create_index("updated_at")
