import asyncio
import json
import os
from motor.motor_asyncio import AsyncIOMotorClient
from pymongo.errors import PyMongoError
from log import get_logger

logger = get_logger(__name__)

def empty_acl():
    return {"allowed_users": [], "revoked_users": []}

class AclStoreError(Exception):
    """Raised when the access lists cannot be read or written."""

class JsonAclStore:
    """Keeps the access lists in a JSON file next to the bot."""

    def __init__(self, path):
        self.path = path

    def _read(self):
        if not os.path.exists(self.path):
            return empty_acl()
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        acl = empty_acl()
        acl.update({k: data.get(k, []) for k in acl})
        return acl

    def _write(self, data):
        # Write to a sibling temp file first so a crash never leaves half a file
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
        os.replace(tmp_path, self.path)

    async def load(self):
        try:
            return await asyncio.to_thread(self._read)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read ACL file {self.path}: {e}")
            raise AclStoreError(str(e)) from e

    async def save(self, data):
        try:
            await asyncio.to_thread(self._write, data)
        except OSError as e:
            logger.error(f"Failed to write ACL file {self.path}: {e}")
            raise AclStoreError(str(e)) from e

class MongoAclStore:
    """Keeps the access lists as a single document in MongoDB."""

    DOC_ID = "acl"

    def __init__(self, uri=None, collection=None):
        self.client = None
        self.col = collection
        if self.col is None:
            self.client = AsyncIOMotorClient(uri)
            try:
                database = self.client.get_database()
            except Exception:
                database = self.client["sonarr_bot"]
            self.col = database.acl
            logger.info("Connected to MongoDB (ACL store)")

    async def load(self):
        try:
            doc = await self.col.find_one({"_id": self.DOC_ID})
        except PyMongoError as e:
            logger.error(f"Failed to read ACL from MongoDB: {e}")
            raise AclStoreError(str(e)) from e

        acl = empty_acl()
        if doc:
            acl.update({k: doc.get(k, []) for k in acl})
        return acl

    async def save(self, data):
        try:
            await self.col.update_one(
                {"_id": self.DOC_ID}, {"$set": data}, upsert=True
            )
        except PyMongoError as e:
            logger.error(f"Failed to write ACL to MongoDB: {e}")
            raise AclStoreError(str(e)) from e

def get_acl_store(config):
    if config.MONGO_URI:
        return MongoAclStore(config.MONGO_URI)
    return JsonAclStore(config.ACL_FILE)
