from log import get_logger

logger = get_logger(__name__)

class AccessList:
    """
    Allowed and revoked bot users.

    Both lists hold {"id": int, "display_name": str} records and a user id
    is in at most one of them. Every mutation is persisted through the store
    before the call returns; a failed save propagates as AclStoreError with
    the in-memory change kept.
    """

    def __init__(self, store, allowed_users=None, revoked_users=None):
        self.store = store
        self.allowed_users = list(allowed_users or [])
        self.revoked_users = list(revoked_users or [])

    @classmethod
    async def load(cls, store):
        data = await store.load()
        acl = cls(store, data["allowed_users"], data["revoked_users"])
        logger.info(f"ACL loaded: {len(acl.allowed_users)} allowed, {len(acl.revoked_users)} revoked")
        return acl

    # --- Gate ---

    def is_authorized(self, user_id):
        return any(u["id"] == user_id for u in self.allowed_users)

    def is_revoked(self, user_id):
        return any(u["id"] == user_id for u in self.revoked_users)

    # --- Mutations ---

    async def authorize(self, user_id, display_name):
        """Grant access. Returns False for revoked or already allowed users."""
        if self.is_revoked(user_id) or self.is_authorized(user_id):
            return False
        self.allowed_users.append({"id": user_id, "display_name": display_name})
        await self.save()
        logger.info(f"Authorized user {display_name} ({user_id})")
        return True

    async def revoke(self, user_id):
        user = _pop(self.allowed_users, user_id)
        if user is None:
            return None
        self.revoked_users.append(user)
        await self.save()
        logger.info(f"Revoked user {user['display_name']} ({user_id})")
        return user

    async def unrevoke(self, user_id):
        # The user is not put back on the allowed list; they need /auth again
        user = _pop(self.revoked_users, user_id)
        if user is None:
            return None
        await self.save()
        logger.info(f"Unrevoked user {user['display_name']} ({user_id})")
        return user

    def to_dict(self):
        return {"allowed_users": self.allowed_users, "revoked_users": self.revoked_users}

    async def save(self):
        await self.store.save(self.to_dict())

def _pop(users, user_id):
    for i, u in enumerate(users):
        if u["id"] == user_id:
            return users.pop(i)
    return None
