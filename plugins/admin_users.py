from pyrogram import Client, filters
from pyrogram.types import Message
from utils.helpers import send_reply

# Owner-only; the access gate has already rejected everyone else

@Client.on_message(filters.command("users"))
async def list_users(client: Client, message: Message):
    acl = client.acl

    def fmt(users):
        if not users:
            return "  (none)"
        return "\n".join(f"  - {u['display_name']} (`{u['id']}`)" for u in users)

    await message.reply(
        f"**Allowed users ({len(acl.allowed_users)}):**\n{fmt(acl.allowed_users)}\n\n"
        f"**Revoked users ({len(acl.revoked_users)}):**\n{fmt(acl.revoked_users)}"
    )

@Client.on_message(filters.command("revoke"))
async def revoke_command(client: Client, message: Message):
    await send_reply(message, client.flow.start_revoke(message.from_user.id))

@Client.on_message(filters.command("unrevoke"))
async def unrevoke_command(client: Client, message: Message):
    await send_reply(message, client.flow.start_unrevoke(message.from_user.id))
