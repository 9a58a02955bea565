from pyrogram import Client, filters, StopPropagation
from pyrogram.types import Message
from config import Config
from log import get_logger
from utils.helpers import parse_command

logger = get_logger(__name__)

PUBLIC_COMMANDS = {"start", "auth"}
OWNER_COMMANDS = {"revoke", "unrevoke", "users", "rss", "refresh", "status"}

NOT_AUTHORIZED = "Not authorized, use `/auth [password]` to authorize."
NOT_OWNER = "Not authorized, this command is for the bot owner only."

@Client.on_message(filters.text & filters.incoming, group=-1)
async def access_gate(client: Client, message: Message):
    """
    High-priority handler deciding who may talk to the bot.
    Anything it rejects stops propagation, so no later handler runs.
    """
    user = message.from_user
    if not user:
        raise StopPropagation

    command = parse_command(message.text)
    if command in PUBLIC_COMMANDS:
        return

    if user.id == Config.OWNER_ID:
        return

    if command in OWNER_COMMANDS:
        logger.warning(f"User {user.id} tried owner command /{command}")
        await message.reply(NOT_OWNER)
        raise StopPropagation

    if not client.acl.is_authorized(user.id):
        logger.info(f"Access check: user {user.id} → not authorized")
        await message.reply(NOT_AUTHORIZED)
        raise StopPropagation
