import secrets
from pyrogram import Client, filters
from pyrogram.types import Message
from config import Config
from db import AclStoreError
from log import get_logger
from utils.helpers import get_display_name, send_reply

logger = get_logger(__name__)

@Client.on_message(filters.command("start"))
async def start_command(client: Client, message: Message):
    user = message.from_user
    name = get_display_name(user)

    if user.id != Config.OWNER_ID and not client.acl.is_authorized(user.id):
        await message.reply(f"Hello {name}, use `/auth [password]` to authorize.")
        return

    await message.reply(
        f"Hello {name}, use /q to search\n\n"
        "`/q [series name]` to continue..."
    )

@Client.on_message(filters.command("auth"))
async def auth_command(client: Client, message: Message):
    user = message.from_user
    name = get_display_name(user)
    acl = client.acl

    if acl.is_revoked(user.id):
        await message.reply("Your access has been revoked, ask the bot owner to restore it.")
        return

    if user.id == Config.OWNER_ID or acl.is_authorized(user.id):
        await message.reply("You are already authorized, type /start to get started.")
        return

    args = message.command[1:]
    password = args[0] if args else ""
    if not Config.BOT_PASSWORD or not secrets.compare_digest(password.encode(), Config.BOT_PASSWORD.encode()):
        logger.warning(f"Failed /auth attempt from {name} ({user.id})")
        await message.reply("Invalid password.")
        return

    try:
        await acl.authorize(user.id, name)
    except AclStoreError:
        await message.reply("Oh no! Error: could not save the access list, try again later.")
        return

    await message.reply("You have been authorized, type /start to get started.")

    if Config.OWNER_ID:
        try:
            await client.send_message(Config.OWNER_ID, f"{name} has been granted access to the bot.")
        except Exception as e:
            logger.warning(f"Failed to notify owner about {user.id}: {e}")

@Client.on_message(filters.command("clear"))
async def clear_command(client: Client, message: Message):
    await send_reply(message, client.flow.clear(message.from_user.id))
