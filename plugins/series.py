from pyrogram import Client, filters
from pyrogram.types import Message
from log import get_logger
from utils.helpers import BOT_COMMANDS, send_reply

logger = get_logger(__name__)

@Client.on_message(filters.command(["q", "query"]))
async def query_command(client: Client, message: Message):
    parts = message.text.split(maxsplit=1)
    if len(parts) < 2 or not parts[1].strip():
        await message.reply("Usage: `/q [series name]`")
        return

    user_id = message.from_user.id
    try:
        reply = await client.flow.search(user_id, parts[1])
    except Exception as e:
        logger.error(f"Search failed for {user_id}: {e}")
        await message.reply("Oh no! Error: something went wrong, try searching again")
        return

    await send_reply(message, reply)

@Client.on_message(filters.text & filters.incoming & ~filters.command(BOT_COMMANDS), group=1)
async def wizard_input(client: Client, message: Message):
    """Free-text replies to whichever wizard step the user is on."""
    user_id = message.from_user.id
    try:
        reply = await client.flow.handle(user_id, message.text)
    except Exception as e:
        logger.error(f"Wizard step failed for {user_id}: {e}")
        client.flow.sessions.delete(user_id)
        await message.reply("Oh no! Error: something went wrong, try searching again")
        return

    await send_reply(message, reply)
