from pyrogram.enums import ParseMode
from pyrogram.types import ReplyKeyboardMarkup, ReplyKeyboardRemove

# Every command the bot registers; free-text replies exclude these
BOT_COMMANDS = [
    "start", "auth", "q", "query", "clear", "users",
    "revoke", "unrevoke", "rss", "refresh", "status",
]

def parse_command(text):
    """'/Revoke@my_bot foo' -> 'revoke'. Returns None for non-command text."""
    if not text or not text.startswith("/"):
        return None
    head = text.split(maxsplit=1)[0][1:]
    return head.split("@", 1)[0].lower() or None

def get_display_name(user):
    if user.username:
        return f"@{user.username}"
    name = user.first_name or ""
    if user.last_name:
        name += f" {user.last_name}"
    return name.strip() or str(user.id)

def to_markup(reply):
    if reply.keyboard:
        return ReplyKeyboardMarkup(reply.keyboard, one_time_keyboard=True, resize_keyboard=True, selective=True)
    if reply.remove_keyboard:
        return ReplyKeyboardRemove(selective=True)
    return None

async def send_reply(message, reply):
    if reply is None:
        return
    # Reply texts are HTML with user-supplied parts escaped
    await message.reply(
        reply.text, reply_markup=to_markup(reply),
        parse_mode=ParseMode.HTML, disable_web_page_preview=True
    )
