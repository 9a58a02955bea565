import datetime
import platform
import time
import asyncio
import psutil
import pyrogram
from pyrogram import Client, filters
from pyrogram.types import Message
from config import Config
from log import get_logger
from utils.sonarr import SonarrError

logger = get_logger(__name__)

# Helper Functions
def format_uptime(seconds: float) -> str:
    if seconds is None:
        return "Unknown"
    dt = datetime.timedelta(seconds=int(seconds))
    days = dt.days
    hours, remainder = divmod(dt.seconds, 3600)
    minutes, _ = divmod(remainder, 60)
    return f"{days}d {hours}h {minutes}m"

def get_readable_size(size: int) -> str:
    power = 2**10
    n = 0
    power_labels = {0: 'B', 1: 'KB', 2: 'MB', 3: 'GB', 4: 'TB'}
    while size >= power and n < 4:
        size /= power
        n += 1
    return f"{size:.2f} {power_labels[n]}"

async def get_system_stats(client):
    try:
        # Run blocking psutil calls in a thread
        cpu_percent = await asyncio.to_thread(psutil.cpu_percent, interval=0.5)
        mem = await asyncio.to_thread(psutil.virtual_memory)
        ram_used = get_readable_size(mem.used)
        ram_total = get_readable_size(mem.total)
    except Exception as e:
        logger.warning(f"System stats unavailable: {e}")
        cpu_percent = "N/A"
        ram_used = "N/A"
        ram_total = "N/A"

    uptime_seconds = time.time() - Config.START_TIME if Config.START_TIME else 0

    return {
        "cpu": cpu_percent,
        "ram_used": ram_used,
        "ram_total": ram_total,
        "python_ver": platform.python_version(),
        "pyro_ver": pyrogram.__version__,
        "uptime": format_uptime(uptime_seconds),
        "sessions": len(client.flow.sessions),
        "users": len(client.acl.allowed_users),
    }

def build_status_text(stats):
    return (
        f"**🤖 Sonarr Bot v{Config.BOT_VERSION}**\n"
        f"⏳ Uptime: {stats['uptime']}\n"
        f"👥 Allowed users: {stats['users']}\n"
        f"💬 Open sessions: {stats['sessions']}\n\n"
        "**💻 System**\n"
        f"├ CPU: {stats['cpu']}%\n"
        f"└ RAM: {stats['ram_used']} / {stats['ram_total']}\n\n"
        "**🛠 Tech Stack**\n"
        f"├ Python: v{stats['python_ver']}\n"
        f"└ Pyrogram: v{stats['pyro_ver']}"
    )

@Client.on_message(filters.command("status"))
async def status_handler(client: Client, message: Message):
    stats = await get_system_stats(client)
    await message.reply(build_status_text(stats))

# --- Sonarr commands ---

async def run_sonarr_command(client, message, name, done_text):
    try:
        await client.sonarr.run_command(name)
    except SonarrError as e:
        logger.error(f"Sonarr command {name} failed: {e}")
        await message.reply(f"Oh no! Error: could not send the {name} command.")
        return
    logger.info(f"{message.from_user.id} sent command {name}")
    await message.reply(done_text)

@Client.on_message(filters.command("rss"))
async def rss_handler(client: Client, message: Message):
    await run_sonarr_command(client, message, "RssSync", "RSS Sync command sent.")

@Client.on_message(filters.command("refresh"))
async def refresh_handler(client: Client, message: Message):
    await run_sonarr_command(client, message, "RefreshSeries", "Refresh series command sent.")
