import asyncio
import time
from pyrogram import Client, idle
from config import Config
from db import get_acl_store
from log import get_logger
from utils.acl import AccessList
from utils.flow import Conversation
from utils.sonarr import SonarrAPI
from utils.states import SessionStore

logger = get_logger(__name__)

class SonarrBot(Client):
    """Pyrogram client carrying the services every plugin handler needs."""

    def __init__(self, acl, sonarr, sessions, flow, **kwargs):
        super().__init__(**kwargs)
        self.acl = acl
        self.sonarr = sonarr
        self.sessions = sessions
        self.flow = flow

async def session_cleanup_loop(sessions):
    logger.info("Starting Session Cleanup Loop...")
    while True:
        try:
            purged = sessions.purge_expired()
            if purged:
                logger.info(f"Dropped {purged} expired sessions.")
        except Exception as e:
            logger.error(f"Session Cleanup Loop Error: {e}")
        await asyncio.sleep(60)

async def main():
    # Set Start Time
    Config.START_TIME = time.time()

    # Load Access Lists
    acl = await AccessList.load(get_acl_store(Config))

    sonarr = SonarrAPI(
        hostname=Config.SONARR_HOST,
        api_key=Config.SONARR_APIKEY,
        port=Config.SONARR_PORT,
        url_base=Config.SONARR_URLBASE,
        ssl=Config.SONARR_SSL,
        username=Config.SONARR_USERNAME,
        password=Config.SONARR_PASSWORD,
    )

    sessions = SessionStore(ttl=Config.SESSION_TTL)
    flow = Conversation(sonarr, sessions, acl, max_results=Config.MAX_RESULTS)

    # Initialize Bot
    plugins = dict(root="plugins")
    app = SonarrBot(
        acl, sonarr, sessions, flow,
        name="sonarr_bot",
        api_id=Config.API_ID,
        api_hash=Config.API_HASH,
        bot_token=Config.BOT_TOKEN,
        plugins=plugins
    )

    await app.start()

    me = await app.get_me()

    # Startup Logs
    logger.info("========================================")
    logger.info(f"🚀 Sonarr Bot v{Config.BOT_VERSION}")
    logger.info(f"👤 Bot: @{me.username} ({me.id})")
    logger.info(f"🔑 Owner ID: {Config.OWNER_ID}")
    logger.info(f"📺 Sonarr: {sonarr.api_url}")
    logger.info("========================================")

    if not Config.OWNER_ID:
        logger.warning("OWNER_ID is not set, owner commands are unavailable.")
    if not Config.BOT_PASSWORD:
        logger.warning("BOT_PASSWORD is not set, /auth will refuse everyone.")

    # Start Background Tasks
    cleanup_task = asyncio.create_task(session_cleanup_loop(sessions))

    await idle()
    cleanup_task.cancel()
    await app.stop()

if __name__ == "__main__":
    asyncio.run(main())
