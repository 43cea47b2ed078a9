"""Main bot entry point for the Shuttle Rotation Bot."""

import asyncio
import logging
from dotenv import load_dotenv
load_dotenv()

import aiosqlite
import discord
from discord import app_commands
from discord.ext import commands

from config import Config, EMBED_COLOR, MAX_PLAYERS, MIN_PLAYERS
from database import Database, session_key
from models import SessionState
from utils import Colors, log

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("shuttle-bot")

COGS = ("cogs.roster", "cogs.session", "cogs.standings", "cogs.costs")


class ShuttleBot(commands.Bot):
    """Discord bot that runs doubles badminton sessions."""

    def __init__(self, config: Config):
        intents = discord.Intents.default()

        super().__init__(
            command_prefix="!",
            intents=intents,
            help_command=None
        )

        self.config = config
        self.db = Database(config.database_path)

    async def setup_hook(self) -> None:
        """Called when the bot is starting up."""
        log("BOT", "setup_hook starting...", Colors.GREEN)
        # Connect to database
        await self.db.connect()
        log("BOT", "Database connected", Colors.GREEN)
        stored = await self.db.list_session_keys()
        log("BOT", f"  {len(stored)} stored session(s)", Colors.GREEN)

        # Load cogs
        for extension in COGS:
            await self.load_extension(extension)
            log("BOT", f"  Loaded {extension}", Colors.GREEN)

        # Sync commands
        log("BOT", "Syncing commands...", Colors.GREEN)
        await self.tree.sync()
        log("BOT", "Commands synced!", Colors.GREEN)

    async def on_ready(self) -> None:
        """Called when the bot is ready."""
        log("BOT", f"Logged in as {self.user} (ID: {self.user.id})", Colors.GREEN)
        log("BOT", f"Connected to {len(self.guilds)} guild(s)", Colors.GREEN)

    async def load_state(self, channel_id: int) -> SessionState:
        """Load the session for a channel."""
        return await self.db.load_session(session_key(channel_id))

    async def save_state(self, channel_id: int, state: SessionState) -> None:
        """Persist the session for a channel; failures are logged, not raised."""
        try:
            await self.db.save_session(session_key(channel_id), state)
        except aiosqlite.Error:
            logger.exception("Failed to save session for channel %s", channel_id)

    async def close(self) -> None:
        """Clean up on shutdown."""
        await self.db.close()
        await super().close()


@app_commands.command(name="help", description="Get help with the Shuttle Rotation Bot commands")
async def help_command(interaction: discord.Interaction) -> None:
    """Display help information about all commands."""
    embed = discord.Embed(
        title="Shuttle Rotation Bot - Help",
        description=f"Run a doubles session for {MIN_PLAYERS}-{MAX_PLAYERS} players on one court.",
        color=EMBED_COLOR
    )

    embed.add_field(
        name="Players",
        value=(
            "**/addplayer** `name` - Add a player\n"
            "**/renameplayer** `player` `name` - Rename a player\n"
            "**/removeplayer** `player` - Remove a player\n"
            "**/roster** - View players and records"
        ),
        inline=False
    )

    embed.add_field(
        name="Matches",
        value=(
            "**/newmatch** - Create the next match\n"
            "**/winner** `match` `team` - Report a result\n"
            "**/revert** `match` - Undo a match and everything after it\n"
            "**/history** `[count]` - View recent matches"
        ),
        inline=False
    )

    embed.add_field(
        name="Results",
        value=(
            "**/standings** - Current standings\n"
            "**/finish** - Final results, then clear the session\n"
            "**/restart** - Clear results, keep the players\n"
            "**/splitcosts** - Split court and shuttlecock costs"
        ),
        inline=False
    )

    embed.set_footer(text="The next match is created automatically after each result.")

    await interaction.response.send_message(embed=embed)


async def main() -> None:
    """Main entry point."""
    config = Config.from_env()
    bot = ShuttleBot(config)

    # Add help command to tree
    bot.tree.add_command(help_command)

    async with bot:
        await bot.start(config.discord_token)


if __name__ == "__main__":
    asyncio.run(main())
