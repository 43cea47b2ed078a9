"""Standings cog for the Shuttle Rotation Bot."""

import discord
from discord import app_commands
from discord.ext import commands

from database import session_key
from matchmaking import compute_final_standings, reset_results
from models import SessionState
from utils import Colors, log
from utils.helpers import create_info_embed, create_success_embed, format_standings_row


def build_standings_embed(state: SessionState, title: str) -> discord.Embed:
    """Embed listing every roster player's rank."""
    standings = compute_final_standings(state.players)
    embed = create_info_embed(title)

    if not standings:
        embed.description = "No players in this session."
        return embed

    embed.description = "\n".join(format_standings_row(s) for s in standings)
    decided = sum(1 for m in state.matches if m.is_finished)
    embed.set_footer(text=f"{decided} match(es) played | Ranked by win rate, then wins, then fewest losses")
    return embed


class Standings(commands.Cog):
    """Cog for session standings and closing a session."""

    def __init__(self, bot: commands.Bot):
        self.bot = bot

    @app_commands.command(name="standings", description="View the current standings")
    async def standings(self, interaction: discord.Interaction) -> None:
        """Display standings for the players on the roster."""
        log("STANDINGS", f"standings command invoked by {interaction.user}", Colors.CYAN)
        state = await self.bot.load_state(interaction.channel_id)
        await interaction.response.send_message(embed=build_standings_embed(state, "Standings"))

    @app_commands.command(name="finish", description="Finish the session and show the final results")
    async def finish(self, interaction: discord.Interaction) -> None:
        """Post final results and clear the session."""
        log("STANDINGS", f"finish command invoked by {interaction.user}", Colors.CYAN)
        state = await self.bot.load_state(interaction.channel_id)
        embed = build_standings_embed(state, "Tournament Results")

        await self.bot.db.delete_session(session_key(interaction.channel_id))
        await interaction.response.send_message(embed=embed)

    @app_commands.command(name="restart", description="Clear all matches and stats, keeping the players")
    async def restart(self, interaction: discord.Interaction) -> None:
        """Start the session over with the same roster."""
        state = await self.bot.load_state(interaction.channel_id)
        reset_results(state)
        await self.bot.save_state(interaction.channel_id, state)

        await interaction.response.send_message(
            embed=create_success_embed(
                "Session Restarted",
                f"All results cleared for {len(state.players)} player(s). Use **/newmatch** to begin."
            )
        )


async def setup(bot: commands.Bot) -> None:
    """Set up the standings cog."""
    await bot.add_cog(Standings(bot))
