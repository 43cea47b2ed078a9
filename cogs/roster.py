"""Roster cog for the Shuttle Rotation Bot."""

import discord
from discord import app_commands
from discord.ext import commands

from config import MAX_PLAYERS, MIN_PLAYERS
from errors import MatchmakingError
from matchmaking import add_player, find_player, remove_player, rename_player, win_rate
from utils import Colors, log
from utils.helpers import (
    create_error_embed,
    create_info_embed,
    create_success_embed,
    format_win_rate,
    history_kept_note,
)


class Roster(commands.Cog):
    """Cog for managing the players in a session."""

    def __init__(self, bot: commands.Bot):
        self.bot = bot

    async def _send_error(self, interaction: discord.Interaction, title: str, error: MatchmakingError) -> None:
        log("ROSTER", f"  ERROR: {error.message}", Colors.RED)
        await interaction.response.send_message(
            embed=create_error_embed(title, error.user_message),
            ephemeral=True
        )

    @app_commands.command(name="addplayer", description="Add a player to the session")
    @app_commands.describe(name="Player name (max 16 characters)")
    async def add(self, interaction: discord.Interaction, name: str) -> None:
        """Add a player to the roster."""
        log("ROSTER", f"addplayer '{name}' invoked by {interaction.user}", Colors.CYAN)
        state = await self.bot.load_state(interaction.channel_id)

        try:
            player = add_player(state, name)
        except MatchmakingError as e:
            await self._send_error(interaction, "Cannot Add Player", e)
            return

        await self.bot.save_state(interaction.channel_id, state)

        size = len(state.players)
        description = f"**{player.name}** joined the session ({size}/{MAX_PLAYERS})."
        if size < MIN_PLAYERS:
            description += f"\nAdd {MIN_PLAYERS - size} more to start matching."
        description += history_kept_note(state)
        await interaction.response.send_message(
            embed=create_success_embed("Player Added", description)
        )

    @app_commands.command(name="renameplayer", description="Rename a player")
    @app_commands.describe(player="Current name", name="New name")
    async def rename(self, interaction: discord.Interaction, player: str, name: str) -> None:
        """Rename a player on the roster."""
        state = await self.bot.load_state(interaction.channel_id)

        try:
            target = find_player(state, player)
            old_name = target.name
            rename_player(state, target.id, name)
        except MatchmakingError as e:
            await self._send_error(interaction, "Cannot Rename Player", e)
            return

        await self.bot.save_state(interaction.channel_id, state)
        await interaction.response.send_message(
            embed=create_success_embed("Player Renamed", f"**{old_name}** is now **{target.name}**.")
        )

    @app_commands.command(name="removeplayer", description="Remove a player from the session")
    @app_commands.describe(player="Player name")
    async def remove(self, interaction: discord.Interaction, player: str) -> None:
        """Remove a player; an open match with them in it is cancelled."""
        state = await self.bot.load_state(interaction.channel_id)
        open_before = state.latest_match is not None and not state.latest_match.is_finished

        try:
            target = find_player(state, player)
            remove_player(state, target.id)
        except MatchmakingError as e:
            await self._send_error(interaction, "Cannot Remove Player", e)
            return

        await self.bot.save_state(interaction.channel_id, state)

        description = f"**{target.name}** left the session."
        open_after = state.latest_match is not None and not state.latest_match.is_finished
        if open_before and not open_after:
            description += "\nThe match they were playing in was cancelled."
        description += history_kept_note(state)
        await interaction.response.send_message(
            embed=create_success_embed("Player Removed", description)
        )

    @app_commands.command(name="roster", description="View the players in this session")
    async def roster(self, interaction: discord.Interaction) -> None:
        """Display the roster with each player's record."""
        state = await self.bot.load_state(interaction.channel_id)

        if not state.players:
            await interaction.response.send_message(
                embed=create_info_embed("Roster", "No players yet! Use **/addplayer** to add some.")
            )
            return

        embed = create_info_embed(f"Roster ({len(state.players)}/{MAX_PLAYERS})")
        for player in state.players:
            embed.add_field(
                name=player.name,
                value=(
                    f"**Wins:** {player.wins} | **Losses:** {player.losses}\n"
                    f"**Matches:** {player.matches_played} | "
                    f"**Win Rate:** {format_win_rate(win_rate(player) * 100)}"
                ),
                inline=False
            )

        await interaction.response.send_message(embed=embed)


async def setup(bot: commands.Bot) -> None:
    """Set up the roster cog."""
    await bot.add_cog(Roster(bot))
