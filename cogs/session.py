"""Match session cog for the Shuttle Rotation Bot."""

import asyncio
import discord
from discord import app_commands, ui
from discord.ext import commands
from typing import Optional

from errors import MatchmakingError
from matchmaking import can_create_match, create_next_match, report_winner, revert_match
from models import Match, SessionState
from utils import Colors, log
from utils.helpers import (
    create_error_embed,
    create_info_embed,
    create_success_embed,
    format_match_line,
    format_team,
)


def build_match_embed(state: SessionState, match: Match) -> discord.Embed:
    """Embed showing a pairing and, once decided, its winner."""
    number = state.matches.index(match) + 1 if match in state.matches else match.id
    embed = create_info_embed(f"Match {number}")
    embed.add_field(name="Team 1", value=format_team(state, match.team1), inline=True)
    embed.add_field(name="Team 2", value=format_team(state, match.team2), inline=True)

    if match.is_finished:
        embed.add_field(
            name="Result",
            value=f"{format_team(state, match.winning_team())} won!",
            inline=False
        )
    embed.set_footer(text=f"Match #{match.id}")
    return embed


class MatchResultView(ui.View):
    """Buttons for reporting the winner of a match."""

    def __init__(self, cog: "Session", match_id: int):
        super().__init__(timeout=None)
        self.cog = cog
        self.match_id = match_id

    @ui.button(label="Team 1 Wins", style=discord.ButtonStyle.primary)
    async def team1_wins(self, interaction: discord.Interaction, button: ui.Button) -> None:
        await self.cog.handle_winner(interaction, self.match_id, "team1", view=self)

    @ui.button(label="Team 2 Wins", style=discord.ButtonStyle.primary)
    async def team2_wins(self, interaction: discord.Interaction, button: ui.Button) -> None:
        await self.cog.handle_winner(interaction, self.match_id, "team2", view=self)


class Session(commands.Cog):
    """Cog for creating matches and recording results."""

    def __init__(self, bot: commands.Bot):
        self.bot = bot

    async def post_match(self, channel: discord.abc.Messageable, state: SessionState, match: Match) -> None:
        """Send a new pairing with result buttons."""
        await channel.send(
            embed=build_match_embed(state, match),
            view=MatchResultView(self, match.id)
        )

    async def handle_winner(
        self,
        interaction: discord.Interaction,
        match_id: int,
        winner: str,
        view: Optional[ui.View] = None
    ) -> None:
        """Record a winner, then queue the next match."""
        log("SESSION", f"{interaction.user} reported {winner} for match #{match_id}", Colors.CYAN)
        channel_id = interaction.channel_id
        state = await self.bot.load_state(channel_id)

        try:
            match = report_winner(state, match_id, winner)
        except MatchmakingError as e:
            log("SESSION", f"  ERROR: {e.message}", Colors.RED)
            await interaction.response.send_message(
                embed=create_error_embed("Cannot Record Result", e.user_message),
                ephemeral=True
            )
            return

        await self.bot.save_state(channel_id, state)

        embed = build_match_embed(state, match)
        if view is not None:
            view.stop()
            await interaction.response.edit_message(embed=embed, view=None)
        else:
            await interaction.response.send_message(embed=embed)

        await self.queue_next_match(interaction.channel, channel_id)

    async def queue_next_match(self, channel: discord.abc.Messageable, channel_id: int) -> None:
        """Create the next match after a short pause, if still possible."""
        await asyncio.sleep(self.bot.config.next_match_delay)

        state = await self.bot.load_state(channel_id)
        if not can_create_match(state):
            log("SESSION", "Skipping automatic match: session not ready", Colors.YELLOW)
            return

        try:
            match = create_next_match(state)
        except MatchmakingError as e:
            log("SESSION", f"Automatic match failed: {e.message}", Colors.YELLOW)
            return

        await self.bot.save_state(channel_id, state)
        await self.post_match(channel, state, match)

    @app_commands.command(name="newmatch", description="Create the next match")
    async def new_match(self, interaction: discord.Interaction) -> None:
        """Pick four players for the next match."""
        log("SESSION", f"newmatch command invoked by {interaction.user}", Colors.CYAN)
        state = await self.bot.load_state(interaction.channel_id)

        try:
            match = create_next_match(state)
        except MatchmakingError as e:
            log("SESSION", f"  ERROR: {e.message}", Colors.RED)
            await interaction.response.send_message(
                embed=create_error_embed("Cannot Create Match", e.user_message),
                ephemeral=True
            )
            return

        await self.bot.save_state(interaction.channel_id, state)
        await interaction.response.send_message(
            embed=build_match_embed(state, match),
            view=MatchResultView(self, match.id)
        )

    @app_commands.command(name="winner", description="Report the winner of a match")
    @app_commands.describe(match="Match number shown in the footer", team="Winning team")
    @app_commands.choices(team=[
        app_commands.Choice(name="Team 1", value="team1"),
        app_commands.Choice(name="Team 2", value="team2"),
    ])
    async def winner(
        self,
        interaction: discord.Interaction,
        match: int,
        team: app_commands.Choice[str]
    ) -> None:
        """Record a result without using the buttons."""
        await self.handle_winner(interaction, match, team.value)

    @app_commands.command(name="revert", description="Undo a match and every match after it")
    @app_commands.describe(match="Match number shown in the footer")
    async def revert(self, interaction: discord.Interaction, match: int) -> None:
        """Revert a match, undoing its result and all later ones."""
        log("SESSION", f"revert command invoked by {interaction.user} for #{match}", Colors.CYAN)
        state = await self.bot.load_state(interaction.channel_id)

        try:
            removed = revert_match(state, match)
        except MatchmakingError as e:
            log("SESSION", f"  ERROR: {e.message}", Colors.RED)
            await interaction.response.send_message(
                embed=create_error_embed("Cannot Revert", e.user_message),
                ephemeral=True
            )
            return

        await self.bot.save_state(interaction.channel_id, state)

        description = f"Removed {len(removed)} match(es), starting at #{match}."
        if can_create_match(state):
            description += "\nUse **/newmatch** to continue."
        await interaction.response.send_message(
            embed=create_success_embed("Match Reverted", description)
        )

    @app_commands.command(name="history", description="View recent matches")
    @app_commands.describe(count="Number of matches to show (default 5, max 15)")
    async def history(self, interaction: discord.Interaction, count: int = 5) -> None:
        """Display the most recent matches."""
        count = max(1, min(count, 15))  # Clamp between 1 and 15
        state = await self.bot.load_state(interaction.channel_id)

        if not state.matches:
            await interaction.response.send_message(
                embed=create_info_embed("Match History", "No matches have been played yet!")
            )
            return

        total = len(state.matches)
        lines = [
            format_match_line(state, m, number)
            for number, m in enumerate(state.matches, 1)
        ][-count:]

        embed = create_info_embed(f"Last {len(lines)} of {total} Match(es)")
        embed.description = "\n".join(lines)
        await interaction.response.send_message(embed=embed)


async def setup(bot: commands.Bot) -> None:
    """Set up the session cog."""
    await bot.add_cog(Session(bot))
