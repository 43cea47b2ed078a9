"""Cost splitting cog for the Shuttle Rotation Bot."""

import discord
from discord import app_commands
from discord.ext import commands
from typing import Optional

from errors import MatchmakingError
from matchmaking import (
    all_players_pay_same,
    calculate_player_costs,
    calculate_total_cost,
    format_phone_number,
    resolve_expenses,
    resolve_player_hours,
    validate_promptpay,
)
from models import CourtFee, Shuttlecock
from utils import Colors, log
from utils.helpers import (
    create_error_embed,
    create_info_embed,
    format_expense,
    parse_extras,
    parse_hours,
    truncate_string,
)


class Costs(commands.Cog):
    """Cog for splitting court and shuttlecock costs."""

    def __init__(self, bot: commands.Bot):
        self.bot = bot

    @app_commands.command(name="splitcosts", description="Split the session costs between players")
    @app_commands.describe(
        court_rate="Court fee per hour",
        court_hours="Hours the court was booked",
        shuttles="Shuttlecocks used",
        shuttle_price="Price per shuttlecock",
        hours="Hours per player if not everyone stayed, e.g. Alice=2 Bob=1.5",
        extras="Extra costs, e.g. Drinks=120, Rackets=50!@Alice (! = each pays in full, @ = only these players)",
        promptpay="PromptPay mobile number to pay to"
    )
    async def split_costs(
        self,
        interaction: discord.Interaction,
        court_rate: float,
        court_hours: float,
        shuttles: int = 0,
        shuttle_price: float = 0.0,
        hours: Optional[str] = None,
        extras: Optional[str] = None,
        promptpay: Optional[str] = None
    ) -> None:
        """Show what each player owes."""
        log("COSTS", f"splitcosts invoked by {interaction.user}", Colors.CYAN)
        state = await self.bot.load_state(interaction.channel_id)

        if not state.players:
            await interaction.response.send_message(
                embed=create_error_embed("No Players", "Add players before splitting costs."),
                ephemeral=True
            )
            return

        if court_rate < 0 or court_hours < 0 or shuttles < 0 or shuttle_price < 0:
            await interaction.response.send_message(
                embed=create_error_embed("Invalid Amount", "Costs and quantities cannot be negative."),
                ephemeral=True
            )
            return

        pay_to = None
        if promptpay:
            pay_to = format_phone_number(promptpay)
            if not validate_promptpay(pay_to):
                await interaction.response.send_message(
                    embed=create_error_embed(
                        "Invalid PromptPay Number",
                        "Enter a 10-digit mobile number starting with 06, 08 or 09."
                    ),
                    ephemeral=True
                )
                return

        # Everyone defaults to the full booking
        try:
            player_hours = resolve_player_hours(state, parse_hours(hours), court_hours)
            expenses = resolve_expenses(state, parse_extras(extras))
        except MatchmakingError as e:
            log("COSTS", f"  ERROR: {e.message}", Colors.RED)
            await interaction.response.send_message(
                embed=create_error_embed("Cannot Split Costs", e.user_message),
                ephemeral=True
            )
            return

        court_fee = CourtFee(hourly_rate=court_rate, hours=court_hours)
        shuttlecock = Shuttlecock(quantity=shuttles, price_per_piece=shuttle_price)

        costs = calculate_player_costs(player_hours, court_fee, shuttlecock, expenses)
        total = calculate_total_cost(court_fee, shuttlecock, expenses, len(player_hours))

        embed = create_info_embed("Cost Breakdown")
        lines = []
        for cost in costs:
            line = f"**{cost.name}** ({cost.hours:g}h): {cost.total:.2f}"
            if cost.custom_expenses:
                line += f" *(shared {cost.shared_cost:.2f} + extras {cost.custom_expenses:.2f})*"
            lines.append(line)
        embed.description = "\n".join(lines)

        if expenses:
            extras_text = "\n".join(format_expense(e) for e in expenses)
            embed.add_field(name="Extras", value=truncate_string(extras_text, 1024), inline=False)

        embed.add_field(name="Total", value=f"{total:.2f}", inline=True)
        if all_players_pay_same(costs):
            embed.add_field(name="Per Player", value=f"{costs[0].total:.2f}", inline=True)
        if pay_to:
            embed.add_field(name="PromptPay", value=pay_to, inline=False)

        await interaction.response.send_message(embed=embed)


async def setup(bot: commands.Bot) -> None:
    """Set up the costs cog."""
    await bot.add_cog(Costs(bot))
