"""Suggestion service - rule-based recommendations for a vision board.

Rules read the legacy sections (financial goals, team plan, systems, brand
goals, lifestyle vision) and the most recent monthly updates. No external
model is involved.
"""
from app.models.monthly_update import MonthlyUpdate
from app.models.suggestion import Suggestion
from app.services.monthly_update_service import MonthlyUpdateService, as_number
from app.utils.sections import locate_section

PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}

RECENT_UPDATE_COUNT = 3


def _money(amount: float) -> str:
    return f"${amount:,.0f}"


def generate_suggestions(board_doc: dict, recent_updates: list[MonthlyUpdate]) -> list[Suggestion]:
    """
    Apply the suggestion rules to a board and its recent updates.

    Args:
        board_doc: Stored vision board document
        recent_updates: Monthly updates, most recent first

    Returns:
        Suggestions ordered high, medium, then low priority
    """

    def data_of(section_name: str) -> dict:
        section = locate_section(board_doc, section_name) or {}
        return section.get("data") or {}

    financial_goals = data_of("financialGoals")
    team_plan = data_of("teamPlan")
    systems_to_build = data_of("systemsToBuild")
    brand_goals = data_of("brandGoals")
    lifestyle_vision = data_of("lifestyleVision")

    annual_revenue = as_number(financial_goals.get("annualRevenue"))
    monthly_revenue = as_number(financial_goals.get("monthlyRevenue"))
    profit_margin = as_number(financial_goals.get("profitMargin"))

    suggestions = []

    # Revenue vs team
    roles = team_plan.get("roles") if isinstance(team_plan.get("roles"), list) else []
    if annual_revenue > 1_000_000 and len(roles) < 3:
        member_word = "member" if len(roles) == 1 else "members"
        suggestions.append(Suggestion(
            type="warning",
            category="Team",
            title="Team Scaling Needed",
            message=(
                f"Your annual revenue target of {_money(annual_revenue)} is ambitious. "
                f"With only {len(roles)} team {member_word} planned, consider expanding "
                "your team capacity to achieve this goal."
            ),
            action="Review your team plan to ensure adequate support for revenue targets.",
            priority="high",
        ))

    # Systems vs revenue
    systems = systems_to_build.get("systems") if isinstance(systems_to_build.get("systems"), list) else []
    completed_systems = sum(
        1 for system in systems if isinstance(system, dict) and system.get("status") == "completed"
    )
    if completed_systems < 3 and annual_revenue > 500_000:
        suggestions.append(Suggestion(
            type="recommendation",
            category="Systems",
            title="Build Core Systems First",
            message=(
                f"You have {completed_systems} completed systems. For a revenue target of "
                f"{_money(annual_revenue)}, focus on building CRM, Sales Funnel, and "
                "Operations systems before scaling."
            ),
            action="Prioritize system development in your quarterly planning.",
            priority="high",
        ))

    if 0 < profit_margin < 15:
        suggestions.append(Suggestion(
            type="alert",
            category="Financial",
            title="Profit Margin Alert",
            message=(
                f"Your target profit margin of {profit_margin:g}% is below the recommended 15%. "
                "This may impact your ability to reinvest in growth and handle unexpected expenses."
            ),
            action="Review your pricing strategy and operational costs.",
            priority="high",
        ))

    working_hours = as_number(lifestyle_vision.get("workingHours"))
    if working_hours > 10 and annual_revenue > 500_000:
        suggestions.append(Suggestion(
            type="warning",
            category="Lifestyle",
            title="Work-Life Balance Risk",
            message=(
                f"Your target of {working_hours:g} hours/day with high revenue goals may lead to "
                "burnout. Consider building systems and team to reduce your direct involvement."
            ),
            action="Plan for delegation and automation to achieve sustainable growth.",
            priority="medium",
        ))

    # Monthly and annual targets should agree within 10%
    if monthly_revenue > 0 and annual_revenue > 0:
        implied_annual = monthly_revenue * 12
        variance = abs(implied_annual - annual_revenue) / annual_revenue * 100
        if variance > 10:
            suggestions.append(Suggestion(
                type="info",
                category="Financial",
                title="Revenue Goal Alignment",
                message=(
                    f"Your monthly revenue target ({_money(monthly_revenue)}/mo) implies "
                    f"{_money(implied_annual)}/year, which differs from your annual target "
                    f"by {variance:.1f}%."
                ),
                action="Align your monthly and annual targets for clearer progress tracking.",
                priority="low",
            ))

    website_leads = as_number(brand_goals.get("websiteLeads"))
    if website_leads > 100 and completed_systems < 2:
        suggestions.append(Suggestion(
            type="recommendation",
            category="Marketing",
            title="Lead Generation Capacity",
            message=(
                f"Targeting {website_leads:g} leads/month is ambitious. Ensure you have systems "
                "to capture, nurture, and convert these leads effectively."
            ),
            action="Build your CRM and email marketing systems before scaling lead generation.",
            priority="medium",
        ))

    if board_doc.get("overall_progress", 0) < 50 and not recent_updates:
        suggestions.append(Suggestion(
            type="info",
            category="Progress",
            title="Start Tracking Progress",
            message=(
                "Your vision board is under 50% complete with no monthly updates yet. "
                "Regular progress tracking helps maintain momentum."
            ),
            action="Complete your vision board sections and start adding monthly updates.",
            priority="medium",
        ))

    if recent_updates:
        latest = recent_updates[0]
        actual_vs_target = latest.actual_revenue / (monthly_revenue or 1)
        if actual_vs_target < 0.7:
            suggestions.append(Suggestion(
                type="alert",
                category="Performance",
                title="Revenue Below Target",
                message=(
                    f"Last month's revenue was {round((1 - actual_vs_target) * 100)}% below target. "
                    "Analyze what's working and what needs adjustment."
                ),
                action="Review your sales process and marketing efforts for quick wins.",
                priority="high",
            ))
        elif actual_vs_target > 1.2:
            suggestions.append(Suggestion(
                type="success",
                category="Performance",
                title="Exceeding Revenue Targets",
                message=(
                    f"You're exceeding your revenue targets by {round((actual_vs_target - 1) * 100)}%. "
                    "Consider raising your goals or investing in growth."
                ),
                action="Document what's working and scale successful strategies.",
                priority="low",
            ))

    # Cash reserve should cover 3+ months of expenses
    cash_reserve = as_number(financial_goals.get("cashReserve"))
    monthly_expenses = monthly_revenue * (1 - profit_margin / 100)
    months_covered = cash_reserve / monthly_expenses if monthly_expenses > 0 else 0
    if months_covered < 3 and annual_revenue > 250_000:
        suggestions.append(Suggestion(
            type="recommendation",
            category="Financial",
            title="Emergency Fund Goal",
            message=(
                f"Your cash reserve target covers approximately {months_covered:.1f} months of "
                "expenses. Aim for 3-6 months for financial security."
            ),
            action="Increase your cash reserve target to build a stronger financial cushion.",
            priority="medium",
        ))

    net_worth_target = as_number(lifestyle_vision.get("netWorth"))
    personal_income = as_number(financial_goals.get("personalIncome"))
    if net_worth_target > 0 and personal_income > 0:
        years_to_target = net_worth_target / personal_income
        if years_to_target > 10:
            suggestions.append(Suggestion(
                type="info",
                category="Wealth Building",
                title="Net Worth Trajectory",
                message=(
                    f"At your current personal income target, reaching {_money(net_worth_target)} "
                    f"net worth would take approximately {round(years_to_target)} years. "
                    "Consider additional income streams or investment strategies."
                ),
                action="Explore investment options and passive income opportunities.",
                priority="low",
            ))

    # Stable sort keeps rule order within a priority
    return sorted(suggestions, key=lambda suggestion: PRIORITY_ORDER[suggestion.priority])


class SuggestionService:
    """Service for building suggestions for a user's board."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.updates = MonthlyUpdateService(db)

    async def get_suggestions(self, user_id: str, board_id: str) -> list[Suggestion]:
        """
        Suggestions for a board based on its targets and latest updates.

        Raises:
            NotFoundError: If the board is not found
        """
        board_doc = await self.updates.boards.get_board_document(user_id, board_id)
        recent_updates = await self.updates.list_monthly_updates(
            user_id, board_id, limit=RECENT_UPDATE_COUNT
        )
        return generate_suggestions(board_doc, recent_updates)
