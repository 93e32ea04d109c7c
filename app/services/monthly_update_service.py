"""Monthly update service - actuals tracked against a board's targets."""
import logging
from datetime import datetime, timezone
from typing import Optional

from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from app.errors import PersistenceError, ValidationError
from app.models.monthly_update import (
    ActualMetrics,
    Comparison,
    ComparisonRow,
    ComparisonTargets,
    Month,
    MonthlyUpdate,
    MonthlyUpdateCreate,
    TargetMetrics,
)
from app.services.vision_board_service import VisionBoardService
from app.utils.sections import locate_section

logger = logging.getLogger(__name__)


def as_number(value) -> float:
    """Coerce a free-form section value to a number, 0 when it is not one."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value.replace(",", "").strip() or 0)
        except ValueError:
            return 0
    return 0


def targets_from_board(board_doc: dict) -> ComparisonTargets:
    """Read revenue, team and lead targets from the legacy sections."""

    def data_of(section_name: str) -> dict:
        section = locate_section(board_doc, section_name) or {}
        return section.get("data") or {}

    financial_goals = data_of("financialGoals")
    return ComparisonTargets(
        annual_revenue=as_number(financial_goals.get("annualRevenue")),
        monthly_revenue=as_number(financial_goals.get("monthlyRevenue")),
        team_size=as_number(data_of("teamPlan").get("teamSize")),
        leads=as_number(data_of("brandGoals").get("websiteLeads")),
    )


class MonthlyUpdateService:
    """Service for handling monthly progress updates."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.monthly_updates = db["monthly_updates"]
        self.boards = VisionBoardService(db)

    def _doc_to_update(self, doc: dict) -> MonthlyUpdate:
        """Convert database document to MonthlyUpdate model."""
        return MonthlyUpdate(
            _id=str(doc["_id"]),
            vision_board_id=doc["vision_board_id"],
            user_id=doc["user_id"],
            month=doc["month"],
            year=doc["year"],
            actual_revenue=doc.get("actual_revenue", 0),
            actual_team_size=doc.get("actual_team_size", 0),
            actual_leads=doc.get("actual_leads", 0),
            actual_customers=doc.get("actual_customers", 0),
            notes=doc.get("notes"),
            wins=doc.get("wins"),
            challenges=doc.get("challenges"),
            next_month_goals=doc.get("next_month_goals"),
            created_at=doc["created_at"],
            updated_at=doc["updated_at"],
        )

    async def list_monthly_updates(
        self,
        user_id: str,
        board_id: str,
        limit: Optional[int] = None,
    ) -> list[MonthlyUpdate]:
        """
        Progress history for a board, most recent month first.

        Args:
            user_id: User ID
            board_id: Vision board ID
            limit: Optional maximum number of updates

        Returns:
            List of monthly updates

        Raises:
            NotFoundError: If the board is not found
        """
        board_doc = await self.boards.get_board_document(user_id, board_id)

        cursor = self.monthly_updates.find(
            {"vision_board_id": str(board_doc["_id"])}
        ).sort([("year", -1), ("month_number", -1)])
        if limit:
            cursor = cursor.limit(limit)
        update_docs = await cursor.to_list(length=None)

        return [self._doc_to_update(doc) for doc in update_docs]

    async def upsert_monthly_update(
        self,
        user_id: str,
        board_id: str,
        update_create: MonthlyUpdateCreate,
    ) -> tuple[MonthlyUpdate, bool]:
        """
        Record the actuals for a month.

        An existing entry for the month keeps the stored values of any field
        the caller did not send. A new entry gets the model defaults for them.

        Args:
            user_id: User ID
            board_id: Vision board ID
            update_create: Month, year and actual metrics

        Returns:
            Tuple of (monthly update, True if it was newly created)

        Raises:
            NotFoundError: If the board is not found
            PersistenceError: If the write fails
        """
        board_doc = await self.boards.get_board_document(user_id, board_id)
        vision_board_id = str(board_doc["_id"])

        now = datetime.now(timezone.utc)
        fields = update_create.model_dump(mode="json", exclude_unset=True)
        fields.update({
            "month": update_create.month.value,
            "year": update_create.year,
            "month_number": update_create.month.number,
            "updated_at": now,
        })
        # Defaults only for fields the caller left out; Mongo rejects a path in both operators
        defaults = {
            key: value
            for key, value in update_create.model_dump(mode="json").items()
            if key not in fields
        }

        try:
            existing = await self.monthly_updates.find_one({
                "vision_board_id": vision_board_id,
                "month": update_create.month.value,
                "year": update_create.year,
            })
            updated_doc = await self.monthly_updates.find_one_and_update(
                {
                    "vision_board_id": vision_board_id,
                    "month": update_create.month.value,
                    "year": update_create.year,
                },
                {
                    "$set": fields,
                    "$setOnInsert": {**defaults, "user_id": user_id, "created_at": now},
                },
                upsert=True,
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error("Failed to save monthly update for board %s: %s", board_id, e)
            raise PersistenceError("Failed to save monthly update") from e

        created = existing is None
        logger.info(
            "%s monthly update %s %s for vision board %s",
            "Created" if created else "Updated",
            update_create.month.value,
            update_create.year,
            board_id,
        )
        return self._doc_to_update(updated_doc), created

    async def get_comparison(
        self,
        user_id: str,
        board_id: str,
        month: Optional[Month] = None,
        year: Optional[int] = None,
    ) -> Comparison:
        """
        Compare recorded actuals with the board's targets.

        Args:
            user_id: User ID
            board_id: Vision board ID
            month: Optional month filter (requires year)
            year: Optional year filter (requires month)

        Returns:
            Targets plus one row per matching month, oldest first

        Raises:
            ValidationError: If only one of month/year is given
            NotFoundError: If the board is not found
        """
        if (month is None) != (year is None):
            raise ValidationError("month and year must be given together")

        board_doc = await self.boards.get_board_document(user_id, board_id)
        targets = targets_from_board(board_doc)

        query = {"vision_board_id": str(board_doc["_id"])}
        if month is not None:
            query["month"] = month.value
            query["year"] = year

        cursor = self.monthly_updates.find(query).sort([("year", 1), ("month_number", 1)])
        update_docs = await cursor.to_list(length=None)

        rows = []
        for doc in update_docs:
            update = self._doc_to_update(doc)
            rows.append(ComparisonRow(
                month=update.month,
                year=update.year,
                actual=ActualMetrics(
                    revenue=update.actual_revenue,
                    team_size=update.actual_team_size,
                    leads=update.actual_leads,
                    customers=update.actual_customers,
                ),
                target=TargetMetrics(
                    revenue=targets.monthly_revenue,
                    team_size=targets.team_size,
                    leads=targets.leads,
                ),
                variance=TargetMetrics(
                    revenue=update.actual_revenue - targets.monthly_revenue,
                    team_size=update.actual_team_size - targets.team_size,
                    leads=update.actual_leads - targets.leads,
                ),
            ))

        return Comparison(targets=targets, comparison=rows)
