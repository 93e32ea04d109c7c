"""Analytics service - aggregate figures across a user's vision boards."""
import math

from app.models.analytics import AnalyticsOverview, CompletionBucket

# Lower bounds of the completion histogram; 101 closes the 100% bucket
COMPLETION_BOUNDARIES = [0, 25, 50, 75, 100, 101]


class AnalyticsService:
    """
    Service for aggregate reporting.

    Reads the stored overall_progress of each board; it never recomputes
    progress and is not coordinated with board writes.
    """

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.vision_boards = db["vision_boards"]
        self.monthly_updates = db["monthly_updates"]

    async def get_overview(self, user_id: str) -> AnalyticsOverview:
        """
        Board counts, average progress and completion distribution.

        Args:
            user_id: User ID whose boards are aggregated

        Returns:
            AnalyticsOverview
        """
        total = await self.vision_boards.count_documents({"user_id": user_id})
        active = await self.vision_boards.count_documents({"user_id": user_id, "is_active": True})
        total_updates = await self.monthly_updates.count_documents({"user_id": user_id})

        average_cursor = self.vision_boards.aggregate([
            {"$match": {"user_id": user_id}},
            {"$group": {"_id": None, "average_progress": {"$avg": "$overall_progress"}}},
        ])
        average_result = await average_cursor.to_list(length=None)
        average = average_result[0]["average_progress"] if average_result else None

        # $bucket fails on values outside the boundaries, so only in-range numbers are grouped
        distribution_cursor = self.vision_boards.aggregate([
            {
                "$match": {
                    "user_id": user_id,
                    "overall_progress": {
                        "$type": "number",
                        "$gte": COMPLETION_BOUNDARIES[0],
                        "$lt": COMPLETION_BOUNDARIES[-1],
                    },
                }
            },
            {
                "$bucket": {
                    "groupBy": "$overall_progress",
                    "boundaries": COMPLETION_BOUNDARIES,
                    "output": {"count": {"$sum": 1}},
                }
            },
        ])
        buckets = await distribution_cursor.to_list(length=None)

        return AnalyticsOverview(
            total_vision_boards=total,
            active_vision_boards=active,
            archived_vision_boards=total - active,
            average_progress=math.floor(average + 0.5) if average is not None else 0,
            total_monthly_updates=total_updates,
            completion_distribution=[
                CompletionBucket(lower_bound=bucket["_id"], count=bucket["count"])
                for bucket in buckets
            ],
        )
