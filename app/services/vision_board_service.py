"""Vision board service - business logic for boards, sections and progress."""
import logging
from datetime import datetime, timezone
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.errors import PyMongoError

from app.errors import NotFoundError, PersistenceError, ValidationError
from app.models.strategy_sheet import empty_strategy_data, validate_strategy_data
from app.models.vision_board import (
    BoardProgress,
    ModuleProgress,
    Section,
    SectionProgress,
    SectionUpdate,
    StrategyProgress,
    StrategySectionStatus,
    StrategySummary,
    VisionBoard,
    VisionBoardCreate,
    VisionBoardUpdate,
)
from app.utils.progress import (
    all_module_progress,
    get_module,
    is_meaningful_content,
    is_section_complete,
    module_progress,
    percentage,
    recompute_overall_progress,
)
from app.utils.sections import (
    LEGACY_CONTAINER,
    LEGACY_SECTION_KEYS,
    STRATEGY_CONTAINER,
    STRATEGY_SHEET_KEYS,
    container_for,
    empty_section,
    locate_section,
)

logger = logging.getLogger(__name__)


def _object_id(board_id: str) -> ObjectId:
    """Parse a board id; malformed ids are reported as not found."""
    try:
        return ObjectId(board_id)
    except (InvalidId, TypeError):
        raise NotFoundError("Vision board not found") from None


def _validate_section_update(section_name: str, update: SectionUpdate) -> str:
    """
    Check a section payload before anything is read or written.

    Returns:
        The container the section lives in

    Raises:
        ValidationError: Unknown section name or malformed strategy data
    """
    container = container_for(section_name)
    if container == STRATEGY_CONTAINER and update.data is not None:
        validate_strategy_data(section_name, update.data)
    return container


def _validate_container_updates(expected: str, updates: Optional[dict[str, SectionUpdate]]) -> None:
    """Validate a batch of section updates addressed to one container."""
    for section_name, update in (updates or {}).items():
        if _validate_section_update(section_name, update) != expected:
            raise ValidationError(f"Section {section_name} does not belong to {expected}")


def _merge_section(doc: dict, section_name: str, update: SectionUpdate) -> None:
    """
    Replace one section of a stored document in place.

    Fields missing from the payload keep their stored value. A provided data
    object replaces the stored one wholesale (no deep merge).
    """
    container = doc.setdefault(container_for(section_name), {})
    existing = container.get(section_name) or {}
    container[section_name] = {
        "completed": update.completed if update.completed is not None else bool(existing.get("completed", False)),
        "data": update.data if update.data is not None else (existing.get("data") or {}),
    }


def _fill_containers(doc: dict) -> None:
    """Make sure both containers carry every key, scaffolding what is missing."""
    sections = doc.setdefault(LEGACY_CONTAINER, {})
    for key in LEGACY_SECTION_KEYS:
        if not isinstance(sections.get(key), dict):
            sections[key] = empty_section()

    strategy_sheet = doc.setdefault(STRATEGY_CONTAINER, {})
    for key in STRATEGY_SHEET_KEYS:
        if not isinstance(strategy_sheet.get(key), dict):
            strategy_sheet[key] = empty_section(empty_strategy_data(key))


def _to_section(raw: Optional[dict], default_data: dict) -> Section:
    if not raw:
        return Section(completed=False, data=default_data)
    return Section(completed=bool(raw.get("completed", False)), data=raw.get("data") or {})


class VisionBoardService:
    """Service for handling vision board operations."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.vision_boards = db["vision_boards"]
        self.monthly_updates = db["monthly_updates"]

    def _doc_to_board(self, doc: dict) -> VisionBoard:
        """
        Convert database document to VisionBoard model.

        Sections missing from older documents are reported as empty.
        """
        legacy = doc.get(LEGACY_CONTAINER) or {}
        strategy = doc.get(STRATEGY_CONTAINER) or {}
        return VisionBoard(
            _id=str(doc["_id"]),
            user_id=doc["user_id"],
            name=doc["name"],
            is_active=doc.get("is_active", True),
            overall_progress=doc.get("overall_progress", 0),
            sections={key: _to_section(legacy.get(key), {}) for key in LEGACY_SECTION_KEYS},
            strategy_sheet={
                key: _to_section(strategy.get(key), empty_strategy_data(key))
                for key in STRATEGY_SHEET_KEYS
            },
            archived_at=doc.get("archived_at"),
            created_at=doc["created_at"],
            updated_at=doc["updated_at"],
        )

    async def get_board_document(self, user_id: str, board_id: str) -> dict:
        """
        Fetch the raw document of a board owned by the user.

        Raises:
            NotFoundError: If the board does not exist or belongs to someone else
        """
        doc = await self.vision_boards.find_one({
            "_id": _object_id(board_id),
            "user_id": user_id,
        })

        if not doc:
            raise NotFoundError("Vision board not found")

        return doc

    async def _save(self, doc: dict) -> dict:
        """
        Persist a whole board document.

        This is the only write path for section containers: progress is
        recomputed here so the stored value always matches the sections.

        Raises:
            NotFoundError: If the board vanished between read and write
            PersistenceError: If the store rejects the write
        """
        _fill_containers(doc)
        doc["overall_progress"] = recompute_overall_progress(doc)
        doc["updated_at"] = datetime.now(timezone.utc)

        try:
            if "_id" in doc:
                result = await self.vision_boards.replace_one(
                    {"_id": doc["_id"], "user_id": doc["user_id"]},
                    doc,
                )
                if result.matched_count == 0:
                    raise NotFoundError("Vision board not found")
            else:
                result = await self.vision_boards.insert_one(doc)
                doc["_id"] = result.inserted_id
        except PyMongoError as e:
            logger.error("Failed to save vision board %s: %s", doc.get("_id"), e)
            raise PersistenceError("Failed to save vision board") from e

        return doc

    async def create_vision_board(
        self,
        user_id: str,
        board_create: VisionBoardCreate,
    ) -> VisionBoard:
        """
        Create a new vision board.

        Args:
            user_id: User ID who owns the board
            board_create: Board creation data, optionally with initial sections

        Returns:
            Created vision board with computed progress

        Raises:
            ValidationError: If an initial section is unknown or malformed
        """
        name = board_create.name.strip()
        if not name:
            raise ValidationError("Please add a name")
        _validate_container_updates(LEGACY_CONTAINER, board_create.sections)
        _validate_container_updates(STRATEGY_CONTAINER, board_create.strategy_sheet)

        now = datetime.now(timezone.utc)
        board_doc = {
            "user_id": user_id,
            "name": name,
            "is_active": True,
            "overall_progress": 0,
            "archived_at": None,
            "created_at": now,
        }
        _fill_containers(board_doc)
        for section_name, update in {**board_create.sections, **board_create.strategy_sheet}.items():
            _merge_section(board_doc, section_name, update)

        board_doc = await self._save(board_doc)
        logger.info("Created vision board %s for user %s", board_doc["_id"], user_id)

        return self._doc_to_board(board_doc)

    async def list_vision_boards(
        self,
        user_id: str,
        active: Optional[bool] = None,
    ) -> list[VisionBoard]:
        """
        List vision boards for a user, newest first.

        Args:
            user_id: User ID
            active: Optional filter on is_active (False lists archived boards)

        Returns:
            List of vision boards
        """
        query = {"user_id": user_id}
        if active is not None:
            query["is_active"] = active

        cursor = self.vision_boards.find(query).sort("created_at", -1)
        board_docs = await cursor.to_list(length=None)

        return [self._doc_to_board(doc) for doc in board_docs]

    async def get_vision_board(self, user_id: str, board_id: str) -> VisionBoard:
        """Get a single vision board."""
        doc = await self.get_board_document(user_id, board_id)
        return self._doc_to_board(doc)

    async def update_vision_board(
        self,
        user_id: str,
        board_id: str,
        board_update: VisionBoardUpdate,
    ) -> VisionBoard:
        """
        Update board fields and/or whole sections in either container.

        Args:
            user_id: User ID
            board_id: Vision board ID
            board_update: Update data

        Returns:
            Updated vision board

        Raises:
            ValidationError: If a section is unknown, misplaced or malformed
            NotFoundError: If the board is not found
        """
        _validate_container_updates(LEGACY_CONTAINER, board_update.sections)
        _validate_container_updates(STRATEGY_CONTAINER, board_update.strategy_sheet)
        if board_update.name is not None and not board_update.name.strip():
            raise ValidationError("Please add a name")

        doc = await self.get_board_document(user_id, board_id)

        if board_update.name is not None:
            doc["name"] = board_update.name.strip()
        if board_update.is_active is not None and board_update.is_active != doc.get("is_active", True):
            doc["is_active"] = board_update.is_active
            doc["archived_at"] = None if board_update.is_active else datetime.now(timezone.utc)

        section_updates = {**(board_update.sections or {}), **(board_update.strategy_sheet or {})}
        for section_name, update in section_updates.items():
            _merge_section(doc, section_name, update)

        doc = await self._save(doc)
        return self._doc_to_board(doc)

    async def update_section(
        self,
        user_id: str,
        board_id: str,
        section_name: str,
        section_update: SectionUpdate,
    ) -> VisionBoard:
        """
        Replace a single section and recompute progress.

        The section name is resolved to its container before the board is
        read, so a bad name never causes a write.

        Args:
            user_id: User ID
            board_id: Vision board ID
            section_name: Legacy or strategy sheet section key
            section_update: completed flag and/or full data object

        Returns:
            Updated vision board with fresh overall progress

        Raises:
            ValidationError: If the section name or payload is invalid
            NotFoundError: If the board is not found
        """
        _validate_section_update(section_name, section_update)

        doc = await self.get_board_document(user_id, board_id)
        _merge_section(doc, section_name, section_update)
        doc = await self._save(doc)

        logger.info(
            "Updated section %s on vision board %s (progress %s%%)",
            section_name,
            board_id,
            doc["overall_progress"],
        )
        return self._doc_to_board(doc)

    async def archive_vision_board(self, user_id: str, board_id: str) -> VisionBoard:
        """Archive (soft delete) a vision board."""
        doc = await self.get_board_document(user_id, board_id)

        doc["is_active"] = False
        doc["archived_at"] = datetime.now(timezone.utc)
        doc = await self._save(doc)

        logger.info("Archived vision board %s", board_id)
        return self._doc_to_board(doc)

    async def delete_vision_board(self, user_id: str, board_id: str) -> dict:
        """
        Permanently delete a board and its monthly updates.

        Returns:
            Dictionary with deleted_count and monthly_updates_deleted

        Raises:
            NotFoundError: If the board is not found
        """
        doc = await self.get_board_document(user_id, board_id)

        try:
            result = await self.vision_boards.delete_one({"_id": doc["_id"], "user_id": user_id})
            updates_result = await self.monthly_updates.delete_many({"vision_board_id": str(doc["_id"])})
        except PyMongoError as e:
            logger.error("Failed to delete vision board %s: %s", board_id, e)
            raise PersistenceError("Failed to delete vision board") from e

        logger.info(
            "Deleted vision board %s and %s monthly updates",
            board_id,
            updates_result.deleted_count,
        )
        return {
            "deleted_count": result.deleted_count,
            "monthly_updates_deleted": updates_result.deleted_count,
        }

    async def get_progress(self, user_id: str, board_id: str) -> BoardProgress:
        """Overall progress plus binary progress of each legacy section."""
        doc = await self.get_board_document(user_id, board_id)

        sections = []
        for key in LEGACY_SECTION_KEYS:
            completed = is_section_complete(locate_section(doc, key))
            sections.append(SectionProgress(name=key, completed=completed, progress=100 if completed else 0))

        return BoardProgress(overall_progress=doc.get("overall_progress", 0), sections=sections)

    async def get_strategy_sheet(self, user_id: str, board_id: str) -> dict[str, Section]:
        """The board's strategy sheet, with missing sections reported empty."""
        board = await self.get_vision_board(user_id, board_id)
        return board.strategy_sheet

    async def get_strategy_progress(self, user_id: str, board_id: str) -> StrategyProgress:
        """Progress over the twenty strategy sheet sections only."""
        doc = await self.get_board_document(user_id, board_id)

        statuses = []
        for key in STRATEGY_SHEET_KEYS:
            section = locate_section(doc, key)
            statuses.append(StrategySectionStatus(
                name=key,
                completed=is_section_complete(section),
                has_data=bool(section) and is_meaningful_content(section.get("data")),
            ))

        completed_count = sum(1 for status in statuses if status.completed)
        return StrategyProgress(
            overall_progress=percentage(completed_count, len(statuses)),
            completed_sections=completed_count,
            total_sections=len(statuses),
            sections=statuses,
        )

    async def get_strategy_summary(self, user_id: str, board_id: str) -> StrategySummary:
        """Assemble the one-page summary from statement fields."""
        doc = await self.get_board_document(user_id, board_id)

        def field(section_name: str, key: str) -> str:
            section = locate_section(doc, section_name) or {}
            value = (section.get("data") or {}).get(key)
            return value if isinstance(value, str) else ""

        return StrategySummary(
            company_name=field("companyOverview", "companyName"),
            core_purpose=field("corePurpose", "purposeStatement"),
            vision=field("vision", "visionStatement"),
            mission=field("mission", "missionStatement"),
            brand_promise=field("brandPromise", "promiseStatement"),
            bhag=field("bhag", "bhagStatement"),
            who_we_serve=field("strategySummary", "whoWeServe"),
            problem_we_solve=field("strategySummary", "problemWeSolve"),
            how_we_make_money=field("strategySummary", "howWeMakeMoney"),
            why_we_win=field("strategySummary", "whyWeWin"),
            year1_focus=field("strategySummary", "year1Focus"),
            three_year_direction=field("strategySummary", "threeYearDirection"),
            ten_year_ambition=field("strategySummary", "tenYearAmbition"),
        )

    async def list_module_progress(self, user_id: str, board_id: str) -> list[ModuleProgress]:
        """Progress of every UI module."""
        doc = await self.get_board_document(user_id, board_id)
        return [ModuleProgress(**entry) for entry in all_module_progress(doc)]

    async def get_module_progress(self, user_id: str, board_id: str, module_id: str) -> ModuleProgress:
        """
        Progress of a single UI module.

        Raises:
            ValidationError: If the module id is unknown
            NotFoundError: If the board is not found
        """
        module = get_module(module_id)
        doc = await self.get_board_document(user_id, board_id)
        return ModuleProgress(
            module=module.id,
            name=module.name,
            sections=list(module.section_keys),
            progress=module_progress(module.id, doc),
        )
