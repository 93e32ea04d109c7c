"""Tests for Pydantic models."""
import pytest
from datetime import datetime
from pydantic import ValidationError


class TestStrategySheetModels:
    """Tests for the strategy sheet schemas."""

    def test_empty_data_uses_field_aliases(self):
        """Scaffolds are dumped with the editor's field names."""
        from app.models.strategy_sheet import RoiCalculation, empty_strategy_data

        assert "return" in RoiCalculation().model_dump(by_alias=True)
        assert empty_strategy_data("revenueModel")["roiCalculations"] == []
        assert empty_strategy_data("threeYearStrategy")["year2"] == {
            "objectives": [],
            "initiatives": [],
            "outcomes": [],
        }

    def test_validate_returns_payload_unchanged(self):
        from app.models.strategy_sheet import validate_strategy_data

        payload = {"risks": [{"risk": "Key person", "probability": "High"}], "note": "extra"}

        assert validate_strategy_data("riskManagement", payload) is payload

    @pytest.mark.parametrize("section_name, data", [
        ("swotAnalysis", {"strengths": "Brand"}),
        ("riskManagement", {"risks": [{"probability": "Extreme"}]}),
        ("companyOverview", {"businessStage": "Unicorn"}),
        ("revenueModel", {"forecast": {"year1Revenue": "lots"}}),
    ])
    def test_validate_rejects_wrong_shapes(self, section_name, data):
        from app.errors import ValidationError as ServiceValidationError
        from app.models.strategy_sheet import validate_strategy_data

        with pytest.raises(ServiceValidationError, match=section_name):
            validate_strategy_data(section_name, data)

    def test_roi_return_accepts_alias(self):
        from app.models.strategy_sheet import RoiCalculation

        assert RoiCalculation.model_validate({"return": 5000}).return_ == 5000


class TestVisionBoardModels:
    """Tests for vision board models."""

    def test_section_update_all_optional(self):
        from app.models.vision_board import SectionUpdate

        update = SectionUpdate()

        assert update.completed is None
        assert update.data is None

    def test_create_name_limits(self):
        from app.models.vision_board import VisionBoardCreate

        with pytest.raises(ValidationError):
            VisionBoardCreate(name="")
        with pytest.raises(ValidationError):
            VisionBoardCreate(name="x" * 101)

    def test_progress_bounds(self):
        from app.models.vision_board import VisionBoard

        now = datetime.now()
        with pytest.raises(ValidationError):
            VisionBoard(
                _id="abc",
                user_id="user123",
                name="Plan",
                overall_progress=101,
                sections={},
                strategy_sheet={},
                created_at=now,
                updated_at=now,
            )

    def test_serializes_id(self):
        from app.models.vision_board import VisionBoard

        now = datetime.now()
        board = VisionBoard(
            _id="abc",
            user_id="user123",
            name="Plan",
            sections={},
            strategy_sheet={},
            created_at=now,
            updated_at=now,
        )

        assert board.model_dump(by_alias=True)["id"] == "abc"


class TestMonthlyUpdateModels:
    """Tests for monthly update models."""

    def test_month_numbers(self):
        from app.models.monthly_update import Month

        assert Month.JANUARY.number == 1
        assert Month("October").number == 10
        assert Month.DECEMBER.number == 12

    def test_defaults(self):
        from app.models.monthly_update import MonthlyUpdateCreate

        update = MonthlyUpdateCreate(month="May", year=2026)

        assert update.actual_revenue == 0
        assert update.actual_customers == 0
        assert update.notes is None

    @pytest.mark.parametrize("overrides", [
        {"year": 2019},
        {"year": 2101},
        {"actual_team_size": -1},
        {"notes": "x" * 1001},
        {"wins": "x" * 501},
        {"month": "may"},
    ])
    def test_rejects_out_of_range(self, overrides):
        from app.models.monthly_update import MonthlyUpdateCreate

        fields = {"month": "May", "year": 2026, **overrides}
        with pytest.raises(ValidationError):
            MonthlyUpdateCreate(**fields)


class TestUserModels:
    """Tests for user models."""

    def test_user_create(self):
        from app.models.user import UserCreate

        user = UserCreate(email="owner@example.com", password="password123", name="Owner")

        assert user.email == "owner@example.com"

    def test_password_min_length(self):
        from app.models.user import UserCreate

        with pytest.raises(ValidationError):
            UserCreate(email="owner@example.com", password="short", name="Owner")

    def test_invalid_email(self):
        from app.models.user import LoginRequest

        with pytest.raises(ValidationError):
            LoginRequest(email="not-an-email", password="password123")

    def test_token_type_default(self):
        from app.models.user import TokenResponse

        assert TokenResponse(access_token="abc").token_type == "bearer"
