"""Typed data schemas for the twenty strategy sheet sections.

Field names mirror the JSON the editors send (camelCase), since the data
object is stored verbatim. Every field has an empty default so that a bare
model dump doubles as the scaffold for a new board. Unknown keys are allowed:
editors may carry extra UI state inside a section.
"""
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from app.errors import ValidationError


Level = Literal["Low", "Medium", "High", ""]


class SheetModel(BaseModel):
    """Base for strategy sheet data objects and their list items."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


# --- Identity --------------------------------------------------------------


class TargetCustomerProfile(SheetModel):
    whoBuys: str = ""
    companySize: str = ""
    industryType: str = ""
    geography: str = ""


class CompanyOverviewData(SheetModel):
    companyName: str = ""
    industry: str = ""
    coreOffering: str = ""
    targetCustomerProfile: TargetCustomerProfile = Field(default_factory=TargetCustomerProfile)
    primaryProblem: str = ""
    businessStage: Literal["Idea", "Validation", "Early Revenue", "Scaling", ""] = ""
    uniqueDifferentiation: str = ""
    businessModel: str = ""


class CorePurposeData(SheetModel):
    brokenSituation: str = ""
    whoBenefits: str = ""
    purposeStatement: str = ""


class VisionData(SheetModel):
    timeHorizon: str = ""
    desiredMarketPosition: str = ""
    scale: str = ""
    impactType: str = ""
    visionStatement: str = ""


class MissionData(SheetModel):
    dailyActions: str = ""
    valueDelivery: str = ""
    primaryFocus: str = ""
    missionStatement: str = ""


class BrandPromiseData(SheetModel):
    promisedOutcome: str = ""
    timeframe: str = ""
    riskReduction: str = ""
    promiseStatement: str = ""


class CoreValue(SheetModel):
    value: str = ""
    behavior: str = ""


class CoreValuesData(SheetModel):
    values: list[CoreValue] = []


class BhagData(SheetModel):
    timeHorizon: str = ""
    revenueGoal: str = ""
    customerScale: str = ""
    marketPosition: str = ""
    bhagStatement: str = ""


class VividDescriptionData(SheetModel):
    customerExperience: str = ""
    internalOperations: str = ""
    systemsProcesses: str = ""
    decisionMaking: str = ""
    marketPerception: str = ""
    additionalPoints: list[str] = []


class SwotAnalysisData(SheetModel):
    strengths: list[str] = []
    weaknesses: list[str] = []
    opportunities: list[str] = []
    threats: list[str] = []


# --- Strategy & execution --------------------------------------------------


class Priority(SheetModel):
    id: Optional[int] = None
    name: str = ""
    whyItMatters: str = ""
    capabilitiesRequired: str = ""
    successLooksLike: str = ""


class WwwAction(SheetModel):
    """Who-What-When action item."""

    id: Optional[int] = None
    who: str = ""
    what: str = ""
    when: str = ""
    status: Literal["Pending", "Done", ""] = "Pending"


class Habit(SheetModel):
    id: Optional[int] = None
    name: str = ""
    description: str = ""
    completed: bool = False


class PortfolioProject(SheetModel):
    id: Optional[int] = None
    name: str = ""
    owner: str = ""
    deadline: str = ""
    status: Literal["Planning", "In Progress", "On Hold", "Complete", ""] = "Planning"
    priority: Level = "Medium"
    progress: float = 0


class StrategicPrioritiesData(SheetModel):
    priorities: list[Priority] = []
    wwwActions: list[WwwAction] = []
    habits: list[Habit] = []
    projects: list[PortfolioProject] = []


class YearPlan(SheetModel):
    objectives: list[str] = []
    initiatives: list[str] = []
    outcomes: list[str] = []


class ThreeYearStrategyData(SheetModel):
    year1: YearPlan = Field(default_factory=YearPlan)
    year2: YearPlan = Field(default_factory=YearPlan)
    year3: YearPlan = Field(default_factory=YearPlan)


class SmartGoal(SheetModel):
    goal: str = ""
    metric: str = ""
    target: str = ""
    deadline: Optional[str] = None
    owner: str = ""
    progress: float = 0


class KeyResult(SheetModel):
    text: str = ""
    progress: float = 0


class Okr(SheetModel):
    id: Optional[int] = None
    objective: str = ""
    keyResults: list[KeyResult] = []
    owner: str = ""
    progress: float = 0


class GoalKpi(SheetModel):
    id: Optional[int] = None
    name: str = ""
    target: str = ""
    current: str = ""
    unit: str = ""


class SmartGoalsData(SheetModel):
    goals: list[SmartGoal] = []
    okrs: list[Okr] = []
    kpis: list[GoalKpi] = []


class Quarter(SheetModel):
    quarter: Literal["Q1", "Q2", "Q3", "Q4"] = "Q1"
    focusTheme: str = ""
    keyActions: list[str] = []
    kpis: list[str] = []
    owner: str = ""


class QuarterlyPlanData(SheetModel):
    quarters: list[Quarter] = []


# --- Finance ---------------------------------------------------------------


class CashStrategy(SheetModel):
    name: str = ""
    impact: Level = ""


class Forecast(SheetModel):
    year1Revenue: float = 0
    year2Revenue: float = 0
    year3Revenue: float = 0
    growthRate: float = 0
    assumptions: str = ""


class RoiCalculation(SheetModel):
    name: str = ""
    investment: float = 0
    return_: float = Field(0, alias="return")
    timeframe: float = 12


class RevenueModelData(SheetModel):
    revenueStreams: list[str] = []
    pricingStructure: str = ""
    averageDealSize: float = 0
    monthlyRevenueTarget: float = 0
    annualRevenueTarget: float = 0
    leadRequirements: str = ""
    conversionAssumptions: str = ""
    currentRevenue: float = 0
    currentExpenses: float = 0
    grossMargin: float = 0
    netMargin: float = 0
    cashOnHand: float = 0
    monthlyBurn: float = 0
    runway: float = 0
    cashStrategies: list[CashStrategy] = []
    forecast: Forecast = Field(default_factory=Forecast)
    roiCalculations: list[RoiCalculation] = []


# --- People & operations ---------------------------------------------------


class RoleDefinition(SheetModel):
    role: str = ""
    responsibility: str = ""
    successMeasure: str = ""


class FaceChartRow(SheetModel):
    """Functional accountability chart row."""

    id: Optional[int] = None
    function: str = ""
    owner: str = ""
    accountable: str = ""
    consulted: str = ""
    informed: str = ""


class TalentAssessment(SheetModel):
    id: Optional[int] = None
    name: str = ""
    role: str = ""
    performance: Level = ""
    potential: Level = ""
    notes: str = ""


class OrganizationalStructureData(SheetModel):
    roles: list[RoleDefinition] = []
    faceChart: list[FaceChartRow] = []
    talentAssessment: list[TalentAssessment] = []


class Sop(SheetModel):
    order: int = 0
    name: str = ""
    description: str = ""


class PaceChartRow(SheetModel):
    """Process accountability chart row."""

    id: Optional[int] = None
    process: str = ""
    owner: str = ""
    frequency: str = ""
    status: Literal["Not Started", "In Progress", "Complete", ""] = ""


class SopRoadmapData(SheetModel):
    sops: list[Sop] = []
    paceChart: list[PaceChartRow] = []


class AutomationSystemsData(SheetModel):
    coreTools: list[str] = []
    keyAutomations: list[str] = []
    dashboardsNeeded: list[str] = []


class KpiDashboardData(SheetModel):
    financialKpis: list[str] = []
    salesKpis: list[str] = []
    operationalKpis: list[str] = []
    customerKpis: list[str] = []
    peopleKpis: list[str] = []


class Risk(SheetModel):
    id: Optional[int] = None
    risk: str = ""
    probability: Level = ""
    impact: Level = ""
    preventionStrategy: str = ""
    monitoringMethod: str = ""


class RiskManagementData(SheetModel):
    risks: list[Risk] = []


class StrategySummaryData(SheetModel):
    whoWeServe: str = ""
    problemWeSolve: str = ""
    howWeMakeMoney: str = ""
    whyWeWin: str = ""
    year1Focus: str = ""
    threeYearDirection: str = ""
    tenYearAmbition: str = ""


STRATEGY_SHEET_SCHEMAS: dict[str, type[SheetModel]] = {
    "companyOverview": CompanyOverviewData,
    "corePurpose": CorePurposeData,
    "vision": VisionData,
    "mission": MissionData,
    "brandPromise": BrandPromiseData,
    "coreValues": CoreValuesData,
    "bhag": BhagData,
    "vividDescription": VividDescriptionData,
    "swotAnalysis": SwotAnalysisData,
    "strategicPriorities": StrategicPrioritiesData,
    "threeYearStrategy": ThreeYearStrategyData,
    "smartGoals": SmartGoalsData,
    "quarterlyPlan": QuarterlyPlanData,
    "revenueModel": RevenueModelData,
    "organizationalStructure": OrganizationalStructureData,
    "sopRoadmap": SopRoadmapData,
    "automationSystems": AutomationSystemsData,
    "kpiDashboard": KpiDashboardData,
    "riskManagement": RiskManagementData,
    "strategySummary": StrategySummaryData,
}


def empty_strategy_data(section_name: str) -> dict[str, Any]:
    """Empty-but-structured data object for a strategy sheet section."""
    return STRATEGY_SHEET_SCHEMAS[section_name]().model_dump(by_alias=True)


def validate_strategy_data(section_name: str, data: dict[str, Any]) -> dict[str, Any]:
    """
    Check a strategy sheet payload against its section schema.

    The payload is returned unchanged: sections are replaced wholesale with
    what the editor sent, and defaults are not filled in.

    Raises:
        ValidationError: If a known field has the wrong shape
    """
    try:
        STRATEGY_SHEET_SCHEMAS[section_name].model_validate(data)
    except PydanticValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        raise ValidationError(f"Invalid data for section {section_name}: {problems}") from e
    return data
