"""Shared test fixtures."""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from pathlib import Path

import pytest

from cal_ai.config import Settings
from cal_ai.containers import AppContainer
from cal_ai.domain.meals import FoodSearchResult, Meal, MealType
from cal_ai.domain.profile import (
    ActivityLevel,
    Gender,
    PrimaryGoal,
    ProfileData,
)
from cal_ai.services.barcode import BarcodeClient, BarcodeService
from cal_ai.services.cache import InMemoryCache
from cal_ai.services.completion import CompletionClient
from cal_ai.services.food_search import FoodSearchService
from cal_ai.services.insights import InsightsService
from cal_ai.services.registry import KeyValueStorage, UserRegistry
from cal_ai.services.reminders import NotificationSink, ReminderScheduler
from cal_ai.services.tracker import TrackerService
from cal_ai.services.vision import VisionService

TODAY = date(2026, 10, 19)


@dataclass
class FakeClock:
    """Clock that only moves when told to."""

    current: datetime = field(default_factory=lambda: datetime(2026, 10, 19, 9, 0))

    def now(self) -> datetime:
        return self.current

    def today(self) -> date:
        return self.current.date()

    def set(self, value: datetime) -> None:
        self.current = value

    def advance(self, **kwargs: float) -> None:
        self.current = self.current + timedelta(**kwargs)


@dataclass
class InMemoryKeyValueStorage(KeyValueStorage):
    """Dict-backed storage that can be told to fail."""

    values: dict[str, object] = field(default_factory=dict)
    writes: list[str] = field(default_factory=list)
    fail_writes: bool = False

    def get(self, key: str) -> object | None:
        return self.values.get(key)

    def set(self, key: str, value: object) -> None:
        if self.fail_writes:
            raise OSError("disk full")
        self.writes.append(key)
        self.values[key] = value


@dataclass
class FakeCompletionClient(CompletionClient):
    """Returns queued payloads, or raises queued exceptions."""

    responses: list[object] = field(default_factory=list)
    calls: list[dict[str, object]] = field(default_factory=list)

    async def complete(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema: dict[str, object],
        schema_name: str,
        image_data_url: str | None = None,
    ) -> dict[str, object]:
        self.calls.append(
            {
                "model": model,
                "prompt": prompt,
                "schema_name": schema_name,
                "image_data_url": image_data_url,
            }
        )
        if not self.responses:
            raise RuntimeError("no response queued")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response  # type: ignore[return-value]


@dataclass
class FakeBarcodeClient(BarcodeClient):
    products: dict[str, dict[str, object]] = field(default_factory=dict)
    error: Exception | None = None

    async def get_product(self, code: str) -> dict[str, object] | None:
        if self.error is not None:
            raise self.error
        return self.products.get(code)


@dataclass
class RecordingNotificationSink(NotificationSink):
    notifications: list[tuple[str, str]] = field(default_factory=list)

    def notify(self, title: str, body: str) -> None:
        self.notifications.append((title, body))


def make_profile(**overrides: object) -> ProfileData:
    values: dict[str, object] = {
        "name": "Alex",
        "age": 30,
        "gender": Gender.MALE,
        "height": 70,
        "activity_level": ActivityLevel.MODERATELY_ACTIVE,
        "primary_goal": PrimaryGoal.LOSE_WEIGHT,
    }
    values.update(overrides)
    return ProfileData.model_validate(values)


def make_meal(
    day: date = TODAY,
    *,
    name: str = "Oatmeal",
    calories: float = 300,
    meal_type: MealType = MealType.BREAKFAST,
) -> Meal:
    return Meal(
        name=name,
        calories=calories,
        protein=10,
        carbs=50,
        fats=5,
        type=meal_type,
        date=day,
    )


def make_food(name: str = "Apple", calories: float = 95) -> FoodSearchResult:
    return FoodSearchResult(
        name=name, calories=calories, protein=0.5, carbs=25, fats=0.3
    )


@pytest.fixture(autouse=True)
def _propagate_app_logs() -> Iterator[None]:
    logger = logging.getLogger("cal_ai")
    propagate = logger.propagate
    logger.propagate = True
    yield
    logger.propagate = propagate


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def storage() -> InMemoryKeyValueStorage:
    return InMemoryKeyValueStorage()


@pytest.fixture
def registry(storage: InMemoryKeyValueStorage) -> UserRegistry:
    return UserRegistry(storage)


@pytest.fixture
def tracker(registry: UserRegistry, clock: FakeClock) -> TrackerService:
    return TrackerService(registry=registry, clock=clock)


@pytest.fixture
def completion_client() -> FakeCompletionClient:
    return FakeCompletionClient()


@pytest.fixture
def barcode_client() -> FakeBarcodeClient:
    return FakeBarcodeClient()


@pytest.fixture
def sink() -> RecordingNotificationSink:
    return RecordingNotificationSink()


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(openai_api_key="openai-key", data_dir=tmp_path / "data")


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    clock: FakeClock,
    registry: UserRegistry,
    tracker: TrackerService,
    completion_client: FakeCompletionClient,
    barcode_client: FakeBarcodeClient,
    sink: RecordingNotificationSink,
) -> AppContainer:
    scheduler = ReminderScheduler(clock=clock, sink=sink, poll_seconds=3600)
    registry.subscribe(scheduler.sync)
    ai_options = {
        "model": settings.openai_model,
        "reasoning_effort": settings.openai_reasoning_effort,
        "store": settings.openai_store,
    }

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        clock=clock,
        registry=registry,
        tracker=tracker,
        scheduler=scheduler,
        vision_service=VisionService(client=completion_client, **ai_options),
        food_search_service=FoodSearchService(
            client=completion_client,
            cache=InMemoryCache(),
            retry_delay_seconds=0,
            **ai_options,
        ),
        barcode_service=BarcodeService(barcode_client),
        insights_service=InsightsService(client=completion_client, **ai_options),
        close_resources=close_resources,
    )
