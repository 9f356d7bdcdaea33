"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from cal_ai.adapters.json_file_storage import JsonFileStorage
from cal_ai.adapters.log_notification_sink import LogNotificationSink
from cal_ai.adapters.openai_completion_client import OpenAICompletionClient
from cal_ai.adapters.openfoodfacts_client import HttpxOpenFoodFactsClient
from cal_ai.adapters.supabase_kv_storage import SupabaseKeyValueStorage
from cal_ai.clock import Clock, SystemClock
from cal_ai.config import Settings, StorageBackend
from cal_ai.services.barcode import BarcodeService
from cal_ai.services.cache import InMemoryCache
from cal_ai.services.food_search import FoodSearchService
from cal_ai.services.insights import InsightsService
from cal_ai.services.registry import KeyValueStorage, UserRegistry
from cal_ai.services.reminders import NotificationSink, ReminderScheduler
from cal_ai.services.tracker import TrackerService
from cal_ai.services.vision import VisionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    clock: Clock
    registry: UserRegistry
    tracker: TrackerService
    scheduler: ReminderScheduler
    vision_service: VisionService
    food_search_service: FoodSearchService
    barcode_service: BarcodeService
    insights_service: InsightsService
    close_resources: Callable[[], Awaitable[None]]


def build_storage(settings: Settings) -> KeyValueStorage:
    """Create the configured key-value storage backend."""
    if settings.storage_backend is StorageBackend.SUPABASE:
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError(
                "SUPABASE_URL and SUPABASE_SERVICE_KEY are required "
                "for the supabase storage backend"
            )
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseKeyValueStorage(client)
    return JsonFileStorage(settings.data_dir)


def build_container(
    settings: Settings | None = None,
    *,
    storage: KeyValueStorage | None = None,
    clock: Clock | None = None,
    sink: NotificationSink | None = None,
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    resolved_clock = clock or SystemClock(resolved_settings.timezone)
    registry = UserRegistry(
        storage=storage or build_storage(resolved_settings),
        users_key=resolved_settings.users_data_key,
        current_user_key=resolved_settings.current_user_key,
    )
    tracker = TrackerService(registry=registry, clock=resolved_clock)
    scheduler = ReminderScheduler(
        clock=resolved_clock,
        sink=sink or LogNotificationSink(),
        permission_granted=lambda: resolved_settings.notifications_enabled,
        poll_seconds=resolved_settings.reminder_poll_seconds,
    )
    registry.subscribe(scheduler.sync)
    scheduler.sync(registry.current_user())

    openai_client = OpenAICompletionClient.create(resolved_settings.openai_api_key)
    ai_options = {
        "model": resolved_settings.openai_model,
        "reasoning_effort": resolved_settings.openai_reasoning_effort,
        "store": resolved_settings.openai_store,
    }
    vision_service = VisionService(client=openai_client, **ai_options)
    food_search_service = FoodSearchService(
        client=openai_client, cache=InMemoryCache(), **ai_options
    )
    insights_service = InsightsService(client=openai_client, **ai_options)
    barcode_client = HttpxOpenFoodFactsClient.create(
        resolved_settings.barcode_base_url
    )
    barcode_service = BarcodeService(barcode_client)

    async def close_resources() -> None:
        await barcode_client.close()
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        clock=resolved_clock,
        registry=registry,
        tracker=tracker,
        scheduler=scheduler,
        vision_service=vision_service,
        food_search_service=food_search_service,
        barcode_service=barcode_service,
        insights_service=insights_service,
        close_resources=close_resources,
    )
