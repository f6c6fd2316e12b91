"""Business logic use cases."""

import asyncio
import logging
from enum import Enum
from typing import Callable, Optional

from audience_tagger.adapters.ai import ClassifierFactory
from audience_tagger.core import (
    AiProvider,
    AudienceClassifier,
    AudienceLabel,
    ItemRepository,
    ItemUpdateType,
    MediaItem,
    ProviderConfig,
    TaggingConfig,
    TaggingSummary,
    find_audience_tags,
    merge_audience_tag,
    sanitize_for_log,
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[float], None]


class ItemOutcome(str, Enum):
    """What happened to a single item."""

    TAGGED = "tagged"
    SKIPPED = "skipped"
    UNCLASSIFIED = "unclassified"
    FAILED = "failed"
    CANCELLED = "cancelled"


class TaggingService:
    """Service for classifying library items and tagging them by audience."""

    def __init__(
        self,
        repository: ItemRepository,
        factory: Optional[ClassifierFactory] = None,
        item_kind: str = "movie",
    ) -> None:
        self.repository = repository
        self.factory = factory or ClassifierFactory()
        self.item_kind = item_kind

    async def run(
        self,
        config: TaggingConfig,
        progress: Optional[ProgressCallback] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> TaggingSummary:
        """Classify and tag every item of the library once.

        Args:
            config: Configuration snapshot used for the whole run
            progress: Receives the completed percentage after each item
            cancel_event: When set, the run stops before the next item

        Returns:
            Counts of processed, tagged, skipped and failed items
        """
        summary = TaggingSummary()

        if not config.enable_auto_tagging or not config.process_on_library_scan:
            logger.info("Auto-tagging is disabled or not configured to run on library scan")
            return summary

        if not config.api_key:
            logger.info("AI API key is not configured; skipping tagging run")
            return summary

        async with self.factory.create(config.provider) as classifier:
            items = await self.repository.query_items(
                self.item_kind, recursive=True, exclude_virtual=True
            )
            total = len(items)
            logger.info("Found %d %s items to process", total, self.item_kind)

            for item in items:
                if cancel_event is not None and cancel_event.is_set():
                    summary.cancelled = True
                    break

                try:
                    outcome = await self.process_item(
                        item, classifier, config.overwrite_existing_tags, cancel_event
                    )
                except Exception as e:
                    logger.error(
                        "Error processing '%s': %s", sanitize_for_log(item.title), e, exc_info=True
                    )
                    outcome = ItemOutcome.FAILED

                if outcome is ItemOutcome.CANCELLED:
                    summary.cancelled = True
                    break

                summary.processed += 1
                if outcome is ItemOutcome.TAGGED:
                    summary.tagged += 1
                elif outcome is ItemOutcome.SKIPPED:
                    summary.skipped += 1
                elif outcome is ItemOutcome.FAILED:
                    summary.failed += 1

                if progress is not None:
                    progress(summary.processed / total * 100)

                await self._delay(config.processing_delay, cancel_event)

            if total == 0 and progress is not None:
                progress(100.0)

        if summary.cancelled:
            logger.info("Tagging run cancelled after %d items", summary.processed)
        logger.info("Completed processing %d items", summary.processed)
        return summary

    async def process_item(
        self,
        item: MediaItem,
        classifier: AudienceClassifier,
        overwrite_existing: bool,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> ItemOutcome:
        """Classify one item and merge the audience tag into its tags."""
        title = sanitize_for_log(item.title)
        existing = find_audience_tags(item.tags)

        if existing and not overwrite_existing:
            logger.debug("'%s' already has audience tag(s): %s", title, ", ".join(existing))
            return ItemOutcome.SKIPPED

        label = await self._classify(classifier, item, cancel_event)

        if label is None and cancel_event is not None and cancel_event.is_set():
            return ItemOutcome.CANCELLED

        tag = self._label_text(label)
        if not tag:
            logger.warning("Could not determine audience for '%s'", title)
            return ItemOutcome.UNCLASSIFIED

        item.tags = merge_audience_tag(item.tags, tag, overwrite_existing)
        await self.repository.persist(item, ItemUpdateType.METADATA_EDIT)

        logger.info("Tagged '%s' (%s) as '%s'", title, item.year, tag)
        return ItemOutcome.TAGGED

    async def _classify(
        self,
        classifier: AudienceClassifier,
        item: MediaItem,
        cancel_event: Optional[asyncio.Event],
    ) -> Optional[AudienceLabel]:
        """Run the classify call, abandoning it if cancellation is requested."""
        request = item.to_request()
        if cancel_event is None:
            return await classifier.classify(request)

        classify_task = asyncio.ensure_future(classifier.classify(request))
        cancel_task = asyncio.ensure_future(cancel_event.wait())
        try:
            done, _ = await asyncio.wait(
                {classify_task, cancel_task}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            for task in (classify_task, cancel_task):
                if not task.done():
                    task.cancel()

        if classify_task in done:
            return classify_task.result()
        return None

    async def _delay(self, seconds: float, cancel_event: Optional[asyncio.Event]) -> None:
        """Wait between items; returns early once cancellation is requested."""
        if seconds <= 0:
            return
        if cancel_event is None:
            await asyncio.sleep(seconds)
            return
        try:
            await asyncio.wait_for(cancel_event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            pass

    @staticmethod
    def _label_text(label: object) -> str:
        if label is None:
            return ""
        if isinstance(label, AudienceLabel):
            return label.value
        return str(label).strip()


class ManualTaggingTask:
    """On-demand trigger that runs a tagging pass over the library."""

    name = "Auto Parental Tags"
    key = "AutoParentalTags"
    description = "Analyzes movies and adds target audience tags (kids, teens, adults) using AI."
    category = "Library"

    def __init__(
        self,
        service: TaggingService,
        config_provider: Callable[[], TaggingConfig],
    ) -> None:
        self.service = service
        self.config_provider = config_provider

    async def execute(
        self,
        progress: Optional[ProgressCallback] = None,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> TaggingSummary:
        """Run the tagging pass with the configuration current at call time."""
        logger.info("Manual %s task started", self.name)

        try:
            summary = await self.service.run(self.config_provider(), progress, cancel_event)
        except Exception as e:
            logger.error("Error running %s task: %s", self.name, e)
            raise

        logger.info("Manual %s task completed successfully", self.name)
        return summary


class ModelsService:
    """Look up the models a provider offers."""

    def __init__(self, factory: Optional[ClassifierFactory] = None) -> None:
        self.factory = factory or ClassifierFactory()

    async def get_models(
        self,
        provider: str,
        api_key: Optional[str] = None,
        endpoint: Optional[str] = None,
    ) -> list[str]:
        """Return model identifiers for a provider.

        Raises:
            UnknownProviderError: If the provider name is not recognized
        """
        ai_provider = AiProvider.parse(provider)
        logger.debug("Fetching models for provider: %s", ai_provider.value)

        config = ProviderConfig(
            provider=ai_provider,
            api_key=api_key or "",
            endpoint=endpoint or "http://localhost:8080",
        )

        async with self.factory.create(config) as classifier:
            models = await classifier.list_models()

        logger.info("Retrieved %d models for %s", len(models), ai_provider.value)
        return models
