"""Style photo -> shoppable products, bucketed into four garment slots.

Primary path: detect garments, crop each one out of the reference photo and
reverse-image search the crops one after another. Fallback path (detector
failed, found nothing, or nothing survived classification/cropping): four
text-refined product searches on the full photo, run concurrently.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

import httpx
from PIL import Image

from garment_vision.cropping import crop_region
from garment_vision.utils import image_bytes_to_pil
from stylefinder.core.config import settings
from stylefinder.schemas.product import ProductSearchResponse, SearchedProductOut, Slot
from stylefinder.services.detector import DetectionResult, RoboflowDetector, get_detector
from stylefinder.services.garment_classifier import DetectorLabelClassifier, TitleClassifier
from stylefinder.services.marketplace import MarketplaceFilter
from stylefinder.services.visual_search import Candidate, SerpApiVisualSearch, build_visual_searcher

logger = logging.getLogger(__name__)

TOP_MATCH_PERCENTAGE = 98
MATCH_PERCENTAGE_STEP = 3

FALLBACK_QUERIES: dict[Slot, str] = {
    Slot.UPPER: "tops shirts kurtis topwear buy online India",
    Slot.LOWER: "pants jeans skirts bottomwear buy online India",
    Slot.FOOTWEAR: "shoes sandals heels footwear buy online India",
    Slot.ACCESSORIES: "bags jewellery watches accessories buy online India",
}

PLACEHOLDER_TITLE = "Untitled product"
PLACEHOLDER_PRICE = "Price unavailable"
PLACEHOLDER_SOURCE = "Unknown"
PLACEHOLDER_LINK = "#"


class ConfigurationError(RuntimeError):
    pass


@dataclass(slots=True)
class CroppedGarment:
    category: Slot
    image_bytes: bytes
    confidence: float
    class_name: str


class ProductSearchPipeline:
    def __init__(
        self,
        detector: RoboflowDetector,
        searcher: SerpApiVisualSearch,
        label_classifier: DetectorLabelClassifier | None = None,
        title_classifier: TitleClassifier | None = None,
        marketplace: MarketplaceFilter | None = None,
        http_client: httpx.AsyncClient | None = None,
        per_slot: int = 10,
        deadline_sec: float | None = None,
    ) -> None:
        self.detector = detector
        self.searcher = searcher
        self.label_classifier = label_classifier or DetectorLabelClassifier()
        self.title_classifier = title_classifier or TitleClassifier()
        self.marketplace = marketplace or MarketplaceFilter()
        self.http_client = http_client
        self.per_slot = per_slot
        self.deadline_sec = deadline_sec

    async def run(self, image_url: str) -> ProductSearchResponse:
        found: dict[Slot, list[Candidate]] = {slot: [] for slot in Slot}
        try:
            if self.deadline_sec and self.deadline_sec > 0:
                await asyncio.wait_for(self._collect(image_url, found), timeout=self.deadline_sec)
            else:
                await self._collect(image_url, found)
        except asyncio.TimeoutError:
            logger.warning(
                "pipeline_deadline_exceeded deadline_sec=%s partial=%s",
                self.deadline_sec,
                {slot.value: len(items) for slot, items in found.items()},
            )

        response = merge_results(found, per_slot=self.per_slot)
        logger.info(
            "pipeline_done upper=%d lower=%d footwear=%d accessories=%d",
            len(response.upper), len(response.lower), len(response.footwear), len(response.accessories),
        )
        return response

    async def _collect(self, image_url: str, found: dict[Slot, list[Candidate]]) -> None:
        try:
            detection = await self.detector.detect(image_url)
        except Exception as exc:
            logger.warning("detector_failed_fallback error=%s", exc)
            await self._search_full_image(image_url, found)
            return

        if not detection.detections:
            logger.info("detector_empty_fallback")
            await self._search_full_image(image_url, found)
            return

        garments = await self._crop_garments(image_url, detection)
        if not garments:
            logger.info("no_garments_cropped_fallback detections=%d", len(detection.detections))
            await self._search_full_image(image_url, found)
            return

        await self._search_garments(garments, found)

    async def _crop_garments(self, image_url: str, detection: DetectionResult) -> list[CroppedGarment]:
        classified = []
        for det in detection.detections:
            slot = self.label_classifier.classify(det.class_name)
            if slot is None:
                logger.info("garment_skipped_unknown_class class_name=%s", det.class_name)
                continue
            classified.append((det, slot))
        if not classified:
            return []

        try:
            image = await self._load_image(image_url)
        except Exception as exc:
            logger.warning("source_image_download_failed url=%s error=%s", image_url, exc)
            return []

        garments: list[CroppedGarment] = []
        for det, slot in classified:
            try:
                image_bytes = await asyncio.to_thread(
                    crop_region, image, det, detection.image_width, detection.image_height
                )
            except Exception as exc:
                logger.warning("garment_crop_failed class_name=%s error=%s", det.class_name, exc)
                continue
            garments.append(
                CroppedGarment(
                    category=slot,
                    image_bytes=image_bytes,
                    confidence=det.confidence,
                    class_name=det.class_name,
                )
            )
            logger.info(
                "garment_cropped class_name=%s slot=%s confidence=%.1f%%",
                det.class_name, slot.value, det.confidence * 100,
            )
        return garments

    async def _load_image(self, image_url: str) -> Image.Image:
        if self.http_client is not None:
            response = await self.http_client.get(image_url)
        else:
            async with httpx.AsyncClient(timeout=settings.http_timeout_sec, follow_redirects=True) as client:
                response = await client.get(image_url)
        response.raise_for_status()
        return await asyncio.to_thread(image_bytes_to_pil, response.content)

    async def _search_garments(self, garments: list[CroppedGarment], found: dict[Slot, list[Candidate]]) -> None:
        # One garment at a time; the reverse-image provider throttles bursts.
        for garment in garments:
            try:
                candidates = await self.searcher.search(garment.image_bytes)
            except Exception as exc:
                logger.warning("garment_search_failed class_name=%s error=%s", garment.class_name, exc)
                continue

            kept = [c for c in candidates if self.marketplace.is_allowed(c.source, c.link)]
            found[garment.category].extend(kept)
            logger.info(
                "garment_search_done class_name=%s slot=%s candidates=%d kept=%d",
                garment.class_name, garment.category.value, len(candidates), len(kept),
            )

    async def _search_full_image(self, image_url: str, found: dict[Slot, list[Candidate]]) -> None:
        await asyncio.gather(*(self._search_slot(slot, image_url, found) for slot in Slot))

    async def _search_slot(self, slot: Slot, image_url: str, found: dict[Slot, list[Candidate]]) -> None:
        try:
            candidates = await self.searcher.search(image_url, query=FALLBACK_QUERIES[slot])
        except Exception as exc:
            logger.warning("category_search_failed slot=%s error=%s", slot.value, exc)
            return

        kept = [
            c for c in candidates
            if self.marketplace.is_allowed(c.source, c.link)
            and self.title_classifier.classify(c.title) == slot
        ]
        found[slot].extend(kept)
        logger.info("category_search_done slot=%s candidates=%d kept=%d", slot.value, len(candidates), len(kept))


def merge_results(found: dict[Slot, list[Candidate]], per_slot: int = 10) -> ProductSearchResponse:
    out: dict[str, list[SearchedProductOut]] = {}
    for slot in Slot:
        items = found.get(slot, [])[: max(0, per_slot)]
        out[slot.value] = [_to_product(c, slot, idx) for idx, c in enumerate(items)]
    return ProductSearchResponse(**out)


def match_percentage(index: int) -> int:
    return TOP_MATCH_PERCENTAGE - MATCH_PERCENTAGE_STEP * index


def _to_product(candidate: Candidate, slot: Slot, index: int) -> SearchedProductOut:
    return SearchedProductOut(
        title=candidate.title or PLACEHOLDER_TITLE,
        price=candidate.price or PLACEHOLDER_PRICE,
        source=candidate.source or PLACEHOLDER_SOURCE,
        link=candidate.link or PLACEHOLDER_LINK,
        thumbnail=candidate.thumbnail or "",
        category=slot,
        rating=candidate.rating,
        reviews=candidate.review_count,
        match_percentage=match_percentage(index),
    )


def build_pipeline() -> ProductSearchPipeline:
    if not settings.roboflow_api_key:
        raise ConfigurationError("ROBOFLOW_API_KEY is not configured")
    if not settings.serpapi_api_key:
        raise ConfigurationError("SERPAPI_API_KEY is not configured")

    return ProductSearchPipeline(
        detector=get_detector(),
        searcher=build_visual_searcher(),
        per_slot=settings.products_per_slot,
        deadline_sec=settings.pipeline_deadline_sec,
    )
