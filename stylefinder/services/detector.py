from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

from garment_vision.cropping import Detection
from stylefinder.core.config import settings

logger = logging.getLogger(__name__)


class DetectorError(RuntimeError):
    pass


@dataclass(slots=True)
class DetectionResult:
    detections: list[Detection] = field(default_factory=list)
    image_width: int = 0
    image_height: int = 0


class RoboflowDetector:
    """Client for the hosted clothing-detection model.

    At most ``max_concurrency`` requests are outstanding at once per instance;
    further callers wait on the semaphore. Failures are raised as
    ``DetectorError`` and never retried here.
    """

    def __init__(
        self,
        api_key: str,
        model_url: str,
        confidence: int = 30,
        overlap: int = 30,
        max_concurrency: int = 3,
        client: httpx.AsyncClient | None = None,
        timeout: float = 20.0,
    ) -> None:
        self.api_key = api_key
        self.model_url = model_url
        self.confidence = confidence
        self.overlap = overlap
        self.max_concurrency = max_concurrency
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._client = client
        self._timeout = timeout

    async def detect(self, image_url: str) -> DetectionResult:
        async with self._semaphore:
            if not self.api_key:
                raise DetectorError("ROBOFLOW_API_KEY is not configured")

            logger.info("detector_request image_url=%s", image_url)
            params = {
                "api_key": self.api_key,
                "confidence": self.confidence,
                "overlap": self.overlap,
                "image": image_url,
            }
            try:
                payload = await self._post(params)
            except DetectorError:
                raise
            except Exception as exc:
                raise DetectorError(f"Detector request failed: {type(exc).__name__}: {exc}") from exc

            result = parse_detection_payload(payload)
            logger.info("detector_response detections=%d", len(result.detections))
            return result

    async def _post(self, params: dict[str, Any]) -> Any:
        if self._client is not None:
            response = await self._client.post(self.model_url, params=params)
        else:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(self.model_url, params=params)
        response.raise_for_status()
        return response.json()


def parse_detection_payload(payload: Any) -> DetectionResult:
    if not isinstance(payload, dict):
        raise DetectorError("Invalid detector response payload")

    predictions = payload.get("predictions") or []
    if not isinstance(predictions, list):
        raise DetectorError("Detector predictions must be a list")

    detections: list[Detection] = []
    for row in predictions:
        if not isinstance(row, dict):
            raise DetectorError("Detector prediction must be an object")
        try:
            detections.append(
                Detection(
                    class_name=str(row.get("class") or ""),
                    confidence=float(row.get("confidence") or 0.0),
                    x=float(row["x"]),
                    y=float(row["y"]),
                    width=float(row["width"]),
                    height=float(row["height"]),
                )
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise DetectorError(f"Malformed detector prediction: {row!r}") from exc

    image = payload.get("image") if isinstance(payload.get("image"), dict) else {}
    return DetectionResult(
        detections=detections,
        image_width=_as_int(image.get("width")),
        image_height=_as_int(image.get("height")),
    )


def _as_int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


_detector: RoboflowDetector | None = None


def get_detector() -> RoboflowDetector:
    global _detector
    if _detector is not None:
        return _detector

    _detector = RoboflowDetector(
        api_key=settings.roboflow_api_key,
        model_url=settings.roboflow_model_url,
        confidence=settings.detector_confidence,
        overlap=settings.detector_overlap,
        max_concurrency=settings.detector_max_concurrency,
        timeout=settings.http_timeout_sec,
    )
    return _detector
