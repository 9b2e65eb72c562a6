"""
StoryboardService — drives one storyboard generation end to end.

  Step 1: Cut-Length Policy picks the scene range
  Step 2: Prompt is built and handed to the injected oracle
  Step 3: Oracle output is validated and its ordering repaired if needed

The oracle is any async callable (request, prompt) -> raw response; the
provider client itself lives outside this package.
"""

import logging
import time
from typing import Any, Awaitable, Callable, Optional, Union

from .. import metrics
from .contract import finalize_storyboard
from .cut_length import MAX_PHOTOS, MIN_PHOTOS, resolve_cut_length
from .errors import MalformedResponse, OracleUnavailable
from .models import AssetInput, CutLength, StoryboardOutcome, StoryboardRequest
from .prompts import StoryboardPrompt, build_storyboard_prompt

logger = logging.getLogger(__name__)

Oracle = Callable[[StoryboardRequest, StoryboardPrompt], Awaitable[Any]]


class StoryboardService:
    """
    Usage:
        service = StoryboardService(oracle=my_oracle_client)
        request = service.build_request(assets, style_pack_id="modern-clean")
        outcome = await service.generate(request)

        # Oracle returned junk? Retry elsewhere and re-validate:
        outcome = service.revalidate(other_raw_response, request)
    """

    def __init__(
        self,
        oracle: Optional[Oracle] = None,
        slack: Optional[int] = None,
        threshold: Optional[float] = None,
    ):
        self._oracle = oracle
        self._slack = slack
        self._threshold = threshold

    def build_request(
        self,
        assets: list[AssetInput],
        style_pack_id: str = "modern-clean",
        cut_length: Optional[Union[CutLength, str]] = None,
        property_title: Optional[str] = None,
    ) -> StoryboardRequest:
        """Apply the Cut-Length Policy and assemble the oracle request."""
        if not MIN_PHOTOS <= len(assets) <= MAX_PHOTOS:
            logger.warning(
                f"{len(assets)} photos is outside the supported {MIN_PHOTOS}-{MAX_PHOTOS} range"
            )

        cut, scene_range = resolve_cut_length(len(assets), cut_length)
        logger.info(
            f"Storyboard request: {len(assets)} assets, cut_length={cut.value} "
            f"({'explicit' if cut_length is not None else 'auto'}), "
            f"scenes {scene_range.min}-{scene_range.max}"
        )
        return StoryboardRequest(
            assets=assets,
            style_pack_id=style_pack_id,
            cut_length=cut,
            scene_range=scene_range,
            property_title=property_title,
        )

    async def generate(self, request: StoryboardRequest) -> StoryboardOutcome:
        """
        Call the oracle and validate what it returns.

        Raises:
            OracleUnavailable: the oracle call failed (not retried here).
            MalformedResponse: the oracle output is structurally invalid.
        """
        if self._oracle is None:
            raise OracleUnavailable("No storyboard oracle configured")

        prompt = build_storyboard_prompt(request)
        logger.info(
            f"Calling oracle with {len(request.assets)} assets, "
            f"style={request.style_pack_id}, cut={request.cut_length.value}"
        )

        started = time.time()
        try:
            raw = await self._oracle(request, prompt)
        except Exception as e:
            logger.error(f"Storyboard oracle failed: {e}")
            metrics.inc_counter("errors.oracle_unavailable")
            metrics.record_error("generate", "oracle_unavailable", str(e))
            raise OracleUnavailable(f"Storyboard oracle failed: {e}") from e
        finally:
            metrics.record_latency("oracle", (time.time() - started) * 1000)

        return self.revalidate(raw, request)

    def revalidate(self, raw: Any, request: StoryboardRequest) -> StoryboardOutcome:
        """Validate a raw oracle response without calling the oracle."""
        started = time.time()
        try:
            outcome = finalize_storyboard(
                raw, request, slack=self._slack, threshold=self._threshold
            )
        except MalformedResponse as e:
            metrics.inc_counter("errors.malformed_response")
            metrics.record_error("validate", type(e).__name__, e.message)
            raise
        finally:
            metrics.record_latency("validate", (time.time() - started) * 1000)

        report = outcome.report
        metrics.inc_counter("storyboard.validated")
        metrics.set_gauge("storyboard.last_inversion_ratio", report.inversion_ratio)
        if report.resequenced:
            metrics.inc_counter("storyboard.resequenced")
        if not report.scene_count_in_range:
            metrics.inc_counter("storyboard.scene_count_out_of_range")

        logger.info(
            f"Storyboard ready: {report.scene_count} scenes, "
            f"{len(outcome.storyboard.room_tags)} room tags, resequenced={report.resequenced}"
        )
        return outcome
