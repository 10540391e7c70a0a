"""
Tests for the vision-model fridge scanner.
"""

import asyncio
from unittest.mock import AsyncMock, patch

from mealvibe.prompts.fridge_scan import FRIDGE_SCAN_PROMPT, UNIDENTIFIED_SENTINEL
from mealvibe.services.fridge_scan import (
    SCAN_FAILED_MESSAGE,
    LLMFridgeScanner,
    build_scan_messages,
    scan_fridge,
)

from conftest import StubScanner

LLM_CALL = "mealvibe.services.fridge_scan.call_llm_text"


def _run(coro):
    return asyncio.run(coro)


def test_scan_message_shape():
    messages = build_scan_messages("QUJD")
    content = messages[0]["content"]
    assert content[0] == {"type": "text", "text": FRIDGE_SCAN_PROMPT}
    assert content[1]["image_url"]["url"] == "data:image/jpeg;base64,QUJD"
    assert content[1]["image_url"]["detail"] == "low"


class TestLLMFridgeScanner:

    def test_detected_list(self):
        with patch(LLM_CALL, new=AsyncMock(return_value='"eggs, milk, spinach"\n')):
            result = _run(LLMFridgeScanner().scan("img"))
        assert result.success
        assert result.ingredients == "eggs, milk, spinach"

    def test_unidentified_sentinel_is_failure(self):
        with patch(LLM_CALL, new=AsyncMock(return_value=UNIDENTIFIED_SENTINEL)):
            result = _run(LLMFridgeScanner().scan("img"))
        assert result.success is False
        assert result.ingredients == SCAN_FAILED_MESSAGE

    def test_api_error_is_failure(self):
        with patch(LLM_CALL, new=AsyncMock(side_effect=RuntimeError("vision down"))):
            result = _run(LLMFridgeScanner().scan("img"))
        assert result.success is False

    def test_blank_output_is_failure(self):
        with patch(LLM_CALL, new=AsyncMock(return_value="   ")):
            result = _run(LLMFridgeScanner().scan("img"))
        assert result.success is False


def test_scan_fridge_uses_given_scanner():
    scanner = StubScanner()
    result = _run(scan_fridge("img", scanner))
    assert result.ingredients == "eggs, milk"
    assert scanner.images == ["img"]
