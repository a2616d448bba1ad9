"""Tests for ExampleClientAdapter (template/reference adapter)."""

import pytest

from receipt_total.analysis.client_base import BaseVisionClient
from receipt_total.analysis.example_client_adapter import ExampleClientAdapter
from receipt_total.storage.models import GenerativePart

PART = GenerativePart(mime_type="image/png", base64_data="iVBORw0KGgo=")


class TestExampleClientAdapter:
    def test_implements_base_contract(self) -> None:
        assert isinstance(ExampleClientAdapter(), BaseVisionClient)

    @pytest.mark.asyncio
    async def test_returns_default_amount(self) -> None:
        adapter = ExampleClientAdapter()
        result = await adapter.generate(model="any", temperature=0.0, part=PART, prompt="p")
        assert result == "0.00"

    @pytest.mark.asyncio
    async def test_returns_configured_answer(self) -> None:
        adapter = ExampleClientAdapter("1234.56")
        result = await adapter.generate(model="any", temperature=0.0, part=PART, prompt="p")
        assert result == "1234.56"

    @pytest.mark.asyncio
    async def test_ignores_input_parameters(self) -> None:
        adapter = ExampleClientAdapter("7")
        first = await adapter.generate(model="a", temperature=0.0, part=PART, prompt="x")
        second = await adapter.generate(model="b", temperature=0.2, part=PART, prompt="y")
        assert first == second
