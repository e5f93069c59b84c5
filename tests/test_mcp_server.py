"""Tests for the MCP tools (requires the 'mcp' extra)."""

import asyncio

import pytest

pytest.importorskip("mcp")

from stccalc.mcp import server


class TestMcpTools:

    def test_calculate_exercise(self, isolated_config):
        response = asyncio.run(server.calculate_exercise(exercise_price=10.0, exercised_shares=100, fmv=50.0))

        assert response["result"]["shares_to_sell"] == 45.0
        assert response["result"]["net_shares"] == 55.0

    def test_calculate_release(self, isolated_config):
        response = asyncio.run(server.calculate_release(shares_released=100, vest_price=50.0, sale_price=50.0))

        assert response["result"]["shares_to_sell"] == 31.0

    def test_invalid_input_returns_error(self, isolated_config):
        response = asyncio.run(server.calculate_exercise(exercise_price=10.0, exercised_shares=100, fmv=0.0))

        assert response["result"] is None
        assert "fmv" in response["error"]

    def test_get_config(self, isolated_config):
        response = asyncio.run(server.get_config())
        assert response["config"]["tax_rates"]["federal"] == 0.22
