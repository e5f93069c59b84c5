"""stc-calc MCP Server - FastMCP implementation for sell-to-cover tools."""

import logging
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from stccalc.sdk import (
    Calculator,
    ConfigError,
    InvalidInputError,
    OptionInput,
    RSUInput,
    load_config,
)

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("stc-calc")


# --- Tools ---

@mcp.tool()
async def calculate_exercise(
    exercise_price: float = Field(description="Exercise (strike) price per share"),
    exercised_shares: float = Field(description="Number of shares exercised"),
    fmv: float = Field(description="Fair market value per share at exercise"),
) -> dict[str, Any]:
    """Shares to sell to cover an option exercise, using the configured tax rates and broker fees. Returns every line item."""
    try:
        calculator = Calculator(load_config())
        result = calculator.calculate(
            OptionInput(exercise_price=exercise_price, exercised_shares=exercised_shares, fmv=fmv)
        )
        return {"result": result.to_dict()}
    except (InvalidInputError, ConfigError) as e:
        logger.error(f"Error calculating exercise: {e}")
        return {"error": str(e), "result": None}


@mcp.tool()
async def calculate_release(
    shares_released: float = Field(description="Number of RSU shares released"),
    vest_price: float = Field(description="FMV per share at vest (tax basis)"),
    sale_price: float = Field(description="Estimated sale price per share"),
) -> dict[str, Any]:
    """Shares to sell to cover an RSU release, using the configured tax rates and broker fees. Returns every line item."""
    try:
        calculator = Calculator(load_config())
        result = calculator.calculate_rsu(
            RSUInput(shares_released=shares_released, vest_price=vest_price, sale_price=sale_price)
        )
        return {"result": result.to_dict()}
    except (InvalidInputError, ConfigError) as e:
        logger.error(f"Error calculating release: {e}")
        return {"error": str(e), "result": None}


@mcp.tool()
async def get_config() -> dict[str, Any]:
    """Current tax rates and broker fees."""
    try:
        return {"config": load_config().model_dump()}
    except ConfigError as e:
        return {"error": str(e), "config": None}


# --- Server Entry Point ---

def run_server():
    """Run the MCP server in stdio mode."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
