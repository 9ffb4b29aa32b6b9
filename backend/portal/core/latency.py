"""Optional artificial delay for the mock-backed services."""
import asyncio
from portal.config import get_settings


async def simulate_latency(factor: float = 1.0) -> None:
    """Sleep for SIMULATED_LATENCY_MS (scaled by factor); no-op when unset."""
    delay_ms = get_settings().simulated_latency_ms * factor
    if delay_ms > 0:
        await asyncio.sleep(delay_ms / 1000)
