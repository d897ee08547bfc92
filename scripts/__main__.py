"""Allow `python -m scripts` to seed demo vendors and score them."""

import asyncio

from scripts.seed import _run_seed

asyncio.run(_run_seed())
