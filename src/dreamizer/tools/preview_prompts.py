"""Preview LLM-enhanced prompts for a handful of dreams.

Runs the same :class:`~dreamizer.core.prompt_enhancer.PromptEnhancer` the
API uses and prints each resulting prompt with its length, so prompt wording
can be tuned without spending image-generation credits.

Usage
-----
::

    dreamizer-preview-prompts
    dreamizer-preview-prompts "Sailing around the world" "Opening a bakery"

Requires ``OPENROUTER_API_KEY``; without it the basic template prompt is
printed instead.
"""

from __future__ import annotations

import argparse
import asyncio
import logging

import httpx

from dreamizer.core.config import DreamizerConfig, config
from dreamizer.core.prompt_enhancer import PromptEnhancer

logger = logging.getLogger(__name__)

SAMPLE_DREAMS = [
    "Flying through the clouds",
    "Winning an Olympic medal",
    "Performing on a world stage",
    "Discovering a new planet",
]

RULE = "=" * 80


async def preview(dreams: list[str], settings: DreamizerConfig, delay: float = 1.0) -> list[str]:
    """Enhance each dream in turn, printing the results as they arrive."""
    prompts: list[str] = []
    async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as http:
        enhancer = PromptEnhancer(settings, http)
        for index, dream in enumerate(dreams, start=1):
            print(f"\nTest {index}/{len(dreams)}")
            print(f'Dream: "{dream}"')
            print("-" * 80)

            prompt = await enhancer.enhance(dream)
            prompts.append(prompt)

            print(f"\nEnhanced Prompt:\n{prompt}\n")
            print(f"Length: {len(prompt)} characters")
            print(RULE)

            if index < len(dreams) and delay > 0:
                await asyncio.sleep(delay)
    return prompts


def main(argv: list[str] | None = None) -> None:
    """Entry point for the ``dreamizer-preview-prompts`` console script."""
    parser = argparse.ArgumentParser(description="Preview LLM-enhanced dream prompts.")
    parser.add_argument("dreams", nargs="*", help="Dreams to enhance (default: built-in samples)")
    parser.add_argument(
        "--delay",
        type=float,
        default=1.0,
        help="Seconds to wait between requests (default: 1.0)",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if not config.has_openrouter_key:
        logger.warning("OPENROUTER_API_KEY not found; showing basic template prompts")

    print("Testing Enhanced Prompt Generation")
    print(RULE)
    asyncio.run(preview(args.dreams or SAMPLE_DREAMS, config, delay=args.delay))
    print("\nTesting complete!")


if __name__ == "__main__":
    main()
