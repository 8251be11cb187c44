"""Temporal worker for Minesweeper game."""
import asyncio
import logging
from typing import Optional

from temporalio.client import Client
from temporalio.worker import Worker

from minesweeper import activities
from minesweeper.client_provider import get_temporal_client
from minesweeper.config import settings
from minesweeper.workflows import MinesweeperWorkflow

logger = logging.getLogger(__name__)


def create_worker(client: Client, task_queue: Optional[str] = None) -> Worker:
    """Worker that runs game sessions and board generation."""
    return Worker(
        client,
        task_queue=task_queue or settings.task_queue,
        workflows=[MinesweeperWorkflow],
        activities=[activities.generate_board],
    )


async def main():
    """Start the Temporal worker."""
    client = await get_temporal_client()
    worker = create_worker(client)

    logger.info("Worker started, connected to Temporal")
    logger.info(f"Listening on task queue: {settings.task_queue}")

    await worker.run()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
