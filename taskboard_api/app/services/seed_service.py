"""
Demo data for a fresh installation.

When ``SEED_DEMO_DATA`` is enabled the application creates a ``demo``
user (password ``demo123``) owning a sample project with one task in
each board column.  Seeding is skipped if the ``demo`` user exists.
"""

import logging

from ..storage.base import Storage
from .project_service import ProjectService
from .task_service import TaskService
from .user_service import UserService


logger = logging.getLogger(__name__)

DEMO_USERNAME = "demo"
DEMO_PASSWORD = "demo123"

DEMO_TASKS = [
    (
        "Welcome to your new task manager",
        "This is a sample task. You can drag it to other columns.",
        "todo",
    ),
    ("In Progress Task", "This task is currently being worked on.", "in_progress"),
    ("Completed Task", "This task is done.", "done"),
]


async def seed_demo_data(storage: Storage) -> bool:
    """Create the demo user, project and tasks.  Returns False if already seeded."""
    if storage.find_user_by_username(DEMO_USERNAME) is not None:
        return False
    logger.info("Seeding database with demo data")
    user = await UserService(storage).register_user(DEMO_USERNAME, DEMO_PASSWORD)
    project = await ProjectService(storage).create_project(
        owner_id=user.id,
        name="Demo Project",
        description="A sample project to get you started",
    )
    tasks = TaskService(storage)
    for title, description, status in DEMO_TASKS:
        await tasks.create_task(
            requester_id=user.id,
            project_id=project.id,
            title=title,
            description=description,
            status=status,
            assignee_id=user.id,
        )
    logger.info("Database seeded")
    return True
