"""
Logging utilities for tracking activity across the site.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError

from app.models import LogEntry
from app import db

logger = logging.getLogger(__name__)


def log_activity(project_name, category, description):
    """
    Write a LogEntry row. A failed write is logged and rolled back so it never
    breaks the request that triggered it.

    Returns:
        bool: True if the entry was committed
    """
    try:
        db.session.add(LogEntry(project=project_name, category=category, description=description))
        db.session.commit()
        return True
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error(f"Failed to write log entry for {project_name}/{category}: {e}")
        return False


def log_project_visit(project_name, project_display_name=None):
    """
    Log a visit to a project/page.
    
    Args:
        project_name (str): The project identifier (e.g., 'tic_tac_toe')
        project_display_name (str, optional): Human-readable name for the description.
                                              Defaults to project_name if not provided.
    """
    display_name = project_display_name or project_name
    return log_activity(project_name, 'Visit', f"Anonymous user visited {display_name}")
