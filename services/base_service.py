"""
Base service for the business logic layer.
Services orchestrate business operations using repositories bound to an
injected database session.
"""

from abc import ABC
import logging

from sqlalchemy.orm import Session


class BaseService(ABC):
    """
    Base service providing the session and structured logging helpers.
    """

    logger_name = "nutritrack.services"

    def __init__(self, db: Session):
        self.db = db
        self.logger = logging.getLogger(self.logger_name)

    def log_info(self, message: str, **kwargs):
        """Log info message with structured data"""
        extra_data = " ".join([f"{k}={v}" for k, v in kwargs.items()])
        self.logger.info(f"{message} {extra_data}".strip())
