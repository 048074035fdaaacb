import logging

__version__ = "0.3.1"

LOGGER = logging.getLogger(__name__)
