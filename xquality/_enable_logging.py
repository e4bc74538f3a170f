import logging
import sys


def enable_logging(level: int = logging.INFO) -> None:
    """
    Allow logging outputs of the quality algorithms on stdout.

    :param level: The logging level to use.
    """
    logging.basicConfig(
        level=level, format="[%(asctime)s - %(name)s - %(levelname)s] %(message)s"
    )
    logger = logging.getLogger()
    logger.setLevel(level)
    logger.handlers[0].stream = sys.stdout
