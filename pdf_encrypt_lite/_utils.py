"""Utility functions for logging."""

import logging


def logger_error(msg: str, src: str) -> None:
    """
    Use this instead of logger.error directly.

    That allows people to overwrite it more easily.
    """
    logging.getLogger(src).error(msg)


def logger_warning(msg: str, src: str) -> None:
    """
    Use this instead of logger.warning directly.

    That allows people to overwrite it more easily.

    ## Exception, warnings.warn, logger_warning
    - Exceptions should be used if the user should write code that deals with
      an error case, e.g. the document cannot be loaded.
    - logger_warning is for things the caller cannot fix but should know
      about, e.g. a weaker random source was used for the file identifier.
    """
    logging.getLogger(src).warning(msg)
