import logging

__all__ = ("configure_logging",)


def configure_logging(verbose: bool = False, debug: bool = False) -> None:
    """
    Set up the root logger.
        debug   -> DEBUG
        verbose -> INFO
        default -> WARNING
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname).1s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    # textual is chatty at debug level
    logging.getLogger("textual").setLevel(logging.WARNING)
