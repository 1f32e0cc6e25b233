import logging


def get_logger(name: str) -> logging.Logger:
    """Return a module-level logger configured with basicConfig."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")
    return logging.getLogger(name)


def set_debug(enabled: bool) -> None:
    """Raise (or restore) the package logger level for ``--debug`` runs."""
    logging.getLogger("rollsheet").setLevel(logging.DEBUG if enabled else logging.INFO)
