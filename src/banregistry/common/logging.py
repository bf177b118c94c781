import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class LazyFlushingFileHandler(logging.Handler):
    """
    Handler fichier paresseux :
    1. Le fichier n'est créé qu'au premier log émis
    2. Flush après chaque enregistrement (utile pour les workers RQ)
    """

    def __init__(self, filename: str, mode: str = "a", encoding: str = "utf-8"):
        super().__init__()
        self.filename = filename
        self.mode = mode
        self.encoding = encoding
        self._handler: Optional[logging.FileHandler] = None

    def _ensure_handler(self) -> logging.FileHandler:
        if self._handler is None:
            Path(self.filename).parent.mkdir(parents=True, exist_ok=True)
            self._handler = logging.FileHandler(self.filename, mode=self.mode, encoding=self.encoding)
            self._handler.setFormatter(self.formatter)
            self._handler.setLevel(self.level)
        return self._handler

    def emit(self, record):
        handler = self._ensure_handler()
        handler.emit(record)
        handler.flush()

    def close(self):
        if self._handler:
            self._handler.close()
        super().close()


_LOGGER_CACHE: dict[str, logging.Logger] = {}


def setup_logging(
    logs_dir: Path,
    log_file_name: str,
    logger_name: str = "banregistry",
    enable_console: bool = True,
    level: int = logging.INFO,
) -> logging.Logger:
    """
    Configure le logger `logger_name` (console + fichier paresseux).

    Les loggers de module (`logging.getLogger(__name__)`) du paquet propagent
    vers le logger "banregistry", c'est donc lui qu'on configure au démarrage
    de l'API, du worker ou de la CLI.

    Args:
        logs_dir: Répertoire des logs
        log_file_name: Nom du fichier (ex: "worker.log")
        logger_name: Logger à configurer
        enable_console: Ajouter une sortie console
        level: Niveau minimal

    Returns:
        Logger configuré et mis en cache
    """
    cache_key = f"{logger_name}:{log_file_name}"
    if cache_key in _LOGGER_CACHE:
        return _LOGGER_CACHE[cache_key]

    logger = logging.getLogger(logger_name)
    logger.setLevel(level)

    if logger.hasHandlers():
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            handler.close()

    logger.propagate = False
    formatter = logging.Formatter(LOG_FORMAT)

    if enable_console:
        ch = logging.StreamHandler()
        ch.setLevel(level)
        ch.setFormatter(formatter)
        logger.addHandler(ch)

    # Le fichier ne sera créé qu'au premier log
    fh_lazy = LazyFlushingFileHandler(str(Path(logs_dir) / log_file_name))
    fh_lazy.setLevel(level)
    fh_lazy.setFormatter(formatter)
    logger.addHandler(fh_lazy)

    _LOGGER_CACHE[cache_key] = logger
    return logger


__all__ = ["LazyFlushingFileHandler", "setup_logging"]
