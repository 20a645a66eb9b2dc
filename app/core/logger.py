import logging

logger = logging.getLogger("app")


def configure_logging(level: str = "WARNING") -> None:
    """Format console par défaut (sans effet si l'application hôte a déjà configuré logging)."""
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.setLevel(level.upper())
