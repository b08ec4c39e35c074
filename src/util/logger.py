import sys

from loguru import logger

PALETTE = {
    "search": "green",
    "terrain": "blue",
    "cli": "magenta",
}

LEVEL_PER_COMPONENT = {
    "search": "INFO",
    "terrain": "INFO",
}


def set_component_level(component: str, level: str) -> None:
    """Change the minimum level emitted for one component."""
    # Raises ValueError for unknown level names before we store them
    logger.level(level)
    LEVEL_PER_COMPONENT[component] = level


def component_filter(record):
    comp = record["extra"].get("component", "")
    min_level = logger.level(LEVEL_PER_COMPONENT.get(comp, "DEBUG")).no
    return record["level"].no >= min_level


def formatter(record):
    comp = record["extra"].get("component", "")
    colour = PALETTE.get(comp, "white")

    return (
        "{time:HH:mm:ss} | "
        f"<{colour}>{comp:<10}</> | "
        "<level>{message}</level>\n"
    )


logger.remove()
logger.add(sys.stderr, format=formatter, filter=component_filter, colorize=True)
